"""Pydantic schemas for the FastAPI server."""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from src.planner import TodoPriority, TodoStatus


class ProjectResponse(BaseModel):
    """Serialized project."""

    model_config = ConfigDict(populate_by_name=True)

    id: str
    name: str
    description: str
    created_at: str = Field(alias="createdAt")
    updated_at: str = Field(alias="updatedAt")


class TodoResponse(BaseModel):
    """Serialized todo item."""

    model_config = ConfigDict(populate_by_name=True, use_enum_values=True)

    id: str
    project_id: str = Field(alias="projectId")
    title: str
    status: TodoStatus
    priority: TodoPriority
    description: str
    created_at: str = Field(alias="createdAt")
    updated_at: str = Field(alias="updatedAt")


class ProjectDetailResponse(BaseModel):
    """Project together with its todos."""

    project: ProjectResponse
    todos: List[TodoResponse]


class DeleteResponse(BaseModel):
    """Confirmation for delete endpoints."""

    deleted: bool
    message: str


class ProjectCreateRequest(BaseModel):
    """Request body for creating project."""

    name: str = Field(..., min_length=1, max_length=200)
    description: str = Field(default="", max_length=2000)


class TodoCreateRequest(BaseModel):
    """Request body for creating todo."""

    title: str = Field(..., min_length=1, max_length=200)
    description: str = Field(default="", max_length=2000)
    priority: TodoPriority = Field(default=TodoPriority.MEDIUM)


class TodoUpdateRequest(BaseModel):
    """Request body for updating todo."""

    title: Optional[str] = Field(default=None, min_length=1, max_length=200)
    description: Optional[str] = Field(default=None, max_length=2000)
    status: Optional[TodoStatus] = Field(default=None)
    priority: Optional[TodoPriority] = Field(default=None)


class ToolExecuteRequest(BaseModel):
    """Tool execution request schema"""

    tool: str = Field(..., description="Tool name to execute")
    args: Dict[str, Any] = Field(default_factory=dict, description="Tool arguments")


class ToolContent(BaseModel):
    """Single content item of a tool response."""

    type: str = "text"
    text: str


class ToolExecuteResponse(BaseModel):
    """Tool execution response schema"""

    model_config = ConfigDict(populate_by_name=True)

    content: List[ToolContent]
    is_error: bool = Field(default=False, alias="isError")


class ToolListResponse(BaseModel):
    """Tool list response schema"""

    tools: List[Dict[str, Any]] = Field(..., description="Available tools with their schemas")


class HealthResponse(BaseModel):
    """Response for health check endpoint."""

    status: str
