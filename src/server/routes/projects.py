"""Project endpoints."""

from __future__ import annotations

import logging
from typing import List

from fastapi import FastAPI, HTTPException

from src.planner import NotFoundError

from ..dependencies import get_project_repository, serialize_project, serialize_todo
from ..schemas import (
    DeleteResponse,
    ProjectCreateRequest,
    ProjectDetailResponse,
    ProjectResponse,
)

logger = logging.getLogger(__name__)


def register_project_routes(app: FastAPI) -> None:
    """Register project CRUD endpoints."""

    @app.get("/api/projects", response_model=List[ProjectResponse])
    async def list_projects() -> List[ProjectResponse]:
        """List projects in creation order."""
        repo = get_project_repository()
        try:
            projects = await repo.list()
            return [serialize_project(project) for project in projects]
        except Exception as exc:
            logger.exception("Failed to list projects: %s", exc)
            raise HTTPException(status_code=500, detail="Failed to list projects") from exc

    @app.post("/api/projects", response_model=ProjectResponse)
    async def create_project(request: ProjectCreateRequest) -> ProjectResponse:
        """Create a new project."""
        repo = get_project_repository()
        try:
            project = await repo.create(request.name, request.description or "")
            return serialize_project(project)
        except Exception as exc:
            logger.exception("Failed to create project: %s", exc)
            raise HTTPException(status_code=500, detail="Failed to create project") from exc

    @app.get("/api/projects/{project_id}", response_model=ProjectDetailResponse)
    async def get_project(project_id: str) -> ProjectDetailResponse:
        """Get a project with its todos."""
        repo = get_project_repository()
        try:
            project, todos = await repo.get(project_id)
            return ProjectDetailResponse(
                project=serialize_project(project),
                todos=[serialize_todo(todo) for todo in todos],
            )
        except NotFoundError as exc:
            raise HTTPException(status_code=404, detail=str(exc)) from exc
        except Exception as exc:
            logger.exception("Failed to get project: %s", exc)
            raise HTTPException(status_code=500, detail="Failed to get project") from exc

    @app.delete("/api/projects/{project_id}", response_model=DeleteResponse)
    async def delete_project(project_id: str) -> DeleteResponse:
        """Delete a project and all of its todos."""
        repo = get_project_repository()
        try:
            result = await repo.delete(project_id)
            return DeleteResponse(deleted=True, message=result.message)
        except NotFoundError as exc:
            raise HTTPException(status_code=404, detail=str(exc)) from exc
        except Exception as exc:
            logger.exception("Failed to delete project: %s", exc)
            raise HTTPException(status_code=500, detail="Failed to delete project") from exc
