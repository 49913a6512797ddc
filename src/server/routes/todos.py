"""Todo endpoints."""

from __future__ import annotations

import logging
from typing import List, Optional

from fastapi import FastAPI, HTTPException, Query

from src.planner import NotFoundError

from ..dependencies import get_todo_repository, serialize_todo
from ..schemas import DeleteResponse, TodoCreateRequest, TodoResponse, TodoUpdateRequest

logger = logging.getLogger(__name__)


def register_todo_routes(app: FastAPI) -> None:
    """Register todo CRUD endpoints."""

    @app.get("/api/projects/{project_id}/todos", response_model=List[TodoResponse])
    async def list_todos(
        project_id: str,
        status: Optional[str] = Query(
            default=None, pattern="^(pending|in_progress|completed|all)$"
        ),
    ) -> List[TodoResponse]:
        """List todos of a project in creation order."""
        repo = get_todo_repository()
        try:
            todos = await repo.list_by_project(project_id, status)
            return [serialize_todo(todo) for todo in todos]
        except NotFoundError as exc:
            raise HTTPException(status_code=404, detail=str(exc)) from exc
        except Exception as exc:
            logger.exception("Failed to list todos: %s", exc)
            raise HTTPException(status_code=500, detail="Failed to list todos") from exc

    @app.post("/api/projects/{project_id}/todos", response_model=TodoResponse)
    async def create_todo(project_id: str, request: TodoCreateRequest) -> TodoResponse:
        """Create a new todo in a project."""
        repo = get_todo_repository()
        try:
            todo = await repo.create(
                project_id,
                request.title,
                description=request.description or "",
                priority=request.priority,
            )
            return serialize_todo(todo)
        except NotFoundError as exc:
            raise HTTPException(status_code=404, detail=str(exc)) from exc
        except Exception as exc:
            logger.exception("Failed to create todo: %s", exc)
            raise HTTPException(status_code=500, detail="Failed to create todo") from exc

    @app.get("/api/todos/{todo_id}", response_model=TodoResponse)
    async def get_todo(todo_id: str) -> TodoResponse:
        """Get a todo."""
        repo = get_todo_repository()
        try:
            return serialize_todo(await repo.get(todo_id))
        except NotFoundError as exc:
            raise HTTPException(status_code=404, detail=str(exc)) from exc
        except Exception as exc:
            logger.exception("Failed to get todo: %s", exc)
            raise HTTPException(status_code=500, detail="Failed to get todo") from exc

    @app.patch("/api/todos/{todo_id}", response_model=TodoResponse)
    async def update_todo(todo_id: str, request: TodoUpdateRequest) -> TodoResponse:
        """Update an existing todo."""
        repo = get_todo_repository()
        try:
            payload = request.model_dump(exclude_unset=True)
            todo = await repo.update(
                todo_id,
                title=payload.get("title"),
                description=payload.get("description"),
                status=payload.get("status"),
                priority=payload.get("priority"),
            )
            return serialize_todo(todo)
        except NotFoundError as exc:
            raise HTTPException(status_code=404, detail=str(exc)) from exc
        except Exception as exc:
            logger.exception("Failed to update todo: %s", exc)
            raise HTTPException(status_code=500, detail="Failed to update todo") from exc

    @app.delete("/api/todos/{todo_id}", response_model=DeleteResponse)
    async def delete_todo(todo_id: str) -> DeleteResponse:
        """Delete a todo."""
        repo = get_todo_repository()
        try:
            result = await repo.delete(todo_id)
            return DeleteResponse(deleted=True, message=result.message)
        except NotFoundError as exc:
            raise HTTPException(status_code=404, detail=str(exc)) from exc
        except Exception as exc:
            logger.exception("Failed to delete todo: %s", exc)
            raise HTTPException(status_code=500, detail="Failed to delete todo") from exc
