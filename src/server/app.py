"""FastAPI application bootstrap."""

from __future__ import annotations

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .dependencies import get_tool_dispatcher, reset_dependencies
from .routes import register_project_routes, register_todo_routes, register_tool_routes
from .schemas import HealthResponse

__all__ = ["app", "create_app", "get_tool_dispatcher", "reset_dependencies"]


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    app = FastAPI(title="Project Planner API", version="1.0.0")

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get("/health", response_model=HealthResponse)
    async def health() -> HealthResponse:
        return HealthResponse(status="ok")

    register_project_routes(app)
    register_todo_routes(app)
    register_tool_routes(app)

    return app


app = create_app()
