"""Route registration helpers."""

from .projects import register_project_routes
from .todos import register_todo_routes
from .tools import register_tool_routes

__all__ = [
    "register_project_routes",
    "register_todo_routes",
    "register_tool_routes",
]
