"""Dependency helpers shared across FastAPI routes."""

from __future__ import annotations

from functools import lru_cache

from src.planner import (
    KeyValueStore,
    Project,
    ProjectRepository,
    Todo,
    TodoRepository,
    ToolDispatcher,
    create_repositories,
)
from src.planner.config import Config
from src.planner.logger import setup_logger

from .schemas import ProjectResponse, TodoResponse

config = Config.from_yaml()
setup_logger(log_level=config.log_level, log_file=config.log_file)


@lru_cache(maxsize=1)
def get_store() -> KeyValueStore:
    """Singleton key-value store built from the current configuration."""
    return Config.from_yaml().build_store()


@lru_cache(maxsize=1)
def get_repositories() -> tuple[ProjectRepository, TodoRepository]:
    """Singleton pair of repositories sharing one store."""
    return create_repositories(get_store())


def get_project_repository() -> ProjectRepository:
    return get_repositories()[0]


def get_todo_repository() -> TodoRepository:
    return get_repositories()[1]


@lru_cache(maxsize=1)
def get_tool_dispatcher() -> ToolDispatcher:
    """Singleton ToolDispatcher."""
    projects, todos = get_repositories()
    return ToolDispatcher(projects, todos)


def reset_dependencies() -> None:
    """Drop cached singletons (used when the store configuration changes)."""
    get_tool_dispatcher.cache_clear()
    get_repositories.cache_clear()
    get_store.cache_clear()


def serialize_project(item: Project) -> ProjectResponse:
    """Convert domain Project to API response."""
    return ProjectResponse.model_validate(item.to_dict())


def serialize_todo(item: Todo) -> TodoResponse:
    """Convert domain Todo to API response."""
    return TodoResponse.model_validate(item.to_dict())
