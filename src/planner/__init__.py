"""Project / Todo planner backed by a flat key-value store."""

from .exceptions import NotFoundError, PlannerError, StoreError, ValidationError
from .index import IdIndex
from .models import DeleteResult, Project, Todo, TodoPriority, TodoStatus
from .repository import ProjectRepository, TodoRepository, create_repositories
from .store import InMemoryKeyValueStore, KeyValueStore, SQLiteKeyValueStore
from .tools import ToolDispatcher

__all__ = [
    "PlannerError",
    "NotFoundError",
    "ValidationError",
    "StoreError",
    "IdIndex",
    "DeleteResult",
    "Project",
    "Todo",
    "TodoPriority",
    "TodoStatus",
    "ProjectRepository",
    "TodoRepository",
    "create_repositories",
    "KeyValueStore",
    "InMemoryKeyValueStore",
    "SQLiteKeyValueStore",
    "ToolDispatcher",
]
