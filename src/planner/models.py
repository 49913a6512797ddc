from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict

STATUS_FILTER_ALL = "all"


class TodoStatus(str, Enum):
    """Todoの進捗ステータス"""

    PENDING = "pending"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"


class TodoPriority(str, Enum):
    """Todoの優先度"""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


@dataclass(slots=True)
class Project:
    """永続化済みプロジェクトの表現。"""

    id: str
    name: str
    description: str
    created_at: str
    updated_at: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "createdAt": self.created_at,
            "updatedAt": self.updated_at,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Project":
        return cls(
            id=data["id"],
            name=data["name"],
            description=data.get("description", ""),
            created_at=data["createdAt"],
            updated_at=data["updatedAt"],
        )


@dataclass(slots=True)
class Todo:
    """永続化済みTodoの表現。project_idは所属プロジェクトへの参照のみを持つ。"""

    id: str
    project_id: str
    title: str
    status: TodoStatus
    priority: TodoPriority
    description: str
    created_at: str
    updated_at: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "projectId": self.project_id,
            "title": self.title,
            "status": self.status.value,
            "priority": self.priority.value,
            "description": self.description,
            "createdAt": self.created_at,
            "updatedAt": self.updated_at,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Todo":
        return cls(
            id=data["id"],
            project_id=data["projectId"],
            title=data["title"],
            status=TodoStatus(data.get("status", TodoStatus.PENDING.value)),
            priority=TodoPriority(data.get("priority", TodoPriority.MEDIUM.value)),
            description=data.get("description", ""),
            created_at=data["createdAt"],
            updated_at=data["updatedAt"],
        )


@dataclass(slots=True)
class DeleteResult:
    """削除操作の結果"""

    entity: str
    id: str
    todos_removed: int = 0

    @property
    def message(self) -> str:
        if self.entity == "project":
            return f"Project {self.id} deleted ({self.todos_removed} todos removed)"
        return f"Todo {self.id} deleted"
