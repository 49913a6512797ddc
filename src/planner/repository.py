"""Project / Todo Repository

Key-Value Store上にプロジェクトとTodoを保存し、2種類のインデックス
（全プロジェクトのインデックス、プロジェクト毎のTodoインデックス）を維持する。

ストアは複数キーのアトミック更新を持たないため、書き込み順序で整合性を保つ:
    作成: レコード書き込み → インデックス追加
    削除: インデックスから除去 → 子レコード/子インデックス削除 → 親レコード削除
途中で停止した場合に残るのは到達不能な孤立レコードであり、
生きているプロジェクトからの壊れた参照ではない。
"""

from __future__ import annotations

import json
import logging
import uuid
from datetime import datetime, timezone
from typing import Any, Callable, Dict, List, Optional, Tuple, TypeVar

from .exceptions import NotFoundError, StoreError
from .index import IdIndex
from .models import (
    STATUS_FILTER_ALL,
    DeleteResult,
    Project,
    Todo,
    TodoPriority,
    TodoStatus,
)
from .store import (
    PROJECT_INDEX_KEY,
    KeyValueStore,
    project_key,
    project_todos_key,
    todo_key,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")


class _RecordRepository:
    """JSONレコードの読み書きを共通化する基底クラス"""

    def __init__(self, store: KeyValueStore):
        self.store = store

    @staticmethod
    def _now() -> str:
        return datetime.now(timezone.utc).isoformat()

    @staticmethod
    def _new_id() -> str:
        return str(uuid.uuid4())

    async def _read_record(self, key: str) -> Optional[Dict[str, Any]]:
        raw = await self.store.get(key)
        if raw is None:
            return None
        try:
            data = json.loads(raw)
        except json.JSONDecodeError as exc:
            raise StoreError(f"Record {key} is not valid JSON") from exc
        if not isinstance(data, dict):
            raise StoreError(f"Record {key} is not an object")
        return data

    async def _read_entity(self, key: str, factory: Callable[[Dict[str, Any]], T]) -> Optional[T]:
        data = await self._read_record(key)
        if data is None:
            return None
        try:
            return factory(data)
        except (KeyError, ValueError) as exc:
            raise StoreError(f"Record {key} is malformed") from exc

    async def _write_record(self, key: str, data: Dict[str, Any]) -> None:
        await self.store.put(key, json.dumps(data, ensure_ascii=False))


class ProjectRepository(_RecordRepository):
    """プロジェクトレコードと全プロジェクトインデックスを管理する。"""

    def __init__(self, store: KeyValueStore):
        super().__init__(store)
        self.index = IdIndex(store, PROJECT_INDEX_KEY)
        self.todos: Optional["TodoRepository"] = None

    def _todo_repository(self) -> "TodoRepository":
        if self.todos is None:
            raise RuntimeError("TodoRepository is not attached to ProjectRepository")
        return self.todos

    async def _load(self, project_id: str) -> Optional[Project]:
        return await self._read_entity(project_key(project_id), Project.from_dict)

    async def exists(self, project_id: str) -> bool:
        return await self.store.get(project_key(project_id)) is not None

    async def create(self, name: str, description: str = "") -> Project:
        now = self._now()
        project = Project(
            id=self._new_id(),
            name=name,
            description=description or "",
            created_at=now,
            updated_at=now,
        )
        await self._write_record(project_key(project.id), project.to_dict())
        await self.index.add(project.id)
        logger.info("Created project %s (%s)", project.id, project.name)
        return project

    async def get(self, project_id: str) -> Tuple[Project, List[Todo]]:
        project = await self._load(project_id)
        if project is None:
            raise NotFoundError("project", project_id)
        todos = await self._todo_repository().list_for_project(project_id)
        return project, todos

    async def list(self) -> List[Project]:
        projects: List[Project] = []
        for project_id in await self.index.read():
            project = await self._load(project_id)
            if project is None:
                logger.warning("Skipping dangling project index entry %s", project_id)
                continue
            projects.append(project)
        return projects

    async def delete(self, project_id: str) -> DeleteResult:
        if not await self.exists(project_id):
            raise NotFoundError("project", project_id)

        todo_repo = self._todo_repository()
        todos = await todo_repo.list_for_project(project_id)
        await self.index.remove(project_id)
        for todo in todos:
            await self.store.delete(todo_key(todo.id))
        await todo_repo.index_for(project_id).clear()
        await self.store.delete(project_key(project_id))

        logger.info("Deleted project %s with %d todos", project_id, len(todos))
        return DeleteResult(entity="project", id=project_id, todos_removed=len(todos))


class TodoRepository(_RecordRepository):
    """Todoレコードとプロジェクト毎のTodoインデックスを管理する。"""

    def __init__(self, store: KeyValueStore, projects: ProjectRepository):
        super().__init__(store)
        self.projects = projects

    def index_for(self, project_id: str) -> IdIndex:
        return IdIndex(self.store, project_todos_key(project_id))

    async def _load(self, todo_id: str) -> Optional[Todo]:
        return await self._read_entity(todo_key(todo_id), Todo.from_dict)

    async def _ensure_project(self, project_id: str) -> None:
        if not await self.projects.exists(project_id):
            raise NotFoundError("project", project_id)

    async def create(
        self,
        project_id: str,
        title: str,
        description: str = "",
        priority: Optional[TodoPriority] = None,
    ) -> Todo:
        await self._ensure_project(project_id)
        now = self._now()
        todo = Todo(
            id=self._new_id(),
            project_id=project_id,
            title=title,
            status=TodoStatus.PENDING,
            priority=TodoPriority(priority) if priority else TodoPriority.MEDIUM,
            description=description or "",
            created_at=now,
            updated_at=now,
        )
        await self._write_record(todo_key(todo.id), todo.to_dict())
        await self.index_for(project_id).add(todo.id)
        logger.info("Created todo %s in project %s", todo.id, project_id)
        return todo

    async def get(self, todo_id: str) -> Todo:
        todo = await self._load(todo_id)
        if todo is None:
            raise NotFoundError("todo", todo_id)
        return todo

    async def update(
        self,
        todo_id: str,
        *,
        title: Optional[str] = None,
        description: Optional[str] = None,
        status: Optional[TodoStatus] = None,
        priority: Optional[TodoPriority] = None,
    ) -> Todo:
        todo = await self.get(todo_id)

        if title is not None:
            todo.title = title
        if description is not None:
            todo.description = description
        if status is not None:
            todo.status = TodoStatus(status)
        if priority is not None:
            todo.priority = TodoPriority(priority)
        todo.updated_at = self._now()

        await self._write_record(todo_key(todo.id), todo.to_dict())
        logger.debug("Updated todo %s", todo.id)
        return todo

    async def delete(self, todo_id: str) -> DeleteResult:
        todo = await self.get(todo_id)
        await self.index_for(todo.project_id).remove(todo.id)
        await self.store.delete(todo_key(todo.id))
        logger.info("Deleted todo %s from project %s", todo.id, todo.project_id)
        return DeleteResult(entity="todo", id=todo.id)

    async def list_for_project(self, project_id: str) -> List[Todo]:
        """インデックスを解決してTodoを返す（プロジェクトの存在は確認しない）"""
        todos: List[Todo] = []
        for todo_id in await self.index_for(project_id).read():
            todo = await self._load(todo_id)
            if todo is None:
                logger.warning(
                    "Skipping dangling todo index entry %s in project %s", todo_id, project_id
                )
                continue
            todos.append(todo)
        return todos

    async def list_by_project(
        self, project_id: str, status: Optional[str] = None
    ) -> List[Todo]:
        await self._ensure_project(project_id)
        todos = await self.list_for_project(project_id)
        if status is None or status == STATUS_FILTER_ALL:
            return todos
        wanted = TodoStatus(status)
        return [todo for todo in todos if todo.status is wanted]


def create_repositories(store: KeyValueStore) -> Tuple[ProjectRepository, TodoRepository]:
    """相互参照するProject/Todoリポジトリを組み立てる"""
    projects = ProjectRepository(store)
    todos = TodoRepository(store, projects)
    projects.todos = todos
    return projects, todos
