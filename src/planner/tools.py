"""
Tool Dispatcher - プロジェクト/Todo操作のツール呼び出しレイヤー

主要コンポーネント:
- TOOL_DEFINITIONS: ツール名・説明・引数スキーマ
- ToolDispatcher: 引数検証、リポジトリ呼び出し、レスポンス封筒への変換
"""

from __future__ import annotations

import json
import logging
from typing import Any, Awaitable, Callable, Dict, List

from .exceptions import NotFoundError, ValidationError
from .models import STATUS_FILTER_ALL, TodoPriority, TodoStatus
from .repository import ProjectRepository, TodoRepository

logger = logging.getLogger(__name__)

PRIORITY_VALUES = [p.value for p in TodoPriority]
STATUS_VALUES = [s.value for s in TodoStatus]

TOOL_DEFINITIONS: Dict[str, Dict[str, Any]] = {
    "create_project": {
        "description": "Create a new project",
        "args_schema": {
            "name": {
                "type": "string",
                "required": True,
                "min_length": 1,
                "description": "Project name",
            },
            "description": {"type": "string", "description": "Project description"},
        },
    },
    "list_projects": {
        "description": "List all projects",
        "args_schema": {},
    },
    "get_project": {
        "description": "Get a project together with its todos",
        "args_schema": {
            "project_id": {"type": "string", "required": True, "description": "Project ID"},
        },
    },
    "delete_project": {
        "description": "Delete a project and all of its todos",
        "args_schema": {
            "project_id": {"type": "string", "required": True, "description": "Project ID"},
        },
    },
    "create_todo": {
        "description": "Create a new todo in a project",
        "args_schema": {
            "project_id": {"type": "string", "required": True, "description": "Project ID"},
            "title": {
                "type": "string",
                "required": True,
                "min_length": 1,
                "description": "Todo title",
            },
            "description": {"type": "string", "description": "Todo description"},
            "priority": {"type": "string", "enum": PRIORITY_VALUES, "description": "Priority"},
        },
    },
    "get_todo": {
        "description": "Get a todo",
        "args_schema": {
            "todo_id": {"type": "string", "required": True, "description": "Todo ID"},
        },
    },
    "update_todo": {
        "description": "Update fields of a todo",
        "args_schema": {
            "todo_id": {"type": "string", "required": True, "description": "Todo ID"},
            "title": {"type": "string", "min_length": 1, "description": "New title"},
            "description": {"type": "string", "description": "New description"},
            "status": {"type": "string", "enum": STATUS_VALUES, "description": "New status"},
            "priority": {"type": "string", "enum": PRIORITY_VALUES, "description": "New priority"},
        },
    },
    "delete_todo": {
        "description": "Delete a todo",
        "args_schema": {
            "todo_id": {"type": "string", "required": True, "description": "Todo ID"},
        },
    },
    "list_todos": {
        "description": "List todos of a project, optionally filtered by status",
        "args_schema": {
            "project_id": {"type": "string", "required": True, "description": "Project ID"},
            "status": {
                "type": "string",
                "enum": STATUS_VALUES + [STATUS_FILTER_ALL],
                "description": "Status filter",
            },
        },
    },
}


def text_content(text: str, is_error: bool = False) -> Dict[str, Any]:
    """テキスト1件のレスポンス封筒を生成"""
    return {"content": [{"type": "text", "text": text}], "isError": is_error}


def json_content(payload: Any) -> Dict[str, Any]:
    return text_content(json.dumps(payload, ensure_ascii=False, indent=2))


class ToolDispatcher:
    """ツール呼び出しをリポジトリ操作に振り分ける"""

    def __init__(self, projects: ProjectRepository, todos: TodoRepository):
        self.projects = projects
        self.todos = todos
        self._handlers: Dict[str, Callable[[Dict[str, Any]], Awaitable[Dict[str, Any]]]] = {
            "create_project": self._create_project,
            "list_projects": self._list_projects,
            "get_project": self._get_project,
            "delete_project": self._delete_project,
            "create_todo": self._create_todo,
            "get_todo": self._get_todo,
            "update_todo": self._update_todo,
            "delete_todo": self._delete_todo,
            "list_todos": self._list_todos,
        }

    def list_tools(self) -> List[Dict[str, Any]]:
        """登録済みツール一覧（名前・説明・引数スキーマ）"""
        return [
            {"name": name, "description": d["description"], "args_schema": d["args_schema"]}
            for name, d in TOOL_DEFINITIONS.items()
        ]

    async def call(self, tool_name: str, args: Dict[str, Any]) -> Dict[str, Any]:
        """
        ツール実行

        Args:
            tool_name: ツール名
            args: 引数辞書

        Returns:
            {"content": [{"type": "text", "text": str}], "isError": bool}
        """
        try:
            handler = self._handlers.get(tool_name)
            if handler is None:
                raise ValidationError(f"Tool not found: {tool_name}")
            self._validate_args(tool_name, args)
            return await handler(args)
        except (NotFoundError, ValidationError) as exc:
            logger.info("Tool %s failed: %s", tool_name, exc)
            return text_content(str(exc), is_error=True)

    @staticmethod
    def _validate_args(tool_name: str, args: Dict[str, Any]) -> None:
        """引数スキーマ検証"""
        args_schema = TOOL_DEFINITIONS[tool_name]["args_schema"]

        unknown = set(args) - set(args_schema)
        if unknown:
            raise ValidationError(f"Unknown arguments for {tool_name}: {sorted(unknown)}")

        for arg_name, schema in args_schema.items():
            if schema.get("required", False) and args.get(arg_name) is None:
                raise ValidationError(f"Required argument missing: {arg_name}")

            value = args.get(arg_name)
            if value is None:
                continue
            if schema.get("type") == "string" and not isinstance(value, str):
                raise ValidationError(f"Argument '{arg_name}' must be a string")
            if "min_length" in schema and len(value) < schema["min_length"]:
                raise ValidationError(
                    f"Argument '{arg_name}' must be at least {schema['min_length']} characters"
                )
            if "enum" in schema and value not in schema["enum"]:
                raise ValidationError(
                    f"Argument '{arg_name}' must be one of {schema['enum']}, got '{value}'"
                )

    async def _create_project(self, args: Dict[str, Any]) -> Dict[str, Any]:
        project = await self.projects.create(args["name"], args.get("description") or "")
        return json_content(project.to_dict())

    async def _list_projects(self, args: Dict[str, Any]) -> Dict[str, Any]:
        projects = await self.projects.list()
        return json_content([p.to_dict() for p in projects])

    async def _get_project(self, args: Dict[str, Any]) -> Dict[str, Any]:
        project, todos = await self.projects.get(args["project_id"])
        return json_content({"project": project.to_dict(), "todos": [t.to_dict() for t in todos]})

    async def _delete_project(self, args: Dict[str, Any]) -> Dict[str, Any]:
        result = await self.projects.delete(args["project_id"])
        return text_content(result.message)

    async def _create_todo(self, args: Dict[str, Any]) -> Dict[str, Any]:
        todo = await self.todos.create(
            args["project_id"],
            args["title"],
            description=args.get("description") or "",
            priority=args.get("priority"),
        )
        return json_content(todo.to_dict())

    async def _get_todo(self, args: Dict[str, Any]) -> Dict[str, Any]:
        todo = await self.todos.get(args["todo_id"])
        return json_content(todo.to_dict())

    async def _update_todo(self, args: Dict[str, Any]) -> Dict[str, Any]:
        todo = await self.todos.update(
            args["todo_id"],
            title=args.get("title"),
            description=args.get("description"),
            status=args.get("status"),
            priority=args.get("priority"),
        )
        return json_content(todo.to_dict())

    async def _delete_todo(self, args: Dict[str, Any]) -> Dict[str, Any]:
        result = await self.todos.delete(args["todo_id"])
        return text_content(result.message)

    async def _list_todos(self, args: Dict[str, Any]) -> Dict[str, Any]:
        todos = await self.todos.list_by_project(args["project_id"], args.get("status"))
        return json_content([t.to_dict() for t in todos])
