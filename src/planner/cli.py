#!/usr/bin/env python3
"""
Planner CLI - ツール呼び出しをコマンドラインから実行するインターフェース

Usage:
    python -m src.planner create-project --name "名前" [--description "詳細"]
    python -m src.planner list-projects
    python -m src.planner get-project --project-id ID
    python -m src.planner delete-project --project-id ID
    python -m src.planner create-todo --project-id ID --title "タイトル" [--description "詳細"] [--priority low|medium|high]
    python -m src.planner get-todo --todo-id ID
    python -m src.planner update-todo --todo-id ID [--title ...] [--description ...] [--status pending|in_progress|completed] [--priority low|medium|high]
    python -m src.planner delete-todo --todo-id ID
    python -m src.planner list-todos --project-id ID [--status pending|in_progress|completed|all]
"""

from __future__ import annotations

import argparse
import asyncio
import sys
from typing import Any, Dict, Optional

from .config import Config
from .logger import setup_logger
from .models import STATUS_FILTER_ALL, TodoPriority, TodoStatus
from .repository import create_repositories
from .store import KeyValueStore, SQLiteKeyValueStore
from .tools import ToolDispatcher

PRIORITY_CHOICES = [p.value for p in TodoPriority]
STATUS_CHOICES = [s.value for s in TodoStatus]

# サブコマンド → (ツール名, 引数名のリスト)
COMMANDS: Dict[str, tuple[str, list[str]]] = {
    "create-project": ("create_project", ["name", "description"]),
    "list-projects": ("list_projects", []),
    "get-project": ("get_project", ["project_id"]),
    "delete-project": ("delete_project", ["project_id"]),
    "create-todo": ("create_todo", ["project_id", "title", "description", "priority"]),
    "get-todo": ("get_todo", ["todo_id"]),
    "update-todo": ("update_todo", ["todo_id", "title", "description", "status", "priority"]),
    "delete-todo": ("delete_todo", ["todo_id"]),
    "list-todos": ("list_todos", ["project_id", "status"]),
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Planner CLI - プロジェクト/Todo管理",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--db-path",
        type=str,
        help="SQLiteデータベースファイルのパス（デフォルト: 設定ファイルのstore.db_path）",
    )

    subparsers = parser.add_subparsers(dest="command", help="実行するコマンド", required=True)

    p = subparsers.add_parser("create-project", help="プロジェクトを作成")
    p.add_argument("--name", required=True, help="プロジェクト名")
    p.add_argument("--description", help="プロジェクトの説明")

    subparsers.add_parser("list-projects", help="プロジェクト一覧を表示")

    for command, help_text in (
        ("get-project", "プロジェクトとTodoを取得"),
        ("delete-project", "プロジェクトと配下のTodoを削除"),
    ):
        p = subparsers.add_parser(command, help=help_text)
        p.add_argument("--project-id", required=True, help="プロジェクトID")

    p = subparsers.add_parser("create-todo", help="Todoを作成")
    p.add_argument("--project-id", required=True, help="プロジェクトID")
    p.add_argument("--title", required=True, help="Todoのタイトル")
    p.add_argument("--description", help="Todoの詳細説明")
    p.add_argument("--priority", choices=PRIORITY_CHOICES, help="優先度（デフォルト: medium）")

    for command, help_text in (
        ("get-todo", "Todoを取得"),
        ("delete-todo", "Todoを削除"),
    ):
        p = subparsers.add_parser(command, help=help_text)
        p.add_argument("--todo-id", required=True, help="TodoID")

    p = subparsers.add_parser("update-todo", help="Todoを更新")
    p.add_argument("--todo-id", required=True, help="TodoID")
    p.add_argument("--title", help="新しいタイトル")
    p.add_argument("--description", help="新しい詳細説明")
    p.add_argument("--status", choices=STATUS_CHOICES, help="新しいステータス")
    p.add_argument("--priority", choices=PRIORITY_CHOICES, help="新しい優先度")

    p = subparsers.add_parser("list-todos", help="プロジェクトのTodo一覧を表示")
    p.add_argument("--project-id", required=True, help="プロジェクトID")
    p.add_argument(
        "--status",
        choices=STATUS_CHOICES + [STATUS_FILTER_ALL],
        help="ステータスで絞り込み",
    )

    return parser


def build_store(config: Config, db_path: Optional[str]) -> KeyValueStore:
    if db_path:
        return SQLiteKeyValueStore(db_path)
    return config.build_store()


async def run_command(store: KeyValueStore, command: str, namespace: argparse.Namespace) -> Dict[str, Any]:
    tool_name, arg_names = COMMANDS[command]
    args = {
        name: getattr(namespace, name)
        for name in arg_names
        if getattr(namespace, name, None) is not None
    }
    projects, todos = create_repositories(store)
    return await ToolDispatcher(projects, todos).call(tool_name, args)


def main(argv: Optional[list[str]] = None) -> int:
    """CLIエントリポイント"""
    args = build_parser().parse_args(argv)
    config = Config.from_yaml()
    setup_logger(log_level=config.log_level, log_file=config.log_file)
    store = build_store(config, args.db_path)

    result = asyncio.run(run_command(store, args.command, args))
    text = "\n".join(item["text"] for item in result["content"])
    if result["isError"]:
        print(f"Error: {text}", file=sys.stderr)
        return 1
    print(text)
    return 0


if __name__ == "__main__":
    sys.exit(main())
