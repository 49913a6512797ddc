"""Planner CLI の動作テスト"""

import json
import subprocess
import sys
from pathlib import Path


def run_cli(args: list[str], db_path: Path) -> subprocess.CompletedProcess:
    """CLI実行ヘルパー"""
    cmd = [
        sys.executable,
        "-m",
        "src.planner",
        "--db-path",
        str(db_path),
    ] + args
    return subprocess.run(
        cmd,
        capture_output=True,
        text=True,
        cwd=Path(__file__).parent.parent,
    )


def test_cli_list_projects_empty(tmp_path):
    db_path = tmp_path / "cli_test.db"
    result = run_cli(["list-projects"], db_path)
    assert result.returncode == 0
    assert json.loads(result.stdout) == []


def test_cli_project_and_todo_flow(tmp_path):
    db_path = tmp_path / "cli_test.db"

    result = run_cli(["create-project", "--name", "会議準備"], db_path)
    assert result.returncode == 0
    project = json.loads(result.stdout)
    assert project["name"] == "会議準備"

    result = run_cli(
        [
            "create-todo",
            "--project-id",
            project["id"],
            "--title",
            "資料作成",
            "--priority",
            "high",
        ],
        db_path,
    )
    assert result.returncode == 0
    todo = json.loads(result.stdout)
    assert todo["priority"] == "high"

    result = run_cli(["update-todo", "--todo-id", todo["id"], "--status", "in_progress"], db_path)
    assert result.returncode == 0
    assert json.loads(result.stdout)["status"] == "in_progress"

    result = run_cli(
        ["list-todos", "--project-id", project["id"], "--status", "in_progress"], db_path
    )
    assert result.returncode == 0
    assert [t["id"] for t in json.loads(result.stdout)] == [todo["id"]]

    result = run_cli(["delete-project", "--project-id", project["id"]], db_path)
    assert result.returncode == 0
    assert "1 todos removed" in result.stdout

    result = run_cli(["get-todo", "--todo-id", todo["id"]], db_path)
    assert result.returncode == 1
    assert "not found" in result.stderr


def test_cli_error_invalid_id(tmp_path):
    db_path = tmp_path / "cli_test.db"
    result = run_cli(["get-project", "--project-id", "nonexistent"], db_path)
    assert result.returncode == 1
    assert "nonexistent" in result.stderr


def test_cli_logs_dangling_index_warning(tmp_path):
    import asyncio

    from src.planner.store import SQLiteKeyValueStore

    db_path = tmp_path / "cli_test.db"
    asyncio.run(SQLiteKeyValueStore(db_path).put("project:list", '["ghost"]'))

    result = run_cli(["list-projects"], db_path)
    assert result.returncode == 0
    assert json.loads(result.stdout) == []
    assert " - WARNING - " in result.stderr
    assert "Skipping dangling project index entry ghost" in result.stderr
