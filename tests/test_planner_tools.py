"""ToolDispatcher の単体テスト"""

import json

import pytest

from src.planner import InMemoryKeyValueStore, ToolDispatcher, create_repositories


@pytest.fixture
def dispatcher():
    projects, todos = create_repositories(InMemoryKeyValueStore())
    return ToolDispatcher(projects, todos)


def payload(result):
    assert result["isError"] is False
    return json.loads(result["content"][0]["text"])


def test_list_tools_covers_all_operations(dispatcher):
    names = {tool["name"] for tool in dispatcher.list_tools()}
    assert names == {
        "create_project",
        "list_projects",
        "get_project",
        "delete_project",
        "create_todo",
        "get_todo",
        "update_todo",
        "delete_todo",
        "list_todos",
    }


@pytest.mark.asyncio
async def test_launch_scenario(dispatcher):
    project = payload(
        await dispatcher.call("create_project", {"name": "Launch", "description": ""})
    )
    assert project["name"] == "Launch"
    assert project["createdAt"] == project["updatedAt"]

    todo = payload(
        await dispatcher.call(
            "create_todo",
            {"project_id": project["id"], "title": "Write plan", "priority": "high"},
        )
    )
    assert todo["projectId"] == project["id"]
    assert todo["status"] == "pending"
    assert todo["priority"] == "high"

    listed = payload(await dispatcher.call("list_todos", {"project_id": project["id"]}))
    assert listed == [todo]

    detail = payload(await dispatcher.call("get_project", {"project_id": project["id"]}))
    assert detail["project"]["id"] == project["id"]
    assert [t["id"] for t in detail["todos"]] == [todo["id"]]


@pytest.mark.asyncio
async def test_update_and_delete_messages(dispatcher):
    project = payload(await dispatcher.call("create_project", {"name": "P"}))
    todo = payload(
        await dispatcher.call("create_todo", {"project_id": project["id"], "title": "T"})
    )

    updated = payload(
        await dispatcher.call("update_todo", {"todo_id": todo["id"], "status": "completed"})
    )
    assert updated["status"] == "completed"
    assert updated["title"] == "T"

    result = await dispatcher.call("delete_todo", {"todo_id": todo["id"]})
    assert result["isError"] is False
    assert result["content"][0]["text"] == f"Todo {todo['id']} deleted"

    result = await dispatcher.call("delete_project", {"project_id": project["id"]})
    assert result["content"][0]["text"] == f"Project {project['id']} deleted (0 todos removed)"
    assert payload(await dispatcher.call("list_projects", {})) == []


@pytest.mark.asyncio
async def test_not_found_becomes_error_envelope(dispatcher):
    result = await dispatcher.call("get_todo", {"todo_id": "nonexistent"})
    assert result["isError"] is True
    assert "nonexistent" in result["content"][0]["text"]


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "tool, args",
    [
        ("unknown_tool", {}),
        ("create_project", {}),
        ("create_project", {"name": 42}),
        ("create_project", {"name": ""}),
        ("create_todo", {"project_id": "p", "title": ""}),
        ("update_todo", {"todo_id": "t", "title": ""}),
        ("create_todo", {"project_id": "p", "title": "t", "priority": "urgent"}),
        ("update_todo", {"todo_id": "t", "status": "done"}),
        ("list_todos", {"project_id": "p", "colour": "red"}),
    ],
)
async def test_invalid_arguments_are_rejected(dispatcher, tool, args):
    result = await dispatcher.call(tool, args)
    assert result["isError"] is True


@pytest.mark.asyncio
async def test_empty_title_is_not_stored(dispatcher):
    project = payload(await dispatcher.call("create_project", {"name": "P"}))
    result = await dispatcher.call("create_todo", {"project_id": project["id"], "title": ""})
    assert result["isError"] is True
    assert "title" in result["content"][0]["text"]

    assert payload(await dispatcher.call("list_todos", {"project_id": project["id"]})) == []
