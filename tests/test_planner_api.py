from fastapi.testclient import TestClient

from src.server.app import create_app, reset_dependencies


def create_test_client(tmp_path, monkeypatch) -> TestClient:
    db_path = tmp_path / "api_planner.db"
    monkeypatch.setenv("PLANNER_DB_PATH", str(db_path))
    reset_dependencies()
    app = create_app()
    return TestClient(app)


def test_project_and_todo_crud_flow(tmp_path, monkeypatch):
    client = create_test_client(tmp_path, monkeypatch)

    resp = client.get("/api/projects")
    assert resp.status_code == 200
    assert resp.json() == []

    resp = client.post("/api/projects", json={"name": "Launch"})
    assert resp.status_code == 200
    project = resp.json()
    assert project["description"] == ""
    project_id = project["id"]

    resp = client.post(
        f"/api/projects/{project_id}/todos",
        json={"title": "Write plan", "priority": "high"},
    )
    assert resp.status_code == 200
    todo = resp.json()
    assert todo["projectId"] == project_id
    assert todo["status"] == "pending"
    todo_id = todo["id"]

    resp = client.patch(f"/api/todos/{todo_id}", json={"status": "completed"})
    assert resp.status_code == 200
    assert resp.json()["status"] == "completed"
    assert resp.json()["title"] == "Write plan"

    resp = client.get(f"/api/projects/{project_id}/todos", params={"status": "pending"})
    assert resp.status_code == 200
    assert resp.json() == []

    resp = client.get(f"/api/projects/{project_id}")
    assert resp.status_code == 200
    assert [t["id"] for t in resp.json()["todos"]] == [todo_id]

    resp = client.delete(f"/api/projects/{project_id}")
    assert resp.status_code == 200
    assert resp.json()["deleted"] is True

    resp = client.get(f"/api/todos/{todo_id}")
    assert resp.status_code == 404

    resp = client.get("/api/projects")
    assert resp.json() == []


def test_missing_entities_return_404(tmp_path, monkeypatch):
    client = create_test_client(tmp_path, monkeypatch)

    assert client.get("/api/projects/nonexistent").status_code == 404
    assert client.delete("/api/projects/nonexistent").status_code == 404
    assert client.get("/api/projects/nonexistent/todos").status_code == 404
    assert client.patch("/api/todos/nonexistent", json={"title": "x"}).status_code == 404
    assert client.delete("/api/todos/nonexistent").status_code == 404


def test_tool_execute_endpoint(tmp_path, monkeypatch):
    client = create_test_client(tmp_path, monkeypatch)

    resp = client.get("/api/tools/list")
    assert resp.status_code == 200
    assert len(resp.json()["tools"]) == 9

    resp = client.post(
        "/api/tools/execute",
        json={"tool": "create_project", "args": {"name": "Via tool"}},
    )
    assert resp.status_code == 200
    body = resp.json()
    assert body["isError"] is False
    assert '"name": "Via tool"' in body["content"][0]["text"]

    resp = client.post(
        "/api/tools/execute",
        json={"tool": "get_project", "args": {"project_id": "nonexistent"}},
    )
    assert resp.status_code == 200
    assert resp.json()["isError"] is True
