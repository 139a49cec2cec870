from hello_ai.api.routes import todos as todos_routes
from hello_ai.core.constants import RETENTION_MS, SESSION_COOKIE
from hello_ai.services.retention import now_ms
from hello_ai.services.todo_service import create_todo, delete_todo, get_todo_by_id, update_todo


def _count_todos(executor) -> int:
    return executor.execute("SELECT COUNT(*) AS n FROM todos").first()["n"]


def test_create_then_list_returns_one_todo(client):
    resp = client.post("/api/todos", json={"text": "Buy milk"})
    assert resp.status_code == 200
    created = resp.json()["todo"]
    assert created["text"] == "Buy milk"
    assert created["completed"] is False
    assert SESSION_COOKIE in resp.headers["set-cookie"]

    resp = client.get("/api/todos")
    assert resp.status_code == 200
    assert resp.json() == {"todos": [{"id": created["id"], "text": "Buy milk", "completed": False}]}


def test_text_is_trimmed(client):
    resp = client.post("/api/todos", json={"text": "  Walk dog  "})
    assert resp.json()["todo"]["text"] == "Walk dog"


def test_blank_text_creates_nothing(client, executor):
    for body in ({"text": ""}, {"text": "   "}, {}):
        resp = client.post("/api/todos", json=body)
        assert resp.status_code == 400
        assert resp.json() == {"error": "Missing text."}
    assert _count_todos(executor) == 0


def test_new_visitor_gets_session_cookie(client):
    resp = client.get("/api/todos")
    assert resp.json() == {"todos": []}
    cookie = resp.headers["set-cookie"]
    assert cookie.startswith(f"{SESSION_COOKIE}=")
    assert "HttpOnly" in cookie
    assert "Max-Age=31536000" in cookie


def test_lists_are_scoped_by_session(client, other_client):
    client.post("/api/todos", json={"text": "Mine"})
    other_client.post("/api/todos", json={"text": "Theirs"})

    assert [t["text"] for t in client.get("/api/todos").json()["todos"]] == ["Mine"]
    assert [t["text"] for t in other_client.get("/api/todos").json()["todos"]] == ["Theirs"]


def test_patch_completed_sets_completed_at(client):
    todo_id = client.post("/api/todos", json={"text": "Buy milk"}).json()["todo"]["id"]

    resp = client.patch(f"/api/todos/{todo_id}", json={"completed": True})

    assert resp.status_code == 200
    todo = resp.json()["todo"]
    assert todo["completed"] is True
    assert todo["completedAt"] is not None


def test_patch_uncomplete_clears_completed_at(client):
    todo_id = client.post("/api/todos", json={"text": "Buy milk"}).json()["todo"]["id"]
    client.patch(f"/api/todos/{todo_id}", json={"completed": True})

    todo = client.patch(f"/api/todos/{todo_id}", json={"completed": False}).json()["todo"]

    assert todo["completed"] is False
    assert todo["completedAt"] is None


def test_patch_blank_text_keeps_old_text(client):
    todo_id = client.post("/api/todos", json={"text": "Buy milk"}).json()["todo"]["id"]

    assert client.patch(f"/api/todos/{todo_id}", json={"text": "  "}).json()["todo"]["text"] == "Buy milk"
    assert client.patch(f"/api/todos/{todo_id}", json={"text": " Buy bread "}).json()["todo"]["text"] == "Buy bread"


def test_patch_empty_body_returns_current(client):
    todo_id = client.post("/api/todos", json={"text": "Buy milk"}).json()["todo"]["id"]

    resp = client.patch(f"/api/todos/{todo_id}", json={})

    assert resp.status_code == 200
    assert resp.json()["todo"]["text"] == "Buy milk"


def test_patch_from_other_session_is_forbidden(client, other_client, executor):
    todo_id = client.post("/api/todos", json={"text": "Buy milk"}).json()["todo"]["id"]

    resp = other_client.patch(f"/api/todos/{todo_id}", json={"completed": True})

    assert resp.status_code == 403
    assert resp.json() == {"error": "Forbidden"}
    assert get_todo_by_id(executor, todo_id).completed is False


def test_patch_missing_is_404(client):
    resp = client.patch("/api/todos/does-not-exist", json={"completed": True})
    assert resp.status_code == 404
    assert resp.json() == {"error": "Not found"}


def test_patch_rejects_non_bool_completed(client):
    todo_id = client.post("/api/todos", json={"text": "Buy milk"}).json()["todo"]["id"]

    resp = client.patch(f"/api/todos/{todo_id}", json={"completed": "yes"})

    assert resp.status_code == 400
    assert "error" in resp.json()


def test_delete_own_todo(client, executor):
    todo_id = client.post("/api/todos", json={"text": "Buy milk"}).json()["todo"]["id"]

    resp = client.delete(f"/api/todos/{todo_id}")

    assert resp.status_code == 200
    assert resp.json() == {"ok": True}
    assert get_todo_by_id(executor, todo_id) is None


def test_delete_from_other_session_is_forbidden(client, other_client, executor):
    todo_id = client.post("/api/todos", json={"text": "Buy milk"}).json()["todo"]["id"]

    assert other_client.delete(f"/api/todos/{todo_id}").status_code == 403
    assert client.delete("/api/todos/missing").status_code == 404
    assert get_todo_by_id(executor, todo_id) is not None


def test_list_sweeps_old_completed_todos(client, executor):
    long_ago = now_ms() - RETENTION_MS - 60_000
    create_todo(executor, "ancient", "someone-else", "Old task", long_ago)
    update_todo(executor, "ancient", completed=True, completed_at=long_ago)
    create_todo(executor, "ancient-active", "someone-else", "Still open", long_ago)

    client.get("/api/todos")

    assert get_todo_by_id(executor, "ancient") is None
    assert get_todo_by_id(executor, "ancient-active") is not None


def test_patch_of_todo_deleted_midway_is_404(client, executor, monkeypatch):
    todo_id = client.post("/api/todos", json={"text": "Buy milk"}).json()["todo"]["id"]

    def deleted_meanwhile(executor, todo_id, **fields):
        delete_todo(executor, todo_id)
        return update_todo(executor, todo_id, **fields)

    monkeypatch.setattr(todos_routes, "update_todo", deleted_meanwhile)

    resp = client.patch(f"/api/todos/{todo_id}", json={"completed": True})

    assert resp.status_code == 404
    assert resp.json() == {"error": "Not found"}
    assert SESSION_COOKIE in resp.headers["set-cookie"]
