import pytest

from hello_ai.core.constants import RETENTION_MS
from hello_ai.core.errors import TodoNotFoundError
from hello_ai.services.todo_service import (
    create_todo,
    delete_todo,
    get_todo_by_id,
    list_todos,
    sweep_expired_completed,
    update_todo,
)

NOW = 1_750_000_000_000


def _toggle(executor, todo_id, at):
    current = get_todo_by_id(executor, todo_id)
    done = not current.completed
    return update_todo(executor, todo_id, completed=done, completed_at=at if done else None)


def test_create_and_list(executor):
    todo = create_todo(executor, "t1", "s1", "Buy milk", 1000)
    create_todo(executor, "t0", "s1", "Earlier", 500)
    create_todo(executor, "x", "s2", "Not mine", 700)

    assert todo.completed is False
    assert todo.completed_at is None
    assert [t.id for t in list_todos(executor, "s1")] == ["t0", "t1"]


def test_get_todo_by_id_carries_session(executor):
    create_todo(executor, "t1", "owner", "Buy milk", 1000)

    todo = get_todo_by_id(executor, "t1")

    assert todo.session_id == "owner"
    assert todo.text == "Buy milk"
    assert get_todo_by_id(executor, "missing") is None


def test_update_is_partial(executor):
    create_todo(executor, "t1", "s1", "Buy milk", 1000)

    updated = update_todo(executor, "t1", text="Buy oat milk")

    assert updated.text == "Buy oat milk"
    assert updated.completed is False
    assert updated.completed_at is None
    assert updated.created_at == 1000


def test_update_without_fields_returns_current_row(executor):
    create_todo(executor, "t1", "s1", "Buy milk", 1000)

    assert update_todo(executor, "t1").text == "Buy milk"


def test_update_missing_todo_raises(executor):
    with pytest.raises(TodoNotFoundError):
        update_todo(executor, "nope", text="x")


def test_completed_iff_completed_at_over_toggles(executor):
    create_todo(executor, "t1", "s1", "Buy milk", 1000)
    for i in range(5):
        todo = _toggle(executor, "t1", 2000 + i)
        assert todo.completed == (todo.completed_at is not None)


def test_toggle_twice_round_trips(executor):
    original = create_todo(executor, "t1", "s1", "Buy milk", 1000)

    _toggle(executor, "t1", 2000)
    back = _toggle(executor, "t1", 3000)

    assert back.completed == original.completed
    assert back.completed_at == original.completed_at


def test_delete(executor):
    create_todo(executor, "t1", "s1", "Buy milk", 1000)

    delete_todo(executor, "t1")

    assert get_todo_by_id(executor, "t1") is None


def test_to_api_shapes(executor):
    todo = create_todo(executor, "t1", "s1", "Buy milk", 1000)

    assert todo.to_api() == {"id": "t1", "text": "Buy milk", "completed": False}
    assert todo.to_api_detail()["createdAt"] == 1000
    assert todo.to_api_detail()["completedAt"] is None


def test_sweep_deletes_only_old_completed(executor):
    cutoff = NOW - RETENTION_MS
    for todo_id in ("old", "edge", "young", "active-old"):
        create_todo(executor, todo_id, "s1", todo_id, cutoff - 10_000)
    update_todo(executor, "old", completed=True, completed_at=cutoff - 1)
    update_todo(executor, "edge", completed=True, completed_at=cutoff)
    update_todo(executor, "young", completed=True, completed_at=cutoff + 1)

    assert sweep_expired_completed(executor, now_ms=NOW) == 1

    assert {t.id for t in list_todos(executor, "s1")} == {"edge", "young", "active-old"}


def test_uncompleted_todo_leaves_sweep_eligibility(executor):
    cutoff = NOW - RETENTION_MS
    create_todo(executor, "t1", "s1", "Buy milk", cutoff - 10_000)
    update_todo(executor, "t1", completed=True, completed_at=cutoff - 5_000)
    update_todo(executor, "t1", completed=False, completed_at=None)

    assert sweep_expired_completed(executor, now_ms=NOW) == 0
    assert get_todo_by_id(executor, "t1") is not None
