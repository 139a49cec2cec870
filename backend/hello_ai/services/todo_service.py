"""
Todos: mutable per-session task list.

Plain accessors only: ownership is checked by the route layer via get_todo_by_id(),
and callers keep completed/completed_at consistent by setting both together.
"""
import logging

from hello_ai.core.errors import TodoNotFoundError
from hello_ai.db.executor import SqlExecutor
from hello_ai.models.todo import Todo
from hello_ai.services.retention import retention_cutoff_ms

logger = logging.getLogger(__name__)

_COLUMNS = "id, session_id, text, completed, completed_at, created_at"


class _Unset:
    def __repr__(self) -> str:
        return "UNSET"


UNSET = _Unset()


def _from_row(row: dict) -> Todo:
    completed_at = row.get("completed_at")
    return Todo(
        id=row["id"],
        session_id=row["session_id"],
        text=row["text"],
        completed=bool(row["completed"]),
        completed_at=int(completed_at) if completed_at is not None else None,
        created_at=int(row["created_at"]),
    )


def list_todos(executor: SqlExecutor, session_id: str) -> list[Todo]:
    """Todos for this session, oldest first."""
    result = executor.execute(
        f"SELECT {_COLUMNS} FROM todos WHERE session_id = :sid ORDER BY created_at ASC",
        {"sid": session_id},
    )
    return [_from_row(r) for r in result.rows]


def create_todo(executor: SqlExecutor, id: str, session_id: str, text: str, created_at: int) -> Todo:
    """Insert an active todo. text is expected to be trimmed and non-empty already."""
    executor.execute(
        "INSERT INTO todos (id, session_id, text, completed, completed_at, created_at) "
        "VALUES (:id, :sid, :text, 0, NULL, :ts)",
        {"id": id, "sid": session_id, "text": text, "ts": created_at},
    )
    return Todo(id=id, session_id=session_id, text=text, completed=False, completed_at=None, created_at=created_at)


def get_todo_by_id(executor: SqlExecutor, id: str) -> Todo | None:
    row = executor.execute(f"SELECT {_COLUMNS} FROM todos WHERE id = :id LIMIT 1", {"id": id}).first()
    return _from_row(row) if row else None


def update_todo(
    executor: SqlExecutor,
    id: str,
    *,
    text: str | _Unset = UNSET,
    completed: bool | _Unset = UNSET,
    completed_at: int | None | _Unset = UNSET,
) -> Todo:
    """
    Partial update: only supplied fields change. Returns the row as stored afterwards.
    Raises TodoNotFoundError if no row has this id.
    """
    assignments = []
    params: dict = {"id": id}
    if text is not UNSET:
        assignments.append("text = :text")
        params["text"] = text
    if completed is not UNSET:
        assignments.append("completed = :completed")
        params["completed"] = 1 if completed else 0
    if completed_at is not UNSET:
        assignments.append("completed_at = :completed_at")
        params["completed_at"] = completed_at
    if assignments:
        executor.execute(f"UPDATE todos SET {', '.join(assignments)} WHERE id = :id", params)
    todo = get_todo_by_id(executor, id)
    if todo is None:
        raise TodoNotFoundError(id)
    return todo


def delete_todo(executor: SqlExecutor, id: str) -> None:
    executor.execute("DELETE FROM todos WHERE id = :id", {"id": id})


def sweep_expired_completed(executor: SqlExecutor, now_ms: int | None = None) -> int:
    """Delete completed todos whose completed_at is past the retention horizon. Returns count deleted."""
    cutoff = retention_cutoff_ms(now_ms)
    n = executor.execute(
        "DELETE FROM todos WHERE completed = 1 AND completed_at IS NOT NULL AND completed_at < :cutoff",
        {"cutoff": cutoff},
    ).rows_affected
    if n:
        logger.info("Pruned %s completed todos (completed_at < %s)", n, cutoff)
    return n
