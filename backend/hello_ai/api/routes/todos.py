"""
Todo list for the current session. Mutations by id check that the caller's session owns the row.
"""
import logging
import uuid

from fastapi import APIRouter, Depends, HTTPException, Response
from pydantic import BaseModel, StrictBool, StrictStr

from hello_ai.api.deps import cookie_headers, get_ready_executor, get_session_id
from hello_ai.core.errors import (
    MSG_FORBIDDEN,
    MSG_MISSING_TODO_TEXT,
    MSG_NOT_FOUND,
    STATUS_BAD_REQUEST,
    STATUS_FORBIDDEN,
    STATUS_NOT_FOUND,
    TodoNotFoundError,
)
from hello_ai.db.executor import SqlExecutor
from hello_ai.models.todo import Todo
from hello_ai.services.retention import now_ms
from hello_ai.services.todo_service import (
    create_todo,
    delete_todo,
    get_todo_by_id,
    list_todos,
    sweep_expired_completed,
    update_todo,
)

router = APIRouter()
logger = logging.getLogger(__name__)


class CreateTodoRequest(BaseModel):
    text: StrictStr | None = None


class UpdateTodoRequest(BaseModel):
    text: StrictStr | None = None
    completed: StrictBool | None = None


def _owned_todo(executor: SqlExecutor, todo_id: str, session_id: str) -> Todo:
    """Load a todo and check ownership: 404 if missing, 403 if another session owns it."""
    todo = get_todo_by_id(executor, todo_id)
    if todo is None:
        raise HTTPException(status_code=STATUS_NOT_FOUND, detail=MSG_NOT_FOUND, headers=cookie_headers(session_id))
    if todo.session_id != session_id:
        raise HTTPException(status_code=STATUS_FORBIDDEN, detail=MSG_FORBIDDEN, headers=cookie_headers(session_id))
    return todo


@router.get("")
async def get_todos(
    response: Response,
    session_id: str = Depends(get_session_id),
    executor: SqlExecutor = Depends(get_ready_executor),
):
    """Return this session's todos as [{ id, text, completed }], oldest first."""
    try:
        sweep_expired_completed(executor)
    except Exception as e:
        logger.warning("todos retention sweep failed: %s", e, exc_info=True)
    todos = list_todos(executor, session_id)
    response.headers.update(cookie_headers(session_id))
    return {"todos": [t.to_api() for t in todos]}


@router.post("")
async def post_todo(
    body: CreateTodoRequest,
    response: Response,
    session_id: str = Depends(get_session_id),
    executor: SqlExecutor = Depends(get_ready_executor),
):
    """Create a todo. Blank text is rejected before anything is written."""
    text = (body.text or "").strip()
    if not text:
        raise HTTPException(
            status_code=STATUS_BAD_REQUEST, detail=MSG_MISSING_TODO_TEXT, headers=cookie_headers(session_id)
        )
    todo = create_todo(executor, str(uuid.uuid4()), session_id, text, now_ms())
    response.headers.update(cookie_headers(session_id))
    return {"todo": todo.to_api_detail()}


@router.patch("/{todo_id}")
async def patch_todo(
    todo_id: str,
    body: UpdateTodoRequest,
    response: Response,
    session_id: str = Depends(get_session_id),
    executor: SqlExecutor = Depends(get_ready_executor),
):
    """
    Update text and/or completion. Blank text keeps the current text; completing stamps
    completedAt, un-completing clears it.
    """
    existing = _owned_todo(executor, todo_id, session_id)
    updates = {}
    if body.text is not None:
        updates["text"] = body.text.strip() or existing.text
    if body.completed is not None:
        updates["completed"] = body.completed
        updates["completed_at"] = now_ms() if body.completed else None
    try:
        todo = update_todo(executor, todo_id, **updates) if updates else existing
    except TodoNotFoundError as e:
        raise HTTPException(
            status_code=STATUS_NOT_FOUND, detail=MSG_NOT_FOUND, headers=cookie_headers(session_id)
        ) from e
    response.headers.update(cookie_headers(session_id))
    return {"todo": todo.to_api_detail()}


@router.delete("/{todo_id}")
async def remove_todo(
    todo_id: str,
    response: Response,
    session_id: str = Depends(get_session_id),
    executor: SqlExecutor = Depends(get_ready_executor),
):
    _owned_todo(executor, todo_id, session_id)
    delete_todo(executor, todo_id)
    response.headers.update(cookie_headers(session_id))
    return {"ok": True}
