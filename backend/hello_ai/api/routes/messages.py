"""
Chat history for the current session: list (with lazy retention sweep) and clear.
"""
import logging

from fastapi import APIRouter, Depends, Response

from hello_ai.api.deps import cookie_headers, get_ready_executor, get_session_id
from hello_ai.db.executor import SqlExecutor
from hello_ai.services.chat_message_service import clear_session, list_messages, sweep_expired

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("")
async def get_messages(
    response: Response,
    session_id: str = Depends(get_session_id),
    executor: SqlExecutor = Depends(get_ready_executor),
):
    """Return this session's messages as [{ id, role, text, ts, kind }], oldest first."""
    try:
        sweep_expired(executor)
    except Exception as e:
        logger.warning("chat_messages retention sweep failed: %s", e, exc_info=True)
    messages = list_messages(executor, session_id)
    response.headers.update(cookie_headers(session_id))
    return {"messages": [m.to_display() for m in messages]}


@router.delete("")
async def delete_messages(
    response: Response,
    session_id: str = Depends(get_session_id),
    executor: SqlExecutor = Depends(get_ready_executor),
):
    """Clear this session's chat history."""
    clear_session(executor, session_id)
    response.headers.update(cookie_headers(session_id))
    return {"ok": True}
