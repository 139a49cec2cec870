"""
Chat messages: append-only log of role-tagged turns per session.
Rows are read back as transient ChatMessage model instances ordered by created_at.
"""
import logging

from hello_ai.core.errors import SqlExecutionError
from hello_ai.db.executor import SqlExecutor
from hello_ai.models.chat_message import ChatMessage
from hello_ai.services.retention import retention_cutoff_ms

logger = logging.getLogger(__name__)

ROLES = ("user", "assistant")


def _from_row(row: dict) -> ChatMessage:
    return ChatMessage(
        id=row["id"],
        session_id=row["session_id"],
        role=row["role"],
        content=row["content"],
        created_at=int(row["created_at"]),
    )


def list_messages(executor: SqlExecutor, session_id: str) -> list[ChatMessage]:
    """Messages for this session, oldest first."""
    result = executor.execute(
        "SELECT id, session_id, role, content, created_at FROM chat_messages "
        "WHERE session_id = :sid ORDER BY created_at ASC",
        {"sid": session_id},
    )
    return [_from_row(r) for r in result.rows]


def append_message(
    executor: SqlExecutor,
    id: str,
    session_id: str,
    role: str,
    content: str,
    created_at: int,
) -> None:
    """
    Insert one message. Caller supplies id and timestamp.
    Failures propagate: a lost write would silently drop a conversation turn.
    """
    try:
        executor.execute(
            "INSERT INTO chat_messages (id, session_id, role, content, created_at) "
            "VALUES (:id, :sid, :role, :content, :ts)",
            {"id": id, "sid": session_id, "role": role, "content": content, "ts": created_at},
        )
    except SqlExecutionError as e:
        logger.error("Chat message insert failed: %s", e)
        raise SqlExecutionError(f"Failed to insert chat message: {e}") from e


def clear_session(executor: SqlExecutor, session_id: str) -> int:
    """Delete every message for this session. Returns count deleted."""
    result = executor.execute("DELETE FROM chat_messages WHERE session_id = :sid", {"sid": session_id})
    return result.rows_affected


def sweep_expired(executor: SqlExecutor, now_ms: int | None = None) -> int:
    """Delete messages older than the retention horizon (all sessions). Returns count deleted."""
    cutoff = retention_cutoff_ms(now_ms)
    n = executor.execute("DELETE FROM chat_messages WHERE created_at < :cutoff", {"cutoff": cutoff}).rows_affected
    if n:
        logger.info("Pruned %s chat_messages (created_at < %s)", n, cutoff)
    return n
