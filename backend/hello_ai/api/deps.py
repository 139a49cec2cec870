"""
Shared route dependencies: session id from the cookie and a migrated SQL executor.
"""
from fastapi import Depends, Request

from hello_ai.db.backend import get_executor
from hello_ai.db.executor import SqlExecutor
from hello_ai.db.migrations import ensure_migrations
from hello_ai.services.session_service import get_or_create_session_id, session_cookie_header


def get_session_id(request: Request) -> str:
    return get_or_create_session_id(request)


def get_ready_executor(executor: SqlExecutor = Depends(get_executor)) -> SqlExecutor:
    """Executor with tables ensured (no-op after the first successful attempt in this process)."""
    ensure_migrations(executor)
    return executor


def cookie_headers(session_id: str) -> dict[str, str]:
    """Headers for every response, including errors, so new sessions stick."""
    return {"Set-Cookie": session_cookie_header(session_id)}
