"""
Session id: opaque partition key carried in a long-lived cookie.
Not stored server-side; callers echo it back with session_cookie_header().
"""
import uuid

from fastapi import Request

from hello_ai.core.constants import SESSION_COOKIE, SESSION_MAX_AGE_SECONDS


def create_session_id() -> str:
    """Generate a new session id (UUID4 string)."""
    return str(uuid.uuid4())


def get_or_create_session_id(request: Request) -> str:
    """
    Return the session cookie value unchanged if present (any string is accepted),
    otherwise a fresh id. Nothing is written here.
    """
    existing = request.cookies.get(SESSION_COOKIE)
    if existing:
        return existing
    return create_session_id()


def session_cookie_header(session_id: str) -> str:
    return (
        f"{SESSION_COOKIE}={session_id}; Path=/; Max-Age={SESSION_MAX_AGE_SECONDS}; "
        "HttpOnly; SameSite=Lax"
    )
