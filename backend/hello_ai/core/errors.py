"""
Centralized error handling for persistence, upload and LLM failures.
Constants, domain exceptions and a reusable helper so routes stay thin and new error types are easy to add.
"""
from __future__ import annotations

from typing import Callable

from fastapi import HTTPException

# ---------------------------------------------------------------------------
# Constants: status codes and user-facing messages
# ---------------------------------------------------------------------------

MSG_AI_QUOTA_EXCEEDED = "AI service quota exceeded. Try again later."
MSG_UPSTREAM_FAILED = "Something went wrong while answering. Please try again."
MSG_DATABASE_FAILED = "Database request failed. Please try again."
MSG_DATABASE_NOT_CONFIGURED = (
    "Database not configured. Set TURSO_DATABASE_URL and TURSO_AUTH_TOKEN in the hosting project settings."
)
MSG_OPENAI_KEY_MISSING = (
    "OPENAI_API_KEY not found. Configure it for this deployment (e.g. hosting project env) and redeploy."
)
MSG_MISSING_CHAT_INPUT = "Missing 'message' or image attachments."
MSG_MISSING_TODO_TEXT = "Missing text."
MSG_NOT_FOUND = "Not found"
MSG_FORBIDDEN = "Forbidden"

STATUS_BAD_REQUEST = 400
STATUS_FORBIDDEN = 403
STATUS_NOT_FOUND = 404
STATUS_INTERNAL_ERROR = 500


# ---------------------------------------------------------------------------
# Domain exceptions
# ---------------------------------------------------------------------------

class ConfigurationError(Exception):
    """Required credentials or settings are missing."""


class SqlExecutionError(Exception):
    """The database accepted the request but the statement failed."""


class BackendUnavailableError(SqlExecutionError):
    """The database could not be reached at all (transport failure)."""


class TodoNotFoundError(LookupError):
    def __init__(self, todo_id: str):
        super().__init__(f"Todo not found: {todo_id}")
        self.todo_id = todo_id


class ImageValidationError(ValueError):
    """Attachment rejected; code is one of TOO_MANY, TOO_LARGE, INVALID_TYPE."""

    def __init__(self, message: str, code: str):
        super().__init__(message)
        self.code = code


# ---------------------------------------------------------------------------
# Error rules: (predicate, status_code, detail_message)
# Add new rules here instead of scattering checks in routes.
# ---------------------------------------------------------------------------

def _is_quota_error(msg: str) -> bool:
    lower = msg.lower()
    return (
        "429" in msg
        or "insufficient_quota" in lower
        or "quota" in lower
        or "rate limit" in lower
    )


# List of (predicate, status_code, detail). First match wins.
UPSTREAM_ERROR_RULES: list[tuple[Callable[[str], bool], int, str]] = [
    (_is_quota_error, STATUS_INTERNAL_ERROR, MSG_AI_QUOTA_EXCEEDED),
]


def upstream_error_to_http(exc: Exception) -> HTTPException:
    """
    Map an exception from the model call or a database call into an HTTPException.
    Clients only ever see generic messages; the real detail goes to the log.
    """
    if isinstance(exc, HTTPException):
        return exc
    if isinstance(exc, ConfigurationError):
        return HTTPException(status_code=STATUS_INTERNAL_ERROR, detail=str(exc))
    if isinstance(exc, SqlExecutionError):
        return HTTPException(status_code=STATUS_INTERNAL_ERROR, detail=MSG_DATABASE_FAILED)
    msg = str(exc)
    for predicate, status_code, detail in UPSTREAM_ERROR_RULES:
        if predicate(msg):
            return HTTPException(status_code=status_code, detail=detail)
    return HTTPException(status_code=STATUS_INTERNAL_ERROR, detail=MSG_UPSTREAM_FAILED)


def redact(text: str, *secrets: str) -> str:
    """Replace any non-empty secret in text so it can be logged."""
    out = text
    for secret in secrets:
        if secret:
            out = out.replace(secret, "***")
    return out
