"""
Chat endpoint: one Joe-bot turn per request. Both turns are persisted to the session's history.
"""
import logging
import uuid
from typing import NoReturn

from fastapi import APIRouter, Depends, HTTPException, Request, Response

from hello_ai.agents.joe_agent import reply as joe_reply
from hello_ai.api.deps import cookie_headers, get_session_id
from hello_ai.config import settings
from hello_ai.core.errors import (
    MSG_DATABASE_NOT_CONFIGURED,
    MSG_MISSING_CHAT_INPUT,
    MSG_OPENAI_KEY_MISSING,
    STATUS_BAD_REQUEST,
    ConfigurationError,
    ImageValidationError,
    redact,
    upstream_error_to_http,
)
from hello_ai.db.backend import get_executor
from hello_ai.db.executor import SqlExecutor
from hello_ai.db.migrations import ensure_migrations
from hello_ai.services.chat_message_service import append_message, list_messages
from hello_ai.services.person_fact_service import get_person_facts, seed_person_facts_if_needed
from hello_ai.services.retention import now_ms
from hello_ai.services.uploads import content_to_store, parse_chat_request, validate_images

router = APIRouter()
logger = logging.getLogger(__name__)

_PREFLIGHT_HEADERS = {
    "Allow": "POST, OPTIONS",
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "POST, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type",
    "Access-Control-Max-Age": "86400",
}


def _handle_upstream_error(exc: Exception, log_message: str, session_id: str) -> NoReturn:
    logger.error("%s: %s", log_message, redact(repr(exc), settings.openai_api_key, settings.turso_auth_token))
    http_exc = upstream_error_to_http(exc)
    http_exc.headers = {**(http_exc.headers or {}), **cookie_headers(session_id)}
    raise http_exc from exc


def _check_database_configured() -> None:
    if settings.is_vercel and not settings.turso_database_url:
        logger.error("/api/chat: TURSO_DATABASE_URL not set on hosted deployment")
        raise ConfigurationError(MSG_DATABASE_NOT_CONFIGURED)


@router.options("", include_in_schema=False)
async def chat_preflight():
    return Response(status_code=204, headers=_PREFLIGHT_HEADERS)


@router.post("")
async def chat(
    request: Request,
    response: Response,
    session_id: str = Depends(get_session_id),
    executor: SqlExecutor = Depends(get_executor),
):
    """
    Send a message (JSON {message} or multipart message + files). Returns {text}.
    In CI the reply is an echo and no model is called.
    """
    try:
        _check_database_configured()

        parsed = await parse_chat_request(request)
        msg = parsed.message
        files = parsed.files
        if not msg and not files:
            raise HTTPException(status_code=STATUS_BAD_REQUEST, detail=MSG_MISSING_CHAT_INPUT)
        try:
            validate_images(files)
        except ImageValidationError as e:
            raise HTTPException(status_code=STATUS_BAD_REQUEST, detail=str(e)) from e

        ensure_migrations(executor)
        try:
            seed_person_facts_if_needed(executor)
        except Exception as e:
            logger.warning("Person facts seed skipped: %s", e)

        content = content_to_store(msg, len(files))

        if settings.is_ci:
            ts = now_ms()
            ci_id = f"ci-{ts}-{uuid.uuid4().hex[:8]}"
            text = f"CI echo: {content}"
            append_message(executor, ci_id, session_id, "user", content, ts)
            append_message(executor, f"{ci_id}-r", session_id, "assistant", text, now_ms())
            response.headers.update(cookie_headers(session_id))
            return {"text": text}

        if not settings.openai_api_key:
            raise ConfigurationError(MSG_OPENAI_KEY_MISSING)

        history = list_messages(executor, session_id)
        facts = get_person_facts(executor)

        append_message(executor, str(uuid.uuid4()), session_id, "user", content, now_ms())
        text = await joe_reply(msg, history=history, facts=facts, images=files)
        append_message(executor, str(uuid.uuid4()), session_id, "assistant", text, now_ms())

        response.headers.update(cookie_headers(session_id))
        return {"text": text}
    except HTTPException as e:
        e.headers = {**(e.headers or {}), **cookie_headers(session_id)}
        raise
    except Exception as e:  # noqa: BLE001
        _handle_upstream_error(e, "/api/chat failed", session_id)
