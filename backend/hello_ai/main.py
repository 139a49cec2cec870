"""
FastAPI app entrypoint.

Joe-bot chat (/api/chat, /api/messages) and the todo list (/api/todos), scoped by session cookie.
"""
import logging
import os
from contextlib import asynccontextmanager
from pathlib import Path

from dotenv import load_dotenv
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

# Load .env from backend/ before any app code
load_dotenv(Path(__file__).resolve().parent.parent / ".env")

from hello_ai.api.routes import chat, messages, todos
from hello_ai.config import settings
from hello_ai.core.errors import (
    MSG_DATABASE_FAILED,
    MSG_UPSTREAM_FAILED,
    STATUS_BAD_REQUEST,
    STATUS_INTERNAL_ERROR,
    SqlExecutionError,
)
from hello_ai.db.backend import get_executor, reset_executor
from hello_ai.db.migrations import ensure_migrations

if settings.openai_api_key:
    os.environ["OPENAI_API_KEY"] = settings.openai_api_key

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Pick the SQL backend once per process; routes share it through get_executor.
    executor = get_executor()
    try:
        ensure_migrations(executor)
    except Exception as e:
        logger.warning("Startup migrations failed (will retry per request): %s", e, exc_info=True)
    logger.info("Backend ready (sql=%s, ci=%s)", executor.name, settings.is_ci)
    yield
    reset_executor()


app = FastAPI(title="Hello AI", version="0.1.0", lifespan=lifespan)

# CORS: dev origins + optional CORS_ORIGINS env (comma-separated) for the deployed frontends
_cors_origins = [
    "http://localhost:3000",
    "http://127.0.0.1:3000",
    "http://localhost:3010",
    "http://127.0.0.1:3010",
    "http://localhost:3012",
    "http://127.0.0.1:3012",
]
if settings.cors_origins:
    _cors_origins.extend(o.strip() for o in settings.cors_origins.split(",") if o.strip())
app.add_middleware(
    CORSMiddleware,
    allow_origins=_cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse({"error": str(exc.detail)}, status_code=exc.status_code, headers=exc.headers)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    first = errors[0].get("msg") if errors else "Invalid request."
    return JSONResponse({"error": first}, status_code=STATUS_BAD_REQUEST)


@app.exception_handler(SqlExecutionError)
async def sql_exception_handler(request: Request, exc: SqlExecutionError):
    logger.error("Database error on %s %s: %s", request.method, request.url.path, exc)
    return JSONResponse({"error": MSG_DATABASE_FAILED}, status_code=STATUS_INTERNAL_ERROR)


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse({"error": MSG_UPSTREAM_FAILED}, status_code=STATUS_INTERNAL_ERROR)


app.include_router(chat.router, prefix="/api/chat", tags=["chat"])
app.include_router(messages.router, prefix="/api/messages", tags=["messages"])
app.include_router(todos.router, prefix="/api/todos", tags=["todos"])


@app.get("/", include_in_schema=False)
def root():
    """Root: point to the APIs, docs and health."""
    return {
        "message": "Hello AI API",
        "apps": {"joe_bot": "/api/chat", "todos": "/api/todos"},
        "docs": "/docs",
        "health": "/health",
    }


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}
