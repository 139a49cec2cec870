"""
Backend selection: local SQLAlchemy engine vs. remote Turso HTTP pipeline.

use_remote_http_backend() is a pure decision over settings; get_executor() makes
that decision once per process so a request never switches backends midway.
"""
import logging
import threading

from hello_ai.config import Settings, settings as default_settings
from hello_ai.db.executor import EngineExecutor, SqlExecutor
from hello_ai.db.turso_http import TursoHttpExecutor, normalize_base_url

logger = logging.getLogger(__name__)

_executor: SqlExecutor | None = None
_lock = threading.Lock()


def use_remote_http_backend(cfg: Settings | None = None) -> bool:
    """True on the serverless host with a remote database URL and an auth token."""
    cfg = cfg or default_settings
    base_url = normalize_base_url(cfg.turso_database_url)
    return cfg.is_vercel and bool(base_url) and bool(cfg.turso_auth_token)


def build_executor(cfg: Settings | None = None) -> SqlExecutor:
    cfg = cfg or default_settings
    if use_remote_http_backend(cfg):
        return TursoHttpExecutor(cfg.turso_database_url, cfg.turso_auth_token)
    return EngineExecutor.from_url(cfg.local_database_url)


def get_executor() -> SqlExecutor:
    """Process-wide executor (FastAPI dependency). Built on first use."""
    global _executor
    if _executor is None:
        with _lock:
            if _executor is None:
                _executor = build_executor()
                logger.info("SQL backend selected: %s", _executor.name)
    return _executor


def reset_executor() -> None:
    """Drop the cached executor so the next get_executor() re-selects."""
    global _executor
    with _lock:
        if isinstance(_executor, EngineExecutor):
            _executor.dispose()
        _executor = None
