"""
Idempotent schema setup: CREATE TABLE IF NOT EXISTS for every table, once per process.

Statements are compiled from the SQLAlchemy models for the SQLite dialect; the remote
libSQL backend speaks the same dialect, so both backends run identical DDL.
"""
import logging
import threading

from sqlalchemy.dialects import sqlite
from sqlalchemy.schema import CreateTable

from hello_ai.core.errors import BackendUnavailableError, SqlExecutionError
from hello_ai.db.base import Base
from hello_ai.db.executor import SqlExecutor
from hello_ai.db.tables import ALL_TABLE_NAMES
from hello_ai.models import ChatMessage, PersonFact, Todo  # noqa: F401  (registers tables on Base.metadata)

logger = logging.getLogger(__name__)

_registered = set(Base.metadata.tables)
_expected = set(ALL_TABLE_NAMES)
assert _registered == _expected, (
    f"Model tables {_registered} must match hello_ai.db.tables.ALL_TABLE_NAMES {_expected}."
)


def migration_statements() -> list[str]:
    """Ordered DDL, one statement per table in ALL_TABLE_NAMES."""
    dialect = sqlite.dialect()
    out = []
    for name in ALL_TABLE_NAMES:
        table = Base.metadata.tables[name]
        ddl = str(CreateTable(table, if_not_exists=True).compile(dialect=dialect))
        out.append(" ".join(ddl.split()))
    return out


MIGRATIONS = migration_statements()

_lock = threading.Lock()
_done = False


def ensure_migrations(executor: SqlExecutor) -> None:
    """
    Run MIGRATIONS once per process. Concurrent callers wait on the single in-flight
    attempt and then share its outcome.

    SQL errors are logged and skipped (the table most likely exists already). If the
    database cannot be reached the attempt is not recorded, so the next call retries.
    """
    global _done
    if _done:
        return
    with _lock:
        if _done:
            return
        for sql in MIGRATIONS:
            try:
                executor.execute(sql)
            except BackendUnavailableError as e:
                logger.warning("Migrations postponed, database unreachable: %s", e)
                return
            except SqlExecutionError as e:
                logger.warning("Migration failed (assuming table exists): %s", e)
        _done = True
        logger.info("Migrations ensured on %s backend", executor.name)


def migrations_done() -> bool:
    return _done


def reset_migrations() -> None:
    global _done
    with _lock:
        _done = False
