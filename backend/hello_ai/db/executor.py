"""
SQL execution seam shared by the local engine and the remote HTTP backend.

Stores only ever call execute(sql, params) with :name placeholders and get back
columns + rows (dicts keyed by column name) + rows_affected.
"""
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Mapping, Protocol

from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import DBAPIError, OperationalError, SQLAlchemyError

from hello_ai.core.errors import BackendUnavailableError, SqlExecutionError

logger = logging.getLogger(__name__)

SqlParams = Mapping[str, Any]


@dataclass
class SqlResult:
    columns: list[str] = field(default_factory=list)
    rows: list[dict[str, Any]] = field(default_factory=list)
    rows_affected: int = 0

    def first(self) -> dict[str, Any] | None:
        return self.rows[0] if self.rows else None


class SqlExecutor(Protocol):
    name: str

    def execute(self, sql: str, params: SqlParams | None = None) -> SqlResult:
        ...


def _ensure_sqlite_dir(url: str) -> None:
    """Create the parent directory for a sqlite:/// file URL."""
    prefix = "sqlite:///"
    if not url.startswith(prefix):
        return
    path = url[len(prefix):]
    if not path or path == ":memory:":
        return
    Path(path).parent.mkdir(parents=True, exist_ok=True)


class EngineExecutor:
    """Local backend: SQLAlchemy engine, one transaction per statement."""

    name = "local"

    def __init__(self, engine: Engine) -> None:
        self._engine = engine

    @classmethod
    def from_url(cls, url: str) -> "EngineExecutor":
        _ensure_sqlite_dir(url)
        connect_args = {"check_same_thread": False} if url.startswith("sqlite") else {}
        return cls(create_engine(url, pool_pre_ping=True, connect_args=connect_args))

    @property
    def engine(self) -> Engine:
        return self._engine

    def execute(self, sql: str, params: SqlParams | None = None) -> SqlResult:
        try:
            with self._engine.begin() as conn:
                result = conn.execute(text(sql), dict(params or {}))
                if result.returns_rows:
                    columns = list(result.keys())
                    rows = [dict(r._mapping) for r in result]
                    return SqlResult(columns=columns, rows=rows, rows_affected=0)
                return SqlResult(rows_affected=max(result.rowcount, 0))
        except OperationalError as e:
            # sqlite raises OperationalError both for "cannot open file" and for SQL-level
            # problems like "table already exists"; only connection loss counts as unavailable.
            if e.connection_invalidated:
                raise BackendUnavailableError(str(e.orig)) from e
            raise SqlExecutionError(str(e.orig)) from e
        except DBAPIError as e:
            raise SqlExecutionError(str(e.orig)) from e
        except SQLAlchemyError as e:
            raise SqlExecutionError(str(e)) from e

    def dispose(self) -> None:
        self._engine.dispose()
