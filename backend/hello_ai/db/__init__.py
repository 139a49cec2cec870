from hello_ai.db.backend import get_executor, reset_executor, use_remote_http_backend
from hello_ai.db.base import Base
from hello_ai.db.executor import EngineExecutor, SqlExecutor, SqlResult
from hello_ai.db.tables import ALL_TABLE_NAMES, SESSION_TABLE_NAMES

__all__ = [
    "get_executor",
    "reset_executor",
    "use_remote_http_backend",
    "Base",
    "EngineExecutor",
    "SqlExecutor",
    "SqlResult",
    "ALL_TABLE_NAMES",
    "SESSION_TABLE_NAMES",
]
