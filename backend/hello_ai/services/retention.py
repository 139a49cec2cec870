"""Retention horizon shared by the chat and todo sweeps."""
import time

from hello_ai.core.constants import RETENTION_MS


def now_ms() -> int:
    return int(time.time() * 1000)


def retention_cutoff_ms(now: int | None = None) -> int:
    """Rows strictly older than this (timestamp < cutoff) are eligible for deletion."""
    return (now_ms() if now is None else now) - RETENTION_MS
