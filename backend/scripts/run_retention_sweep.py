#!/usr/bin/env python3
"""Run both retention sweeps now (chat messages older than 90 days, todos completed more than 90 days ago).
Reads already sweep lazily; this is for one-off cleanup or a cron.
Run from backend: python scripts/run_retention_sweep.py
"""
import sys
from pathlib import Path

backend_dir = Path(__file__).resolve().parent.parent
if str(backend_dir) not in sys.path:
    sys.path.insert(0, str(backend_dir))

from hello_ai.db.backend import get_executor
from hello_ai.db.migrations import ensure_migrations
from hello_ai.services.chat_message_service import sweep_expired
from hello_ai.services.todo_service import sweep_expired_completed


def main():
    executor = get_executor()
    try:
        ensure_migrations(executor)
        messages = sweep_expired(executor)
        todos = sweep_expired_completed(executor)
        print(f"Deleted {messages} chat_messages and {todos} completed todos past retention.")
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
