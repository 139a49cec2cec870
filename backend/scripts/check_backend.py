#!/usr/bin/env python3
"""
Quick checks so the backend can start. Run from repo root or backend/:
  python backend/scripts/check_backend.py
  # or
  cd backend && python scripts/check_backend.py
"""
import os
import sys
from pathlib import Path

# Run from backend/
backend_dir = Path(__file__).resolve().parent.parent
os.chdir(backend_dir)
if str(backend_dir) not in sys.path:
    sys.path.insert(0, str(backend_dir))

def main():
    from hello_ai.config import settings

    errors = []
    executor = None

    # 1) .env
    env_file = backend_dir / ".env"
    if not env_file.exists():
        print("WARN backend/.env missing (copy .env.example; local SQLite file is used without it)")
    else:
        print("OK  .env exists")

    # 2) Backend selection + DB round trip
    try:
        from hello_ai.db.backend import get_executor, use_remote_http_backend
        executor = get_executor()
        executor.execute("SELECT 1 AS ok")
        where = "remote Turso HTTP" if use_remote_http_backend(settings) else settings.local_database_url
        print(f"OK  Database ({executor.name}: {where})")
    except Exception as e:
        errors.append(f"Database: {e}")
        print("FAIL Database:", e)

    # 3) Tables
    if executor is None:
        print("SKIP Migrations (no database)")
    else:
        try:
            from hello_ai.db.migrations import ensure_migrations, migrations_done
            ensure_migrations(executor)
            if migrations_done():
                print("OK  Tables ensured (chat_messages, todos, person_facts)")
            else:
                errors.append("Migrations postponed: database unreachable.")
        except Exception as e:
            errors.append(f"Migrations: {e}")
            print("FAIL Migrations:", e)

    # 4) LLM key (not needed in CI echo mode)
    if not settings.openai_api_key and not settings.is_ci:
        errors.append("OPENAI_API_KEY not set. /api/chat will return 500 (set CI=true to echo instead).")
        print("FAIL OPENAI_API_KEY missing")
    else:
        print("OK  Chat model configured" if settings.openai_api_key else "OK  CI echo mode")

    # 5) App import (catches missing deps, bad imports)
    try:
        from hello_ai.main import app  # noqa: F401
        print("OK  App import (hello_ai.main)")
    except Exception as e:
        errors.append(f"App import: {e}")
        print("FAIL App import:", e)

    if errors:
        print("\n---")
        for e in errors:
            print("•", e)
        print("\nThen start backend: cd backend && uvicorn hello_ai.main:app --reload --port 8000")
        return 1

    print("\nAll checks passed. Start with: cd backend && uvicorn hello_ai.main:app --reload --port 8000")
    return 0

if __name__ == "__main__":
    sys.exit(main())
