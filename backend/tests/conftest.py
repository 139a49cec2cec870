import os
import sys
from pathlib import Path

import pytest

# Ensure backend/ on sys.path for imports from anywhere in tests tree.
BACKEND = Path(__file__).resolve().parent.parent
if str(BACKEND) not in sys.path:
    sys.path.insert(0, str(BACKEND))

os.environ.setdefault("OPENAI_API_KEY", "sk-test-not-used")

from fastapi.testclient import TestClient

from hello_ai.agents.joe_agent import opening_rotation
from hello_ai.config import settings
from hello_ai.db.backend import get_executor
from hello_ai.db.executor import EngineExecutor
from hello_ai.db.migrations import ensure_migrations, reset_migrations


@pytest.fixture(autouse=True)
def _isolated_settings(monkeypatch):
    """Tests never inherit CI/VERCEL/Turso values from the environment running them."""
    monkeypatch.setattr(settings, "ci", "")
    monkeypatch.setattr(settings, "vercel", "")
    monkeypatch.setattr(settings, "turso_database_url", "")
    monkeypatch.setattr(settings, "turso_auth_token", "")
    monkeypatch.setattr(settings, "openai_api_key", "sk-test")
    reset_migrations()
    opening_rotation.reset()
    yield
    reset_migrations()


@pytest.fixture
def executor(tmp_path):
    ex = EngineExecutor.from_url(f"sqlite:///{tmp_path / 'test.db'}")
    ensure_migrations(ex)
    yield ex
    ex.dispose()


@pytest.fixture
def app(executor):
    from hello_ai.main import app as fastapi_app

    fastapi_app.dependency_overrides[get_executor] = lambda: executor
    yield fastapi_app
    fastapi_app.dependency_overrides.clear()


@pytest.fixture
def client(app):
    return TestClient(app)


@pytest.fixture
def other_client(app):
    """Second browser: its own cookie jar, so its own session."""
    return TestClient(app)
