"""
Application settings (Pydantic Settings).
"""
from pathlib import Path

from pydantic import field_validator
from pydantic_settings import BaseSettings

# .env next to backend/ (parent of hello_ai/)
_env_path = Path(__file__).resolve().parent.parent / ".env"
_default_local_db = Path(__file__).resolve().parent.parent / "data" / "local.db"


class Settings(BaseSettings):
    # Turso / libSQL: TURSO_DATABASE_URL (libsql://... or https://...) and TURSO_AUTH_TOKEN
    turso_database_url: str = ""
    turso_auth_token: str = ""
    local_database_url: str = f"sqlite:///{_default_local_db}"
    openai_api_key: str = ""  # OPENAI_API_KEY in .env
    ai_model: str = "openai:gpt-4o-mini"
    # Hosting flags: VERCEL=1 on the serverless platform, CI=true in pipelines
    vercel: str = ""
    ci: str = ""
    cors_origins: str = ""

    class Config:
        env_file = _env_path
        extra = "ignore"

    @field_validator("turso_database_url", "turso_auth_token", mode="after")
    @classmethod
    def strip_turso(cls, v: str) -> str:
        # Dashboards often paste values wrapped in quotes
        return (v or "").strip().strip("\"'")

    @property
    def is_vercel(self) -> bool:
        return self.vercel.strip() == "1"

    @property
    def is_ci(self) -> bool:
        return self.ci.strip().lower() == "true"


settings = Settings()
