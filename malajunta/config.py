"""
Settings for the Mala Junta client.

Every value comes from the process environment first and the ``.env`` file in
the project root second. The Supabase URL and anon key are mandatory: a
missing or template value stops the import of :mod:`malajunta.main`.
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from dotenv import load_dotenv
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .constants import DEFAULT_MAX_SESSIONS, DEFAULT_SESSION_IDLE_SECONDS
from .security.secrets import check_project_url, is_placeholder

BASE_DIR = Path(__file__).resolve().parents[1]
ENV_PATH = BASE_DIR / ".env"

# Platform-provided variables win over the file.
load_dotenv(dotenv_path=ENV_PATH, override=False)


class Settings(BaseSettings):
    supabase_url: str = Field(..., alias="SUPABASE_URL")
    supabase_anon_key: str = Field(..., alias="SUPABASE_ANON_KEY")

    # Direct Postgres DSN, used by Alembic only
    database_url: str | None = Field(default=None, alias="DATABASE_URL")
    auto_migrate: bool = Field(default=False, alias="AUTO_MIGRATE")

    app_name: str = Field(default="Mala Junta", alias="APP_NAME")
    api_version: str = Field(default="0.1.0", alias="API_VERSION")
    session_cookie_name: str = Field(default="mj_session", alias="SESSION_COOKIE_NAME")
    session_cookie_secure: bool = Field(default=False, alias="SESSION_COOKIE_SECURE")
    max_sessions: int = Field(default=DEFAULT_MAX_SESSIONS, alias="MAX_SESSIONS", ge=1)
    session_idle_seconds: float = Field(default=DEFAULT_SESSION_IDLE_SECONDS, alias="SESSION_IDLE_SECONDS", gt=0)
    cors_origins: str | None = Field(default=None, alias="CORS_ORIGINS")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    model_config = SettingsConfigDict(
        env_file=str(ENV_PATH),
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @field_validator("supabase_url")
    @classmethod
    def _valid_project_url(cls, value: str) -> str:
        return check_project_url(value)

    @field_validator("supabase_anon_key")
    @classmethod
    def _real_anon_key(cls, value: str) -> str:
        if is_placeholder(value):
            raise ValueError("SUPABASE_ANON_KEY is not configured")
        return value.strip()

    @field_validator("database_url")
    @classmethod
    def _blank_dsn_is_unset(cls, value: str | None) -> str | None:
        if value is None or is_placeholder(value):
            return None
        return value.strip()

    @property
    def allowed_origins(self) -> list[str]:
        if not self.cors_origins:
            return ["*"]
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]


@lru_cache()
def get_settings() -> Settings:
    return Settings()


__all__ = ["Settings", "get_settings"]
