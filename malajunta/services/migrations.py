"""Apply the Postgres schema (tables, RLS, like RPCs, buckets) with Alembic.

Supabase hosts the database, so the web client normally never touches it
directly. Startup only upgrades the schema when ``DATABASE_URL`` is set and
``AUTO_MIGRATE`` is on; otherwise run ``alembic upgrade head`` by hand.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

from ..config import Settings

logger = logging.getLogger(__name__)

REPO_ROOT = Path(__file__).resolve().parents[2]
ALEMBIC_INI = REPO_ROOT / "alembic.ini"


def skip_reason(database_url: str | None, *, opted_in: bool) -> str | None:
    """Why startup should leave the schema alone, or ``None`` to upgrade."""

    if not database_url:
        return "DATABASE_URL is not set"
    if os.getenv("PYTEST_CURRENT_TEST") is not None:
        return "running under pytest"
    if not opted_in:
        return "AUTO_MIGRATE is off"
    if not database_url.lower().startswith("postgres"):
        return "schema requires Postgres"
    if not ALEMBIC_INI.exists():
        return f"missing {ALEMBIC_INI}"
    return None


def build_alembic_config(database_url: str):
    from alembic.config import Config

    config = Config(str(ALEMBIC_INI))
    config.set_main_option("sqlalchemy.url", database_url)
    config.set_main_option("script_location", str(REPO_ROOT / "alembic"))
    return config


def run_migrations_if_needed(settings: Settings) -> bool:
    reason = skip_reason(settings.database_url, opted_in=settings.auto_migrate)
    if reason is not None:
        logger.info("Schema upgrade skipped: %s", reason)
        return False

    from alembic import command

    logger.info("Upgrading Supabase schema to head")
    command.upgrade(build_alembic_config(settings.database_url), "head")
    logger.info("Supabase schema is current")
    return True


__all__ = ["skip_reason", "build_alembic_config", "run_migrations_if_needed"]
