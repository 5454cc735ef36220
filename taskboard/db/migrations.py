"""Programmatic Alembic runner plus the ``create_all`` development bootstrap."""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path

from alembic import command
from alembic.config import Config
from sqlalchemy.engine import make_url

from taskboard.settings import Settings, get_settings

from .base import metadata
from .session import get_engine

__all__ = [
    "build_sync_url",
    "create_schema",
    "run_migrations",
    "run_migrations_async",
]

logger = logging.getLogger(__name__)

_ASYNC_TO_SYNC_DRIVERS = {
    "sqlite+aiosqlite": "sqlite",
    "postgresql+asyncpg": "postgresql+psycopg",
}


def build_sync_url(dsn: str) -> str:
    """Return the synchronous equivalent of an async DSN for Alembic."""

    url = make_url(dsn)
    sync_driver = _ASYNC_TO_SYNC_DRIVERS.get(url.drivername)
    if sync_driver is not None:
        url = url.set(drivername=sync_driver)
    return url.render_as_string(hide_password=False)


def run_migrations(settings: Settings | None = None, *, revision: str = "head") -> None:
    settings = settings or get_settings()
    alembic_ini = Path(settings.alembic_ini_path)
    if not alembic_ini.exists():
        raise FileNotFoundError(f"Alembic config not found at {alembic_ini}")

    alembic_cfg = Config(str(alembic_ini))
    alembic_cfg.set_main_option("script_location", str(alembic_ini.parent / "migrations"))
    alembic_cfg.attributes["configure_logger"] = False
    _ensure_sqlite_parent_dir(settings.database_dsn)
    alembic_cfg.set_main_option("sqlalchemy.url", build_sync_url(settings.database_dsn))
    command.upgrade(alembic_cfg, revision)
    logger.info("db.migrations.applied", extra={"revision": revision})


async def run_migrations_async(
    settings: Settings | None = None, *, revision: str = "head"
) -> None:
    await asyncio.to_thread(run_migrations, settings, revision=revision)


async def create_schema(settings: Settings | None = None) -> None:
    """Create any missing tables directly from the ORM metadata."""

    import taskboard.models  # noqa: F401

    settings = settings or get_settings()
    _ensure_sqlite_parent_dir(settings.database_dsn)
    engine = get_engine(settings)
    async with engine.begin() as connection:
        await connection.run_sync(metadata.create_all)
    logger.debug("db.schema.ready")


def _ensure_sqlite_parent_dir(url: str) -> None:
    parsed = make_url(url)
    if parsed.get_backend_name() != "sqlite":
        return
    db = (parsed.database or "").strip()
    if not db or db == ":memory:" or db.startswith("file:"):
        return
    path = Path(db)
    if not path.is_absolute():
        path = (Path.cwd() / path).resolve()
    path.parent.mkdir(parents=True, exist_ok=True)
