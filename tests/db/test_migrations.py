"""Schema bootstrap: Alembic upgrade and the ``create_all`` fallback."""

from __future__ import annotations

from pathlib import Path

import pytest
from sqlalchemy import create_engine, inspect

from taskboard import Settings
from taskboard.db.migrations import build_sync_url, create_schema, run_migrations
from taskboard.db.session import dispose_engine

_TABLES = {"users", "workspaces", "workspace_members", "projects", "tasks", "comments"}


def _settings_for(path: Path) -> Settings:
    return Settings(
        database_dsn=f"sqlite+aiosqlite:///{path}",
        jwt_secret="m" * 40,
    )


def _table_names(settings: Settings) -> set[str]:
    engine = create_engine(build_sync_url(settings.database_dsn))
    try:
        return set(inspect(engine).get_table_names())
    finally:
        engine.dispose()


@pytest.mark.parametrize(
    ("dsn", "expected"),
    [
        ("sqlite+aiosqlite:///./data/app.sqlite", "sqlite:///./data/app.sqlite"),
        (
            "postgresql+asyncpg://user:pw@db:5432/tasks",
            "postgresql+psycopg://user:pw@db:5432/tasks",
        ),
        ("sqlite:///plain.sqlite", "sqlite:///plain.sqlite"),
    ],
)
def test_build_sync_url(dsn: str, expected: str) -> None:
    assert build_sync_url(dsn) == expected


def test_run_migrations_creates_every_table(tmp_path: Path) -> None:
    settings = _settings_for(tmp_path / "nested" / "migrated.sqlite")

    run_migrations(settings)

    tables = _table_names(settings)
    assert _TABLES <= tables
    assert "alembic_version" in tables


def test_run_migrations_requires_alembic_ini(tmp_path: Path) -> None:
    settings = _settings_for(tmp_path / "x.sqlite").model_copy(
        update={"alembic_ini_path": tmp_path / "missing.ini"}
    )

    with pytest.raises(FileNotFoundError):
        run_migrations(settings)


@pytest.mark.asyncio
async def test_create_schema_bootstraps_tables(tmp_path: Path) -> None:
    settings = _settings_for(tmp_path / "bootstrap.sqlite")

    try:
        await create_schema(settings)
    finally:
        await dispose_engine()

    assert _TABLES <= _table_names(settings)
