"""Database engine + session factory.

Standard behavior:
- One engine per process (cached per DSN)
- One session per request (FastAPI dependency)
- Commit on success, rollback on exception
- SQLite: foreign keys enforced on every connection
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Annotated, Any

from fastapi import Depends, Request
from sqlalchemy import event
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from taskboard.settings import Settings, get_settings

_ENGINE: AsyncEngine | None = None
_ENGINE_KEY: tuple[Any, ...] | None = None
_SESSION_FACTORY: async_sessionmaker[AsyncSession] | None = None


def engine_cache_key(settings: Settings) -> tuple[Any, ...]:
    return (settings.database_dsn, settings.database_echo)


def _enable_sqlite_foreign_keys(dbapi_connection, _connection_record) -> None:
    cursor = dbapi_connection.cursor()
    try:
        cursor.execute("PRAGMA foreign_keys=ON")
    finally:
        cursor.close()


def get_engine(settings: Settings | None = None) -> AsyncEngine:
    """Return the process-wide async engine for ``settings``."""

    global _ENGINE, _ENGINE_KEY, _SESSION_FACTORY
    settings = settings or get_settings()
    key = engine_cache_key(settings)
    if _ENGINE is None or _ENGINE_KEY != key:
        url = make_url(settings.database_dsn)
        engine = create_async_engine(url, echo=settings.database_echo, future=True)
        if url.get_backend_name() == "sqlite":
            event.listen(engine.sync_engine, "connect", _enable_sqlite_foreign_keys)
        _ENGINE = engine
        _ENGINE_KEY = key
        _SESSION_FACTORY = None
    return _ENGINE


def get_sessionmaker(settings: Settings | None = None) -> async_sessionmaker[AsyncSession]:
    """Return a cached ``async_sessionmaker`` bound to the engine."""

    global _SESSION_FACTORY
    engine = get_engine(settings)
    if _SESSION_FACTORY is None:
        _SESSION_FACTORY = async_sessionmaker(
            bind=engine,
            expire_on_commit=False,
            autoflush=False,
        )
    return _SESSION_FACTORY


async def dispose_engine() -> None:
    """Dispose the cached engine and forget the session factory."""

    global _ENGINE, _ENGINE_KEY, _SESSION_FACTORY
    if _ENGINE is not None:
        await _ENGINE.dispose()
    _ENGINE = None
    _ENGINE_KEY = None
    _SESSION_FACTORY = None


@asynccontextmanager
async def session_scope(settings: Settings | None = None) -> AsyncIterator[AsyncSession]:
    """Yield a session that commits on success and rolls back on error."""

    session = get_sessionmaker(settings)()
    try:
        yield session
        if session.in_transaction():
            await session.commit()
    except Exception:
        if session.in_transaction():
            await session.rollback()
        raise
    finally:
        await session.close()


async def get_session(request: Request) -> AsyncIterator[AsyncSession]:
    """One session per request, bound to the app's settings; commits when the handler returns."""

    async with session_scope(getattr(request.app.state, "settings", None)) as session:
        yield session


SessionDep = Annotated[AsyncSession, Depends(get_session)]


__all__ = [
    "SessionDep",
    "dispose_engine",
    "engine_cache_key",
    "get_engine",
    "get_session",
    "get_sessionmaker",
    "session_scope",
]
