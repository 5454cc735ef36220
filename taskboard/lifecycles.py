"""FastAPI lifespan helpers for the Taskboard application."""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from starlette.types import Lifespan

from .db import dispose_engine
from .db.migrations import create_schema
from .settings import Settings

logger = logging.getLogger(__name__)


def create_application_lifespan(*, settings: Settings) -> Lifespan[FastAPI]:
    """Return the lifespan context manager bound to ``settings``."""

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        if settings.jwt_secret_generated:
            logger.warning(
                "auth.jwt_secret.generated",
                extra={"detail": "TASKBOARD_JWT_SECRET is unset; tokens will not survive a restart"},
            )
        if settings.database_auto_create:
            await create_schema(settings)
        logger.info(
            "app.startup",
            extra={"app_name": settings.app_name, "version": settings.app_version},
        )
        try:
            yield
        finally:
            await dispose_engine()
            logger.info("app.shutdown")

    return lifespan


__all__ = ["create_application_lifespan"]
