from __future__ import annotations

from fastapi import APIRouter
from sqlalchemy import text

from taskboard.common.schema import BaseSchema
from taskboard.db import SessionDep

router = APIRouter(tags=["health"])


class HealthResponse(BaseSchema):
    status: str


@router.get("/health", response_model=HealthResponse, summary="Liveness and database check")
async def read_health(session: SessionDep) -> HealthResponse:
    await session.execute(text("SELECT 1"))
    return HealthResponse(status="ok")
