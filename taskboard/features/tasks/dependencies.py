from __future__ import annotations

from typing import Annotated
from uuid import UUID

from fastapi import Depends, Path

from taskboard.db import SessionDep

from .service import TasksService

TaskIdPath = Annotated[UUID, Path(description="Task identifier")]


def get_tasks_service(session: SessionDep) -> TasksService:
    return TasksService(session=session)


TasksServiceDep = Annotated[TasksService, Depends(get_tasks_service)]

__all__ = ["TaskIdPath", "TasksServiceDep", "get_tasks_service"]
