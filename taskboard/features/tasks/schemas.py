from __future__ import annotations

from datetime import datetime
from uuid import UUID

from pydantic import Field

from taskboard.common.schema import BaseSchema
from taskboard.models import TaskPriority, TaskStatus


class TaskCreate(BaseSchema):
    title: str | None = Field(default=None, max_length=255)
    description: str | None = None
    status: TaskStatus | None = None
    priority: TaskPriority | None = None
    due_date: datetime | None = None
    assignee_id: UUID | None = None


class TaskUpdate(BaseSchema):
    """Partial update; only fields present in the body are applied."""

    title: str | None = Field(default=None, max_length=255)
    description: str | None = None
    status: TaskStatus | None = None
    priority: TaskPriority | None = None
    due_date: datetime | None = None
    assignee_id: UUID | None = None


class TaskOut(BaseSchema):
    id: UUID
    project_id: UUID
    title: str
    description: str | None = None
    status: TaskStatus
    priority: TaskPriority
    due_date: datetime | None = None
    assignee_id: UUID | None = None
    created_by: UUID
    created_at: datetime
    updated_at: datetime


class TaskResponse(BaseSchema):
    task: TaskOut


class TaskMutationResponse(BaseSchema):
    message: str
    task: TaskOut


class TaskListResponse(BaseSchema):
    tasks: list[TaskOut]


__all__ = [
    "TaskCreate",
    "TaskListResponse",
    "TaskMutationResponse",
    "TaskOut",
    "TaskResponse",
    "TaskUpdate",
]
