from __future__ import annotations

from datetime import datetime
from uuid import UUID

from pydantic import Field

from taskboard.common.schema import BaseSchema


class ProjectCreate(BaseSchema):
    name: str | None = Field(default=None, max_length=255)
    description: str | None = None


class ProjectUpdate(BaseSchema):
    name: str | None = Field(default=None, max_length=255)
    description: str | None = None


class ProjectOut(BaseSchema):
    id: UUID
    workspace_id: UUID
    name: str
    description: str | None = None
    created_by: UUID
    created_at: datetime
    updated_at: datetime


class ProjectResponse(BaseSchema):
    project: ProjectOut


class ProjectMutationResponse(BaseSchema):
    message: str
    project: ProjectOut


class ProjectListResponse(BaseSchema):
    projects: list[ProjectOut]


__all__ = [
    "ProjectCreate",
    "ProjectListResponse",
    "ProjectMutationResponse",
    "ProjectOut",
    "ProjectResponse",
    "ProjectUpdate",
]
