"""Workspace request and response bodies."""

from __future__ import annotations

from datetime import datetime
from uuid import UUID

from pydantic import Field

from taskboard.common.schema import BaseSchema
from taskboard.models import Workspace, WorkspaceRole


class WorkspaceCreate(BaseSchema):
    name: str | None = Field(default=None, max_length=255)
    description: str | None = None


class WorkspaceUpdate(BaseSchema):
    name: str | None = Field(default=None, max_length=255)
    description: str | None = None


class WorkspaceOut(BaseSchema):
    id: UUID
    name: str
    description: str | None = None
    owner_id: UUID
    role: WorkspaceRole | None = None
    created_at: datetime
    updated_at: datetime

    @classmethod
    def build(cls, workspace: Workspace, role: WorkspaceRole | None = None) -> WorkspaceOut:
        return cls(
            id=workspace.id,
            name=workspace.name,
            description=workspace.description,
            owner_id=workspace.owner_id,
            role=role,
            created_at=workspace.created_at,
            updated_at=workspace.updated_at,
        )


class WorkspaceResponse(BaseSchema):
    workspace: WorkspaceOut


class WorkspaceMutationResponse(BaseSchema):
    message: str
    workspace: WorkspaceOut


class WorkspaceListResponse(BaseSchema):
    workspaces: list[WorkspaceOut]


__all__ = [
    "WorkspaceCreate",
    "WorkspaceListResponse",
    "WorkspaceMutationResponse",
    "WorkspaceOut",
    "WorkspaceResponse",
    "WorkspaceUpdate",
]
