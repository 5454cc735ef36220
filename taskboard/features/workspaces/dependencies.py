"""FastAPI dependencies for workspace-scoped routes."""

from __future__ import annotations

from typing import Annotated
from uuid import UUID

from fastapi import Depends, Path

from taskboard.db import SessionDep

from .service import WorkspacesService

WorkspaceIdPath = Annotated[UUID, Path(description="Workspace identifier")]


def get_workspaces_service(session: SessionDep) -> WorkspacesService:
    return WorkspacesService(session=session)


WorkspacesServiceDep = Annotated[WorkspacesService, Depends(get_workspaces_service)]

__all__ = ["WorkspaceIdPath", "WorkspacesServiceDep", "get_workspaces_service"]
