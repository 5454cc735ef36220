from __future__ import annotations

from typing import Annotated
from uuid import UUID

from fastapi import Depends, Path

from taskboard.db import SessionDep

from .service import ProjectsService

ProjectIdPath = Annotated[UUID, Path(description="Project identifier")]


def get_projects_service(session: SessionDep) -> ProjectsService:
    return ProjectsService(session=session)


ProjectsServiceDep = Annotated[ProjectsService, Depends(get_projects_service)]

__all__ = ["ProjectIdPath", "ProjectsServiceDep", "get_projects_service"]
