"""Project services gated on workspace membership."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from taskboard.common.errors import NotFoundError
from taskboard.common.logging import log_context
from taskboard.core.roles import MANAGER_ROLES, require_role
from taskboard.core.validation import optional_text, require_text
from taskboard.models import Project, User, WorkspaceMember

from ..workspaces.service import NO_ACCESS_MESSAGE, WorkspacesService
from .repository import ProjectsRepository

logger = logging.getLogger(__name__)

PROJECT_NOT_FOUND = "Project not found in this workspace"


class ProjectsService:
    def __init__(self, *, session: AsyncSession) -> None:
        self._session = session
        self._repo = ProjectsRepository(session)
        self._workspaces = WorkspacesService(session=session)

    async def resolve_project(
        self,
        *,
        workspace_id: UUID,
        project_id: UUID,
        user: User,
        message: str = NO_ACCESS_MESSAGE,
    ) -> tuple[Project, WorkspaceMember]:
        """Check membership first, then locate the project inside the workspace."""

        membership = await self._workspaces.require_membership(
            workspace_id=workspace_id, user=user, message=message
        )
        project = await self._repo.get_in_workspace(
            workspace_id=workspace_id, project_id=project_id
        )
        if project is None:
            raise NotFoundError(PROJECT_NOT_FOUND)
        return project, membership

    async def create_project(
        self,
        *,
        workspace_id: UUID,
        user: User,
        name: str | None,
        description: str | None = None,
    ) -> Project:
        denied = "You do not have permission to create projects in this workspace"
        membership = await self._workspaces.require_membership(
            workspace_id=workspace_id, user=user, message=denied
        )
        require_role(membership, MANAGER_ROLES, message=denied)
        cleaned = require_text(name, message="Project name is required")

        project = await self._repo.create(
            workspace_id=workspace_id,
            name=cleaned,
            description=optional_text(description),
            created_by=user.id,
        )
        await self._session.commit()
        logger.info(
            "project.create.success",
            extra=log_context(workspace_id=workspace_id, project_id=project.id, user_id=user.id),
        )
        return project

    async def list_projects(self, *, workspace_id: UUID, user: User) -> list[Project]:
        await self._workspaces.require_membership(workspace_id=workspace_id, user=user)
        return list(await self._repo.list_for_workspace(workspace_id))

    async def get_project(self, *, workspace_id: UUID, project_id: UUID, user: User) -> Project:
        project, _ = await self.resolve_project(
            workspace_id=workspace_id, project_id=project_id, user=user
        )
        return project

    async def update_project(
        self,
        *,
        workspace_id: UUID,
        project_id: UUID,
        user: User,
        changes: Mapping[str, Any],
    ) -> Project:
        denied = "You do not have permission to update this project"
        project, membership = await self.resolve_project(
            workspace_id=workspace_id, project_id=project_id, user=user, message=denied
        )
        require_role(membership, MANAGER_ROLES, message=denied)

        if "name" in changes:
            project.name = require_text(changes["name"], message="Project name cannot be empty")
        if "description" in changes:
            project.description = optional_text(changes["description"])
        await self._session.commit()
        logger.info(
            "project.update.success",
            extra=log_context(workspace_id=workspace_id, project_id=project.id, user_id=user.id),
        )
        return project

    async def delete_project(self, *, workspace_id: UUID, project_id: UUID, user: User) -> None:
        denied = "You do not have permission to delete this project"
        project, membership = await self.resolve_project(
            workspace_id=workspace_id, project_id=project_id, user=user, message=denied
        )
        require_role(membership, MANAGER_ROLES, message=denied)

        await self._repo.delete(project.id)
        await self._session.commit()
        logger.info(
            "project.delete.success",
            extra=log_context(workspace_id=workspace_id, project_id=project_id, user_id=user.id),
        )


__all__ = ["PROJECT_NOT_FOUND", "ProjectsService"]
