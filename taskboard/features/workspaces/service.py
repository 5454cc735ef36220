"""Workspace domain services with role-based permissions."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from taskboard.common.errors import PermissionDeniedError
from taskboard.common.logging import log_context
from taskboard.core.roles import MANAGER_ROLES, require_role
from taskboard.core.validation import optional_text, require_text
from taskboard.models import User, Workspace, WorkspaceMember, WorkspaceRole

from .repository import WorkspacesRepository

logger = logging.getLogger(__name__)

NO_ACCESS_MESSAGE = "You do not have access to this workspace"


class WorkspacesService:
    """Create, read, update and delete workspaces for their members."""

    def __init__(self, *, session: AsyncSession) -> None:
        self._session = session
        self._repo = WorkspacesRepository(session)

    async def require_membership(
        self,
        *,
        workspace_id: UUID,
        user: User,
        message: str = NO_ACCESS_MESSAGE,
    ) -> WorkspaceMember:
        """Return ``user``'s membership in ``workspace_id`` or raise.

        A missing workspace and a workspace the user does not belong to are
        indistinguishable to the caller.
        """

        membership = await self._repo.get_membership(
            workspace_id=workspace_id, user_id=user.id
        )
        if membership is None:
            logger.info(
                "workspace.access.denied",
                extra=log_context(workspace_id=workspace_id, user_id=user.id),
            )
            raise PermissionDeniedError(message)
        return membership

    async def create_workspace(
        self,
        *,
        user: User,
        name: str | None,
        description: str | None = None,
    ) -> tuple[Workspace, WorkspaceMember]:
        cleaned_name = require_text(name, message="Workspace name is required")
        workspace, membership = await self._repo.create_workspace(
            name=cleaned_name,
            description=optional_text(description),
            owner_id=user.id,
        )
        await self._session.commit()

        logger.info(
            "workspace.create.success",
            extra=log_context(workspace_id=workspace.id, user_id=user.id),
        )
        return workspace, membership

    async def list_workspaces(self, *, user: User) -> list[tuple[Workspace, WorkspaceRole]]:
        memberships = await self._repo.list_memberships_for_user(user.id)
        return [(membership.workspace, membership.role) for membership in memberships]

    async def get_workspace(
        self, *, workspace_id: UUID, user: User
    ) -> tuple[Workspace, WorkspaceRole]:
        membership = await self.require_membership(workspace_id=workspace_id, user=user)
        return membership.workspace, membership.role

    async def update_workspace(
        self,
        *,
        workspace_id: UUID,
        user: User,
        changes: Mapping[str, Any],
    ) -> tuple[Workspace, WorkspaceRole]:
        denied = "You do not have permission to update this workspace"
        membership = await self.require_membership(
            workspace_id=workspace_id, user=user, message=denied
        )
        require_role(membership, MANAGER_ROLES, message=denied)

        workspace = membership.workspace
        if "name" in changes:
            workspace.name = require_text(
                changes["name"], message="Workspace name is required"
            )
        if "description" in changes:
            workspace.description = optional_text(changes["description"])
        await self._session.commit()

        logger.info(
            "workspace.update.success",
            extra=log_context(
                workspace_id=workspace.id,
                user_id=user.id,
                fields=",".join(sorted(changes)),
            ),
        )
        return workspace, membership.role

    async def delete_workspace(self, *, workspace_id: UUID, user: User) -> None:
        denied = "Only the workspace owner can delete the workspace"
        membership = await self.require_membership(
            workspace_id=workspace_id, user=user, message=denied
        )
        require_role(membership, {WorkspaceRole.OWNER}, message=denied)

        await self._repo.delete_workspace(workspace_id)
        await self._session.commit()
        logger.info(
            "workspace.delete.success",
            extra=log_context(workspace_id=workspace_id, user_id=user.id),
        )


__all__ = ["NO_ACCESS_MESSAGE", "WorkspacesService"]
