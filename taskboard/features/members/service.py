"""Workspace membership management."""

from __future__ import annotations

import logging
from uuid import UUID

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from taskboard.common.errors import NotFoundError, PermissionDeniedError, ValidationError
from taskboard.common.logging import log_context
from taskboard.core.roles import MANAGER_ROLES, can_remove_member, grantable_roles, require_role
from taskboard.models import User, WorkspaceMember, WorkspaceRole

from ..users.repository import UsersRepository
from ..workspaces.repository import WorkspacesRepository
from ..workspaces.service import WorkspacesService

logger = logging.getLogger(__name__)

_MANAGE_DENIED = "You do not have permission to manage members of this workspace"


class MembersService:
    """Invite, re-role and remove workspace members."""

    def __init__(self, *, session: AsyncSession) -> None:
        self._session = session
        self._repo = WorkspacesRepository(session)
        self._users = UsersRepository(session)
        self._workspaces = WorkspacesService(session=session)

    async def list_members(self, *, workspace_id: UUID, user: User) -> list[WorkspaceMember]:
        await self._workspaces.require_membership(workspace_id=workspace_id, user=user)
        return list(await self._repo.list_members(workspace_id))

    async def add_member(
        self,
        *,
        workspace_id: UUID,
        user: User,
        email: str,
        role: WorkspaceRole,
    ) -> tuple[WorkspaceMember, User]:
        actor = await self._workspaces.require_membership(
            workspace_id=workspace_id, user=user, message=_MANAGE_DENIED
        )
        require_role(actor, MANAGER_ROLES, message=_MANAGE_DENIED)
        self._ensure_grantable(actor, role)

        invitee = await self._users.get_by_email(email)
        if invitee is None:
            raise NotFoundError("User not found")
        existing = await self._repo.get_membership(
            workspace_id=workspace_id, user_id=invitee.id
        )
        if existing is not None:
            raise ValidationError("User is already a member of this workspace")

        try:
            membership = await self._repo.add_member(
                workspace_id=workspace_id, user_id=invitee.id, role=role
            )
            await self._session.commit()
        except IntegrityError as exc:
            await self._session.rollback()
            raise ValidationError("User is already a member of this workspace") from exc

        logger.info(
            "workspace.member.add.success",
            extra=log_context(
                workspace_id=workspace_id,
                user_id=user.id,
                member_user_id=invitee.id,
                role=role.value,
            ),
        )
        return membership, invitee

    async def update_member_role(
        self,
        *,
        workspace_id: UUID,
        user: User,
        member_user_id: UUID,
        role: WorkspaceRole,
    ) -> WorkspaceMember:
        actor = await self._workspaces.require_membership(
            workspace_id=workspace_id, user=user, message=_MANAGE_DENIED
        )
        require_role(actor, MANAGER_ROLES, message=_MANAGE_DENIED)
        target = await self._get_target(workspace_id, member_user_id)

        if target.role is WorkspaceRole.OWNER:
            raise PermissionDeniedError("The workspace owner's role cannot be changed")
        if actor.role is WorkspaceRole.ADMIN and target.role is WorkspaceRole.ADMIN:
            raise PermissionDeniedError("Only the workspace owner can change an admin's role")
        self._ensure_grantable(actor, role)

        target.role = role
        await self._session.commit()
        logger.info(
            "workspace.member.role_update.success",
            extra=log_context(
                workspace_id=workspace_id,
                user_id=user.id,
                member_user_id=member_user_id,
                role=role.value,
            ),
        )
        return target

    async def remove_member(
        self,
        *,
        workspace_id: UUID,
        user: User,
        member_user_id: UUID,
    ) -> None:
        actor = await self._workspaces.require_membership(
            workspace_id=workspace_id, user=user, message=_MANAGE_DENIED
        )
        target = await self._get_target(workspace_id, member_user_id)

        if target.role is WorkspaceRole.OWNER:
            raise PermissionDeniedError("The workspace owner cannot be removed")
        if not can_remove_member(actor, target):
            raise PermissionDeniedError("You do not have permission to remove this member")

        await self._repo.delete_membership(target)
        await self._session.commit()
        logger.info(
            "workspace.member.remove.success",
            extra=log_context(
                workspace_id=workspace_id,
                user_id=user.id,
                member_user_id=member_user_id,
            ),
        )

    async def _get_target(self, workspace_id: UUID, member_user_id: UUID) -> WorkspaceMember:
        target = await self._repo.get_membership(
            workspace_id=workspace_id, user_id=member_user_id
        )
        if target is None:
            raise NotFoundError("Member not found in this workspace")
        return target

    @staticmethod
    def _ensure_grantable(actor: WorkspaceMember, role: WorkspaceRole) -> None:
        if role is WorkspaceRole.OWNER:
            raise ValidationError("The OWNER role cannot be granted")
        if role not in grantable_roles(actor.role):
            raise PermissionDeniedError("Only the workspace owner can grant the ADMIN role")


__all__ = ["MembersService"]
