"""Workspace and membership persistence helpers."""

from __future__ import annotations

from collections.abc import Sequence
from uuid import UUID

from sqlalchemy import and_, delete, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from taskboard.models import (
    Comment,
    Project,
    Task,
    Workspace,
    WorkspaceMember,
    WorkspaceRole,
)


class WorkspacesRepository:
    """Query helpers for workspaces and their memberships."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get_workspace(self, workspace_id: UUID) -> Workspace | None:
        return await self._session.get(Workspace, workspace_id)

    async def get_membership(
        self,
        *,
        workspace_id: UUID,
        user_id: UUID,
    ) -> WorkspaceMember | None:
        stmt = (
            select(WorkspaceMember)
            .options(selectinload(WorkspaceMember.workspace))
            .where(
                and_(
                    WorkspaceMember.workspace_id == workspace_id,
                    WorkspaceMember.user_id == user_id,
                )
            )
            .execution_options(populate_existing=True)
        )
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none()

    async def list_memberships_for_user(self, user_id: UUID) -> Sequence[WorkspaceMember]:
        stmt = (
            select(WorkspaceMember)
            .join(Workspace, Workspace.id == WorkspaceMember.workspace_id)
            .options(selectinload(WorkspaceMember.workspace))
            .where(WorkspaceMember.user_id == user_id)
            .order_by(Workspace.created_at, Workspace.name)
        )
        result = await self._session.execute(stmt)
        return result.scalars().all()

    async def list_members(self, workspace_id: UUID) -> Sequence[WorkspaceMember]:
        stmt = (
            select(WorkspaceMember)
            .where(WorkspaceMember.workspace_id == workspace_id)
            .order_by(WorkspaceMember.created_at)
        )
        result = await self._session.execute(stmt)
        return result.scalars().all()

    async def create_workspace(
        self,
        *,
        name: str,
        description: str | None,
        owner_id: UUID,
    ) -> tuple[Workspace, WorkspaceMember]:
        """Flush the workspace so it has an id, then stage its OWNER membership."""

        workspace = Workspace(name=name, description=description, owner_id=owner_id)
        self._session.add(workspace)
        await self._session.flush()
        membership = WorkspaceMember(
            workspace_id=workspace.id,
            user_id=owner_id,
            role=WorkspaceRole.OWNER,
        )
        self._session.add(membership)
        await self._session.flush()
        return workspace, membership

    async def add_member(
        self,
        *,
        workspace_id: UUID,
        user_id: UUID,
        role: WorkspaceRole,
    ) -> WorkspaceMember:
        membership = WorkspaceMember(workspace_id=workspace_id, user_id=user_id, role=role)
        self._session.add(membership)
        await self._session.flush()
        return membership

    async def delete_membership(self, membership: WorkspaceMember) -> None:
        await self._session.execute(
            delete(WorkspaceMember).where(WorkspaceMember.id == membership.id)
        )

    async def delete_workspace(self, workspace_id: UUID) -> None:
        """Delete ``workspace_id`` children first, then memberships, then the row."""

        project_ids = select(Project.id).where(Project.workspace_id == workspace_id)
        task_ids = select(Task.id).where(Task.project_id.in_(project_ids))
        await self._session.execute(delete(Comment).where(Comment.task_id.in_(task_ids)))
        await self._session.execute(delete(Task).where(Task.project_id.in_(project_ids)))
        await self._session.execute(delete(Project).where(Project.workspace_id == workspace_id))
        await self._session.execute(
            delete(WorkspaceMember).where(WorkspaceMember.workspace_id == workspace_id)
        )
        await self._session.execute(delete(Workspace).where(Workspace.id == workspace_id))


__all__ = ["WorkspacesRepository"]
