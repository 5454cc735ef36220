"""Project persistence helpers."""

from __future__ import annotations

from collections.abc import Sequence
from uuid import UUID

from sqlalchemy import and_, delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from taskboard.models import Comment, Project, Task


class ProjectsRepository:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get_in_workspace(self, *, workspace_id: UUID, project_id: UUID) -> Project | None:
        stmt = select(Project).where(
            and_(Project.id == project_id, Project.workspace_id == workspace_id)
        )
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none()

    async def list_for_workspace(self, workspace_id: UUID) -> Sequence[Project]:
        stmt = (
            select(Project)
            .where(Project.workspace_id == workspace_id)
            .order_by(Project.created_at, Project.name)
        )
        result = await self._session.execute(stmt)
        return result.scalars().all()

    async def create(
        self,
        *,
        workspace_id: UUID,
        name: str,
        description: str | None,
        created_by: UUID,
    ) -> Project:
        project = Project(
            workspace_id=workspace_id,
            name=name,
            description=description,
            created_by=created_by,
        )
        self._session.add(project)
        await self._session.flush()
        return project

    async def delete(self, project_id: UUID) -> None:
        """Delete the project with its tasks and their comments."""

        task_ids = select(Task.id).where(Task.project_id == project_id)
        await self._session.execute(delete(Comment).where(Comment.task_id.in_(task_ids)))
        await self._session.execute(delete(Task).where(Task.project_id == project_id))
        await self._session.execute(delete(Project).where(Project.id == project_id))


__all__ = ["ProjectsRepository"]
