"""Task persistence helpers."""

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime
from uuid import UUID

from sqlalchemy import and_, delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from taskboard.models import Comment, Task, TaskPriority, TaskStatus


class TasksRepository:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get_in_project(self, *, project_id: UUID, task_id: UUID) -> Task | None:
        stmt = select(Task).where(and_(Task.id == task_id, Task.project_id == project_id))
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none()

    async def list_for_project(
        self,
        project_id: UUID,
        *,
        status: TaskStatus | None = None,
        priority: TaskPriority | None = None,
    ) -> Sequence[Task]:
        stmt = select(Task).where(Task.project_id == project_id)
        if status is not None:
            stmt = stmt.where(Task.status == status)
        if priority is not None:
            stmt = stmt.where(Task.priority == priority)
        stmt = stmt.order_by(Task.created_at, Task.title)
        result = await self._session.execute(stmt)
        return result.scalars().all()

    async def create(
        self,
        *,
        project_id: UUID,
        title: str,
        description: str | None,
        status: TaskStatus,
        priority: TaskPriority,
        due_date: datetime | None,
        assignee_id: UUID | None,
        created_by: UUID,
    ) -> Task:
        task = Task(
            project_id=project_id,
            title=title,
            description=description,
            status=status,
            priority=priority,
            due_date=due_date,
            assignee_id=assignee_id,
            created_by=created_by,
        )
        self._session.add(task)
        await self._session.flush()
        return task

    async def delete(self, task_id: UUID) -> None:
        await self._session.execute(delete(Comment).where(Comment.task_id == task_id))
        await self._session.execute(delete(Task).where(Task.id == task_id))


__all__ = ["TasksRepository"]
