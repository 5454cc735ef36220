"""Comment persistence helpers."""

from __future__ import annotations

from collections.abc import Sequence
from uuid import UUID

from sqlalchemy import and_, delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from taskboard.models import Comment


class CommentsRepository:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get_in_task(self, *, task_id: UUID, comment_id: UUID) -> Comment | None:
        stmt = select(Comment).where(and_(Comment.id == comment_id, Comment.task_id == task_id))
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none()

    async def list_for_task(self, task_id: UUID) -> Sequence[Comment]:
        stmt = select(Comment).where(Comment.task_id == task_id).order_by(Comment.created_at)
        result = await self._session.execute(stmt)
        return result.scalars().all()

    async def create(self, *, task_id: UUID, author_id: UUID, content: str) -> Comment:
        comment = Comment(task_id=task_id, author_id=author_id, content=content)
        self._session.add(comment)
        await self._session.flush()
        return comment

    async def delete(self, comment_id: UUID) -> None:
        await self._session.execute(delete(Comment).where(Comment.id == comment_id))


__all__ = ["CommentsRepository"]
