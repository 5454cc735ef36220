"""Comment services; authors own their comments, managers may moderate."""

from __future__ import annotations

import logging
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from taskboard.common.errors import NotFoundError, PermissionDeniedError
from taskboard.common.logging import log_context
from taskboard.core.roles import is_manager
from taskboard.core.validation import require_text
from taskboard.models import Comment, Task, User, WorkspaceMember

from ..tasks.service import TasksService
from ..workspaces.service import NO_ACCESS_MESSAGE
from .repository import CommentsRepository

logger = logging.getLogger(__name__)

COMMENT_NOT_FOUND = "Comment not found on this task"


class CommentsService:
    def __init__(self, *, session: AsyncSession) -> None:
        self._session = session
        self._repo = CommentsRepository(session)
        self._tasks = TasksService(session=session)

    async def _resolve_comment(
        self,
        *,
        workspace_id: UUID,
        project_id: UUID,
        task_id: UUID,
        comment_id: UUID,
        user: User,
        message: str = NO_ACCESS_MESSAGE,
    ) -> tuple[Comment, Task, WorkspaceMember]:
        task, _, membership = await self._tasks.resolve_task(
            workspace_id=workspace_id,
            project_id=project_id,
            task_id=task_id,
            user=user,
            message=message,
        )
        comment = await self._repo.get_in_task(task_id=task.id, comment_id=comment_id)
        if comment is None:
            raise NotFoundError(COMMENT_NOT_FOUND)
        return comment, task, membership

    async def create_comment(
        self,
        *,
        workspace_id: UUID,
        project_id: UUID,
        task_id: UUID,
        user: User,
        content: str | None,
    ) -> Comment:
        task, _, _ = await self._tasks.resolve_task(
            workspace_id=workspace_id,
            project_id=project_id,
            task_id=task_id,
            user=user,
            message="You do not have permission to comment in this workspace",
        )
        cleaned = require_text(content, message="Comment content is required")
        comment = await self._repo.create(task_id=task.id, author_id=user.id, content=cleaned)
        await self._session.commit()
        logger.info(
            "comment.create.success",
            extra=log_context(
                workspace_id=workspace_id,
                project_id=project_id,
                task_id=task.id,
                comment_id=comment.id,
                user_id=user.id,
            ),
        )
        return comment

    async def list_comments(
        self, *, workspace_id: UUID, project_id: UUID, task_id: UUID, user: User
    ) -> list[Comment]:
        task, _, _ = await self._tasks.resolve_task(
            workspace_id=workspace_id, project_id=project_id, task_id=task_id, user=user
        )
        return list(await self._repo.list_for_task(task.id))

    async def update_comment(
        self,
        *,
        workspace_id: UUID,
        project_id: UUID,
        task_id: UUID,
        comment_id: UUID,
        user: User,
        content: str | None,
    ) -> Comment:
        denied = "You can only edit your own comments"
        comment, _, _ = await self._resolve_comment(
            workspace_id=workspace_id,
            project_id=project_id,
            task_id=task_id,
            comment_id=comment_id,
            user=user,
            message=denied,
        )
        if comment.author_id != user.id:
            raise PermissionDeniedError(denied)

        comment.content = require_text(content, message="Comment content cannot be empty")
        await self._session.commit()
        logger.info(
            "comment.update.success",
            extra=log_context(
                workspace_id=workspace_id,
                task_id=task_id,
                comment_id=comment.id,
                user_id=user.id,
            ),
        )
        return comment

    async def delete_comment(
        self,
        *,
        workspace_id: UUID,
        project_id: UUID,
        task_id: UUID,
        comment_id: UUID,
        user: User,
    ) -> None:
        denied = "You do not have permission to delete this comment"
        comment, _, membership = await self._resolve_comment(
            workspace_id=workspace_id,
            project_id=project_id,
            task_id=task_id,
            comment_id=comment_id,
            user=user,
            message=denied,
        )
        if comment.author_id != user.id and not is_manager(membership.role):
            raise PermissionDeniedError(denied)

        await self._repo.delete(comment.id)
        await self._session.commit()
        logger.info(
            "comment.delete.success",
            extra=log_context(
                workspace_id=workspace_id,
                task_id=task_id,
                comment_id=comment_id,
                user_id=user.id,
            ),
        )


__all__ = ["COMMENT_NOT_FOUND", "CommentsService"]
