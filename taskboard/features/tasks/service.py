"""Task services; any workspace member may work on tasks."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from taskboard.common.errors import NotFoundError, PermissionDeniedError, ValidationError
from taskboard.common.logging import log_context
from taskboard.core.roles import is_manager
from taskboard.core.validation import optional_text, require_text
from taskboard.models import Project, Task, TaskPriority, TaskStatus, User, WorkspaceMember

from ..projects.service import ProjectsService
from ..workspaces.repository import WorkspacesRepository
from ..workspaces.service import NO_ACCESS_MESSAGE
from .repository import TasksRepository

logger = logging.getLogger(__name__)

TASK_NOT_FOUND = "Task not found in this project"


class TasksService:
    def __init__(self, *, session: AsyncSession) -> None:
        self._session = session
        self._repo = TasksRepository(session)
        self._workspaces = WorkspacesRepository(session)
        self._projects = ProjectsService(session=session)

    async def resolve_task(
        self,
        *,
        workspace_id: UUID,
        project_id: UUID,
        task_id: UUID,
        user: User,
        message: str = NO_ACCESS_MESSAGE,
    ) -> tuple[Task, Project, WorkspaceMember]:
        """Return ``(task, project, membership)`` after the scope checks."""

        project, membership = await self._projects.resolve_project(
            workspace_id=workspace_id, project_id=project_id, user=user, message=message
        )
        task = await self._repo.get_in_project(project_id=project.id, task_id=task_id)
        if task is None:
            raise NotFoundError(TASK_NOT_FOUND)
        return task, project, membership

    async def create_task(
        self,
        *,
        workspace_id: UUID,
        project_id: UUID,
        user: User,
        data: Mapping[str, Any],
    ) -> Task:
        project, _ = await self._projects.resolve_project(
            workspace_id=workspace_id,
            project_id=project_id,
            user=user,
            message="You do not have permission to create tasks in this workspace",
        )
        title = require_text(data.get("title"), message="Task title is required")
        assignee_id = data.get("assignee_id")
        await self._ensure_assignee(project, assignee_id)

        task = await self._repo.create(
            project_id=project.id,
            title=title,
            description=optional_text(data.get("description")),
            status=TaskStatus(data.get("status") or TaskStatus.TODO),
            priority=TaskPriority(data.get("priority") or TaskPriority.MEDIUM),
            due_date=data.get("due_date"),
            assignee_id=assignee_id,
            created_by=user.id,
        )
        await self._session.commit()
        logger.info(
            "task.create.success",
            extra=log_context(
                workspace_id=workspace_id,
                project_id=project.id,
                task_id=task.id,
                user_id=user.id,
            ),
        )
        return task

    async def list_tasks(
        self,
        *,
        workspace_id: UUID,
        project_id: UUID,
        user: User,
        status: TaskStatus | None = None,
        priority: TaskPriority | None = None,
    ) -> list[Task]:
        project, _ = await self._projects.resolve_project(
            workspace_id=workspace_id, project_id=project_id, user=user
        )
        return list(
            await self._repo.list_for_project(project.id, status=status, priority=priority)
        )

    async def get_task(
        self, *, workspace_id: UUID, project_id: UUID, task_id: UUID, user: User
    ) -> Task:
        task, _, _ = await self.resolve_task(
            workspace_id=workspace_id, project_id=project_id, task_id=task_id, user=user
        )
        return task

    async def update_task(
        self,
        *,
        workspace_id: UUID,
        project_id: UUID,
        task_id: UUID,
        user: User,
        changes: Mapping[str, Any],
    ) -> Task:
        task, project, _ = await self.resolve_task(
            workspace_id=workspace_id,
            project_id=project_id,
            task_id=task_id,
            user=user,
            message="You do not have permission to update tasks in this workspace",
        )

        if "title" in changes:
            task.title = require_text(changes["title"], message="Task title cannot be empty")
        if "description" in changes:
            task.description = optional_text(changes["description"])
        if "status" in changes:
            if changes["status"] is None:
                raise ValidationError("Task status cannot be empty")
            task.status = TaskStatus(changes["status"])
        if "priority" in changes:
            if changes["priority"] is None:
                raise ValidationError("Task priority cannot be empty")
            task.priority = TaskPriority(changes["priority"])
        if "due_date" in changes:
            task.due_date = changes["due_date"]
        if "assignee_id" in changes:
            await self._ensure_assignee(project, changes["assignee_id"])
            task.assignee_id = changes["assignee_id"]

        await self._session.commit()
        logger.info(
            "task.update.success",
            extra=log_context(
                workspace_id=workspace_id,
                project_id=project.id,
                task_id=task.id,
                user_id=user.id,
                fields=",".join(sorted(changes)),
            ),
        )
        return task

    async def delete_task(
        self, *, workspace_id: UUID, project_id: UUID, task_id: UUID, user: User
    ) -> None:
        denied = "You do not have permission to delete this task"
        task, project, membership = await self.resolve_task(
            workspace_id=workspace_id,
            project_id=project_id,
            task_id=task_id,
            user=user,
            message=denied,
        )
        if task.created_by != user.id and not is_manager(membership.role):
            raise PermissionDeniedError(denied)

        await self._repo.delete(task.id)
        await self._session.commit()
        logger.info(
            "task.delete.success",
            extra=log_context(
                workspace_id=workspace_id,
                project_id=project.id,
                task_id=task_id,
                user_id=user.id,
            ),
        )

    async def _ensure_assignee(self, project: Project, assignee_id: UUID | None) -> None:
        if assignee_id is None:
            return
        membership = await self._workspaces.get_membership(
            workspace_id=project.workspace_id, user_id=assignee_id
        )
        if membership is None:
            raise ValidationError("Assignee must be a member of this workspace")


__all__ = ["TASK_NOT_FOUND", "TasksService"]
