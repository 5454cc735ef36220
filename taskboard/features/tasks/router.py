from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Body, Query, status

from taskboard.common.schema import ErrorMessage, MessageResponse
from taskboard.models import TaskPriority, TaskStatus

from ..auth.dependencies import CurrentUser
from ..projects.dependencies import ProjectIdPath
from ..workspaces.dependencies import WorkspaceIdPath
from .dependencies import TaskIdPath, TasksServiceDep
from .schemas import (
    TaskCreate,
    TaskListResponse,
    TaskMutationResponse,
    TaskOut,
    TaskResponse,
    TaskUpdate,
)

router = APIRouter(
    prefix="/workspaces/{workspace_id}/projects/{project_id}/tasks",
    tags=["tasks"],
)

_ERRORS = {
    status.HTTP_400_BAD_REQUEST: {"model": ErrorMessage},
    status.HTTP_401_UNAUTHORIZED: {"model": ErrorMessage},
}


@router.post(
    "",
    response_model=TaskMutationResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a task",
    responses=_ERRORS,
)
async def create_task(
    workspace_id: WorkspaceIdPath,
    project_id: ProjectIdPath,
    user: CurrentUser,
    service: TasksServiceDep,
    payload: TaskCreate = Body(...),
) -> TaskMutationResponse:
    task = await service.create_task(
        workspace_id=workspace_id,
        project_id=project_id,
        user=user,
        data=payload.model_dump(),
    )
    return TaskMutationResponse(
        message="Task created successfully",
        task=TaskOut.model_validate(task),
    )


@router.get(
    "",
    response_model=TaskListResponse,
    summary="List tasks in a project",
    responses=_ERRORS,
)
async def list_tasks(
    workspace_id: WorkspaceIdPath,
    project_id: ProjectIdPath,
    user: CurrentUser,
    service: TasksServiceDep,
    status_filter: Annotated[TaskStatus | None, Query(alias="status")] = None,
    priority: Annotated[TaskPriority | None, Query()] = None,
) -> TaskListResponse:
    tasks = await service.list_tasks(
        workspace_id=workspace_id,
        project_id=project_id,
        user=user,
        status=status_filter,
        priority=priority,
    )
    return TaskListResponse(tasks=[TaskOut.model_validate(task) for task in tasks])


@router.get(
    "/{task_id}",
    response_model=TaskResponse,
    summary="Read a task",
    responses=_ERRORS,
)
async def read_task(
    workspace_id: WorkspaceIdPath,
    project_id: ProjectIdPath,
    task_id: TaskIdPath,
    user: CurrentUser,
    service: TasksServiceDep,
) -> TaskResponse:
    task = await service.get_task(
        workspace_id=workspace_id, project_id=project_id, task_id=task_id, user=user
    )
    return TaskResponse(task=TaskOut.model_validate(task))


@router.put(
    "/{task_id}",
    response_model=TaskMutationResponse,
    summary="Update a task",
    responses=_ERRORS,
)
async def update_task(
    workspace_id: WorkspaceIdPath,
    project_id: ProjectIdPath,
    task_id: TaskIdPath,
    user: CurrentUser,
    service: TasksServiceDep,
    payload: TaskUpdate = Body(...),
) -> TaskMutationResponse:
    task = await service.update_task(
        workspace_id=workspace_id,
        project_id=project_id,
        task_id=task_id,
        user=user,
        changes=payload.model_dump(exclude_unset=True),
    )
    return TaskMutationResponse(
        message="Task updated successfully",
        task=TaskOut.model_validate(task),
    )


@router.delete(
    "/{task_id}",
    response_model=MessageResponse,
    summary="Delete a task and its comments",
    responses=_ERRORS,
)
async def delete_task(
    workspace_id: WorkspaceIdPath,
    project_id: ProjectIdPath,
    task_id: TaskIdPath,
    user: CurrentUser,
    service: TasksServiceDep,
) -> MessageResponse:
    await service.delete_task(
        workspace_id=workspace_id, project_id=project_id, task_id=task_id, user=user
    )
    return MessageResponse(message="Task deleted successfully")
