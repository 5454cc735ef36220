from __future__ import annotations

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Body, Depends, Path, status

from taskboard.common.schema import ErrorMessage, MessageResponse
from taskboard.db import SessionDep

from ..auth.dependencies import CurrentUser
from ..projects.dependencies import ProjectIdPath
from ..tasks.dependencies import TaskIdPath
from ..workspaces.dependencies import WorkspaceIdPath
from .schemas import (
    CommentCreate,
    CommentListResponse,
    CommentMutationResponse,
    CommentOut,
    CommentUpdate,
)
from .service import CommentsService

router = APIRouter(
    prefix="/workspaces/{workspace_id}/projects/{project_id}/tasks/{task_id}/comments",
    tags=["comments"],
)

_ERRORS = {
    status.HTTP_400_BAD_REQUEST: {"model": ErrorMessage},
    status.HTTP_401_UNAUTHORIZED: {"model": ErrorMessage},
}

CommentIdPath = Annotated[UUID, Path(description="Comment identifier")]


def get_comments_service(session: SessionDep) -> CommentsService:
    return CommentsService(session=session)


CommentsServiceDep = Annotated[CommentsService, Depends(get_comments_service)]


@router.post(
    "",
    response_model=CommentMutationResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Comment on a task",
    responses=_ERRORS,
)
async def create_comment(
    workspace_id: WorkspaceIdPath,
    project_id: ProjectIdPath,
    task_id: TaskIdPath,
    user: CurrentUser,
    service: CommentsServiceDep,
    payload: CommentCreate = Body(...),
) -> CommentMutationResponse:
    comment = await service.create_comment(
        workspace_id=workspace_id,
        project_id=project_id,
        task_id=task_id,
        user=user,
        content=payload.content,
    )
    return CommentMutationResponse(
        message="Comment created successfully",
        comment=CommentOut.build(comment, user),
    )


@router.get(
    "",
    response_model=CommentListResponse,
    summary="List comments on a task",
    responses=_ERRORS,
)
async def list_comments(
    workspace_id: WorkspaceIdPath,
    project_id: ProjectIdPath,
    task_id: TaskIdPath,
    user: CurrentUser,
    service: CommentsServiceDep,
) -> CommentListResponse:
    comments = await service.list_comments(
        workspace_id=workspace_id, project_id=project_id, task_id=task_id, user=user
    )
    return CommentListResponse(comments=[CommentOut.build(item) for item in comments])


@router.put(
    "/{comment_id}",
    response_model=CommentMutationResponse,
    summary="Edit your own comment",
    responses=_ERRORS,
)
async def update_comment(
    workspace_id: WorkspaceIdPath,
    project_id: ProjectIdPath,
    task_id: TaskIdPath,
    comment_id: CommentIdPath,
    user: CurrentUser,
    service: CommentsServiceDep,
    payload: CommentUpdate = Body(...),
) -> CommentMutationResponse:
    comment = await service.update_comment(
        workspace_id=workspace_id,
        project_id=project_id,
        task_id=task_id,
        comment_id=comment_id,
        user=user,
        content=payload.content,
    )
    return CommentMutationResponse(
        message="Comment updated successfully",
        comment=CommentOut.build(comment, user),
    )


@router.delete(
    "/{comment_id}",
    response_model=MessageResponse,
    summary="Delete a comment",
    responses=_ERRORS,
)
async def delete_comment(
    workspace_id: WorkspaceIdPath,
    project_id: ProjectIdPath,
    task_id: TaskIdPath,
    comment_id: CommentIdPath,
    user: CurrentUser,
    service: CommentsServiceDep,
) -> MessageResponse:
    await service.delete_comment(
        workspace_id=workspace_id,
        project_id=project_id,
        task_id=task_id,
        comment_id=comment_id,
        user=user,
    )
    return MessageResponse(message="Comment deleted successfully")
