from __future__ import annotations

from fastapi import APIRouter, Body, status

from taskboard.common.schema import ErrorMessage, MessageResponse

from ..auth.dependencies import CurrentUser
from .dependencies import WorkspaceIdPath, WorkspacesServiceDep
from .schemas import (
    WorkspaceCreate,
    WorkspaceListResponse,
    WorkspaceMutationResponse,
    WorkspaceOut,
    WorkspaceResponse,
    WorkspaceUpdate,
)

router = APIRouter(prefix="/workspaces", tags=["workspaces"])

_ERRORS = {
    status.HTTP_400_BAD_REQUEST: {
        "description": "Validation, permission or lookup failure.",
        "model": ErrorMessage,
    },
    status.HTTP_401_UNAUTHORIZED: {
        "description": "Authentication required.",
        "model": ErrorMessage,
    },
}


@router.post(
    "",
    response_model=WorkspaceMutationResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a workspace owned by the caller",
    responses=_ERRORS,
)
async def create_workspace(
    user: CurrentUser,
    service: WorkspacesServiceDep,
    payload: WorkspaceCreate = Body(...),
) -> WorkspaceMutationResponse:
    workspace, membership = await service.create_workspace(
        user=user, name=payload.name, description=payload.description
    )
    return WorkspaceMutationResponse(
        message="Workspace created successfully",
        workspace=WorkspaceOut.build(workspace, membership.role),
    )


@router.get(
    "",
    response_model=WorkspaceListResponse,
    summary="List workspaces the caller belongs to",
    responses=_ERRORS,
)
async def list_workspaces(
    user: CurrentUser, service: WorkspacesServiceDep
) -> WorkspaceListResponse:
    entries = await service.list_workspaces(user=user)
    return WorkspaceListResponse(
        workspaces=[WorkspaceOut.build(workspace, role) for workspace, role in entries]
    )


@router.get(
    "/{workspace_id}",
    response_model=WorkspaceResponse,
    summary="Read a workspace",
    responses=_ERRORS,
)
async def read_workspace(
    workspace_id: WorkspaceIdPath,
    user: CurrentUser,
    service: WorkspacesServiceDep,
) -> WorkspaceResponse:
    workspace, role = await service.get_workspace(workspace_id=workspace_id, user=user)
    return WorkspaceResponse(workspace=WorkspaceOut.build(workspace, role))


@router.put(
    "/{workspace_id}",
    response_model=WorkspaceMutationResponse,
    summary="Update workspace name or description",
    responses=_ERRORS,
)
async def update_workspace(
    workspace_id: WorkspaceIdPath,
    user: CurrentUser,
    service: WorkspacesServiceDep,
    payload: WorkspaceUpdate = Body(...),
) -> WorkspaceMutationResponse:
    workspace, role = await service.update_workspace(
        workspace_id=workspace_id,
        user=user,
        changes=payload.model_dump(exclude_unset=True),
    )
    return WorkspaceMutationResponse(
        message="Workspace updated successfully",
        workspace=WorkspaceOut.build(workspace, role),
    )


@router.delete(
    "/{workspace_id}",
    response_model=MessageResponse,
    summary="Delete a workspace and everything in it",
    responses=_ERRORS,
)
async def delete_workspace(
    workspace_id: WorkspaceIdPath,
    user: CurrentUser,
    service: WorkspacesServiceDep,
) -> MessageResponse:
    await service.delete_workspace(workspace_id=workspace_id, user=user)
    return MessageResponse(message="Workspace deleted successfully")
