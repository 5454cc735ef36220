from __future__ import annotations

from fastapi import APIRouter, Body, status

from taskboard.common.schema import ErrorMessage, MessageResponse
from taskboard.models import WorkspaceRole

from ..auth.dependencies import CurrentUser
from ..workspaces.dependencies import WorkspaceIdPath
from .dependencies import MembersServiceDep, MemberUserIdPath
from .schemas import MemberAdd, MemberListResponse, MemberOut, MemberResponse, MemberRoleUpdate

router = APIRouter(prefix="/workspaces/{workspace_id}/members", tags=["members"])

_ERRORS = {
    status.HTTP_400_BAD_REQUEST: {"model": ErrorMessage},
    status.HTTP_401_UNAUTHORIZED: {"model": ErrorMessage},
}


@router.get(
    "",
    response_model=MemberListResponse,
    summary="List workspace members",
    responses=_ERRORS,
)
async def list_members(
    workspace_id: WorkspaceIdPath,
    user: CurrentUser,
    service: MembersServiceDep,
) -> MemberListResponse:
    memberships = await service.list_members(workspace_id=workspace_id, user=user)
    return MemberListResponse(members=[MemberOut.build(item) for item in memberships])


@router.post(
    "",
    response_model=MemberResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Add an existing user to the workspace",
    responses=_ERRORS,
)
async def add_member(
    workspace_id: WorkspaceIdPath,
    user: CurrentUser,
    service: MembersServiceDep,
    payload: MemberAdd = Body(...),
) -> MemberResponse:
    membership, invitee = await service.add_member(
        workspace_id=workspace_id,
        user=user,
        email=payload.email,
        role=WorkspaceRole(payload.role),
    )
    return MemberResponse(
        message="Member added successfully",
        member=MemberOut.build(membership, invitee),
    )


@router.put(
    "/{member_user_id}",
    response_model=MemberResponse,
    summary="Change a member's role",
    responses=_ERRORS,
)
async def update_member_role(
    workspace_id: WorkspaceIdPath,
    member_user_id: MemberUserIdPath,
    user: CurrentUser,
    service: MembersServiceDep,
    payload: MemberRoleUpdate = Body(...),
) -> MemberResponse:
    membership = await service.update_member_role(
        workspace_id=workspace_id,
        user=user,
        member_user_id=member_user_id,
        role=WorkspaceRole(payload.role),
    )
    return MemberResponse(
        message="Member role updated successfully",
        member=MemberOut.build(membership),
    )


@router.delete(
    "/{member_user_id}",
    response_model=MessageResponse,
    summary="Remove a member (or leave the workspace)",
    responses=_ERRORS,
)
async def remove_member(
    workspace_id: WorkspaceIdPath,
    member_user_id: MemberUserIdPath,
    user: CurrentUser,
    service: MembersServiceDep,
) -> MessageResponse:
    await service.remove_member(
        workspace_id=workspace_id, user=user, member_user_id=member_user_id
    )
    return MessageResponse(message="Member removed successfully")
