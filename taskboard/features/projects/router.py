from __future__ import annotations

from fastapi import APIRouter, Body, status

from taskboard.common.schema import ErrorMessage, MessageResponse

from ..auth.dependencies import CurrentUser
from ..workspaces.dependencies import WorkspaceIdPath
from .dependencies import ProjectIdPath, ProjectsServiceDep
from .schemas import (
    ProjectCreate,
    ProjectListResponse,
    ProjectMutationResponse,
    ProjectOut,
    ProjectResponse,
    ProjectUpdate,
)

router = APIRouter(prefix="/workspaces/{workspace_id}/projects", tags=["projects"])

_ERRORS = {
    status.HTTP_400_BAD_REQUEST: {"model": ErrorMessage},
    status.HTTP_401_UNAUTHORIZED: {"model": ErrorMessage},
}


@router.post(
    "",
    response_model=ProjectMutationResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a project",
    responses=_ERRORS,
)
async def create_project(
    workspace_id: WorkspaceIdPath,
    user: CurrentUser,
    service: ProjectsServiceDep,
    payload: ProjectCreate = Body(...),
) -> ProjectMutationResponse:
    project = await service.create_project(
        workspace_id=workspace_id,
        user=user,
        name=payload.name,
        description=payload.description,
    )
    return ProjectMutationResponse(
        message="Project created successfully",
        project=ProjectOut.model_validate(project),
    )


@router.get(
    "",
    response_model=ProjectListResponse,
    summary="List projects in a workspace",
    responses=_ERRORS,
)
async def list_projects(
    workspace_id: WorkspaceIdPath,
    user: CurrentUser,
    service: ProjectsServiceDep,
) -> ProjectListResponse:
    projects = await service.list_projects(workspace_id=workspace_id, user=user)
    return ProjectListResponse(projects=[ProjectOut.model_validate(p) for p in projects])


@router.get(
    "/{project_id}",
    response_model=ProjectResponse,
    summary="Read a project",
    responses=_ERRORS,
)
async def read_project(
    workspace_id: WorkspaceIdPath,
    project_id: ProjectIdPath,
    user: CurrentUser,
    service: ProjectsServiceDep,
) -> ProjectResponse:
    project = await service.get_project(
        workspace_id=workspace_id, project_id=project_id, user=user
    )
    return ProjectResponse(project=ProjectOut.model_validate(project))


@router.put(
    "/{project_id}",
    response_model=ProjectMutationResponse,
    summary="Update a project",
    responses=_ERRORS,
)
async def update_project(
    workspace_id: WorkspaceIdPath,
    project_id: ProjectIdPath,
    user: CurrentUser,
    service: ProjectsServiceDep,
    payload: ProjectUpdate = Body(...),
) -> ProjectMutationResponse:
    project = await service.update_project(
        workspace_id=workspace_id,
        project_id=project_id,
        user=user,
        changes=payload.model_dump(exclude_unset=True),
    )
    return ProjectMutationResponse(
        message="Project updated successfully",
        project=ProjectOut.model_validate(project),
    )


@router.delete(
    "/{project_id}",
    response_model=MessageResponse,
    summary="Delete a project with its tasks and comments",
    responses=_ERRORS,
)
async def delete_project(
    workspace_id: WorkspaceIdPath,
    project_id: ProjectIdPath,
    user: CurrentUser,
    service: ProjectsServiceDep,
) -> MessageResponse:
    await service.delete_project(workspace_id=workspace_id, project_id=project_id, user=user)
    return MessageResponse(message="Project deleted successfully")
