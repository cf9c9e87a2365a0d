"""Project management endpoints"""

from typing import List
from uuid import UUID
from fastapi import APIRouter, Depends, status

from taskflow.api.dependencies import get_current_user, get_project_service
from taskflow.schemas.auth import CurrentUser
from taskflow.schemas.common import ApiResponse, MessageResponse
from taskflow.schemas.project import (
    ProjectCreate,
    ProjectDetailResponse,
    ProjectResponse,
    ProjectUpdate,
)
from taskflow.services.project_service import ProjectService

router = APIRouter(prefix="/api/projects", tags=["Projects"])


@router.post("", response_model=ApiResponse[ProjectResponse], status_code=status.HTTP_201_CREATED)
async def create_project(
    data: ProjectCreate,
    current_user: CurrentUser = Depends(get_current_user),
    service: ProjectService = Depends(get_project_service),
):
    """
    Create a project in the caller's organization

    Platform admins cannot create projects directly.
    """
    project = await service.create_project(data, current_user)
    return ApiResponse(data=ProjectResponse.model_validate(project))


@router.get("", response_model=ApiResponse[List[ProjectResponse]])
async def list_projects(
    current_user: CurrentUser = Depends(get_current_user),
    service: ProjectService = Depends(get_project_service),
):
    """
    List projects

    Members only get projects they created or have a task assignment in.
    """
    projects = await service.list_projects(current_user)
    return ApiResponse(data=[ProjectResponse.model_validate(p) for p in projects])


@router.get("/{project_id}", response_model=ApiResponse[ProjectDetailResponse])
async def get_project(
    project_id: UUID,
    current_user: CurrentUser = Depends(get_current_user),
    service: ProjectService = Depends(get_project_service),
):
    """Get a project with its tasks"""
    project = await service.get_project(project_id, current_user)
    return ApiResponse(data=ProjectDetailResponse.model_validate(project))


@router.patch("/{project_id}", response_model=ApiResponse[ProjectResponse])
async def update_project(
    project_id: UUID,
    data: ProjectUpdate,
    current_user: CurrentUser = Depends(get_current_user),
    service: ProjectService = Depends(get_project_service),
):
    """
    Update project name or description

    Members can only update projects they created.
    """
    project = await service.update_project(project_id, data, current_user)
    return ApiResponse(data=ProjectResponse.model_validate(project))


@router.delete("/{project_id}", response_model=ApiResponse[MessageResponse])
async def delete_project(
    project_id: UUID,
    current_user: CurrentUser = Depends(get_current_user),
    service: ProjectService = Depends(get_project_service),
):
    """Delete a project and its tasks"""
    await service.delete_project(project_id, current_user)
    return ApiResponse(data=MessageResponse(message="Project deleted successfully"))
