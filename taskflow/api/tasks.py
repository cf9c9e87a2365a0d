"""Task management endpoints"""

from typing import List, Optional
from uuid import UUID
from fastapi import APIRouter, Depends, Query, status

from taskflow.api.dependencies import get_current_user, get_task_service
from taskflow.models import TaskPriority, TaskStatus
from taskflow.schemas.auth import CurrentUser
from taskflow.schemas.common import ApiResponse, MessageResponse
from taskflow.schemas.task import TaskAssign, TaskCreate, TaskResponse, TaskUpdate
from taskflow.services.task_service import TaskService

router = APIRouter(prefix="/api/tasks", tags=["Tasks"])


@router.post("", response_model=ApiResponse[TaskResponse], status_code=status.HTTP_201_CREATED)
async def create_task(
    data: TaskCreate,
    current_user: CurrentUser = Depends(get_current_user),
    service: TaskService = Depends(get_task_service),
):
    """
    Create a task in a project of the caller's organization

    All assignees must belong to the same organization.
    """
    task = await service.create_task(data, current_user)
    return ApiResponse(data=TaskResponse.model_validate(task))


@router.get("", response_model=ApiResponse[List[TaskResponse]])
async def list_tasks(
    project_id: Optional[UUID] = Query(None, alias="projectId", description="Filter by project"),
    task_status: Optional[TaskStatus] = Query(None, alias="status", description="Filter by status"),
    priority: Optional[TaskPriority] = Query(None, description="Filter by priority"),
    current_user: CurrentUser = Depends(get_current_user),
    service: TaskService = Depends(get_task_service),
):
    """
    List tasks

    Members only get tasks assigned to them.
    """
    tasks = await service.list_tasks(
        current_user, project_id=project_id, status=task_status, priority=priority
    )
    return ApiResponse(data=[TaskResponse.model_validate(t) for t in tasks])


@router.get("/{task_id}", response_model=ApiResponse[TaskResponse])
async def get_task(
    task_id: UUID,
    current_user: CurrentUser = Depends(get_current_user),
    service: TaskService = Depends(get_task_service),
):
    task = await service.get_task(task_id, current_user)
    return ApiResponse(data=TaskResponse.model_validate(task))


@router.patch("/{task_id}", response_model=ApiResponse[TaskResponse])
async def update_task(
    task_id: UUID,
    data: TaskUpdate,
    current_user: CurrentUser = Depends(get_current_user),
    service: TaskService = Depends(get_task_service),
):
    """
    Update a task

    `assigneeIds` replaces the current assignees; `dueDate: null` clears the due date.
    """
    task = await service.update_task(task_id, data, current_user)
    return ApiResponse(data=TaskResponse.model_validate(task))


@router.delete("/{task_id}", response_model=ApiResponse[MessageResponse])
async def delete_task(
    task_id: UUID,
    current_user: CurrentUser = Depends(get_current_user),
    service: TaskService = Depends(get_task_service),
):
    await service.delete_task(task_id, current_user)
    return ApiResponse(data=MessageResponse(message="Task deleted successfully"))


@router.post("/{task_id}/assign", response_model=ApiResponse[TaskResponse])
async def assign_task(
    task_id: UUID,
    data: TaskAssign,
    current_user: CurrentUser = Depends(get_current_user),
    service: TaskService = Depends(get_task_service),
):
    """Add a user from the same organization to the task's assignees"""
    task = await service.assign_user(task_id, data.user_id, current_user)
    return ApiResponse(data=TaskResponse.model_validate(task))


@router.post("/{task_id}/unassign", response_model=ApiResponse[TaskResponse])
async def unassign_task(
    task_id: UUID,
    data: TaskAssign,
    current_user: CurrentUser = Depends(get_current_user),
    service: TaskService = Depends(get_task_service),
):
    """Remove a user from the task's assignees"""
    task = await service.unassign_user(task_id, data.user_id, current_user)
    return ApiResponse(data=TaskResponse.model_validate(task))
