"""User management endpoints"""

from typing import List
from uuid import UUID
from fastapi import APIRouter, Depends, status

from taskflow.api.dependencies import get_current_user, get_user_service
from taskflow.schemas.auth import CurrentUser
from taskflow.schemas.common import ApiResponse, MessageResponse
from taskflow.schemas.user import UserCreate, UserResponse, UserUpdate
from taskflow.services.user_service import UserService

router = APIRouter(prefix="/api/users", tags=["Users"])


@router.post("", response_model=ApiResponse[UserResponse], status_code=status.HTTP_201_CREATED)
async def create_user(
    data: UserCreate,
    current_user: CurrentUser = Depends(get_current_user),
    service: UserService = Depends(get_user_service),
):
    """Create a user (platform and organization admins only)"""
    user = await service.create_user(data, current_user)
    return ApiResponse(data=UserResponse.model_validate(user))


@router.get("", response_model=ApiResponse[List[UserResponse]])
async def list_users(
    current_user: CurrentUser = Depends(get_current_user),
    service: UserService = Depends(get_user_service),
):
    """List users in the caller's organization (all organizations for platform admins)"""
    users = await service.list_users(current_user)
    return ApiResponse(data=[UserResponse.model_validate(u) for u in users])


@router.get("/{user_id}", response_model=ApiResponse[UserResponse])
async def get_user(
    user_id: UUID,
    current_user: CurrentUser = Depends(get_current_user),
    service: UserService = Depends(get_user_service),
):
    user = await service.get_user(user_id, current_user)
    return ApiResponse(data=UserResponse.model_validate(user))


@router.patch("/{user_id}", response_model=ApiResponse[UserResponse])
async def update_user(
    user_id: UUID,
    data: UserUpdate,
    current_user: CurrentUser = Depends(get_current_user),
    service: UserService = Depends(get_user_service),
):
    """Update email, password, name or role"""
    user = await service.update_user(user_id, data, current_user)
    return ApiResponse(data=UserResponse.model_validate(user))


@router.delete("/{user_id}", response_model=ApiResponse[MessageResponse])
async def delete_user(
    user_id: UUID,
    current_user: CurrentUser = Depends(get_current_user),
    service: UserService = Depends(get_user_service),
):
    await service.delete_user(user_id, current_user)
    return ApiResponse(data=MessageResponse(message="User deleted successfully"))
