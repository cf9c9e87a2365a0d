"""Organization endpoints"""

from typing import List
from uuid import UUID
from fastapi import APIRouter, Depends, status

from taskflow.api.dependencies import get_current_user, get_organization_service
from taskflow.schemas.auth import CurrentUser
from taskflow.schemas.common import ApiResponse, MessageResponse
from taskflow.schemas.organization import (
    OrganizationCreate,
    OrganizationDetailResponse,
    OrganizationResponse,
    OrganizationUpdate,
)
from taskflow.services.organization_service import OrganizationService

router = APIRouter(prefix="/api/organizations", tags=["Organizations"])


@router.post(
    "",
    response_model=ApiResponse[OrganizationResponse],
    status_code=status.HTTP_201_CREATED,
)
async def create_organization(
    data: OrganizationCreate,
    current_user: CurrentUser = Depends(get_current_user),
    service: OrganizationService = Depends(get_organization_service),
):
    """Create an organization (platform admin only)"""
    organization = await service.create_organization(data, current_user)
    return ApiResponse(data=OrganizationResponse.model_validate(organization))


@router.get("", response_model=ApiResponse[List[OrganizationDetailResponse]])
async def list_organizations(
    current_user: CurrentUser = Depends(get_current_user),
    service: OrganizationService = Depends(get_organization_service),
):
    """List organizations; non platform admins only see their own"""
    return ApiResponse(data=await service.list_organizations(current_user))


@router.get("/{organization_id}", response_model=ApiResponse[OrganizationDetailResponse])
async def get_organization(
    organization_id: UUID,
    current_user: CurrentUser = Depends(get_current_user),
    service: OrganizationService = Depends(get_organization_service),
):
    """Get an organization with user and project counts"""
    return ApiResponse(data=await service.get_organization(organization_id, current_user))


@router.patch("/{organization_id}", response_model=ApiResponse[OrganizationResponse])
async def update_organization(
    organization_id: UUID,
    data: OrganizationUpdate,
    current_user: CurrentUser = Depends(get_current_user),
    service: OrganizationService = Depends(get_organization_service),
):
    """Update organization name or slug"""
    organization = await service.update_organization(organization_id, data, current_user)
    return ApiResponse(data=OrganizationResponse.model_validate(organization))


@router.delete("/{organization_id}", response_model=ApiResponse[MessageResponse])
async def delete_organization(
    organization_id: UUID,
    current_user: CurrentUser = Depends(get_current_user),
    service: OrganizationService = Depends(get_organization_service),
):
    """Delete an organization and everything in it (platform admin only)"""
    await service.delete_organization(organization_id, current_user)
    return ApiResponse(data=MessageResponse(message="Organization deleted successfully"))
