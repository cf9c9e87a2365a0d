"""User schemas"""

from typing import ClassVar, Optional
from datetime import datetime
from uuid import UUID
from pydantic import ConfigDict, EmailStr, Field

from taskflow.models.user import Role
from taskflow.schemas.common import CamelModel, UpdateModel
from taskflow.schemas.organization import OrganizationResponse

# bcrypt only looks at the first 72 bytes
PASSWORD_MIN_LENGTH = 6
PASSWORD_MAX_LENGTH = 72


class UserCreate(CamelModel):
    """User creation schema (admin roles only)"""
    email: EmailStr = Field(..., description="User email address")
    password: str = Field(
        ..., min_length=PASSWORD_MIN_LENGTH, max_length=PASSWORD_MAX_LENGTH
    )
    name: Optional[str] = Field(None, max_length=255, description="Display name")
    role: Role = Field(..., description="User role")
    organization_id: Optional[UUID] = Field(
        None, description="Target organization (defaults to the caller's for org admins)"
    )


class UserUpdate(UpdateModel):
    """User update schema - unknown fields are rejected"""
    model_config = ConfigDict(extra="forbid")
    non_nullable_fields: ClassVar[tuple[str, ...]] = ("email", "password", "role")

    email: Optional[EmailStr] = None
    password: Optional[str] = Field(
        None, min_length=PASSWORD_MIN_LENGTH, max_length=PASSWORD_MAX_LENGTH
    )
    name: Optional[str] = Field(None, max_length=255)
    role: Optional[Role] = None


class UserSummary(CamelModel):
    """Compact user reference embedded in tasks"""
    id: UUID
    email: str
    name: Optional[str] = None


class UserResponse(CamelModel):
    """User response schema (never includes the password)"""
    id: UUID
    email: str
    name: Optional[str] = None
    role: Role
    organization_id: UUID
    created_at: datetime
    updated_at: datetime


class UserProfileResponse(UserResponse):
    """Current user profile with organization"""
    organization: Optional[OrganizationResponse] = None
