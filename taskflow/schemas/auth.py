"""Authentication schemas"""

from typing import Optional
from uuid import UUID
from pydantic import EmailStr, Field, field_validator

from taskflow.models.user import Role
from taskflow.schemas.common import CamelModel
from taskflow.schemas.organization import SLUG_MIN_LENGTH, slugify
from taskflow.schemas.user import PASSWORD_MIN_LENGTH, PASSWORD_MAX_LENGTH, UserProfileResponse


class LoginRequest(CamelModel):
    """Login request schema"""
    email: EmailStr = Field(..., description="User email address")
    password: str = Field(
        ..., min_length=PASSWORD_MIN_LENGTH, max_length=PASSWORD_MAX_LENGTH
    )


class RegisterRequest(CamelModel):
    """Self-service registration: creates an organization and its first admin"""
    email: EmailStr = Field(..., description="User email address")
    password: str = Field(
        ..., min_length=PASSWORD_MIN_LENGTH, max_length=PASSWORD_MAX_LENGTH
    )
    name: str = Field(..., min_length=2, max_length=255, description="User name")
    organization_name: str = Field(
        ..., min_length=2, max_length=255, description="Name of the new organization"
    )

    @field_validator("organization_name")
    @classmethod
    def check_derived_slug(cls, v: str) -> str:
        if len(slugify(v)) < SLUG_MIN_LENGTH:
            raise ValueError(
                f"Organization name must contain at least {SLUG_MIN_LENGTH} non-space characters"
            )
        return v


class CurrentUser(CamelModel):
    """Identity attached to an authenticated request"""
    id: UUID
    email: str
    role: Role
    organization_id: UUID


class AuthResponse(CamelModel):
    """Login/registration response"""
    user: UserProfileResponse
    token: str = Field(..., description="Bearer token, valid for 7 days")
    token_type: str = Field(default="Bearer")
    expires_in: Optional[int] = Field(None, description="Token lifetime in seconds")
