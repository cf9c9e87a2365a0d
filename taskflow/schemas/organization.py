"""Organization schemas"""

import re
from typing import ClassVar, Optional
from datetime import datetime
from uuid import UUID
from pydantic import Field

from taskflow.schemas.common import CamelModel, UpdateModel

SLUG_PATTERN = r"^[a-z0-9-]+$"
SLUG_MIN_LENGTH = 2


def slugify(name: str) -> str:
    """Lowercase a name and replace whitespace runs with hyphens"""
    return re.sub(r"\s+", "-", name.strip().lower())


class OrganizationCreate(CamelModel):
    """Organization creation schema"""
    name: str = Field(..., min_length=2, max_length=255, description="Organization name")
    slug: str = Field(
        ...,
        min_length=SLUG_MIN_LENGTH,
        max_length=255,
        pattern=SLUG_PATTERN,
        description="Lowercase letters, numbers and hyphens",
    )


class OrganizationUpdate(UpdateModel):
    """Organization update schema - at least one field"""
    non_nullable_fields: ClassVar[tuple[str, ...]] = ("name", "slug")

    name: Optional[str] = Field(None, min_length=2, max_length=255)
    slug: Optional[str] = Field(None, min_length=SLUG_MIN_LENGTH, max_length=255, pattern=SLUG_PATTERN)


class OrganizationResponse(CamelModel):
    """Organization response schema"""
    id: UUID
    name: str
    slug: str
    created_at: datetime
    updated_at: datetime


class OrganizationDetailResponse(OrganizationResponse):
    """Organization with member and project counts"""
    user_count: int = Field(default=0, description="Number of users in the organization")
    project_count: int = Field(default=0, description="Number of projects in the organization")
