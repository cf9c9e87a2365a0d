"""Project schemas"""

from typing import ClassVar, Optional
from datetime import datetime
from uuid import UUID
from pydantic import Field

from taskflow.schemas.common import CamelModel, UpdateModel
from taskflow.schemas.task import TaskResponse


class ProjectCreate(CamelModel):
    """Project creation schema"""
    name: str = Field(..., min_length=2, max_length=255, description="Project name")
    description: Optional[str] = Field(None, description="Project description")
    organization_id: Optional[UUID] = Field(
        None, description="Defaults to the caller's organization"
    )


class ProjectUpdate(UpdateModel):
    """Project update schema - organization cannot be changed"""
    non_nullable_fields: ClassVar[tuple[str, ...]] = ("name",)

    name: Optional[str] = Field(None, min_length=2, max_length=255, description="Project name")
    description: Optional[str] = Field(None, description="Project description")


class ProjectResponse(CamelModel):
    """Project response schema"""
    id: UUID
    name: str
    description: Optional[str] = None
    organization_id: UUID
    created_by: Optional[UUID] = None
    created_at: datetime
    updated_at: datetime


class ProjectDetailResponse(ProjectResponse):
    """Project with its tasks"""
    tasks: list[TaskResponse] = Field(default_factory=list)
