"""Task schemas"""

from typing import ClassVar, Optional
from datetime import datetime
from uuid import UUID
from pydantic import Field

from taskflow.models.task import TaskStatus, TaskPriority
from taskflow.schemas.common import CamelModel, UpdateModel
from taskflow.schemas.user import UserSummary


class TaskCreate(CamelModel):
    """Task creation schema"""
    title: str = Field(..., min_length=2, max_length=255, description="Task title")
    description: Optional[str] = Field(None, description="Task description")
    project_id: UUID = Field(..., description="Parent project")
    assignee_ids: Optional[list[UUID]] = Field(None, description="Users to assign")
    status: TaskStatus = Field(default=TaskStatus.PENDING)
    priority: TaskPriority = Field(default=TaskPriority.MEDIUM)
    due_date: Optional[datetime] = Field(None, description="ISO-8601 due date")


class TaskUpdate(UpdateModel):
    """
    Task update schema.

    assigneeIds replaces the whole assignee set; dueDate null clears the due date.
    """
    non_nullable_fields: ClassVar[tuple[str, ...]] = ("title", "status", "priority", "assignee_ids")

    title: Optional[str] = Field(None, min_length=2, max_length=255)
    description: Optional[str] = None
    status: Optional[TaskStatus] = None
    priority: Optional[TaskPriority] = None
    assignee_ids: Optional[list[UUID]] = None
    due_date: Optional[datetime] = None


class TaskAssign(CamelModel):
    """Assign/unassign request"""
    user_id: UUID = Field(..., description="User to add or remove")


class TaskResponse(CamelModel):
    """Task response schema"""
    id: UUID
    title: str
    description: Optional[str] = None
    status: TaskStatus
    priority: TaskPriority
    due_date: Optional[datetime] = None
    project_id: UUID
    organization_id: UUID
    created_by: Optional[UUID] = None
    assignees: list[UserSummary] = Field(default_factory=list)
    created_at: datetime
    updated_at: datetime
