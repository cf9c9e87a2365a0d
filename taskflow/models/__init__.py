"""Database models package"""

from taskflow.models.base import BaseModel
from taskflow.models.organization import Organization
from taskflow.models.user import User, Role
from taskflow.models.project import Project
from taskflow.models.task import Task, TaskStatus, TaskPriority, task_assignees

# Export all models
__all__ = [
    "BaseModel",
    "Organization",
    "User",
    "Role",
    "Project",
    "Task",
    "TaskStatus",
    "TaskPriority",
    "task_assignees",
]
