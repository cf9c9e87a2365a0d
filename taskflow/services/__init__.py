"""Services package"""

from .auth_service import AuthService
from .organization_service import OrganizationService
from .user_service import UserService
from .project_service import ProjectService
from .task_service import TaskService

__all__ = [
    "AuthService",
    "OrganizationService",
    "UserService",
    "ProjectService",
    "TaskService",
]
