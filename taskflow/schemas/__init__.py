"""API schemas package"""

from .common import ApiResponse, MessageResponse
from .auth import LoginRequest, RegisterRequest, CurrentUser, AuthResponse
from .organization import (
    OrganizationCreate,
    OrganizationUpdate,
    OrganizationResponse,
    OrganizationDetailResponse,
)
from .user import UserCreate, UserUpdate, UserSummary, UserResponse, UserProfileResponse
from .project import ProjectCreate, ProjectUpdate, ProjectResponse, ProjectDetailResponse
from .task import TaskCreate, TaskUpdate, TaskAssign, TaskResponse

__all__ = [
    "ApiResponse",
    "MessageResponse",
    "LoginRequest",
    "RegisterRequest",
    "CurrentUser",
    "AuthResponse",
    "OrganizationCreate",
    "OrganizationUpdate",
    "OrganizationResponse",
    "OrganizationDetailResponse",
    "UserCreate",
    "UserUpdate",
    "UserSummary",
    "UserResponse",
    "UserProfileResponse",
    "ProjectCreate",
    "ProjectUpdate",
    "ProjectResponse",
    "ProjectDetailResponse",
    "TaskCreate",
    "TaskUpdate",
    "TaskAssign",
    "TaskResponse",
]
