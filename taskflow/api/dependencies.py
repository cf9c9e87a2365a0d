"""API dependencies for authentication and service construction"""

from typing import Optional
from uuid import UUID

from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.ext.asyncio import AsyncSession

from taskflow.database import get_db
from taskflow.models import User
from taskflow.schemas.auth import CurrentUser
from taskflow.services.auth_service import AuthService
from taskflow.services.errors import UnauthenticatedError
from taskflow.services.organization_service import OrganizationService
from taskflow.services.project_service import ProjectService
from taskflow.services.task_service import TaskService
from taskflow.services.user_service import UserService

security = HTTPBearer(auto_error=False)


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    db: AsyncSession = Depends(get_db),
) -> CurrentUser:
    """
    Resolve the bearer token to the calling user.

    Args:
        credentials: Parsed Authorization header
        db: Database session

    Returns:
        CurrentUser with id, email, role and organization_id

    Raises:
        UnauthenticatedError: Missing or malformed header, invalid or expired
            token, or the user no longer exists
    """
    if not credentials or not credentials.credentials:
        raise UnauthenticatedError("No authentication token provided")

    payload = AuthService.validate_token(credentials.credentials)
    if not payload:
        raise UnauthenticatedError("Invalid or expired token")

    try:
        user_id = UUID(payload["sub"])
    except ValueError:
        raise UnauthenticatedError("Invalid token payload")

    user = await db.get(User, user_id)
    if not user:
        raise UnauthenticatedError("User not found")

    return CurrentUser(
        id=user.id,
        email=user.email,
        role=user.role,
        organization_id=user.organization_id,
    )


def get_auth_service(db: AsyncSession = Depends(get_db)) -> AuthService:
    return AuthService(db)


def get_organization_service(db: AsyncSession = Depends(get_db)) -> OrganizationService:
    return OrganizationService(db)


def get_user_service(db: AsyncSession = Depends(get_db)) -> UserService:
    return UserService(db)


def get_project_service(db: AsyncSession = Depends(get_db)) -> ProjectService:
    return ProjectService(db)


def get_task_service(db: AsyncSession = Depends(get_db)) -> TaskService:
    return TaskService(db)
