"""User service: tenant-scoped user management"""

import logging
from typing import List, Optional
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from taskflow.models import Organization, User, Role
from taskflow.schemas.auth import CurrentUser
from taskflow.schemas.user import UserCreate, UserUpdate
from taskflow.services.access_policy import (
    Action,
    Resource,
    ResourceKind,
    check_role_grant,
    enforce,
    evaluate,
    is_platform_admin,
    tenant_scope,
)
from taskflow.services.auth_service import AuthService
from taskflow.services.errors import (
    BadRequestError,
    ConflictError,
    NotFoundError,
    is_unique_violation,
)

logger = logging.getLogger(__name__)


def _user_resource(organization_id: Optional[UUID]) -> Resource:
    return Resource(kind=ResourceKind.USER, organization_id=organization_id)


class UserService:
    """Service for creating and managing users inside organizations"""

    def __init__(self, db: AsyncSession):
        """Initialize with database session"""
        self.db = db

    async def _email_taken(self, email: str, exclude_id: Optional[UUID] = None) -> bool:
        query = select(User.id).where(User.email == email)
        if exclude_id is not None:
            query = query.where(User.id != exclude_id)
        result = await self.db.execute(query)
        return result.scalar_one_or_none() is not None

    async def _commit(self) -> None:
        try:
            await self.db.commit()
        except IntegrityError as e:
            await self.db.rollback()
            if not is_unique_violation(e):
                raise
            raise ConflictError("User already exists")

    async def create_user(self, data: UserCreate, actor: CurrentUser) -> User:
        """
        Create a user in an organization.

        Organization admins create users in their own organization only;
        platform admins must name the target organization.

        Raises:
            ForbiddenError: Caller may not create users there, or may not grant the role
            BadRequestError: Platform admin omitted organizationId
            NotFoundError: Target organization does not exist
            ConflictError: Email already registered
        """
        if is_platform_admin(actor):
            if not data.organization_id:
                raise BadRequestError("Organization ID is required")
            target_organization_id = data.organization_id
        else:
            target_organization_id = data.organization_id or actor.organization_id

        enforce(evaluate(actor, Action.CREATE, _user_resource(target_organization_id)))
        enforce(check_role_grant(actor, data.role))

        if await self._email_taken(data.email):
            raise ConflictError("User already exists")

        if not await self.db.get(Organization, target_organization_id):
            raise NotFoundError("Organization not found")

        user = User(
            email=data.email,
            name=data.name,
            password_hash=AuthService.hash_password(data.password),
            role=data.role,
            organization_id=target_organization_id,
        )
        self.db.add(user)
        await self._commit()
        await self.db.refresh(user)

        logger.info("User %s (%s) created by %s", user.email, user.role.value, actor.email)
        return user

    async def list_users(self, actor: CurrentUser) -> List[User]:
        """List users visible to the caller; platform admins are never listed"""
        query = (
            select(User)
            .where(User.role != Role.PLATFORM_ADMIN)
            .order_by(User.created_at.desc())
        )
        scope = tenant_scope(actor)
        if scope is not None:
            query = query.where(User.organization_id == scope)

        result = await self.db.execute(query)
        return list(result.scalars().all())

    async def get_user(self, user_id: UUID, actor: CurrentUser) -> User:
        """
        Raises:
            NotFoundError: User does not exist
            ForbiddenError: User belongs to another organization
        """
        user = await self.db.get(User, user_id)
        if not user:
            raise NotFoundError("User not found")

        enforce(evaluate(actor, Action.READ, _user_resource(user.organization_id)))
        return user

    async def update_user(self, user_id: UUID, data: UserUpdate, actor: CurrentUser) -> User:
        """
        Update a user; a new password is rehashed before it is stored.

        Raises:
            NotFoundError, ForbiddenError, ConflictError
        """
        user = await self.get_user(user_id, actor)
        enforce(evaluate(actor, Action.UPDATE, _user_resource(user.organization_id)))

        update_data = data.model_dump(exclude_unset=True)
        if "role" in update_data:
            enforce(check_role_grant(actor, update_data["role"]))
        if "email" in update_data and await self._email_taken(update_data["email"], user.id):
            raise ConflictError("User already exists")
        if "password" in update_data:
            update_data["password_hash"] = AuthService.hash_password(update_data.pop("password"))

        for field, value in update_data.items():
            setattr(user, field, value)

        await self._commit()
        await self.db.refresh(user)
        return user

    async def delete_user(self, user_id: UUID, actor: CurrentUser) -> None:
        """
        Delete a user. Projects and tasks they created are kept with no creator.

        Raises:
            NotFoundError, ForbiddenError
        """
        user = await self.get_user(user_id, actor)
        enforce(evaluate(actor, Action.DELETE, _user_resource(user.organization_id)))

        await self.db.delete(user)
        await self.db.commit()
        logger.info("User %s deleted by %s", user.email, actor.email)
