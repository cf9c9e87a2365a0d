"""Organization service: tenant CRUD"""

import logging
from typing import List
from uuid import UUID

from sqlalchemy import select, func, or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from taskflow.models import Organization, Project, User
from taskflow.schemas.auth import CurrentUser
from taskflow.schemas.organization import (
    OrganizationCreate,
    OrganizationUpdate,
    OrganizationDetailResponse,
)
from taskflow.services.access_policy import (
    Action,
    Resource,
    ResourceKind,
    enforce,
    evaluate,
    tenant_scope,
)
from taskflow.services.errors import ConflictError, NotFoundError, is_unique_violation

logger = logging.getLogger(__name__)


def _organization_resource(organization_id) -> Resource:
    return Resource(kind=ResourceKind.ORGANIZATION, organization_id=organization_id)


class OrganizationService:
    """
    Service for managing organizations (tenants).
    Platform admins see every organization; everyone else only their own.
    """

    def __init__(self, db: AsyncSession):
        """Initialize with database session"""
        self.db = db

    def _with_counts(self):
        """Select organizations along with user and project counts"""
        user_count = (
            select(func.count(User.id))
            .where(User.organization_id == Organization.id)
            .correlate(Organization)
            .scalar_subquery()
        )
        project_count = (
            select(func.count(Project.id))
            .where(Project.organization_id == Organization.id)
            .correlate(Organization)
            .scalar_subquery()
        )
        return select(
            Organization,
            user_count.label("user_count"),
            project_count.label("project_count"),
        )

    @staticmethod
    def _detail(row) -> OrganizationDetailResponse:
        organization, user_count, project_count = row
        detail = OrganizationDetailResponse.model_validate(organization)
        detail.user_count = user_count or 0
        detail.project_count = project_count or 0
        return detail

    async def _ensure_unique(self, name, slug, exclude_id=None) -> None:
        conditions = []
        if name is not None:
            conditions.append(Organization.name == name)
        if slug is not None:
            conditions.append(Organization.slug == slug)
        if not conditions:
            return

        query = select(Organization.id).where(or_(*conditions))
        if exclude_id is not None:
            query = query.where(Organization.id != exclude_id)
        result = await self.db.execute(query.limit(1))
        if result.scalar_one_or_none():
            raise ConflictError("Organization already exists")

    async def _commit(self) -> None:
        try:
            await self.db.commit()
        except IntegrityError as e:
            await self.db.rollback()
            if not is_unique_violation(e):
                raise
            raise ConflictError("Organization already exists")

    async def _get(self, organization_id: UUID) -> Organization:
        organization = await self.db.get(Organization, organization_id)
        if not organization:
            raise NotFoundError("Organization not found")
        return organization

    async def create_organization(
        self, data: OrganizationCreate, actor: CurrentUser
    ) -> Organization:
        """
        Create an organization (platform admins only).

        Raises:
            ForbiddenError: Caller is not a platform admin
            ConflictError: Name or slug already taken
        """
        enforce(evaluate(actor, Action.CREATE, _organization_resource(None)))
        await self._ensure_unique(data.name, data.slug)

        organization = Organization(name=data.name, slug=data.slug)
        self.db.add(organization)
        await self._commit()
        await self.db.refresh(organization)

        logger.info("Organization %s created by %s", organization.slug, actor.email)
        return organization

    async def get_organization(
        self, organization_id: UUID, actor: CurrentUser
    ) -> OrganizationDetailResponse:
        """
        Get a single organization with counts.

        Raises:
            NotFoundError: Organization does not exist
            ForbiddenError: Organization belongs to another tenant
        """
        result = await self.db.execute(
            self._with_counts().where(Organization.id == organization_id)
        )
        row = result.one_or_none()
        if row is None:
            raise NotFoundError("Organization not found")

        enforce(evaluate(actor, Action.READ, _organization_resource(row[0].id)))
        return self._detail(row)

    async def list_organizations(self, actor: CurrentUser) -> List[OrganizationDetailResponse]:
        """List organizations visible to the caller, newest first"""
        query = self._with_counts().order_by(Organization.created_at.desc())
        scope = tenant_scope(actor)
        if scope is not None:
            query = query.where(Organization.id == scope)

        result = await self.db.execute(query)
        return [self._detail(row) for row in result.all()]

    async def update_organization(
        self, organization_id: UUID, data: OrganizationUpdate, actor: CurrentUser
    ) -> Organization:
        """
        Update an organization's name or slug.

        Raises:
            NotFoundError, ForbiddenError, ConflictError
        """
        organization = await self._get(organization_id)
        enforce(evaluate(actor, Action.UPDATE, _organization_resource(organization.id)))

        update_data = data.model_dump(exclude_unset=True)
        await self._ensure_unique(
            update_data.get("name"), update_data.get("slug"), exclude_id=organization.id
        )

        for field, value in update_data.items():
            setattr(organization, field, value)

        await self._commit()
        await self.db.refresh(organization)
        return organization

    async def delete_organization(self, organization_id: UUID, actor: CurrentUser) -> None:
        """
        Delete an organization; its users, projects and tasks go with it.

        Raises:
            NotFoundError: Organization does not exist
            ForbiddenError: Caller is not a platform admin
        """
        organization = await self._get(organization_id)
        enforce(evaluate(actor, Action.DELETE, _organization_resource(organization.id)))

        await self.db.delete(organization)
        await self.db.commit()
        logger.info("Organization %s deleted by %s", organization.slug, actor.email)
