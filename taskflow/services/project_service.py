"""Project service: organization-scoped project management"""

import logging
from typing import List
from uuid import UUID

from sqlalchemy import select, or_
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from taskflow.models import Project, Task, Role, task_assignees
from taskflow.schemas.auth import CurrentUser
from taskflow.schemas.project import ProjectCreate, ProjectUpdate
from taskflow.services.access_policy import (
    Action,
    Resource,
    ResourceKind,
    enforce,
    evaluate,
    tenant_scope,
)
from taskflow.services.errors import NotFoundError

logger = logging.getLogger(__name__)


def project_resource(project: Project) -> Resource:
    """Authorization view of a project; members are assignees of its tasks"""
    member_ids = frozenset(
        assignee.id for task in project.tasks for assignee in task.assignees
    )
    return Resource(
        kind=ResourceKind.PROJECT,
        organization_id=project.organization_id,
        owner_id=project.created_by,
        member_ids=member_ids,
    )


class ProjectService:
    """
    Service for managing projects.
    Members only see projects they created or hold a task assignment in.
    """

    def __init__(self, db: AsyncSession):
        """Initialize with database session"""
        self.db = db

    async def create_project(self, data: ProjectCreate, actor: CurrentUser) -> Project:
        """
        Create a project in the caller's organization.

        Raises:
            ForbiddenError: Platform admin caller, or organizationId of another tenant
        """
        target_organization_id = data.organization_id or actor.organization_id
        enforce(evaluate(
            actor,
            Action.CREATE,
            Resource(kind=ResourceKind.PROJECT, organization_id=target_organization_id),
        ))

        project = Project(
            name=data.name,
            description=data.description,
            organization_id=target_organization_id,
            created_by=actor.id,
        )
        self.db.add(project)
        await self.db.commit()
        await self.db.refresh(project)

        logger.info("Project %s created by %s", project.id, actor.email)
        return project

    async def list_projects(self, actor: CurrentUser) -> List[Project]:
        """List projects visible to the caller, newest first"""
        query = select(Project).order_by(Project.created_at.desc())

        scope = tenant_scope(actor)
        if scope is not None:
            query = query.where(Project.organization_id == scope)

        if actor.role == Role.ORGANIZATION_MEMBER:
            assigned_project_ids = (
                select(Task.project_id)
                .join(task_assignees, task_assignees.c.task_id == Task.id)
                .where(task_assignees.c.user_id == actor.id)
            )
            query = query.where(
                or_(
                    Project.created_by == actor.id,
                    Project.id.in_(assigned_project_ids),
                )
            )

        result = await self.db.execute(query)
        return list(result.scalars().all())

    async def get_project(self, project_id: UUID, actor: CurrentUser) -> Project:
        """
        Get a project with its tasks.

        Raises:
            NotFoundError: Project does not exist
            ForbiddenError: Other tenant, or member without any association
        """
        result = await self.db.execute(
            select(Project)
            .options(selectinload(Project.tasks))
            .where(Project.id == project_id)
            .execution_options(populate_existing=True)
        )
        project = result.scalar_one_or_none()
        if not project:
            raise NotFoundError("Project not found")

        enforce(evaluate(actor, Action.READ, project_resource(project)))
        return project

    async def update_project(
        self, project_id: UUID, data: ProjectUpdate, actor: CurrentUser
    ) -> Project:
        """
        Update name or description; the organization never changes.

        Raises:
            NotFoundError, ForbiddenError
        """
        project = await self.get_project(project_id, actor)
        enforce(evaluate(actor, Action.UPDATE, project_resource(project)))

        for field, value in data.model_dump(exclude_unset=True).items():
            setattr(project, field, value)

        await self.db.commit()
        await self.db.refresh(project, attribute_names=["name", "description", "updated_at"])
        return project

    async def delete_project(self, project_id: UUID, actor: CurrentUser) -> None:
        """
        Delete a project and its tasks.

        Raises:
            NotFoundError, ForbiddenError
        """
        project = await self.get_project(project_id, actor)
        enforce(evaluate(actor, Action.DELETE, project_resource(project)))

        await self.db.delete(project)
        await self.db.commit()
        logger.info("Project %s deleted by %s", project.id, actor.email)
