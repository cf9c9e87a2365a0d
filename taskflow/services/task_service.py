"""Task service: task CRUD and assignee management"""

import logging
from datetime import datetime, timezone
from typing import Iterable, List, Optional
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from taskflow.models import Project, Task, TaskPriority, TaskStatus, User, Role
from taskflow.schemas.auth import CurrentUser
from taskflow.schemas.task import TaskCreate, TaskUpdate
from taskflow.services.access_policy import (
    Action,
    Resource,
    ResourceKind,
    enforce,
    evaluate,
    tenant_scope,
)
from taskflow.services.errors import BadRequestError, NotFoundError

logger = logging.getLogger(__name__)


def task_resource(task: Task) -> Resource:
    return Resource(
        kind=ResourceKind.TASK,
        organization_id=task.organization_id,
        owner_id=task.created_by,
        member_ids=frozenset(assignee.id for assignee in task.assignees),
    )


def normalize_due_date(value: Optional[datetime]) -> Optional[datetime]:
    """Store due dates as naive UTC"""
    if value is None or value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


class TaskService:
    """
    Service for managing tasks and their assignees.
    Members only see tasks assigned to them; creators and assignees may edit.
    """

    def __init__(self, db: AsyncSession):
        """Initialize with database session"""
        self.db = db

    async def _resolve_assignees(
        self, assignee_ids: Iterable[UUID], organization_id: UUID
    ) -> List[User]:
        """
        Load assignees, all of which must belong to `organization_id`.

        Raises:
            BadRequestError: An id is unknown or belongs to another organization
        """
        unique_ids = set(assignee_ids)
        if not unique_ids:
            return []

        result = await self.db.execute(
            select(User).where(
                User.id.in_(list(unique_ids)),
                User.organization_id == organization_id,
            )
        )
        users = list(result.scalars().all())
        if len(users) != len(unique_ids):
            raise BadRequestError("Some assignees do not belong to your organization")
        return users

    async def create_task(self, data: TaskCreate, actor: CurrentUser) -> Task:
        """
        Create a task in a project of the caller's organization.

        Raises:
            ForbiddenError: Platform admin caller
            NotFoundError: Project missing or in another organization
            BadRequestError: Assignee outside the organization
        """
        enforce(evaluate(
            actor,
            Action.CREATE,
            Resource(kind=ResourceKind.TASK, organization_id=actor.organization_id),
        ))

        result = await self.db.execute(
            select(Project).where(
                Project.id == data.project_id,
                Project.organization_id == actor.organization_id,
            )
        )
        project = result.scalar_one_or_none()
        if not project:
            raise NotFoundError("Project not found or access denied")

        assignees = await self._resolve_assignees(
            data.assignee_ids or [], project.organization_id
        )

        task = Task(
            title=data.title,
            description=data.description,
            status=data.status,
            priority=data.priority,
            due_date=normalize_due_date(data.due_date),
            project_id=project.id,
            organization_id=project.organization_id,
            created_by=actor.id,
        )
        task.assignees = assignees
        self.db.add(task)
        await self.db.commit()
        await self.db.refresh(task)

        logger.info("Task %s created in project %s by %s", task.id, project.id, actor.email)
        return task

    async def list_tasks(
        self,
        actor: CurrentUser,
        project_id: Optional[UUID] = None,
        status: Optional[TaskStatus] = None,
        priority: Optional[TaskPriority] = None,
    ) -> List[Task]:
        """List tasks visible to the caller, newest first, with optional filters"""
        query = select(Task).order_by(Task.created_at.desc())

        scope = tenant_scope(actor)
        if scope is not None:
            query = query.where(Task.organization_id == scope)
        if actor.role == Role.ORGANIZATION_MEMBER:
            query = query.where(Task.assignees.any(User.id == actor.id))

        if project_id is not None:
            query = query.where(Task.project_id == project_id)
        if status is not None:
            query = query.where(Task.status == status)
        if priority is not None:
            query = query.where(Task.priority == priority)

        result = await self.db.execute(query)
        return list(result.scalars().all())

    async def get_task(self, task_id: UUID, actor: CurrentUser) -> Task:
        """
        Raises:
            NotFoundError: Task does not exist
            ForbiddenError: Other tenant, or member who is neither creator nor assignee
        """
        task = await self.db.get(Task, task_id)
        if not task:
            raise NotFoundError("Task not found")

        enforce(evaluate(actor, Action.READ, task_resource(task)))
        return task

    async def update_task(self, task_id: UUID, data: TaskUpdate, actor: CurrentUser) -> Task:
        """
        Update a task.

        assignee_ids replaces the assignee set; an explicit null due_date clears it.

        Raises:
            NotFoundError, ForbiddenError, BadRequestError
        """
        task = await self.get_task(task_id, actor)
        enforce(evaluate(actor, Action.UPDATE, task_resource(task)))

        update_data = data.model_dump(exclude_unset=True)

        if "assignee_ids" in update_data:
            task.assignees = await self._resolve_assignees(
                update_data.pop("assignee_ids"), task.organization_id
            )
        if "due_date" in update_data:
            update_data["due_date"] = normalize_due_date(update_data["due_date"])

        for field, value in update_data.items():
            setattr(task, field, value)

        await self.db.commit()
        await self.db.refresh(task)
        return task

    async def delete_task(self, task_id: UUID, actor: CurrentUser) -> None:
        """
        Raises:
            NotFoundError, ForbiddenError (members may only delete their own tasks)
        """
        task = await self.get_task(task_id, actor)
        enforce(evaluate(actor, Action.DELETE, task_resource(task)))

        await self.db.delete(task)
        await self.db.commit()
        logger.info("Task %s deleted by %s", task.id, actor.email)

    async def assign_user(self, task_id: UUID, user_id: UUID, actor: CurrentUser) -> Task:
        """
        Add a user to the task's assignees.

        Raises:
            NotFoundError: Task missing, or user not in the task's organization
            BadRequestError: User already assigned
        """
        task = await self.get_task(task_id, actor)
        enforce(evaluate(actor, Action.UPDATE, task_resource(task)))

        result = await self.db.execute(
            select(User).where(
                User.id == user_id,
                User.organization_id == task.organization_id,
            )
        )
        user = result.scalar_one_or_none()
        if not user:
            raise NotFoundError("User not found or does not belong to your organization")

        if any(assignee.id == user_id for assignee in task.assignees):
            raise BadRequestError("User is already assigned to this task")

        task.assignees.append(user)
        await self.db.commit()
        await self.db.refresh(task)

        logger.info("User %s assigned to task %s by %s", user.email, task.id, actor.email)
        return task

    async def unassign_user(self, task_id: UUID, user_id: UUID, actor: CurrentUser) -> Task:
        """
        Remove a user from the task's assignees.

        Raises:
            NotFoundError: Task missing
            BadRequestError: User is not assigned
        """
        task = await self.get_task(task_id, actor)
        enforce(evaluate(actor, Action.UPDATE, task_resource(task)))

        remaining = [assignee for assignee in task.assignees if assignee.id != user_id]
        if len(remaining) == len(task.assignees):
            raise BadRequestError("User is not assigned to this task")

        task.assignees = remaining
        await self.db.commit()
        await self.db.refresh(task)

        logger.info("User %s unassigned from task %s by %s", user_id, task.id, actor.email)
        return task
