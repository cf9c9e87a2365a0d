"""
Authorization policy for tenant-scoped resources.

Every allow/deny decision about organizations, users, projects and tasks is
made by `evaluate`. Services describe the resource they are about to touch
and call `enforce(evaluate(...))` instead of branching on roles themselves.

Evaluation order:
    1. Platform-only actions (creating or deleting organizations)
    2. Platform admin restriction on creating projects and tasks
    3. Tenant isolation (resource organization must match the caller's)
    4. Ownership rules for organization members
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import FrozenSet, Optional, Protocol
from uuid import UUID

from taskflow.models.user import Role
from taskflow.services.errors import ForbiddenError

logger = logging.getLogger(__name__)


class Action(str, Enum):
    CREATE = "create"
    READ = "read"
    UPDATE = "update"
    DELETE = "delete"


class ResourceKind(str, Enum):
    ORGANIZATION = "organization"
    USER = "user"
    PROJECT = "project"
    TASK = "task"


class Actor(Protocol):
    """Anything carrying the caller's identity (CurrentUser, User)"""
    id: UUID
    role: Role
    organization_id: UUID


@dataclass(frozen=True)
class Resource:
    """
    The part of a resource that matters for authorization.

    Attributes:
        kind: Resource type
        organization_id: Owning tenant (the organization itself for organizations)
        owner_id: Creator of the resource, if tracked
        member_ids: Users associated with the resource (task assignees, or
            assignees of any task within a project)
    """
    kind: ResourceKind
    organization_id: Optional[UUID]
    owner_id: Optional[UUID] = None
    member_ids: FrozenSet[UUID] = field(default_factory=frozenset)


@dataclass(frozen=True)
class Decision:
    allowed: bool
    reason: str = ""


ALLOW = Decision(True)


def deny(reason: str) -> Decision:
    return Decision(False, reason)


def is_platform_admin(actor: Actor) -> bool:
    return actor.role == Role.PLATFORM_ADMIN


def tenant_scope(actor: Actor) -> Optional[UUID]:
    """Organization a listing must be filtered by, or None for platform admins"""
    if is_platform_admin(actor):
        return None
    return actor.organization_id


def evaluate(actor: Actor, action: Action, resource: Resource) -> Decision:
    """Decide whether `actor` may perform `action` on `resource`"""
    kind = resource.kind.value

    if resource.kind == ResourceKind.ORGANIZATION and action in (Action.CREATE, Action.DELETE):
        if is_platform_admin(actor):
            return ALLOW
        return deny(f"Only platform admins can {action.value} organizations")

    if is_platform_admin(actor):
        if action == Action.CREATE and resource.kind in (ResourceKind.PROJECT, ResourceKind.TASK):
            return deny(f"Platform admin cannot create {kind}s directly")
        return ALLOW

    if resource.organization_id != actor.organization_id:
        if action == Action.CREATE:
            return deny(f"Cannot create {kind} in another organization")
        return deny(f"Access to this {kind} is forbidden")

    if actor.role == Role.ORGANIZATION_MEMBER:
        return _evaluate_member(actor, action, resource)

    return ALLOW


def _evaluate_member(actor: Actor, action: Action, resource: Resource) -> Decision:
    kind = resource.kind.value
    is_owner = resource.owner_id is not None and resource.owner_id == actor.id
    is_member = actor.id in resource.member_ids

    if resource.kind == ResourceKind.ORGANIZATION:
        return ALLOW

    if resource.kind == ResourceKind.USER:
        if action == Action.READ:
            return ALLOW
        return deny("Organization members cannot manage users")

    if action == Action.CREATE:
        return ALLOW

    if action == Action.READ or (action == Action.UPDATE and resource.kind == ResourceKind.TASK):
        if is_owner or is_member:
            return ALLOW
        if action == Action.UPDATE:
            return deny("You do not have permission to update this task")
        return deny(f"Access to this {kind} is forbidden")

    # Project update/delete and task delete are creator-only
    if is_owner:
        return ALLOW
    return deny(f"Only {kind} creator or organization admin can {action.value} {kind}")


def check_role_grant(actor: Actor, role: Role) -> Decision:
    """Only platform admins may hand out the platform admin role"""
    if role == Role.PLATFORM_ADMIN and not is_platform_admin(actor):
        return deny("Only platform admins can grant the platform admin role")
    return ALLOW


def enforce(decision: Decision) -> None:
    """Raise ForbiddenError for a denied decision"""
    if not decision.allowed:
        logger.warning("Access denied: %s", decision.reason)
        raise ForbiddenError(decision.reason)
