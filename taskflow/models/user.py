"""User model"""

import enum
from sqlalchemy import Column, String, ForeignKey, Enum, Uuid
from sqlalchemy.orm import relationship
from taskflow.models.base import BaseModel


class Role(str, enum.Enum):
    """User roles, from widest to narrowest access"""
    PLATFORM_ADMIN = "PLATFORM_ADMIN"
    ORGANIZATION_ADMIN = "ORGANIZATION_ADMIN"
    ORGANIZATION_MEMBER = "ORGANIZATION_MEMBER"


class User(BaseModel):
    """
    User model representing application users.
    Users belong to exactly one organization; platform admins belong to the
    platform organization.
    """

    __tablename__ = "users"

    email = Column(String(255), unique=True, nullable=False, index=True)
    name = Column(String(255), nullable=True)
    password_hash = Column(String(255), nullable=False)
    role = Column(
        Enum(Role),
        nullable=False,
        default=Role.ORGANIZATION_MEMBER,
        server_default=Role.ORGANIZATION_MEMBER.value,
    )
    organization_id = Column(
        Uuid(as_uuid=True),
        ForeignKey("organizations.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    # Relationships
    organization = relationship("Organization", back_populates="users")
    assigned_tasks = relationship(
        "Task",
        secondary="task_assignees",
        back_populates="assignees",
        passive_deletes=True,
    )

    def __repr__(self):
        return f"<User(id={self.id}, email={self.email}, role={self.role})>"
