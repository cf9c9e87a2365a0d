"""Task model"""

import enum
from sqlalchemy import Column, String, Text, ForeignKey, DateTime, Enum, Table, Uuid
from sqlalchemy.orm import relationship
from taskflow.database import Base
from taskflow.models.base import BaseModel


class TaskStatus(str, enum.Enum):
    """Task workflow status"""
    PENDING = "pending"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    BLOCKED = "blocked"


class TaskPriority(str, enum.Enum):
    """Task priority"""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    URGENT = "urgent"


task_assignees = Table(
    "task_assignees",
    Base.metadata,
    Column(
        "task_id",
        Uuid(as_uuid=True),
        ForeignKey("tasks.id", ondelete="CASCADE"),
        primary_key=True,
    ),
    Column(
        "user_id",
        Uuid(as_uuid=True),
        ForeignKey("users.id", ondelete="CASCADE"),
        primary_key=True,
    ),
)


class Task(BaseModel):
    """
    Task model. A task belongs to a project and carries a copy of the
    project's organization_id for tenant filtering.
    """

    __tablename__ = "tasks"

    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    status = Column(
        Enum(TaskStatus),
        nullable=False,
        default=TaskStatus.PENDING,
        server_default=TaskStatus.PENDING.name,
        index=True,
    )
    priority = Column(
        Enum(TaskPriority),
        nullable=False,
        default=TaskPriority.MEDIUM,
        server_default=TaskPriority.MEDIUM.name,
    )
    due_date = Column(DateTime, nullable=True)  # naive UTC
    project_id = Column(
        Uuid(as_uuid=True),
        ForeignKey("projects.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    organization_id = Column(
        Uuid(as_uuid=True),
        ForeignKey("organizations.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    created_by = Column(
        Uuid(as_uuid=True),
        ForeignKey("users.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )

    # Relationships
    project = relationship("Project", back_populates="tasks")
    organization = relationship("Organization", back_populates="tasks")
    creator = relationship("User", foreign_keys=[created_by])
    assignees = relationship(
        "User",
        secondary=task_assignees,
        back_populates="assigned_tasks",
        lazy="selectin",
        order_by="User.email",
    )

    def __repr__(self):
        return f"<Task(id={self.id}, title={self.title}, status={self.status})>"
