"""Organization model"""

from sqlalchemy import Column, String, CheckConstraint
from sqlalchemy.orm import relationship
from taskflow.models.base import BaseModel


class Organization(BaseModel):
    """
    Organization model representing a tenant.
    Every user, project and task is partitioned by organization.
    """

    __tablename__ = "organizations"

    name = Column(String(255), unique=True, nullable=False)
    slug = Column(String(255), unique=True, nullable=False, index=True)

    # Relationships (rows are removed by ON DELETE CASCADE)
    users = relationship(
        "User",
        back_populates="organization",
        cascade="all",
        passive_deletes=True,
    )
    projects = relationship(
        "Project",
        back_populates="organization",
        cascade="all",
        passive_deletes=True,
    )
    tasks = relationship(
        "Task",
        back_populates="organization",
        cascade="all",
        passive_deletes=True,
    )

    __table_args__ = (
        CheckConstraint("length(slug) >= 2", name="check_organization_slug_length"),
    )

    def __repr__(self):
        return f"<Organization(id={self.id}, slug={self.slug})>"
