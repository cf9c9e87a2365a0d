"""Project model"""

from sqlalchemy import Column, String, Text, ForeignKey, Uuid
from sqlalchemy.orm import relationship
from taskflow.models.base import BaseModel


class Project(BaseModel):
    """
    Project model. Projects belong to the organization of their creator
    and contain tasks.
    """

    __tablename__ = "projects"

    organization_id = Column(
        Uuid(as_uuid=True),
        ForeignKey("organizations.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    name = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    created_by = Column(
        Uuid(as_uuid=True),
        ForeignKey("users.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )

    # Relationships
    organization = relationship("Organization", back_populates="projects")
    creator = relationship("User")
    tasks = relationship(
        "Task",
        back_populates="project",
        cascade="all",
        passive_deletes=True,
        order_by="Task.created_at.desc()",
    )

    def __repr__(self):
        return f"<Project(id={self.id}, name={self.name})>"
