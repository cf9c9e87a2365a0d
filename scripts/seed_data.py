#!/usr/bin/env python3
"""
Database seeding script for development and testing.
Creates the platform organization and its admin, plus two sample tenants
with admins, members, projects and tasks.
"""

import asyncio
import sys
from pathlib import Path
from datetime import datetime, timedelta

# Add parent directory to path to import our modules
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from sqlalchemy import delete
from sqlalchemy.ext.asyncio import AsyncSession
from taskflow.database import async_engine, Base, AsyncSessionLocal
from taskflow.models import (
    Organization,
    User,
    Role,
    Project,
    Task,
    TaskStatus,
    TaskPriority,
    task_assignees,
)
from taskflow.services.auth_service import AuthService

PLATFORM_SLUG = "platform"


async def create_tables():
    """Create all database tables"""
    async with async_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    print("✓ Database tables created")


async def clear_data(session: AsyncSession):
    """Remove existing rows, children first"""
    await session.execute(delete(task_assignees))
    await session.execute(delete(Task))
    await session.execute(delete(Project))
    await session.execute(delete(User))
    await session.execute(delete(Organization))
    await session.flush()


async def seed(session: AsyncSession) -> dict:
    """
    Seed the session with sample data and commit.

    Returns:
        Row counts per entity
    """
    await clear_data(session)

    # Platform organization and admin
    platform = Organization(name="Platform", slug=PLATFORM_SLUG)
    techcorp = Organization(name="TechCorp Inc", slug="techcorp-inc")
    designhub = Organization(name="DesignHub", slug="designhub")
    session.add_all([platform, techcorp, designhub])
    await session.flush()
    print("✓ Created organizations")

    platform_admin = User(
        email="admin@platform.com",
        name="Platform Admin",
        password_hash=AuthService.hash_password("Admin123!"),
        role=Role.PLATFORM_ADMIN,
        organization_id=platform.id,
    )
    techcorp_admin = User(
        email="admin@techcorp.com",
        name="TechCorp Admin",
        password_hash=AuthService.hash_password("OrgAdmin123!"),
        role=Role.ORGANIZATION_ADMIN,
        organization_id=techcorp.id,
    )
    john = User(
        email="john.doe@techcorp.com",
        name="John Doe",
        password_hash=AuthService.hash_password("Member123!"),
        role=Role.ORGANIZATION_MEMBER,
        organization_id=techcorp.id,
    )
    jane = User(
        email="jane.smith@techcorp.com",
        name="Jane Smith",
        password_hash=AuthService.hash_password("Member123!"),
        role=Role.ORGANIZATION_MEMBER,
        organization_id=techcorp.id,
    )
    designhub_admin = User(
        email="admin@designhub.com",
        name="DesignHub Admin",
        password_hash=AuthService.hash_password("OrgAdmin123!"),
        role=Role.ORGANIZATION_ADMIN,
        organization_id=designhub.id,
    )
    users = [platform_admin, techcorp_admin, john, jane, designhub_admin]
    session.add_all(users)
    await session.flush()
    print("✓ Created users")

    website = Project(
        organization_id=techcorp.id,
        name="Website Redesign",
        description="Refresh the marketing site",
        created_by=techcorp_admin.id,
    )
    mobile = Project(
        organization_id=techcorp.id,
        name="Mobile App",
        description="First release of the mobile client",
        created_by=john.id,
    )
    branding = Project(
        organization_id=designhub.id,
        name="Brand Guidelines",
        description="Company-wide brand book",
        created_by=designhub_admin.id,
    )
    projects = [website, mobile, branding]
    session.add_all(projects)
    await session.flush()
    print("✓ Created projects")

    tasks = [
        Task(
            title="Design homepage mockups",
            description="Three layout options for review",
            status=TaskStatus.IN_PROGRESS,
            priority=TaskPriority.HIGH,
            due_date=datetime.utcnow() + timedelta(days=7),
            project_id=website.id,
            organization_id=techcorp.id,
            created_by=techcorp_admin.id,
            assignees=[jane],
        ),
        Task(
            title="Set up CI pipeline",
            status=TaskStatus.PENDING,
            priority=TaskPriority.MEDIUM,
            project_id=mobile.id,
            organization_id=techcorp.id,
            created_by=john.id,
            assignees=[john],
        ),
        Task(
            title="Pick typography",
            status=TaskStatus.COMPLETED,
            priority=TaskPriority.LOW,
            project_id=branding.id,
            organization_id=designhub.id,
            created_by=designhub_admin.id,
        ),
    ]
    session.add_all(tasks)
    await session.commit()
    print("✓ Created tasks")

    return {
        "organizations": 3,
        "users": len(users),
        "projects": len(projects),
        "tasks": len(tasks),
    }


async def seed_data():
    """Seed the configured database"""
    async with AsyncSessionLocal() as session:
        try:
            summary = await seed(session)
        except Exception as e:
            await session.rollback()
            print(f"❌ Error seeding database: {e}")
            raise

    print("\n✅ Database seeding completed successfully!")
    print("\nSummary:")
    for name, count in summary.items():
        print(f"  - {name.capitalize()}: {count}")


async def main():
    """Main function"""
    print("Starting database seeding...\n")
    await create_tables()
    await seed_data()


if __name__ == "__main__":
    asyncio.run(main())
