"""Pytest configuration and shared fixtures"""

import os

# Settings are read at import time, so the environment must be ready first
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("JWT_SECRET", "test-jwt-secret")
os.environ.setdefault("BCRYPT_ROUNDS", "4")

import pytest
import pytest_asyncio
from typing import AsyncGenerator, Callable, Dict
from fastapi.testclient import TestClient
from httpx import ASGITransport, AsyncClient
from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker
from sqlalchemy.pool import StaticPool

from taskflow.main import app
from taskflow.database import Base, get_db
from taskflow.models import Organization, User, Role
from taskflow.services.auth_service import AuthService

# In-memory database shared by every connection of a test engine
TEST_DATABASE_URL = "sqlite+aiosqlite://"
TEST_PASSWORD = "Password123!"


@pytest.fixture
def client():
    """FastAPI test client fixture"""
    return TestClient(app)


@pytest_asyncio.fixture(scope="function")
async def test_engine():
    """Create a test database engine"""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        echo=False,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )

    @event.listens_for(engine.sync_engine, "connect")
    def _enable_foreign_keys(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest_asyncio.fixture(scope="function")
async def db_session(test_engine) -> AsyncGenerator[AsyncSession, None]:
    """Create a database session for testing"""
    async_session_maker = async_sessionmaker(
        test_engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )

    async with async_session_maker() as session:
        yield session
        await session.rollback()


@pytest_asyncio.fixture
async def async_client(db_session: AsyncSession):
    """Create async test client with database override"""

    async def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()


async def create_organization(db: AsyncSession, name: str, slug: str) -> Organization:
    org = Organization(name=name, slug=slug)
    db.add(org)
    await db.commit()
    await db.refresh(org)
    return org


async def create_user(
    db: AsyncSession,
    email: str,
    role: Role,
    organization: Organization,
    password: str = TEST_PASSWORD,
) -> User:
    user = User(
        email=email,
        name=email.split("@")[0],
        password_hash=AuthService.hash_password(password),
        role=role,
        organization_id=organization.id,
    )
    db.add(user)
    await db.commit()
    await db.refresh(user)
    return user


@pytest.fixture
def auth_headers() -> Callable[[User], Dict[str, str]]:
    """Build Authorization headers for a user"""

    def _headers(user: User) -> Dict[str, str]:
        token = AuthService.create_access_token(str(user.id))
        return {"Authorization": f"Bearer {token}"}

    return _headers


@pytest_asyncio.fixture
async def platform_org(db_session: AsyncSession) -> Organization:
    return await create_organization(db_session, "Platform", "platform")


@pytest_asyncio.fixture
async def acme_org(db_session: AsyncSession) -> Organization:
    return await create_organization(db_session, "Acme", "acme")


@pytest_asyncio.fixture
async def other_org(db_session: AsyncSession) -> Organization:
    return await create_organization(db_session, "Globex", "globex")


@pytest_asyncio.fixture
async def platform_admin(db_session: AsyncSession, platform_org: Organization) -> User:
    return await create_user(db_session, "root@platform.com", Role.PLATFORM_ADMIN, platform_org)


@pytest_asyncio.fixture
async def acme_admin(db_session: AsyncSession, acme_org: Organization) -> User:
    return await create_user(db_session, "admin@acme.com", Role.ORGANIZATION_ADMIN, acme_org)


@pytest_asyncio.fixture
async def acme_member(db_session: AsyncSession, acme_org: Organization) -> User:
    return await create_user(db_session, "m1@acme.com", Role.ORGANIZATION_MEMBER, acme_org)


@pytest_asyncio.fixture
async def acme_member_two(db_session: AsyncSession, acme_org: Organization) -> User:
    return await create_user(db_session, "m2@acme.com", Role.ORGANIZATION_MEMBER, acme_org)


@pytest_asyncio.fixture
async def other_admin(db_session: AsyncSession, other_org: Organization) -> User:
    return await create_user(db_session, "admin@globex.com", Role.ORGANIZATION_ADMIN, other_org)


@pytest_asyncio.fixture
async def other_member(db_session: AsyncSession, other_org: Organization) -> User:
    return await create_user(db_session, "member@globex.com", Role.ORGANIZATION_MEMBER, other_org)
