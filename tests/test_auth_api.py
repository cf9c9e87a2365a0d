"""Tests for authentication endpoints"""

import pytest
from uuid import uuid4
from httpx import AsyncClient
from fastapi import status
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from taskflow.models import Organization, User
from taskflow.services.auth_service import AuthService

TEST_PASSWORD = "Password123!"


REGISTRATION = {
    "email": "founder@acme.com",
    "password": "secret123",
    "name": "Acme Founder",
    "organizationName": "Acme Corp",
}


@pytest.mark.asyncio
class TestRegister:
    """Test POST /api/auth/register"""

    async def test_register_creates_organization_and_admin(self, async_client: AsyncClient):
        response = await async_client.post("/api/auth/register", json=REGISTRATION)

        assert response.status_code == status.HTTP_201_CREATED
        body = response.json()
        assert body["status"] == "success"

        data = body["data"]
        assert data["token"]
        assert data["tokenType"] == "Bearer"
        assert data["expiresIn"] == 7 * 24 * 3600

        user = data["user"]
        assert user["email"] == "founder@acme.com"
        assert user["name"] == "Acme Founder"
        assert user["role"] == "ORGANIZATION_ADMIN"
        assert user["organization"]["name"] == "Acme Corp"
        assert user["organization"]["slug"] == "acme-corp"
        assert user["organizationId"] == user["organization"]["id"]
        assert "password" not in user
        assert "passwordHash" not in user

    async def test_registered_token_authenticates(self, async_client: AsyncClient):
        response = await async_client.post("/api/auth/register", json=REGISTRATION)
        token = response.json()["data"]["token"]

        me = await async_client.get("/api/me", headers={"Authorization": f"Bearer {token}"})

        assert me.status_code == status.HTTP_200_OK
        assert me.json()["data"]["email"] == "founder@acme.com"

    async def test_register_duplicate_email(self, async_client: AsyncClient):
        await async_client.post("/api/auth/register", json=REGISTRATION)

        response = await async_client.post(
            "/api/auth/register",
            json={**REGISTRATION, "organizationName": "Another Org"},
        )

        assert response.status_code == status.HTTP_409_CONFLICT
        assert response.json() == {"status": "error", "message": "User already exists"}

    async def test_register_duplicate_organization_creates_nothing(
        self, async_client: AsyncClient, db_session: AsyncSession
    ):
        await async_client.post("/api/auth/register", json=REGISTRATION)

        response = await async_client.post(
            "/api/auth/register",
            json={**REGISTRATION, "email": "second@acme.com"},
        )

        assert response.status_code == status.HTTP_409_CONFLICT
        assert response.json()["status"] == "error"

        users = await db_session.execute(
            select(func.count(User.id)).where(User.email == "second@acme.com")
        )
        organizations = await db_session.execute(select(func.count(Organization.id)))
        assert users.scalar_one() == 0
        assert organizations.scalar_one() == 1

    async def test_register_organization_name_too_short_for_slug(
        self, async_client: AsyncClient, db_session: AsyncSession
    ):
        response = await async_client.post(
            "/api/auth/register",
            json={**REGISTRATION, "organizationName": " a"},
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        body = response.json()
        assert body["message"] == "Validation failed"
        assert body["errors"][0]["field"] == "organizationName"

        organizations = await db_session.execute(select(func.count(Organization.id)))
        assert organizations.scalar_one() == 0

    async def test_register_validation_errors(self, async_client: AsyncClient):
        response = await async_client.post(
            "/api/auth/register",
            json={"email": "not-an-email", "password": "123", "name": "A"},
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        body = response.json()
        assert body["status"] == "error"
        assert body["message"] == "Validation failed"

        fields = {error["field"] for error in body["errors"]}
        assert {"email", "password", "name", "organizationName"} <= fields


@pytest.mark.asyncio
class TestLogin:
    """Test POST /api/auth/login"""

    async def test_login_success(self, async_client: AsyncClient, acme_admin: User):
        response = await async_client.post(
            "/api/auth/login",
            json={"email": "admin@acme.com", "password": TEST_PASSWORD},
        )

        assert response.status_code == status.HTTP_200_OK
        data = response.json()["data"]
        assert data["user"]["id"] == str(acme_admin.id)
        assert data["user"]["organization"]["slug"] == "acme"

        payload = AuthService.validate_token(data["token"])
        assert payload["sub"] == str(acme_admin.id)

    async def test_login_wrong_password(self, async_client: AsyncClient, acme_admin: User):
        response = await async_client.post(
            "/api/auth/login",
            json={"email": "admin@acme.com", "password": "wrong-password"},
        )

        assert response.status_code == status.HTTP_401_UNAUTHORIZED
        assert response.json()["message"] == "Invalid email or password"
        assert response.headers["www-authenticate"] == "Bearer"

    async def test_login_unknown_email_same_message(self, async_client: AsyncClient):
        response = await async_client.post(
            "/api/auth/login",
            json={"email": "nobody@acme.com", "password": TEST_PASSWORD},
        )

        assert response.status_code == status.HTTP_401_UNAUTHORIZED
        assert response.json()["message"] == "Invalid email or password"

    async def test_login_missing_password(self, async_client: AsyncClient):
        response = await async_client.post("/api/auth/login", json={"email": "admin@acme.com"})

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()["errors"][0]["field"] == "password"


@pytest.mark.asyncio
class TestCurrentUser:
    """Test GET /api/me and the bearer token guard"""

    async def test_me_returns_profile(
        self, async_client: AsyncClient, acme_member: User, auth_headers
    ):
        response = await async_client.get("/api/me", headers=auth_headers(acme_member))

        assert response.status_code == status.HTTP_200_OK
        data = response.json()["data"]
        assert data["email"] == "m1@acme.com"
        assert data["role"] == "ORGANIZATION_MEMBER"
        assert data["organization"]["name"] == "Acme"

    async def test_missing_token(self, async_client: AsyncClient):
        response = await async_client.get("/api/me")

        assert response.status_code == status.HTTP_401_UNAUTHORIZED
        assert response.json() == {
            "status": "error",
            "message": "No authentication token provided",
        }

    async def test_non_bearer_scheme(self, async_client: AsyncClient):
        response = await async_client.get("/api/me", headers={"Authorization": "Basic abc"})

        assert response.status_code == status.HTTP_401_UNAUTHORIZED
        assert response.json()["message"] == "No authentication token provided"

    async def test_invalid_token(self, async_client: AsyncClient):
        response = await async_client.get(
            "/api/me", headers={"Authorization": "Bearer not.a.token"}
        )

        assert response.status_code == status.HTTP_401_UNAUTHORIZED
        assert response.json()["message"] == "Invalid or expired token"

    async def test_token_for_unknown_user(self, async_client: AsyncClient):
        token = AuthService.create_access_token(str(uuid4()))

        response = await async_client.get(
            "/api/me", headers={"Authorization": f"Bearer {token}"}
        )

        assert response.status_code == status.HTTP_401_UNAUTHORIZED
        assert response.json()["message"] == "User not found"

    async def test_token_with_malformed_subject(self, async_client: AsyncClient):
        token = AuthService.create_access_token("not-a-uuid")

        response = await async_client.get(
            "/api/me", headers={"Authorization": f"Bearer {token}"}
        )

        assert response.status_code == status.HTTP_401_UNAUTHORIZED
        assert response.json()["message"] == "Invalid token payload"
