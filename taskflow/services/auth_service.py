"""Authentication service: password hashing, JWT tokens, login and registration"""

import logging
from datetime import datetime, timedelta
from typing import Optional, Dict, Any
from uuid import UUID

import bcrypt
from jose import JWTError, jwt
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from taskflow.config import settings
from taskflow.models import Organization, User, Role
from taskflow.schemas.auth import LoginRequest, RegisterRequest
from taskflow.schemas.organization import slugify
from taskflow.services.errors import (
    ConflictError,
    NotFoundError,
    UnauthenticatedError,
    is_unique_violation,
)

logger = logging.getLogger(__name__)

TOKEN_ISSUER = "taskflow-api"


class AuthService:
    """Service for handling authentication, JWT tokens, and password management"""

    def __init__(self, db: AsyncSession):
        """Initialize with database session"""
        self.db = db

    @staticmethod
    def hash_password(password: str) -> str:
        """
        Hash a password using bcrypt

        Args:
            password: Plain text password

        Returns:
            Hashed password string
        """
        salt = bcrypt.gensalt(rounds=settings.bcrypt_rounds)
        hashed = bcrypt.hashpw(password.encode("utf-8"), salt)
        return hashed.decode("utf-8")

    @staticmethod
    def verify_password(plain_password: str, hashed_password: str) -> bool:
        """
        Verify a password against its hash

        Args:
            plain_password: Plain text password to verify
            hashed_password: Hashed password to compare against

        Returns:
            True if password matches, False otherwise
        """
        return bcrypt.checkpw(
            plain_password.encode("utf-8"), hashed_password.encode("utf-8")
        )

    @staticmethod
    def generate_token(
        data: Dict[str, Any],
        expires_delta: Optional[timedelta] = None,
    ) -> str:
        """
        Generate a signed JWT with the provided claims

        Args:
            data: Dictionary of claims to include in the token
            expires_delta: Optional lifetime (defaults to jwt_expiration_days)

        Returns:
            Encoded JWT token string
        """
        to_encode = data.copy()
        now = datetime.utcnow()
        expire = now + (expires_delta or timedelta(days=settings.jwt_expiration_days))

        to_encode.update({
            "exp": expire,
            "iat": now,
            "iss": TOKEN_ISSUER,
            "type": "access",
        })

        return jwt.encode(to_encode, settings.jwt_secret, algorithm=settings.jwt_algorithm)

    @staticmethod
    def decode_token(token: str) -> Optional[Dict[str, Any]]:
        """
        Decode a JWT token, verifying signature and expiration

        Returns:
            Dictionary of token claims if valid, None otherwise
        """
        try:
            return jwt.decode(
                token,
                settings.jwt_secret,
                algorithms=[settings.jwt_algorithm],
                issuer=TOKEN_ISSUER,
            )
        except JWTError:
            return None

    @staticmethod
    def validate_token(token: str) -> Optional[Dict[str, Any]]:
        """
        Validate a JWT access token and return its claims

        Returns:
            Dictionary of token claims if valid, None otherwise
        """
        payload = AuthService.decode_token(token)

        if not payload or payload.get("type") != "access" or not payload.get("sub"):
            return None

        return payload

    @staticmethod
    def create_access_token(user_id: str) -> str:
        """Create an access token carrying the user id"""
        return AuthService.generate_token({"sub": user_id})

    @staticmethod
    def token_lifetime_seconds() -> int:
        return settings.jwt_expiration_days * 24 * 3600

    async def login(self, data: LoginRequest) -> tuple[User, str]:
        """
        Authenticate by email and password.

        Raises:
            UnauthenticatedError: Unknown email or wrong password (same message for both)
        """
        result = await self.db.execute(
            select(User)
            .options(selectinload(User.organization))
            .where(User.email == data.email)
        )
        user = result.scalar_one_or_none()

        if not user or not self.verify_password(data.password, user.password_hash):
            logger.info("Failed login attempt for %s", data.email)
            raise UnauthenticatedError("Invalid email or password")

        return user, self.create_access_token(str(user.id))

    async def register(self, data: RegisterRequest) -> tuple[User, str]:
        """
        Create a new organization and its first ORGANIZATION_ADMIN user.

        Both rows are committed together; a uniqueness failure on either
        rolls back both.

        Raises:
            ConflictError: Email already registered or organization already exists
        """
        existing = await self.db.execute(select(User.id).where(User.email == data.email))
        if existing.scalar_one_or_none():
            raise ConflictError("User already exists")

        organization = Organization(
            name=data.organization_name,
            slug=slugify(data.organization_name),
        )
        user = User(
            email=data.email,
            name=data.name,
            password_hash=self.hash_password(data.password),
            role=Role.ORGANIZATION_ADMIN,
            organization=organization,
        )
        self.db.add_all([organization, user])

        try:
            await self.db.commit()
        except IntegrityError as e:
            await self.db.rollback()
            if not is_unique_violation(e):
                raise
            logger.info("Registration conflict for %s", data.email)
            raise ConflictError("User or organization already exists")

        logger.info("Registered organization %s with admin %s", organization.slug, user.email)
        return user, self.create_access_token(str(user.id))

    async def get_profile(self, user_id: UUID) -> User:
        """Load a user with its organization"""
        result = await self.db.execute(
            select(User)
            .options(selectinload(User.organization))
            .where(User.id == user_id)
        )
        user = result.scalar_one_or_none()
        if not user:
            raise NotFoundError("User not found")
        return user
