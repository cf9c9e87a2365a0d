"""Service-layer error types mapped to HTTP responses by the API layer"""

from typing import Optional
from fastapi import status
from sqlalchemy.exc import IntegrityError


class ServiceError(Exception):
    """Base class for expected failures raised by domain services"""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message: str = "Internal server error"

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class BadRequestError(ServiceError):
    """Malformed input or referential inconsistency"""
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Bad request"


class UnauthenticatedError(ServiceError):
    """Missing, invalid or expired credentials"""
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Authentication required"


class ForbiddenError(ServiceError):
    """Valid identity but the action is not permitted"""
    status_code = status.HTTP_403_FORBIDDEN
    default_message = "Insufficient permissions"


class NotFoundError(ServiceError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Resource not found"


class ConflictError(ServiceError):
    status_code = status.HTTP_409_CONFLICT
    default_message = "Resource already exists"


UNIQUE_VIOLATION_SQLSTATE = "23505"


def is_unique_violation(exc: IntegrityError) -> bool:
    """True for duplicate-key failures (PostgreSQL sqlstate or SQLite message)"""
    orig = exc.orig
    if getattr(orig, "sqlstate", None) == UNIQUE_VIOLATION_SQLSTATE:
        return True
    if getattr(orig, "pgcode", None) == UNIQUE_VIOLATION_SQLSTATE:
        return True
    return "UNIQUE constraint failed" in str(orig)
