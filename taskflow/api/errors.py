"""Error response formatting and exception handlers"""

import logging
from typing import Optional, Dict, Any, List
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field
from sqlalchemy.exc import IntegrityError
from starlette.exceptions import HTTPException as StarletteHTTPException

from taskflow.config import settings
from taskflow.services.errors import ServiceError, UnauthenticatedError, is_unique_violation

logger = logging.getLogger(__name__)


class ValidationErrorDetail(BaseModel):
    """Validation error detail for a specific field"""
    field: str
    message: str


class ErrorResponse(BaseModel):
    """Error envelope returned by every failing request"""
    status: str = Field(default="error", description="Always 'error'")
    message: str = Field(..., description="Human-readable explanation")
    errors: Optional[List[ValidationErrorDetail]] = Field(None, description="Validation errors")


def create_error_response(
    status_code: int,
    message: str,
    errors: Optional[List[Dict[str, str]]] = None,
    headers: Optional[Dict[str, str]] = None,
) -> JSONResponse:
    """
    Create an error response

    Args:
        status_code: HTTP status code
        message: Error message
        errors: List of validation errors with field and message
        headers: Extra response headers

    Returns:
        JSONResponse with the error envelope
    """
    content: Dict[str, Any] = {"status": "error", "message": message}

    if errors:
        content["errors"] = errors

    return JSONResponse(status_code=status_code, content=content, headers=headers)


def _field_path(loc) -> str:
    parts = [str(part) for part in loc if part not in ("body", "query", "path")]
    return ".".join(parts) or "body"


async def service_error_handler(request: Request, exc: ServiceError) -> JSONResponse:
    headers = None
    if isinstance(exc, UnauthenticatedError):
        headers = {"WWW-Authenticate": "Bearer"}
    return create_error_response(exc.status_code, exc.message, headers=headers)


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = [
        {"field": _field_path(error.get("loc", ())), "message": error.get("msg", "Invalid value")}
        for error in exc.errors()
    ]
    logger.debug("Validation failed on %s: %s", request.url.path, errors)
    return create_error_response(
        status.HTTP_400_BAD_REQUEST, "Validation failed", errors=errors
    )


async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    if exc.status_code == status.HTTP_404_NOT_FOUND and exc.detail == "Not Found":
        message = f"Route {request.url.path} not found"
    else:
        message = str(exc.detail)
    return create_error_response(exc.status_code, message, headers=getattr(exc, "headers", None))


async def integrity_error_handler(request: Request, exc: IntegrityError) -> JSONResponse:
    logger.warning("Integrity error on %s: %s", request.url.path, exc.orig)
    if is_unique_violation(exc):
        return create_error_response(status.HTTP_409_CONFLICT, "Resource already exists")
    # Foreign key and check constraint failures
    return create_error_response(
        status.HTTP_400_BAD_REQUEST, "Request violates a data constraint"
    )


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    message = str(exc) if settings.is_development else "Internal server error"
    return create_error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, message)


def register_exception_handlers(app: FastAPI) -> None:
    """Install the error envelope handlers on the application"""
    app.add_exception_handler(ServiceError, service_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
    app.add_exception_handler(IntegrityError, integrity_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
