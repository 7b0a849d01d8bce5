"""
Custom exceptions for the application
"""

from datetime import datetime, timezone
from typing import Any, Dict, Optional

from fastapi import HTTPException, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import ORJSONResponse
from pydantic import BaseModel
from starlette_context import context
from starlette_context.header_keys import HeaderKeys

from app.core.config import settings
from app.core.logging import log


class BaseAPIException(HTTPException):
    """Base exception for API errors"""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    detail: str = "Internal server error"
    headers: Optional[Dict[str, str]] = None

    def __init__(self, detail: Optional[str] = None, headers: Optional[Dict[str, str]] = None, **kwargs):
        super().__init__(status_code=self.status_code, detail=detail or self.detail, headers=headers or self.headers)
        # Store any additional context
        self.context = kwargs


class NotFoundError(BaseAPIException):
    """Resource not found"""

    status_code = status.HTTP_404_NOT_FOUND
    detail = "Resource not found"


class ConflictError(BaseAPIException):
    """Operation blocked by a referential constraint"""

    status_code = status.HTTP_409_CONFLICT
    detail = "Resource conflict"


class InvalidReferenceError(BaseAPIException):
    """A product points at a brand that does not exist"""

    status_code = status.HTTP_400_BAD_REQUEST
    detail = "brand not found"


class BadRequestError(BaseAPIException):
    """Bad request"""

    status_code = status.HTTP_400_BAD_REQUEST
    detail = "Bad request"


class DatabaseError(BaseAPIException):
    """Database operation error"""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    detail = "Database error"


# Error response models for OpenAPI documentation
class ErrorDetail(BaseModel):
    """Error detail model"""

    message: str
    type: str
    context: Optional[Dict[str, Any]] = None


class ErrorResponse(BaseModel):
    """Standard error response"""

    error: ErrorDetail
    correlation_id: Optional[str] = None
    timestamp: str


def error_body(message: str, error_type: str, error_context: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """Build the error envelope shared by every failure response"""
    correlation_id = context.get(HeaderKeys.correlation_id, "no-context") if context.exists() else "no-context"
    return {
        "error": {"message": message, "type": error_type, "context": error_context or {}},
        "correlation_id": correlation_id,
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }


# Exception handlers
async def handle_api_exception(request: Request, exc: BaseAPIException) -> ORJSONResponse:
    """Handle API exceptions with structured response"""
    return ORJSONResponse(
        status_code=exc.status_code,
        content=error_body(exc.detail, exc.__class__.__name__, getattr(exc, "context", {})),
        headers=getattr(exc, "headers", None),
    )


async def handle_validation_exception(request: Request, exc: RequestValidationError) -> ORJSONResponse:
    """Malformed bodies, ids and query values are answered 400"""
    errors = exc.errors()
    first = errors[0] if errors else {}
    location = ".".join(str(part) for part in first.get("loc", ()))
    message = f"Invalid request: {location} {first.get('msg', '')}".strip()

    log.info("Rejected request", path=request.url.path, errors=len(errors))

    return ORJSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=error_body(message, "BadRequestError", {"errors": len(errors)}),
    )


async def handle_unexpected_exception(request: Request, exc: Exception) -> ORJSONResponse:
    """Handle unexpected exceptions"""
    # Log the full exception
    log.opt(exception=exc).error("Unexpected error", path=request.url.path)

    # Don't expose internal errors in production
    if settings.DEBUG:
        detail = str(exc)
    else:
        detail = "An unexpected error occurred"

    return ORJSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=error_body(detail, "InternalServerError"),
    )
