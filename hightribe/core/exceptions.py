"""
Global exception handling for the application.
Every failure is rendered as the JSON envelope ``{"success": false, "error": ..., "details": ...}``.
"""

import traceback
from typing import Any, List, Optional

import structlog
from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = structlog.get_logger(__name__)


class AppError(Exception):
    """Base class for all application exceptions."""
    def __init__(
        self,
        message: str,
        status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
        details: Optional[Any] = None,
    ):
        self.message = message
        self.status_code = status_code
        self.details = details
        super().__init__(self.message)


class ValidationFailure(AppError):
    """Request body failed schema validation; ``errors`` lists every field violation."""
    def __init__(self, errors: List[Any], message: str = "Validation failed"):
        self.errors = list(errors)
        super().__init__(
            message,
            status.HTTP_400_BAD_REQUEST,
            [error.to_dict() for error in self.errors],
        )


class MalformedRequest(AppError):
    """Request body is not valid JSON."""
    def __init__(self, message: str = "Invalid JSON format"):
        super().__init__(message, status.HTTP_400_BAD_REQUEST)


class BadRequestException(AppError):
    """Request is structurally valid but carries an unusable parameter."""
    def __init__(self, message: str = "Bad request"):
        super().__init__(message, status.HTTP_400_BAD_REQUEST)


class EntityNotFoundException(AppError):
    """Resource not found error."""
    def __init__(self, message: str = "Entity not found", details: Optional[Any] = None):
        super().__init__(message, status.HTTP_404_NOT_FOUND, details)


class UniqueConstraintViolation(AppError):
    """A unique column (email or phone) already holds the submitted value."""
    def __init__(
        self,
        message: str = "Unique constraint violation",
        field: Optional[str] = None,
        status_code: int = status.HTTP_400_BAD_REQUEST,
    ):
        self.field = field
        super().__init__(message, status_code)


class UnauthorizedException(AppError):
    """Authentication failure error."""
    def __init__(self, message: str = "Invalid credentials", details: Optional[Any] = None):
        super().__init__(message, status.HTTP_401_UNAUTHORIZED, details)


def error_envelope(message: str, status_code: int, details: Optional[Any] = None, headers=None) -> JSONResponse:
    content = {"success": False, "error": message}
    if details is not None:
        content["details"] = details
    return JSONResponse(status_code=status_code, content=content, headers=headers)


def _is_production(request: Request) -> bool:
    settings = getattr(request.app.state, "settings", None)
    return bool(settings and settings.is_production)


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    logger.info(
        "Request rejected",
        code=exc.__class__.__name__,
        status_code=exc.status_code,
        error=exc.message,
        path=request.url.path,
    )
    return error_envelope(exc.message, exc.status_code, exc.details)


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    message = exc.detail if isinstance(exc.detail, str) else "Request failed"
    if exc.status_code == status.HTTP_405_METHOD_NOT_ALLOWED:
        message = "Method not allowed"
    return error_envelope(message, exc.status_code, headers=getattr(exc, "headers", None))


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    details = [
        {"field": ".".join(str(part) for part in error["loc"]), "message": error["msg"]}
        for error in exc.errors()
    ]
    return error_envelope("Validation failed", status.HTTP_400_BAD_REQUEST, details)


async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle all uncaught exceptions globally."""

    if isinstance(exc, AppError):
        return await app_error_handler(request, exc)

    logger.exception("Unexpected error occurred", path=request.url.path)

    # Routes may name their own failure; otherwise production stays generic
    route_message = getattr(request.state, "failure_message", None)

    if _is_production(request):
        return error_envelope(route_message or "Internal server error", status.HTTP_500_INTERNAL_SERVER_ERROR)

    return error_envelope(
        route_message or str(exc) or "Internal server error",
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        "".join(traceback.format_exception(type(exc), exc, exc.__traceback__)),
    )


def register_exception_handlers(app) -> None:
    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(Exception, global_exception_handler)
