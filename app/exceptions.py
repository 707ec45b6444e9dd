# =============================================================================
# app/exceptions.py - Custom Exception Handlers
# =============================================================================
# Centralized exception handling for the API.
# Every error leaves the API as {"error": message, "code": CODE, ...}.
# =============================================================================

import logging
from typing import Any

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from lib.supabase_client import SupabaseClientError
from lib.utils import ApplicationError

logger = logging.getLogger(__name__)


class CatalogException(ApplicationError):
    """
    Base exception for the catalog API.

    All custom exceptions inherit from this class.
    Provides structured error responses with actionable suggestions.
    """

    def __init__(
        self,
        message: str,
        code: str = "CATALOG_ERROR",
        status_code: int = 500,
        suggestion: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message, code=code, suggestion=suggestion, details=details)
        self.status_code = status_code


# =============================================================================
# Authorization Exceptions
# =============================================================================

class AuthenticationRequiredError(CatalogException):
    """Raised when an action needs a signed-in caller and there is none."""

    def __init__(self, message: str = "Unauthorized"):
        super().__init__(
            message=message,
            code="UNAUTHORIZED",
            status_code=401,
            suggestion="Send a valid Supabase access token as 'Authorization: Bearer <token>'",
        )


class ForbiddenError(CatalogException):
    """Raised when the caller is signed in but may not touch this row."""

    def __init__(self, message: str = "Forbidden", details: dict[str, Any] | None = None):
        super().__init__(
            message=message,
            code="FORBIDDEN",
            status_code=403,
            details=details,
        )


# =============================================================================
# Not Found Exceptions
# =============================================================================

class AppNotFoundError(CatalogException):
    """Raised when an app doesn't exist or isn't visible to the caller."""

    def __init__(self, app_ref: str):
        super().__init__(
            message="App not found",
            code="APP_NOT_FOUND",
            status_code=404,
            suggestion="Check the app id or slug; unpublished apps are only visible to their developer",
            details={"app": app_ref}
        )


class CategoryNotFoundError(CatalogException):
    """Raised when a category id doesn't exist."""

    def __init__(self, category_id: str):
        super().__init__(
            message=f"Category not found: {category_id}",
            code="CATEGORY_NOT_FOUND",
            status_code=404,
            details={"category_id": category_id}
        )


class RatingNotFoundError(CatalogException):
    """Raised when the caller has no rating on an app."""

    def __init__(self, app_id: str):
        super().__init__(
            message="Rating not found",
            code="RATING_NOT_FOUND",
            status_code=404,
            details={"app_id": app_id}
        )


# =============================================================================
# Validation / Conflict Exceptions
# =============================================================================

class InvalidInputError(CatalogException):
    """Raised for request values that pass parsing but make no sense."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(
            message=message,
            code="VALIDATION_ERROR",
            status_code=400,
            details=details,
        )


class SlugConflictError(CatalogException):
    """Raised when a slug is taken and the configured policy refuses to adapt."""

    def __init__(self, slug: str, resource: str = "app"):
        super().__init__(
            message=f"Slug already in use: {slug}",
            code="SLUG_CONFLICT",
            status_code=409,
            suggestion=f"Choose a different {resource} name",
            details={"slug": slug}
        )


# =============================================================================
# Exception Handlers
# =============================================================================

async def catalog_exception_handler(
    request: Request,
    exc: CatalogException
) -> JSONResponse:
    """
    Convert CatalogException to JSON response.

    Returns structured error with:
    - error: Human-readable message
    - code: Machine-readable error code
    - suggestion: How to fix (if available)
    - details: Additional context
    """
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_dict()
    )


async def supabase_exception_handler(
    request: Request,
    exc: SupabaseClientError
) -> JSONResponse:
    """
    Convert platform failures to 500 responses.

    The platform's message is passed through unchanged.
    """
    logger.error(f"Backend failure on {request.method} {request.url.path}: {exc}")
    return JSONResponse(
        status_code=500,
        content=exc.to_dict()
    )


async def validation_exception_handler(
    request: Request,
    exc: RequestValidationError
) -> JSONResponse:
    """
    Handle Pydantic validation errors.

    Converts validation errors to a single readable message with status 400.
    """
    messages = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ()) if part != "body")
        messages.append(f"{location}: {error.get('msg')}" if location else str(error.get("msg")))

    return JSONResponse(
        status_code=400,
        content={
            "error": "; ".join(messages) or "Invalid request",
            "code": "VALIDATION_ERROR",
        }
    )


async def http_exception_handler(
    request: Request,
    exc: StarletteHTTPException
) -> JSONResponse:
    """Render framework HTTP errors (404 routes, 405, auth) in the same envelope."""
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": str(exc.detail), "code": "HTTP_ERROR"},
        headers=getattr(exc, "headers", None),
    )
