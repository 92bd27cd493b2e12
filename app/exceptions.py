# =============================================================================
# app/exceptions.py - Custom Exception Handlers
# =============================================================================
# Centralized exception handling for the API.
# Every failure is mapped to one of: 400, 401, 403, 404, 409, 500.
# =============================================================================

import logging
from typing import Any

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from lib.supabase_client import SupabaseClientError

logger = logging.getLogger(__name__)


class TemoConnectException(Exception):
    """
    Base exception for the Temo Connect API.

    All custom exceptions inherit from this class.
    Provides structured error responses with actionable suggestions.
    """

    def __init__(
        self,
        message: str,
        code: str = "TEMO_CONNECT_ERROR",
        status_code: int = 500,
        suggestion: str | None = None,
        details: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.status_code = status_code
        self.suggestion = suggestion
        self.details = details or {}
        self.headers = headers

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to API response dict."""
        result = {
            "detail": self.message,
            "code": self.code,
        }
        if self.suggestion:
            result["suggestion"] = self.suggestion
        if self.details:
            result["details"] = self.details
        return result


# =============================================================================
# Request Exceptions
# =============================================================================

class ValidationFailedError(TemoConnectException):
    """Raised when required fields are missing or invalid."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(
            message=message,
            code="VALIDATION_ERROR",
            status_code=400,
            details=details,
        )


# =============================================================================
# Auth Exceptions
# =============================================================================

class UnauthorizedError(TemoConnectException):
    """Raised for a missing, invalid or expired token, or bad credentials."""

    def __init__(self, message: str = "Invalid token", suggestion: str | None = None):
        super().__init__(
            message=message,
            code="UNAUTHORIZED",
            status_code=401,
            suggestion=suggestion,
            headers={"WWW-Authenticate": "Bearer"},
        )


class ForbiddenError(TemoConnectException):
    """Raised when an authenticated caller is not allowed to act."""

    def __init__(
        self,
        message: str = "Forbidden",
        code: str = "FORBIDDEN",
        suggestion: str | None = None,
    ):
        super().__init__(
            message=message,
            code=code,
            status_code=403,
            suggestion=suggestion,
        )


class EmailAlreadyRegisteredError(TemoConnectException):
    """Raised when registering with an email that already has an account."""

    def __init__(self, email: str):
        super().__init__(
            message="Email already registered",
            code="EMAIL_EXISTS",
            status_code=409,
            suggestion="Log in with this email or register with a different one",
            details={"email": email},
        )


# =============================================================================
# Resource Exceptions
# =============================================================================

class ProductNotFoundError(TemoConnectException):
    """Raised when a product doesn't exist or isn't owned by the caller."""

    def __init__(self, product_id: int):
        super().__init__(
            message="Product not found",
            code="PRODUCT_NOT_FOUND",
            status_code=404,
            details={"product_id": product_id},
        )


class FarmerNotFoundError(TemoConnectException):
    """Raised when approving an unknown or already approved farmer."""

    def __init__(self, farmer_id: int):
        super().__init__(
            message="Farmer not found or already approved",
            code="FARMER_NOT_FOUND",
            status_code=404,
            suggestion="List pending farmers with GET /api/admin/farmers/pending",
            details={"farmer_id": farmer_id},
        )


# =============================================================================
# Exception Handlers
# =============================================================================

async def temo_connect_exception_handler(
    request: Request,
    exc: TemoConnectException
) -> JSONResponse:
    """
    Convert TemoConnectException to JSON response.

    Returns structured error with:
    - detail: Human-readable message
    - code: Machine-readable error code
    - suggestion: How to fix (if available)
    - details: Additional context
    """
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_dict(),
        headers=exc.headers,
    )


async def validation_exception_handler(
    request: Request,
    exc: RequestValidationError
) -> JSONResponse:
    """
    Handle Pydantic validation errors.

    Missing or malformed request fields are a 400, not FastAPI's default 422.
    """
    errors = [
        {
            "field": ".".join(str(part) for part in error.get("loc", ())[1:]),
            "message": error.get("msg", ""),
        }
        for error in exc.errors()
    ]
    return JSONResponse(
        status_code=400,
        content={
            "detail": "Missing or invalid fields",
            "code": "VALIDATION_ERROR",
            "errors": errors,
        }
    )


async def store_exception_handler(
    request: Request,
    exc: SupabaseClientError
) -> JSONResponse:
    """Handle failures talking to the database."""
    logger.error(f"Store error on {request.method} {request.url.path}: {exc}")
    return JSONResponse(
        status_code=500,
        content={
            "detail": "Server error",
            "code": exc.code,
        }
    )
