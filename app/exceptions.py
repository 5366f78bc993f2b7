# =============================================================================
# app/exceptions.py - Custom Exception Handlers
# =============================================================================
# Centralized exception handling for the API.
# Every error carries a machine-readable code alongside the user-facing
# message, plus a suggestion on how to recover where one exists.
# =============================================================================

from typing import Any

from fastapi import Request
from fastapi.responses import JSONResponse

from lib.supabase_client import SupabaseClientError


class OneDollarException(Exception):
    """
    Base exception for the $1 Startup API.

    All custom exceptions inherit from this class.
    Provides structured error responses with actionable suggestions.
    """

    def __init__(
        self,
        message: str,
        code: str = "ONEDOLLAR_ERROR",
        status_code: int = 500,
        suggestion: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.status_code = status_code
        self.suggestion = suggestion
        self.details = details or {}

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
# Application Exceptions
# =============================================================================

class DuplicateSubmissionError(OneDollarException):
    """Raised when an application already exists for the submitted email."""

    def __init__(self, email: str):
        super().__init__(
            message="You've already submitted an application with this email.",
            code="DUPLICATE_SUBMISSION",
            status_code=409,
            suggestion="Check your application status instead, or apply with a different email",
            details={"email": email}
        )


class ApplicationsClosedError(OneDollarException):
    """Raised when a submission arrives while intake is closed."""

    def __init__(self):
        super().__init__(
            message="Applications are currently closed.",
            code="APPLICATIONS_CLOSED",
            status_code=403,
            suggestion="Follow the show for the next open call",
        )


class ApplicationNotFoundError(OneDollarException):
    """Raised when the caller has no application on file."""

    def __init__(self, email: str | None):
        super().__init__(
            message="No application found for this account.",
            code="APPLICATION_NOT_FOUND",
            status_code=404,
            suggestion="Submit an application using POST /applications",
            details={"email": email} if email else None
        )


# =============================================================================
# Datastore / Auth Exceptions
# =============================================================================

class DatastoreUnavailableError(OneDollarException):
    """Raised when the managed datastore or auth provider cannot be reached."""

    def __init__(self, error: str, code: str | None = None):
        details = {"error": error}
        if code:
            details["cause"] = code
        super().__init__(
            message="Failed to reach the datastore. Please try again.",
            code="DATASTORE_UNAVAILABLE",
            status_code=503,
            suggestion="Try again in a moment or contact support if the issue persists",
            details=details
        )


class AuthenticationFailedError(OneDollarException):
    """Raised when a password sign-in or sign-up is rejected."""

    def __init__(self, message: str, code: str):
        super().__init__(
            message=message,
            code=code,
            status_code=401,
            suggestion="Check your email and password and try again",
        )


# =============================================================================
# Exception Handlers
# =============================================================================

async def onedollar_exception_handler(
    request: Request,
    exc: OneDollarException
) -> JSONResponse:
    """
    Convert OneDollarException to JSON response.

    Returns structured error with:
    - detail: Human-readable message
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
    """Surface datastore failures as a retryable 503."""
    error = DatastoreUnavailableError(exc.message, code=exc.code)
    return JSONResponse(
        status_code=error.status_code,
        content=error.to_dict()
    )


async def validation_exception_handler(
    request: Request,
    exc: Exception
) -> JSONResponse:
    """
    Handle request validation errors.

    Converts validation errors to user-friendly messages.
    """
    errors = exc.errors() if hasattr(exc, "errors") else str(exc)
    return JSONResponse(
        status_code=422,
        content={
            "detail": "Validation error",
            "code": "VALIDATION_ERROR",
            "errors": jsonable_errors(errors),
        }
    )


def jsonable_errors(errors: Any) -> Any:
    """Strip non-serializable context (e.g. exception objects) from pydantic errors."""
    if not isinstance(errors, list):
        return errors
    return [
        {
            "loc": list(error.get("loc", [])),
            "msg": error.get("msg"),
            "type": error.get("type"),
        }
        for error in errors
    ]
