"""
Application error hierarchy and FastAPI exception handlers.

AppError is the base for all typed errors. The global exception handler
converts AppError subclasses to consistent JSON responses.

Token failures are deliberately collapsed into a single InvalidTokenError:
callers never learn whether a token was expired, mis-signed or of the
wrong kind.

Non-AppError exceptions bubble up as 500s (with Sentry reporting in production).
"""

from __future__ import annotations

from typing import Any, Optional

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse


class AppError(Exception):
    """Base application error. All typed errors inherit from this."""

    status_code: int = 500
    error_code: str = "internal_error"

    def __init__(
        self,
        message: str,
        *,
        field: Optional[str] = None,
        details: Optional[Any] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.field = field
        self.details = details

    def to_dict(self) -> dict:
        payload: dict = {"error": self.message, "code": self.error_code}
        if self.field is not None:
            payload["field"] = self.field
        if self.details is not None:
            payload["details"] = self.details
        return payload


class ValidationError(AppError):
    status_code = 400
    error_code = "validation_error"


class AuthenticationError(AppError):
    status_code = 401
    error_code = "authentication_error"


class ForbiddenError(AppError):
    status_code = 403
    error_code = "forbidden"


class NotFoundError(AppError):
    status_code = 404
    error_code = "not_found"


class ConflictError(AppError):
    status_code = 409
    error_code = "conflict"


# ── Credentials and tokens ────────────────────────────────────────────────────


class MissingCredentialsError(AuthenticationError):
    error_code = "missing_credentials"


class InvalidCredentialsError(AuthenticationError):
    error_code = "invalid_credentials"


class InvalidTokenError(AuthenticationError):
    error_code = "invalid_token"


class InvalidTokenTypeError(ValidationError):
    error_code = "invalid_token_type"


class InvalidAPIKeyError(ValidationError):
    error_code = "invalid_api_key"


class CredentialTooLongError(AppError):
    error_code = "credential_too_long"


class HashingError(AppError):
    error_code = "hashing_error"


# ── Resources ─────────────────────────────────────────────────────────────────


class UserNotFoundError(NotFoundError):
    pass


class UserAlreadyExistsError(ConflictError):
    pass


class APIKeyNotFoundError(NotFoundError):
    pass


class CodeSpaceNotFoundError(NotFoundError):
    pass


class CodeSpaceAccessDeniedError(ForbiddenError):
    error_code = "access_denied"


class UnsupportedLanguageError(ValidationError):
    error_code = "unsupported_language"


class CodeExecutionError(AppError):
    status_code = 502
    error_code = "code_execution_failed"


def register_error_handlers(app: FastAPI) -> None:
    """Register global exception handlers on the FastAPI app."""

    @app.exception_handler(AppError)
    async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
        return JSONResponse(status_code=exc.status_code, content=exc.to_dict())

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(
        request: Request, exc: Exception
    ) -> JSONResponse:
        # Sentry integration: if sentry_sdk is initialized it will auto-capture
        # unhandled exceptions before this handler fires.
        return JSONResponse(
            status_code=500,
            content={"error": "An internal server error occurred.", "code": "internal_error"},
        )
