"""
Application error hierarchy and FastAPI exception handlers.

AppError is the base for all typed errors. The global exception handlers
convert every error into the relay's response envelope:

    {"success": false, "message": "...", "code": "..."}

Non-AppError exceptions are logged with full detail and surface to the caller
only as a generic 500 (with Sentry reporting in production).
"""

from __future__ import annotations

from typing import Any, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from shared.logging import get_logger

log = get_logger(__name__)

GENERIC_SERVER_ERROR = "An internal server error occurred."


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
        payload: dict = {
            "success": False,
            "message": self.message,
            "code": self.error_code,
        }
        if self.field is not None:
            payload["field"] = self.field
        if self.details is not None:
            payload["details"] = self.details
        return payload


class ValidationError(AppError):
    status_code = 400
    error_code = "validation_error"


class CaptchaRejectedError(AppError):
    """The provider answered and denied the token."""

    status_code = 400
    error_code = "captcha_rejected"


class VerificationUnavailableError(AppError):
    """The provider could not be reached or returned something unusable.

    Safe for the caller to retry.
    """

    status_code = 500
    error_code = "verification_unavailable"


def register_error_handlers(app: FastAPI) -> None:
    """Register global exception handlers on the FastAPI app."""

    @app.exception_handler(AppError)
    async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
        return JSONResponse(status_code=exc.status_code, content=exc.to_dict())

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        errors = exc.errors()
        field = None
        if errors:
            loc = [
                part
                for part in errors[0].get("loc", ())
                if isinstance(part, str) and part != "body"
            ]
            field = ".".join(loc) or None
        log.info("request_body_invalid", path=request.url.path, field=field)
        err = ValidationError("Invalid request body.", field=field)
        return JSONResponse(status_code=err.status_code, content=err.to_dict())

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(
        request: Request, exc: Exception
    ) -> JSONResponse:
        # Sentry integration: if sentry_sdk is initialized it will auto-capture
        # unhandled exceptions before this handler fires.
        log.error(
            "unhandled_exception",
            path=request.url.path,
            error=str(exc),
            error_type=type(exc).__name__,
            exc_info=exc,
        )
        return JSONResponse(
            status_code=500,
            content={
                "success": False,
                "message": GENERIC_SERVER_ERROR,
                "code": "internal_error",
            },
        )
