"""Custom exception classes and global exception handlers."""

import logging
import traceback

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from app.schemas.common import ErrorDetail, ErrorResponse

logger = logging.getLogger(__name__)


class LibrarySettingsException(Exception):
    """Base exception for all application-specific errors."""

    def __init__(self, message: str, status_code: int = 400):
        self.message = message
        self.status_code = status_code
        super().__init__(self.message)


class ConflictException(LibrarySettingsException):
    """Resource conflict exception."""

    def __init__(self, message: str = "Resource already exists"):
        super().__init__(message, 409)


class DuplicateSettingsError(ConflictException):
    """A settings record already exists (lost creation race)."""

    def __init__(self, message: str = "System settings already exist"):
        super().__init__(message)


class StorageUnavailableException(LibrarySettingsException):
    """The database is unreachable or failed; the caller may retry."""

    def __init__(self, message: str = "Settings storage is temporarily unavailable"):
        super().__init__(message, 503)


class ValidationException(LibrarySettingsException):
    """Validation error exception with field-level errors."""

    def __init__(self, errors: list[dict] | str):
        if isinstance(errors, str):
            errors = [{"field": "general", "message": errors}]
        super().__init__("Validation failed", 422)
        self.errors = errors

    @property
    def fields(self) -> list[str]:
        """Names of the offending fields."""
        return [error["field"] for error in self.errors]


def _error_body(message: str, errors: list[dict] | None = None) -> dict:
    """Render the standard error envelope."""
    response = ErrorResponse(
        message=message,
        errors=[ErrorDetail(**error) for error in errors] if errors is not None else None,
    )
    return response.model_dump(exclude_none=True)


def create_exception_handlers():
    """Create exception handlers that render the JSON error envelope."""

    async def app_exception_handler(request: Request, exc: LibrarySettingsException):
        """Handle application exceptions."""
        logger.warning(f"{type(exc).__name__} on {request.method} {request.url.path}: {exc.message} (status={exc.status_code})")

        headers = {"Retry-After": "5"} if exc.status_code == 503 else None
        return JSONResponse(
            status_code=exc.status_code,
            content=_error_body(exc.message, getattr(exc, "errors", None)),
            headers=headers,
        )

    async def validation_exception_handler(request: Request, exc: ValidationException):
        """Handle validation exceptions with field-level errors."""
        logger.warning(f"ValidationException on {request.method} {request.url.path}: {exc.errors}")

        return JSONResponse(
            status_code=exc.status_code,
            content=_error_body(exc.message, exc.errors),
        )

    async def request_validation_handler(request: Request, exc: RequestValidationError):
        """Handle bodies FastAPI could not parse (e.g. malformed JSON)."""
        errors = []
        for error in exc.errors():
            loc = [part for part in error.get("loc", ()) if isinstance(part, str) and part != "body"]
            errors.append({"field": loc[-1] if loc else "body", "message": error["msg"]})
        logger.warning(f"RequestValidationError on {request.method} {request.url.path}: {errors}")

        return JSONResponse(status_code=422, content=_error_body("Validation failed", errors))

    async def generic_exception_handler(request: Request, exc: Exception):
        """Handle unexpected exceptions."""
        logger.error(f"Unhandled exception on {request.method} {request.url.path}")
        logger.error(f"Exception: {type(exc).__name__}: {exc}")
        tb_lines = traceback.format_exception(type(exc), exc, exc.__traceback__)
        logger.error("".join(tb_lines))

        return JSONResponse(
            status_code=500,
            content=_error_body("An unexpected error occurred"),
        )

    return {
        LibrarySettingsException: app_exception_handler,
        ValidationException: validation_exception_handler,
        RequestValidationError: request_validation_handler,
        Exception: generic_exception_handler,
    }
