"""Common Pydantic schemas used across the application."""

from typing import Any, Generic, TypeVar

from pydantic import BaseModel

T = TypeVar("T")


class APIResponse(BaseModel, Generic[T]):
    """Standard API response envelope.

    All JSON API responses use this consistent envelope structure.
    """

    status: str = "success"
    data: T | None = None
    message: str | None = None
    errors: list[dict[str, Any]] | None = None


class ErrorDetail(BaseModel):
    """Field-level error detail."""

    field: str
    message: str


class ErrorResponse(BaseModel):
    """Standard error response."""

    status: str = "error"
    message: str
    errors: list[ErrorDetail] | None = None
