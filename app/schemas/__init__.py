"""Pydantic schemas for request/response validation."""

from app.schemas.common import APIResponse, ErrorDetail, ErrorResponse
from app.schemas.system_settings import SystemSettingsResponse, SystemSettingsUpdate

__all__ = [
    "APIResponse",
    "ErrorDetail",
    "ErrorResponse",
    "SystemSettingsResponse",
    "SystemSettingsUpdate",
]
