"""Service layer for business logic."""

from app.services.settings_service import SettingsService, get_settings_service

__all__ = [
    "SettingsService",
    "get_settings_service",
]
