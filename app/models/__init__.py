"""SQLAlchemy models for the library settings service."""

from app.models.base import Base, BaseModel, TimestampMixin
from app.models.system_settings import (
    SETTINGS_FIELDS,
    SETTINGS_KEY,
    PasswordPolicy,
    SystemSettings,
    TwoFactorAuthMode,
)

__all__ = [
    # Base
    "Base",
    "BaseModel",
    "TimestampMixin",
    # System settings
    "SystemSettings",
    "PasswordPolicy",
    "TwoFactorAuthMode",
    "SETTINGS_KEY",
    "SETTINGS_FIELDS",
]
