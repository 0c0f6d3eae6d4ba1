"""Service for reading and updating the library-wide system settings."""

import logging
from collections.abc import Mapping
from typing import Any

from pydantic import ValidationError
from pydantic.alias_generators import to_camel
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import Settings, get_settings
from app.exceptions import (
    DuplicateSettingsError,
    StorageUnavailableException,
    ValidationException,
)
from app.models.system_settings import SETTINGS_FIELDS, SystemSettings
from app.repositories.settings_store import SettingsStore
from app.schemas.system_settings import SystemSettingsUpdate

logger = logging.getLogger(__name__)

# Column name -> API field name, used when reporting validation errors
FIELD_ALIASES = {name: to_camel(name) for name in SETTINGS_FIELDS}


def _field_errors(exc: ValidationError) -> list[dict]:
    """Convert pydantic errors into the field-level error format."""
    errors = []
    for error in exc.errors():
        loc = error.get("loc") or ("general",)
        field = str(loc[0])
        errors.append({"field": FIELD_ALIASES.get(field, field), "message": error["msg"]})
    return errors


class SettingsService:
    """Get-or-create and partial update of the system settings record.

    The service keeps no copy of the record between calls; every
    operation goes through a ``SettingsStore`` bound to the caller's
    session.
    """

    def __init__(self, app_settings: Settings | None = None):
        self._app_settings = app_settings or get_settings()
        # Validate configured defaults once so a bad value fails at startup
        self._defaults = self.get_defaults().to_patch()

    def get_defaults(self) -> SystemSettingsUpdate:
        """Build the default record values from application configuration."""
        cfg = self._app_settings
        return self.validate_patch(
            {
                "library_name": cfg.default_library_name,
                "max_books_per_user": cfg.default_max_books_per_user,
                "loan_period_days": cfg.default_loan_period_days,
                "session_timeout_minutes": cfg.default_session_timeout_minutes,
                "password_policy": cfg.default_password_policy,
                "two_factor_auth_mode": cfg.default_two_factor_auth_mode,
            }
        )

    def validate_patch(
        self, patch: Mapping[str, Any] | SystemSettingsUpdate
    ) -> SystemSettingsUpdate:
        """Validate a partial update without touching the database.

        Raises:
            ValidationException: With one entry per offending field.
        """
        if isinstance(patch, SystemSettingsUpdate):
            return patch
        if not isinstance(patch, Mapping):
            raise ValidationException("Settings update must be an object")

        try:
            return SystemSettingsUpdate.model_validate(dict(patch))
        except ValidationError as e:
            raise ValidationException(_field_errors(e)) from e

    async def get(self, db: AsyncSession) -> SystemSettings:
        """Return the settings record, creating it with defaults if absent."""
        store = SettingsStore(db)

        settings_row = await store.find_one()
        if settings_row is not None:
            return settings_row

        try:
            settings_row = await store.insert(self._defaults)
        except DuplicateSettingsError:
            # Another caller created it between our read and insert
            logger.info("System settings created concurrently, re-reading")
            settings_row = await store.find_one()
            if settings_row is None:
                raise StorageUnavailableException()
            return settings_row

        logger.info(f"System settings {settings_row.id} created with defaults")
        return settings_row

    async def update(
        self,
        db: AsyncSession,
        patch: Mapping[str, Any] | SystemSettingsUpdate,
    ) -> SystemSettings:
        """Validate and merge a partial update, returning the full record.

        Fields absent from ``patch`` keep their stored values. If the
        record does not exist yet it is created from the defaults first.

        Raises:
            ValidationException: If any supplied field is invalid; nothing
                is written in that case.
            StorageUnavailableException: If the database fails.
        """
        changes = self.validate_patch(patch).to_patch()

        settings_row = await SettingsStore(db).upsert_merge(changes, self._defaults)

        logger.info(
            f"System settings updated: {', '.join(sorted(changes)) or 'no fields'}"
        )
        return settings_row


# Singleton instance
_settings_service: SettingsService | None = None


def get_settings_service() -> SettingsService:
    """Get the settings service singleton."""
    global _settings_service
    if _settings_service is None:
        _settings_service = SettingsService()
    return _settings_service
