"""Pydantic schemas for the system settings record."""

import uuid
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from app.models.system_settings import PasswordPolicy, TwoFactorAuthMode

# Largest value an Integer (int4) column holds
MAX_INTEGER = 2_147_483_647


class SystemSettingsUpdate(BaseModel):
    """Partial update for the system settings record.

    Only fields explicitly present in the input are part of the patch
    (``model_fields_set``); everything else is left untouched by the merge.
    Keys are accepted in camelCase or snake_case, unknown keys are ignored.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        str_strip_whitespace=True,
        extra="ignore",
    )

    library_name: str | None = Field(None, min_length=1, max_length=255)
    max_books_per_user: int | None = Field(None, ge=0, le=MAX_INTEGER)
    loan_period_days: int | None = Field(None, ge=1, le=MAX_INTEGER)
    session_timeout_minutes: int | None = Field(None, ge=1, le=MAX_INTEGER)
    password_policy: PasswordPolicy | None = None
    two_factor_auth_mode: TwoFactorAuthMode | None = None

    @field_validator("*", mode="before")
    @classmethod
    def reject_null(cls, value):
        # Only runs for supplied fields, so omitted fields stay None
        if value is None:
            raise ValueError("Value may not be null")
        return value

    def to_patch(self) -> dict:
        """Return only the supplied fields, keyed by column name."""
        return self.model_dump(include=self.model_fields_set, mode="json")


class SystemSettingsResponse(BaseModel):
    """Schema for the full settings record."""

    model_config = ConfigDict(
        from_attributes=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    id: uuid.UUID
    library_name: str
    max_books_per_user: int
    loan_period_days: int
    session_timeout_minutes: int
    password_policy: PasswordPolicy
    two_factor_auth_mode: TwoFactorAuthMode
    created_at: datetime
    updated_at: datetime
