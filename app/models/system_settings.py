"""SystemSettings model for the library-wide policy record (singleton)."""

from enum import Enum

from sqlalchemy import CheckConstraint, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from app.models.base import BaseModel

# Storage key of the one and only settings row
SETTINGS_KEY = "system"


class PasswordPolicy(str, Enum):
    """Password strength policy applied to user accounts."""

    STRONG = "strong"
    MEDIUM = "medium"
    BASIC = "basic"


class TwoFactorAuthMode(str, Enum):
    """Two-factor authentication mode."""

    DISABLED = "disabled"
    OPTIONAL = "optional"
    REQUIRED = "required"


# Columns a caller may change; everything else is bookkeeping
SETTINGS_FIELDS = (
    "library_name",
    "max_books_per_user",
    "loan_period_days",
    "session_timeout_minutes",
    "password_policy",
    "two_factor_auth_mode",
)


class SystemSettings(BaseModel):
    """Library-wide policy values.

    Exactly one row may exist. The unique ``key`` column plus the check
    constraint pinning it to ``SETTINGS_KEY`` enforce that at the storage
    layer, and upserts target ``key`` so the row's ``id`` never changes.
    """

    __tablename__ = "system_settings"
    __table_args__ = (
        CheckConstraint(f"key = '{SETTINGS_KEY}'", name="ck_system_settings_singleton"),
        CheckConstraint("max_books_per_user >= 0", name="ck_system_settings_max_books"),
        CheckConstraint("loan_period_days >= 1", name="ck_system_settings_loan_period"),
        CheckConstraint(
            "session_timeout_minutes >= 1", name="ck_system_settings_session_timeout"
        ),
    )

    key: Mapped[str] = mapped_column(
        String(100),
        unique=True,
        nullable=False,
        index=True,
        default=SETTINGS_KEY,
    )
    library_name: Mapped[str] = mapped_column(String(255), nullable=False)
    max_books_per_user: Mapped[int] = mapped_column(Integer, nullable=False)
    loan_period_days: Mapped[int] = mapped_column(Integer, nullable=False)
    session_timeout_minutes: Mapped[int] = mapped_column(Integer, nullable=False)
    password_policy: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        default=PasswordPolicy.STRONG.value,
    )
    two_factor_auth_mode: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        default=TwoFactorAuthMode.DISABLED.value,
    )

    def to_dict(self) -> dict:
        """Return the policy values as a plain dict."""
        return {field: getattr(self, field) for field in SETTINGS_FIELDS}
