"""Application configuration using pydantic-settings."""

from functools import lru_cache
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = "Library Settings"
    app_env: Literal["development", "staging", "production"] = "development"
    app_base_url: str = "http://localhost:8000"
    app_debug: bool = False
    app_log_level: str = "INFO"

    # Database
    database_url: str = "sqlite+aiosqlite:///./library.db"
    database_pool_size: int = 20
    database_max_overflow: int = 10

    # Defaults for the system settings record (applied on first creation)
    default_library_name: str = "University Library"
    default_max_books_per_user: int = 5
    default_loan_period_days: int = 14
    default_session_timeout_minutes: int = 30
    default_password_policy: str = "strong"
    default_two_factor_auth_mode: str = "disabled"

    @property
    def is_development(self) -> bool:
        """Check if running in development mode."""
        return self.app_env == "development"

    @property
    def is_sqlite(self) -> bool:
        """Check if the configured database is SQLite."""
        return self.database_url.startswith("sqlite")

    @property
    def async_database_url(self) -> str:
        """Get database URL with an async driver for async SQLAlchemy."""
        url = self.database_url
        # Convert postgresql:// to postgresql+asyncpg://
        if url.startswith("postgresql://"):
            url = url.replace("postgresql://", "postgresql+asyncpg://", 1)
        elif url.startswith("postgres://"):
            url = url.replace("postgres://", "postgresql+asyncpg://", 1)
        elif url.startswith("sqlite://"):
            url = url.replace("sqlite://", "sqlite+aiosqlite://", 1)
        return url

    @property
    def sync_database_url(self) -> str:
        """Get database URL with a sync driver (Alembic)."""
        url = self.database_url
        if url.startswith("postgres://"):
            url = url.replace("postgres://", "postgresql://", 1)
        # Remove any async driver specification
        for driver in ("+asyncpg", "+aiosqlite"):
            if driver in url:
                url = url.replace(driver, "", 1)
        return url


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


# Global settings instance
settings = get_settings()
