"""Persistence helpers."""

from app.repositories.settings_store import SettingsStore

__all__ = ["SettingsStore"]
