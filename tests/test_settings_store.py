"""Tests for the settings persistence layer."""

import pytest
from sqlalchemy.exc import IntegrityError

from app.database import create_engine, create_session_factory
from app.exceptions import DuplicateSettingsError, StorageUnavailableException
from app.models.system_settings import SystemSettings
from app.repositories.settings_store import SettingsStore

DEFAULTS = {
    "library_name": "University Library",
    "max_books_per_user": 5,
    "loan_period_days": 14,
    "session_timeout_minutes": 30,
    "password_policy": "strong",
    "two_factor_auth_mode": "disabled",
}


async def test_find_one_returns_none_when_empty(db):
    assert await SettingsStore(db).find_one() is None


async def test_insert_creates_fully_populated_row(db, settings_count):
    store = SettingsStore(db)

    row = await store.insert(DEFAULTS)

    assert row.to_dict() == DEFAULTS
    assert row.key == "system"
    assert row.created_at is not None
    assert await settings_count() == 1


async def test_second_insert_raises_duplicate(session_factory, settings_count):
    async with session_factory() as first:
        await SettingsStore(first).insert(DEFAULTS)

    async with session_factory() as second:
        store = SettingsStore(second)
        with pytest.raises(DuplicateSettingsError):
            await store.insert({**DEFAULTS, "library_name": "Other"})

        # Session stays usable after the rejected insert
        row = await store.find_one()
        assert row.library_name == "University Library"

    assert await settings_count() == 1


async def test_upsert_creates_from_defaults_and_patch(db):
    row = await SettingsStore(db).upsert_merge({"loan_period_days": 21}, DEFAULTS)

    assert row.loan_period_days == 21
    assert row.max_books_per_user == 5
    assert row.library_name == "University Library"


async def test_upsert_only_overwrites_patch_fields(session_factory):
    async with session_factory() as session:
        original = await SettingsStore(session).insert(
            {**DEFAULTS, "library_name": "City Library"}
        )

    async with session_factory() as session:
        row = await SettingsStore(session).upsert_merge(
            {"max_books_per_user": 8}, DEFAULTS
        )

    assert row.id == original.id
    assert row.max_books_per_user == 8
    # Not reset to the defaults passed for the insert branch
    assert row.library_name == "City Library"


async def test_upsert_with_empty_patch_keeps_values(session_factory):
    async with session_factory() as session:
        original = await SettingsStore(session).insert(DEFAULTS)

    async with session_factory() as session:
        row = await SettingsStore(session).upsert_merge({}, DEFAULTS)

    assert row.id == original.id
    assert row.to_dict() == DEFAULTS


async def test_storage_rejects_second_row_with_other_key(db):
    await SettingsStore(db).insert(DEFAULTS)

    db.add(SystemSettings(key="another", **DEFAULTS))
    with pytest.raises(IntegrityError):
        await db.flush()


async def test_unreachable_database_raises_storage_unavailable(tmp_path):
    engine = create_engine(f"sqlite+aiosqlite:///{tmp_path / 'missing' / 'settings.db'}")
    try:
        async with create_session_factory(engine)() as session:
            with pytest.raises(StorageUnavailableException) as exc_info:
                await SettingsStore(session).find_one()
        assert exc_info.value.status_code == 503
    finally:
        await engine.dispose()
