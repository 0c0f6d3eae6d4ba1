"""Persistence for the singleton system settings record."""

import logging
from collections.abc import AsyncIterator, Mapping
from contextlib import asynccontextmanager
from typing import Any

from sqlalchemy import func, select
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.exc import DBAPIError, IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from uuid_extensions import uuid7

from app.exceptions import DuplicateSettingsError, StorageUnavailableException
from app.models.system_settings import SETTINGS_KEY, SystemSettings

logger = logging.getLogger(__name__)

# Dialects with INSERT ... ON CONFLICT DO UPDATE ... RETURNING
_UPSERT_INSERTS = {
    "postgresql": postgresql.insert,
    "sqlite": sqlite.insert,
}


class SettingsStore:
    """Storage for exactly one ``SystemSettings`` row.

    Every call round-trips to the database; nothing is cached between
    calls. Writes are single statements, so a failed or cancelled call
    leaves the previous row untouched.
    """

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    @asynccontextmanager
    async def _storage_errors(self, operation: str) -> AsyncIterator[None]:
        """Translate driver failures into StorageUnavailableException."""
        try:
            yield
        except (DBAPIError, OSError) as exc:
            logger.error(f"Settings storage failed during {operation}: {exc}")
            await self._session.rollback()
            raise StorageUnavailableException() from exc

    async def find_one(self) -> SystemSettings | None:
        """Return the settings row, or None if it was never created."""
        stmt = (
            select(SystemSettings)
            .where(SystemSettings.key == SETTINGS_KEY)
            .execution_options(populate_existing=True)
        )
        async with self._storage_errors("find_one"):
            result = await self._session.execute(stmt)
            return result.scalar_one_or_none()

    async def insert(self, defaults: Mapping[str, Any]) -> SystemSettings:
        """Create the settings row from a fully populated set of values.

        Raises:
            DuplicateSettingsError: If the row already exists.
        """
        row = SystemSettings(key=SETTINGS_KEY, **defaults)
        self._session.add(row)
        async with self._storage_errors("insert"):
            try:
                await self._session.flush()
            except IntegrityError as exc:
                await self._session.rollback()
                raise DuplicateSettingsError() from exc
            await self._session.refresh(row)
            await self._session.commit()
        return row

    async def upsert_merge(
        self,
        patch: Mapping[str, Any],
        defaults: Mapping[str, Any],
    ) -> SystemSettings:
        """Create-or-update the row in one statement and return it.

        The row is created from ``defaults`` overlaid with ``patch`` when
        absent; otherwise only the ``patch`` columns are overwritten.
        """
        insert = _UPSERT_INSERTS.get(self._dialect_name())
        if insert is None:
            raise NotImplementedError(
                f"Upsert is not supported for the {self._dialect_name()} dialect"
            )

        stmt = insert(SystemSettings).values(
            id=uuid7(),
            key=SETTINGS_KEY,
            **{**defaults, **patch},
        )
        stmt = stmt.on_conflict_do_update(
            index_elements=["key"],
            set_={**patch, "updated_at": func.now()},
        )
        async with self._storage_errors("upsert_merge"):
            result = await self._session.scalars(
                stmt.returning(SystemSettings),
                execution_options={"populate_existing": True},
            )
            row = result.one()
            await self._session.commit()
        return row

    def _dialect_name(self) -> str:
        return self._session.get_bind().dialect.name
