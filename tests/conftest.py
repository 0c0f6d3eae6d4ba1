"""
Pytest configuration and shared fixtures.

Each test gets its own SQLite database file so concurrency tests exercise
real connections and locking rather than a shared in-memory connection.
"""

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy import func, select

from app.config import Settings
from app.database import create_engine, create_session_factory, get_db, init_db
from app.models.system_settings import SystemSettings
from app.services.settings_service import SettingsService


@pytest.fixture
def app_settings() -> Settings:
    """Application settings isolated from any local .env file."""
    return Settings(_env_file=None)


@pytest.fixture
async def engine(tmp_path):
    """Async engine on a fresh database with the schema created."""
    engine = create_engine(f"sqlite+aiosqlite:///{tmp_path / 'settings.db'}")
    await init_db(engine)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return create_session_factory(engine)


@pytest.fixture
async def db(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
def settings_count(session_factory):
    """Count stored settings rows from a separate session."""

    async def count() -> int:
        async with session_factory() as session:
            result = await session.execute(select(func.count()).select_from(SystemSettings))
            return result.scalar() or 0

    return count


@pytest.fixture
def service(app_settings) -> SettingsService:
    return SettingsService(app_settings)


@pytest.fixture
async def client(session_factory):
    """HTTP client against the app with the test database wired in."""
    from app.main import app

    async def override_get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client
    app.dependency_overrides.clear()
