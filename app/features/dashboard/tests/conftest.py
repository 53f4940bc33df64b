"""Test fixtures for the dashboard module."""

import random
from datetime import UTC, datetime
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import pytest
from httpx import ASGITransport, AsyncClient

from app.core.config import Settings
from app.core.database import get_db
from app.features.dashboard.clock import DashboardClock
from app.features.dashboard.deps import get_dashboard_reader
from app.features.dashboard.service import DashboardReader
from app.main import app

FIXED_NOW = datetime(2024, 6, 15, 23, 30, tzinfo=UTC)


def make_result(rows: list[dict] | None = None, scalar: int | None = None) -> MagicMock:
    """Build a mock SQLAlchemy Result.

    Rows are exposed through ``all()`` with attribute access, the way
    ``Row`` objects behave; ``scalar`` backs ``scalar_one()``.
    """
    result = MagicMock()
    result.all.return_value = [SimpleNamespace(**row) for row in rows or []]
    result.scalar_one.return_value = scalar
    return result


@pytest.fixture
def settings() -> Settings:
    """Settings with a fixed mock seed."""
    return Settings(dashboard_mock_seed=7)


@pytest.fixture
def clock() -> DashboardClock:
    """UTC clock frozen at FIXED_NOW."""
    return DashboardClock("UTC", now=lambda: FIXED_NOW)


@pytest.fixture
def reader(settings: Settings, clock: DashboardClock) -> DashboardReader:
    """Reader with fixed clock and seeded RNG."""
    return DashboardReader(settings=settings, clock=clock, rng=random.Random(7))


@pytest.fixture
def mock_db() -> AsyncMock:
    """Mock async session; tests set ``execute.side_effect``."""
    return AsyncMock()


@pytest.fixture
async def client(mock_db: AsyncMock, reader: DashboardReader):
    """HTTP client with the database session and reader overridden."""

    async def override_get_db():
        yield mock_db

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_dashboard_reader] = lambda: reader
    try:
        async with AsyncClient(
            transport=ASGITransport(app=app),
            base_url="http://test",
        ) as ac:
            yield ac
    finally:
        app.dependency_overrides.clear()
