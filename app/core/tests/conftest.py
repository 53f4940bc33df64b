"""Fixtures for core infrastructure tests."""

from unittest.mock import AsyncMock

import pytest
from httpx import ASGITransport, AsyncClient

from app.core.database import get_db
from app.main import app


@pytest.fixture
def mock_db() -> AsyncMock:
    """Mock async session for the readiness check."""
    return AsyncMock()


@pytest.fixture
async def client(mock_db: AsyncMock):
    """Create async HTTP client with the database session overridden."""

    async def override_get_db():
        yield mock_db

    app.dependency_overrides[get_db] = override_get_db
    try:
        async with AsyncClient(
            transport=ASGITransport(app=app),
            base_url="http://test",
        ) as ac:
            yield ac
    finally:
        app.dependency_overrides.clear()
