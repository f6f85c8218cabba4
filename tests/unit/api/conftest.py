"""Fixtures for API unit tests: in-memory record store, AsyncClient."""

import pytest
from httpx import ASGITransport, AsyncClient

from resident_directory.main import app


@pytest.fixture
def app_with_overrides(memory_repository):
    """App with the record store overridden by a fresh in-memory store."""
    from resident_directory.api import dependencies

    app.dependency_overrides[dependencies.get_resident_repository] = lambda: memory_repository
    yield app
    app.dependency_overrides.clear()


@pytest.fixture
async def async_client(app_with_overrides):
    """Async HTTP client for testing; uses overridden app."""
    transport = ASGITransport(app=app_with_overrides)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
