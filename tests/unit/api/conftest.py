"""Fixtures for API unit tests: fresh in-memory store per test, AsyncClient."""

import pytest
from httpx import ASGITransport, AsyncClient

from expense_app.infrastructure.storage.memory_store import InMemoryKeyedStore
from expense_app.main import app


@pytest.fixture
def memory_store():
    """Empty store; the first /api request seeds it."""
    return InMemoryKeyedStore()


@pytest.fixture
def app_with_overrides(memory_store):
    """App with the KeyedStore overridden for testing."""
    from expense_app.api import dependencies

    app.dependency_overrides[dependencies.get_store] = lambda: memory_store
    yield app
    app.dependency_overrides.clear()


@pytest.fixture
async def async_client(app_with_overrides):
    """Async HTTP client for testing; uses overridden app."""
    transport = ASGITransport(app=app_with_overrides)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest.fixture
def new_expense():
    return {
        "userId": "u1",
        "merchant": "Acme",
        "amount": 42.5,
        "currency": "USD",
        "date": 1717459200000,
        "description": "Team lunch",
        "category": "Meals",
    }
