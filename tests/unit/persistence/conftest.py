"""Fixtures for entity-store tests: counter entities over a store that yields on every call."""

import asyncio

import pytest

from expense_app.infrastructure.storage.memory_store import InMemoryKeyedStore
from expense_app.persistence import IndexedEntity

from counter_entity import COUNTER_ENTITY


class YieldingStore:
    """Delegates to an InMemoryKeyedStore but suspends before every call, forcing interleaving."""

    def __init__(self, inner: InMemoryKeyedStore) -> None:
        self.inner = inner
        self.commits = 0
        self.failed_commits = 0

    async def get(self, key):
        await asyncio.sleep(0)
        return await self.inner.get(key)

    async def get_versioned(self, key):
        await asyncio.sleep(0)
        return await self.inner.get_versioned(key)

    async def put(self, key, value):
        await asyncio.sleep(0)
        await self.inner.put(key, value)

    async def delete(self, key):
        await asyncio.sleep(0)
        await self.inner.delete(key)

    async def list_keys_with_prefix(self, prefix):
        await asyncio.sleep(0)
        return await self.inner.list_keys_with_prefix(prefix)

    async def commit(self, expected, writes):
        await asyncio.sleep(0)
        self.commits += 1
        applied = await self.inner.commit(expected, writes)
        if not applied:
            self.failed_commits += 1
        return applied


@pytest.fixture
def memory_store():
    return InMemoryKeyedStore()


@pytest.fixture
def store(memory_store):
    return YieldingStore(memory_store)


@pytest.fixture
def counters(store):
    return IndexedEntity(store, COUNTER_ENTITY, max_retries=64)
