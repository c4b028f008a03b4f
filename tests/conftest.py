"""Root conftest.py for pytest configuration.

Provides store fixtures shared by unit and integration tests. The ``store``
fixture is parametrized over both backends so behavioral tests run against
SQLite and the in-memory store alike.
"""

from __future__ import annotations

from typing import AsyncGenerator

import pytest

from typed_kv import KeyValueStore, MemoryKeyValueStore, SQLiteKeyValueStore


@pytest.fixture
async def sqlite_store() -> AsyncGenerator[SQLiteKeyValueStore, None]:
    """In-memory SQLite store, connected."""
    async with SQLiteKeyValueStore(":memory:") as store:
        yield store


@pytest.fixture
def memory_store() -> MemoryKeyValueStore:
    """Fresh dict-backed store."""
    return MemoryKeyValueStore()


@pytest.fixture(params=["sqlite", "memory"])
async def store(request: pytest.FixtureRequest) -> AsyncGenerator[KeyValueStore, None]:
    """Each store backend in turn."""
    if request.param == "memory":
        yield MemoryKeyValueStore()
        return
    async with SQLiteKeyValueStore(":memory:") as sqlite_store:
        yield sqlite_store
