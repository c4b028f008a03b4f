"""Shared fixtures for database unit tests.

Resets the store singleton around each test so every test starts with no
shared instance and no custom path.
"""

from __future__ import annotations

from typing import AsyncGenerator

import pytest

from typed_kv.database.singleton import reset_store


@pytest.fixture(autouse=True)
async def reset_store_singleton() -> AsyncGenerator[None, None]:
    """Reset store singleton before and after each test."""
    await reset_store()
    yield
    await reset_store()
