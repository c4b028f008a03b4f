"""Composed SQLiteKeyValueStore class.

Combines the connection and key-value mixins with the KeyValueStore
interface.
"""

from __future__ import annotations

from ..store import KeyValueStore
from .connection import ConnectionMixin
from .kv import KeyValueMixin


class SQLiteKeyValueStore(ConnectionMixin, KeyValueMixin, KeyValueStore):
    """Async SQLite-backed key-value store.

    Takes ``db_path`` (or ":memory:") and an optional StoreConfig. The
    connection opens on ``connect()``, on context manager entry, or lazily on
    first use.

    Usage:
        async with SQLiteKeyValueStore("state.db") as store:
            await store.set("count", 42)
            count = await store.get("count", int)
    """
