"""Async SQLite backend for the key-value store.

All operations are async using aiosqlite for non-blocking I/O.
"""

from __future__ import annotations

from .core import SQLiteKeyValueStore
from .singleton import get_store, reset_store, set_store_path

__all__ = [
    "SQLiteKeyValueStore",
    "get_store",
    "reset_store",
    "set_store_path",
]
