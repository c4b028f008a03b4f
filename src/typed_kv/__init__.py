"""Typed key-value storage on SQLite.

This package provides a small async key-value store: values of any
JSON-serializable shape stored under JSON-serializable keys, plus named
singleton fields that carry their own storage key.
"""

from __future__ import annotations

from .config import StoreConfig, load_store_config
from .database import SQLiteKeyValueStore, get_store, reset_store, set_store_path
from .exceptions import (
    EncodingError,
    EngineError,
    ErrorKind,
    KVStoreError,
    SerializationError,
)
from .field import Field, registered_fields
from .memory import MemoryKeyValueStore
from .store import KeyValueStore

__all__ = [
    # Interface
    "KeyValueStore",
    "Field",
    "registered_fields",
    # Backends
    "SQLiteKeyValueStore",
    "MemoryKeyValueStore",
    "get_store",
    "reset_store",
    "set_store_path",
    # Configuration
    "StoreConfig",
    "load_store_config",
    # Errors
    "KVStoreError",
    "EncodingError",
    "EngineError",
    "SerializationError",
    "ErrorKind",
]
