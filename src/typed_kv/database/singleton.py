"""Singleton store instance management.

Provides module-level get_store(), reset_store() and set_store_path()
functions for managing a shared SQLiteKeyValueStore instance.
"""

from __future__ import annotations

import logging
from pathlib import Path

from ..config import StoreConfig
from .core import SQLiteKeyValueStore

logger = logging.getLogger(__name__)

_store_instance: SQLiteKeyValueStore | None = None

# Allows configuring the store before the first get_store() call
_custom_db_path: str | Path | None = None
_custom_config: StoreConfig | None = None


def set_store_path(path: str | Path, config: StoreConfig | None = None) -> None:
    """Set custom database path before first get_store() call.

    Args:
        path: Path to SQLite database file, or ":memory:".
        config: Optional store configuration for the shared instance.

    Raises:
        RuntimeError: If the store is already initialized.
    """
    global _custom_db_path, _custom_config
    if _store_instance is not None:
        msg = "Cannot set store path after the store is initialized. Call reset_store() first."
        raise RuntimeError(msg)
    _custom_db_path = path
    _custom_config = config
    logger.info("Store path set to: %s", path)


async def get_store() -> SQLiteKeyValueStore:
    """Get the singleton store instance.

    Returns:
        The singleton SQLiteKeyValueStore, connected and ready.
    """
    global _store_instance
    if _store_instance is None:
        # Assigned before connecting so concurrent first calls share one instance
        _store_instance = SQLiteKeyValueStore(_custom_db_path, _custom_config)
    store = _store_instance
    await store.connect()
    return store


async def reset_store() -> None:
    """Close and forget the singleton store instance.

    Also clears any custom path and configuration.
    """
    global _store_instance, _custom_db_path, _custom_config
    if _store_instance is not None:
        await _store_instance.close()
        _store_instance = None
    _custom_db_path = None
    _custom_config = None
