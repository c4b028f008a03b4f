"""Key-value operations on the SQLite table.

Provides the KeyValueMixin with lazy table creation, upsert and point
lookup. Both columns hold hex-encoded JSON (see typed_kv.codec).
"""

from __future__ import annotations

import logging
from typing import Any

import aiosqlite

from ..codec import decode_value, encode_key, encode_value
from ..config import StoreConfig

logger = logging.getLogger(__name__)


class KeyValueMixin:
    """Mixin providing set/get against a two-column key-value table."""

    config: StoreConfig

    async def execute_statement(
        self, query: str, params: tuple[Any, ...] | None = None
    ) -> int: ...

    async def query_row(
        self, query: str, params: tuple[Any, ...] | None = None
    ) -> aiosqlite.Row | None: ...

    async def execute_schema(self, query: str) -> None: ...

    async def _ensure_table(self) -> None:
        """Create the key-value table if it does not exist.

        Takes no write lock, so reads stay lock-free.
        """
        await self.execute_schema(
            f"CREATE TABLE IF NOT EXISTS {self.config.table_name}"
            "(key TEXT NOT NULL UNIQUE, value TEXT)"
        )

    async def set(self, key: Any, value: Any) -> None:
        """Store value under key, replacing any previous value.

        Args:
            key: Any JSON-serializable key.
            value: Any JSON-serializable value.

        Raises:
            SerializationError: If key or value cannot be serialized.
            EngineError: If SQLite rejects the write.
        """
        await self._ensure_table()
        encoded_key = encode_key(key)
        encoded_value = encode_value(value)

        await self.execute_statement(
            f"""
            INSERT INTO {self.config.table_name} (key, value) VALUES (?, ?)
            ON CONFLICT(key) DO UPDATE SET value = excluded.value
            """,
            (encoded_key, encoded_value),
        )
        logger.debug("Set %s (%d value chars)", encoded_key[:32], len(encoded_value))

    async def get(self, key: Any, value_type: Any = Any) -> Any | None:
        """Return the value stored under key.

        Args:
            key: Any JSON-serializable key.
            value_type: Type to validate the stored value into.

        Returns:
            The stored value, or None if no row exists for key.

        Raises:
            EncodingError: If the stored value is NULL or not valid hex.
            SerializationError: If key cannot be serialized, or the stored
                value does not validate as value_type.
            EngineError: If SQLite rejects the read.
        """
        await self._ensure_table()
        encoded_key = encode_key(key)

        row = await self.query_row(
            f"SELECT value FROM {self.config.table_name} WHERE key = ?",
            (encoded_key,),
        )
        if row is None:
            logger.debug("Get %s: miss", encoded_key[:32])
            return None

        logger.debug("Get %s: hit", encoded_key[:32])
        return decode_value(row[0], value_type, strict=self.config.strict_decoding)
