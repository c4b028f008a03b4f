"""In-memory key-value store.

Rows are kept as encoded text exactly as the SQLite table would hold them,
so key comparison and decode failures match SQLiteKeyValueStore.
"""

from __future__ import annotations

import logging
from typing import Any

from .codec import decode_value, encode_key, encode_value
from .store import KeyValueStore

logger = logging.getLogger(__name__)


class MemoryKeyValueStore(KeyValueStore):
    """Dict-backed KeyValueStore for tests and throwaway state."""

    def __init__(self, *, strict_decoding: bool = True) -> None:
        self.strict_decoding = strict_decoding
        self._rows: dict[str, str | None] = {}

    @property
    def rows(self) -> dict[str, str | None]:
        """Copy of the stored rows, encoded key to encoded value."""
        return dict(self._rows)

    async def set(self, key: Any, value: Any) -> None:
        encoded_key = encode_key(key)
        self._rows[encoded_key] = encode_value(value)
        logger.debug("Set %s", encoded_key[:32])

    async def get(self, key: Any, value_type: Any = Any) -> Any | None:
        encoded_key = encode_key(key)
        if encoded_key not in self._rows:
            return None
        return decode_value(self._rows[encoded_key], value_type, strict=self.strict_decoding)
