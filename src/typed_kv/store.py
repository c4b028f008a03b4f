"""Key-value store interface.

Callers depend on KeyValueStore rather than on a concrete backend.
SQLiteKeyValueStore is the production implementation; MemoryKeyValueStore
keeps rows in a dict for tests.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, TypeVar

from .field import Field

F = TypeVar("F", bound=Field)


class KeyValueStore(ABC):
    """Typed get/set by arbitrary JSON-serializable key.

    Keys are compared by their canonical encoded form: two keys are the same
    key only if they serialize to the same JSON text.
    """

    @abstractmethod
    async def set(self, key: Any, value: Any) -> None:
        """Store value under key, replacing any previous value.

        Raises:
            SerializationError: If key or value cannot be serialized.
            EngineError: If the backend rejects the write.
        """

    @abstractmethod
    async def get(self, key: Any, value_type: Any = Any) -> Any | None:
        """Return the value stored under key, validated as value_type.

        Returns:
            The stored value, or None if nothing is stored under key.

        Raises:
            EncodingError: If the stored text is corrupt.
            SerializationError: If the stored value does not match value_type.
            EngineError: If the backend rejects the read.
        """

    async def set_field(self, item: Field) -> None:
        """Store item under its type's field key."""
        await self.set(type(item).key(), item)

    async def get_field(self, field_type: type[F]) -> F:
        """Return the stored value of field_type, or its default if unset."""
        value = await self.get(field_type.key(), field_type)
        if value is None:
            return field_type.default()
        return value
