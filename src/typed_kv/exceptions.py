"""Exceptions for the key-value store.

Every failure raised by a store is a KVStoreError. The three subclasses form a
closed set, and each one carries an ErrorKind tag so callers can branch on
the kind without isinstance chains.
"""

from __future__ import annotations

from enum import Enum


class ErrorKind(Enum):
    """Kinds of store failure.

    - ENCODING: stored text could not be hex-decoded
    - ENGINE: SQLite rejected a statement or the connection failed
    - SERIALIZATION: a key or value could not be serialized, or stored JSON
      could not be validated into the requested shape
    """

    ENCODING = "encoding"
    ENGINE = "engine"
    SERIALIZATION = "serialization"


class KVStoreError(Exception):
    """Base exception for all key-value store errors.

    Subclasses set ``kind``. The original library or engine exception is
    chained as ``__cause__``.
    """

    kind: ErrorKind

    @property
    def retryable(self) -> bool:
        """Whether retrying the same call could succeed."""
        return self.kind is ErrorKind.ENGINE


class EncodingError(KVStoreError):
    """Raised when stored text is not valid hex.

    This happens when the table holds corrupted or foreign data, including a
    NULL value column.
    """

    kind = ErrorKind.ENCODING


class EngineError(KVStoreError):
    """Raised when the database engine rejects a statement.

    Covers connection failures, SQL errors and constraint violations.
    """

    kind = ErrorKind.ENGINE


class SerializationError(KVStoreError):
    """Raised when JSON serialization or validation fails.

    On write this means the key or value is not JSON-serializable. On read it
    means the stored JSON does not match the requested value type.
    """

    kind = ErrorKind.SERIALIZATION
