"""Key and value encoding for the store.

Keys and values are serialized to JSON and then hex-encoded so that any
serialization output can be stored in a TEXT column and compared exactly.
Keys use a canonical JSON form (sorted object keys, compact separators) so
that equal keys always produce the same column text.
"""

from __future__ import annotations

import json
import logging
import re
from typing import Any

from pydantic import PydanticSchemaGenerationError, TypeAdapter, ValidationError
from pydantic_core import PydanticSerializationError, to_json, to_jsonable_python

from .exceptions import EncodingError, SerializationError

logger = logging.getLogger(__name__)

_ADAPTERS: dict[Any, TypeAdapter[Any]] = {}
_HEX_RE = re.compile(r"^(?:[0-9a-fA-F]{2})*$")


def _adapter_for(value_type: Any) -> TypeAdapter[Any]:
    """Return a cached TypeAdapter for value_type."""
    try:
        adapter = _ADAPTERS.get(value_type)
    except TypeError:
        # Unhashable type expression, build without caching
        return TypeAdapter(value_type)
    if adapter is None:
        adapter = TypeAdapter(value_type)
        _ADAPTERS[value_type] = adapter
    return adapter


def serialize_key(key: Any) -> bytes:
    """Serialize a key to canonical JSON bytes.

    Raises:
        SerializationError: If the key is not JSON-serializable.
    """
    try:
        plain = to_jsonable_python(key)
        text = json.dumps(plain, sort_keys=True, separators=(",", ":"), ensure_ascii=False)
    except (PydanticSerializationError, TypeError, ValueError) as e:
        msg = f"Cannot serialize key of type {type(key).__name__}: {e}"
        raise SerializationError(msg) from e
    return text.encode("utf-8")


def serialize_value(value: Any) -> bytes:
    """Serialize a value to JSON bytes.

    Raises:
        SerializationError: If the value is not JSON-serializable.
    """
    try:
        return to_json(value)
    except (PydanticSerializationError, TypeError, ValueError) as e:
        msg = f"Cannot serialize value of type {type(value).__name__}: {e}"
        raise SerializationError(msg) from e


def encode_key(key: Any) -> str:
    """Return the hex text stored in the key column for key."""
    return serialize_key(key).hex()


def encode_value(value: Any) -> str:
    """Return the hex text stored in the value column for value."""
    return serialize_value(value).hex()


def decode_value(text: str | None, value_type: Any = Any, *, strict: bool = True) -> Any:
    """Decode stored value text into value_type.

    Args:
        text: Hex text read from the value column.
        value_type: Type (or type expression) to validate the JSON into.
            ``Any`` returns plain decoded JSON.
        strict: Use pydantic strict mode, so e.g. a stored string is not
            coerced into an int.

    Returns:
        The validated value.

    Raises:
        EncodingError: If text is NULL or not valid hex.
        SerializationError: If the JSON does not validate as value_type.
    """
    if text is None:
        msg = "Stored value is NULL"
        raise EncodingError(msg)

    if not isinstance(text, str) or not _HEX_RE.fullmatch(text):
        msg = f"Stored value is not valid hex: {text!r:.64}"
        raise EncodingError(msg)

    try:
        raw = bytes.fromhex(text)
    except ValueError as e:
        msg = f"Stored value is not valid hex: {e}"
        raise EncodingError(msg) from e

    try:
        adapter = _adapter_for(value_type)
    except PydanticSchemaGenerationError as e:
        msg = f"Cannot decode into unsupported type {value_type!r}: {e}"
        raise SerializationError(msg) from e

    try:
        return adapter.validate_json(raw, strict=strict)
    except ValidationError as e:
        logger.debug("Stored value does not validate as %r: %s", value_type, e)
        msg = f"Stored value does not match requested type {value_type!r}: {e}"
        raise SerializationError(msg) from e
