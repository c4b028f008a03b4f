"""Tests for key and value encoding.

Covers canonical key encoding, hex transcoding, and the mapping of hex and
validation failures onto EncodingError and SerializationError.
"""

from __future__ import annotations

from typing import Any

import pytest
from pydantic import BaseModel

from typed_kv.codec import (
    decode_value,
    encode_key,
    encode_value,
    serialize_key,
    serialize_value,
)
from typed_kv.exceptions import EncodingError, ErrorKind, SerializationError


class Point(BaseModel):
    x: int
    y: int


class Opaque:
    """A class pydantic knows nothing about."""


class TestEncodeKey:
    """Tests for canonical key encoding."""

    def test_string_key_is_hex_of_json(self) -> None:
        """A string key is stored as the hex of its JSON string literal."""
        assert encode_key("count") == b'"count"'.hex()
        assert encode_key("count") == "22636f756e7422"

    def test_encoded_key_uses_lowercase_hex_alphabet(self) -> None:
        """Encoded keys only contain [0-9a-f]."""
        encoded = encode_key({"name": "Zoë", "n": [1, 2.5, None, True]})
        assert set(encoded) <= set("0123456789abcdef")

    def test_dict_key_order_does_not_matter(self) -> None:
        """Dict keys serialize canonically regardless of insertion order."""
        assert encode_key({"b": 1, "a": 2}) == encode_key({"a": 2, "b": 1})

    def test_serialized_key_is_compact_and_sorted(self) -> None:
        """Canonical JSON has sorted keys and no whitespace."""
        assert serialize_key({"b": 1, "a": [1, 2]}) == b'{"a":[1,2],"b":1}'

    def test_int_and_string_keys_differ(self) -> None:
        """1 and "1" are different keys."""
        assert encode_key(1) != encode_key("1")

    def test_list_order_matters(self) -> None:
        """Lists with the same elements in a different order are different keys."""
        assert encode_key([1, 2]) != encode_key([2, 1])

    def test_model_key_matches_equivalent_dict(self) -> None:
        """A model key encodes like the dict of its fields."""
        assert encode_key(Point(x=1, y=2)) == encode_key({"y": 2, "x": 1})

    def test_unserializable_key_raises_serialization_error(self) -> None:
        """Keys that cannot become JSON raise SerializationError."""
        with pytest.raises(SerializationError) as exc_info:
            encode_key(Opaque())
        assert exc_info.value.kind is ErrorKind.SERIALIZATION
        assert exc_info.value.__cause__ is not None


class TestEncodeValue:
    """Tests for value encoding."""

    def test_int_value_is_hex_of_json(self) -> None:
        """42 is stored as hex('42')."""
        assert encode_value(42) == b"42".hex()

    def test_model_value_serializes_fields(self) -> None:
        """Models serialize to a JSON object of their fields."""
        assert serialize_value(Point(x=3, y=4)) == b'{"x":3,"y":4}'

    def test_unserializable_value_raises_serialization_error(self) -> None:
        """Values that cannot become JSON raise SerializationError."""
        with pytest.raises(SerializationError):
            encode_value(Opaque())


class TestDecodeValue:
    """Tests for decoding stored value text."""

    def test_round_trips_int(self) -> None:
        assert decode_value(encode_value(42), int) == 42

    def test_round_trips_nested_structure(self) -> None:
        value = {"tags": ["a", "b"], "limits": {"max": 10, "min": -1}, "ratio": 0.5}
        assert decode_value(encode_value(value), dict[str, Any]) == value

    def test_round_trips_model(self) -> None:
        assert decode_value(encode_value(Point(x=1, y=2)), Point) == Point(x=1, y=2)

    def test_any_returns_plain_json(self) -> None:
        """Without a requested type, the decoded JSON is returned as-is."""
        assert decode_value(encode_value(Point(x=1, y=2))) == {"x": 1, "y": 2}

    def test_wrong_shape_raises_serialization_error(self) -> None:
        """An int stored and a str requested is a decode error, not a default."""
        with pytest.raises(SerializationError):
            decode_value(encode_value(42), str)

    def test_model_shape_mismatch_raises_serialization_error(self) -> None:
        with pytest.raises(SerializationError):
            decode_value(encode_value({"x": 1}), Point)

    def test_strict_mode_rejects_numeric_string_for_int(self) -> None:
        """Strict decoding does not coerce "42" into 42."""
        with pytest.raises(SerializationError):
            decode_value(encode_value("42"), int)

    def test_lax_mode_coerces_numeric_string_for_int(self) -> None:
        assert decode_value(encode_value("42"), int, strict=False) == 42

    def test_invalid_hex_raises_encoding_error(self) -> None:
        """Non-hex characters in the stored text raise EncodingError."""
        with pytest.raises(EncodingError) as exc_info:
            decode_value("not hex", int)
        assert exc_info.value.kind is ErrorKind.ENCODING

    def test_odd_length_hex_raises_encoding_error(self) -> None:
        with pytest.raises(EncodingError):
            decode_value("abc", int)

    @pytest.mark.parametrize("text", ["34 32", " 3432", "3432\n", "34\t32"])
    def test_whitespace_in_hex_raises_encoding_error(self, text: str) -> None:
        """Hex text with embedded whitespace is foreign data, not 42."""
        with pytest.raises(EncodingError):
            decode_value(text, int)

    def test_uppercase_hex_is_accepted(self) -> None:
        assert decode_value(b"42".hex().upper(), int) == 42

    def test_null_value_raises_encoding_error(self) -> None:
        with pytest.raises(EncodingError):
            decode_value(None, int)

    def test_hex_of_invalid_json_raises_serialization_error(self) -> None:
        """Valid hex that is not JSON fails at the serialization layer."""
        with pytest.raises(SerializationError):
            decode_value(b"{not json".hex(), int)

    def test_unsupported_type_raises_serialization_error(self) -> None:
        with pytest.raises(SerializationError):
            decode_value(encode_value(1), Opaque)
