"""
Structured codec — byte encoding for values that are not natively storable.

Backed by pydantic's TypeAdapter, so any type pydantic can build a schema
for (dataclasses, BaseModel subclasses, TypedDicts, unions, ...) can be
stored. Encoded cells are compact UTF-8 JSON.
"""

from __future__ import annotations

from typing import Any, Generic, TypeVar

from pydantic import PydanticUserError, TypeAdapter

V = TypeVar("V")


class StructuredCodec(Generic[V]):
    """
    Encode/decode values of one declared type to/from bytes.

    Usage:
        codec = StructuredCodec(Score)
        blob = codec.encode(Score(player="John", points=3))
        # b'{"player":"John","points":3}'
        codec.decode(blob)  # Score(player='John', points=3)

    Raises TypeError from the constructor when no schema can be built for
    the type. encode() raises ValueError/TypeError for values that do not
    fit the type; decode() raises ValueError for malformed blobs.
    """

    def __init__(self, value_type: Any) -> None:
        self.value_type = value_type
        try:
            self._adapter: TypeAdapter[V] = TypeAdapter(value_type)
        except PydanticUserError as e:
            raise TypeError(f"Cannot build a codec for {value_type!r}: {e}") from e

    def encode(self, value: V) -> bytes:
        # warnings="error" turns "expected X but got Y" into an exception
        return self._adapter.dump_json(value, warnings="error")

    def decode(self, data: bytes) -> V:
        return self._adapter.validate_json(data)
