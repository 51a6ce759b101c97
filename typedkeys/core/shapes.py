"""
Value classification — which declared types a backend can hold directly.

The natively storable set is closed:
    str, bool, int, float, datetime (naive only), bytes
    list[T] / tuple[T, ...] / Sequence[T]   (T storable)
    dict[str, V] / Mapping[str, V]          (V storable)
    bare list / tuple / dict                (contents checked at runtime)

classify() turns a declared type into a Shape, or None when the type must
go through the structured codec instead. A Shape narrows an opaque stored
value back to the declared type, raising ShapeMismatch when the runtime
value has the wrong form.

Only naive datetime values are native; timezone-aware datetimes and
datetime.date are not, so a date key is serialized like any other record.
"""

from __future__ import annotations

import collections.abc
from dataclasses import dataclass
from datetime import datetime
from typing import Any, get_args, get_origin


class ShapeMismatch(Exception):
    """A stored value does not have the declared shape. Internal to the accessor layer."""

    pass


# Order matters for describe() only; bool is checked before int in narrow().
SCALAR_TYPES: tuple[type, ...] = (str, bool, int, float, datetime, bytes)

_SEQUENCE_ORIGINS = (list, tuple, collections.abc.Sequence)
_MAPPING_ORIGINS = (dict, collections.abc.Mapping)


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# Shapes
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━


def _require_naive(value: datetime) -> None:
    if value.tzinfo is not None:
        raise ShapeMismatch("timezone-aware datetimes are not storable")


@dataclass(frozen=True, slots=True)
class ScalarShape:
    """A single primitive value."""

    kind: type

    def narrow(self, value: Any) -> Any:
        kind = self.kind
        if kind is bool:
            if isinstance(value, bool):
                return value
        elif kind is int:
            if isinstance(value, int) and not isinstance(value, bool):
                return value
        elif kind is float:
            if isinstance(value, float):
                return value
            if isinstance(value, int) and not isinstance(value, bool):
                try:
                    return float(value)
                except OverflowError as e:
                    raise ShapeMismatch(f"int too large for float: {e}") from e
        elif kind is datetime:
            if isinstance(value, datetime):
                _require_naive(value)
                return value
        elif kind is bytes:
            if isinstance(value, (bytes, bytearray, memoryview)):
                return bytes(value)
        elif isinstance(value, kind):
            return value
        raise ShapeMismatch(f"expected {self.describe()}, got {type(value).__name__}")

    def describe(self) -> str:
        return self.kind.__name__


@dataclass(frozen=True, slots=True)
class SequenceShape:
    """An ordered, homogeneous sequence. `container` is list or tuple."""

    item: Shape
    container: type = list

    def narrow(self, value: Any) -> Any:
        if not isinstance(value, (list, tuple)):
            raise ShapeMismatch(f"expected {self.describe()}, got {type(value).__name__}")
        return self.container(self.item.narrow(v) for v in value)

    def describe(self) -> str:
        return f"{self.container.__name__}[{self.item.describe()}]"


@dataclass(frozen=True, slots=True)
class MappingShape:
    """A string-keyed mapping with homogeneous values."""

    value: Shape

    def narrow(self, value: Any) -> Any:
        if not isinstance(value, collections.abc.Mapping):
            raise ShapeMismatch(f"expected {self.describe()}, got {type(value).__name__}")
        result = {}
        for k, v in value.items():
            if not isinstance(k, str):
                raise ShapeMismatch(f"mapping key {k!r} is not a string")
            result[k] = self.value.narrow(v)
        return result

    def describe(self) -> str:
        return f"dict[str, {self.value.describe()}]"


@dataclass(frozen=True, slots=True)
class AnyStorableShape:
    """Contents of a bare list/dict: any value from the storable set."""

    def narrow(self, value: Any) -> Any:
        if isinstance(value, datetime):
            _require_naive(value)
            return value
        if isinstance(value, (str, bool, int, float)):
            return value
        if isinstance(value, (bytes, bytearray, memoryview)):
            return bytes(value)
        if isinstance(value, (list, tuple)):
            return [self.narrow(v) for v in value]
        if isinstance(value, collections.abc.Mapping):
            return MappingShape(self).narrow(value)
        raise ShapeMismatch(f"{type(value).__name__} is not storable")

    def describe(self) -> str:
        return "storable"


Shape = ScalarShape | SequenceShape | MappingShape | AnyStorableShape


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# Classification
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━


def classify(tp: Any) -> Shape | None:
    """
    Return the storage shape for a declared type, or None if not storable.

    Examples:
        classify(int)                    → ScalarShape(int)
        classify(dict[str, list[int]])   → MappingShape(SequenceShape(ScalarShape(int)))
        classify(Score)                  → None
    """
    if tp in SCALAR_TYPES:
        return ScalarShape(tp)
    if tp is list or tp is tuple:
        return SequenceShape(AnyStorableShape(), container=tp)
    if tp is dict:
        return MappingShape(AnyStorableShape())

    origin = get_origin(tp)
    if origin is None:
        return None
    args = get_args(tp)

    # typing.List / typing.Dict without parameters
    if not args:
        if origin in _SEQUENCE_ORIGINS:
            return SequenceShape(AnyStorableShape(), container=tuple if origin is tuple else list)
        if origin in _MAPPING_ORIGINS:
            return MappingShape(AnyStorableShape())
        return None

    if origin in _SEQUENCE_ORIGINS:
        if origin is tuple:
            # Only the homogeneous form tuple[T, ...]
            if len(args) != 2 or args[1] is not Ellipsis:
                return None
        elif len(args) != 1:
            return None
        item = classify(args[0])
        if item is None:
            return None
        return SequenceShape(item, container=tuple if origin is tuple else list)

    if origin in _MAPPING_ORIGINS:
        if len(args) != 2 or args[0] is not str:
            return None
        value = classify(args[1])
        if value is None:
            return None
        return MappingShape(value)

    return None


def is_storable(tp: Any) -> bool:
    """True when values of `tp` can be held by a backend without encoding."""
    return classify(tp) is not None
