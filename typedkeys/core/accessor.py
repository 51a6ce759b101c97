"""
Typed accessor layer — read and write values through TypedKeys.

Works against anything with the minimal backend capability:
    get(name) -> value | None
    set(name, value | None)

Reads fail soft: an empty cell, a cell holding the wrong shape, or a blob
that does not decode all come back as None. Writes to ENCODED keys fail
soft too: a value that cannot be encoded leaves the stored cell untouched.
"""

from __future__ import annotations

import logging
from typing import Any, Protocol, TypeVar

from typedkeys.core.errors import KeyTypeError
from typedkeys.core.keys import Strategy, TypedKey
from typedkeys.core.shapes import ShapeMismatch

logger = logging.getLogger(__name__)

V = TypeVar("V")


class CellStore(Protocol):
    """The capability the accessor layer needs from a backend."""

    def get(self, name: str) -> Any | None: ...

    def set(self, name: str, value: Any | None) -> None: ...


def get_value(storage: CellStore, key: TypedKey[V]) -> V | None:
    """Read the value stored under `key`, or None if absent or unreadable."""
    raw = storage.get(key.name)
    if raw is None:
        return None

    if key.strategy is Strategy.NATIVE:
        try:
            return key.shape.narrow(raw)  # type: ignore[union-attr]
        except ShapeMismatch as e:
            logger.debug(f"Key '{key.name}' holds a {type(raw).__name__}, reading as absent: {e}")
            return None

    if not isinstance(raw, (bytes, bytearray)):
        logger.debug(f"Key '{key.name}' expected an encoded blob, got {type(raw).__name__}")
        return None
    try:
        return key.codec.decode(bytes(raw))  # type: ignore[union-attr]
    except ValueError as e:
        logger.warning(f"Key '{key.name}' could not be decoded as {key.type_name}: {e}")
        return None


def set_value(storage: CellStore, key: TypedKey[V], value: V | None) -> None:
    """
    Write `value` under `key`. None removes the cell.

    Raises:
        KeyTypeError: a NATIVE key was given a value of the wrong shape.
    """
    if value is None:
        storage.set(key.name, None)
        return

    if key.strategy is Strategy.NATIVE:
        try:
            narrowed = key.shape.narrow(value)  # type: ignore[union-attr]
        except ShapeMismatch as e:
            raise KeyTypeError(
                f"Key '{key.name}' stores {key.type_name}: {e}", key_name=key.name
            ) from e
        storage.set(key.name, narrowed)
        return

    try:
        blob = key.codec.encode(value)  # type: ignore[union-attr]
    except (ValueError, TypeError) as e:
        logger.warning(f"Key '{key.name}' could not encode {type(value).__name__}, write skipped: {e}")
        return
    storage.set(key.name, blob)


def delete_value(storage: CellStore, key: TypedKey[Any]) -> None:
    """Remove the cell for `key`. Same as set_value(storage, key, None)."""
    storage.set(key.name, None)
