"""
Storage Provider interface.

Untyped, string-keyed cell store. Values are opaque: backends store and
return exactly what they are given. Type enforcement lives in the
accessor layer (typedkeys.core.accessor), mixed in here as subscripts.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, TypeVar

from typedkeys.core.accessor import delete_value, get_value, set_value
from typedkeys.core.keys import TypedKey

V = TypeVar("V")


class StorageProvider(ABC):
    """
    Abstract base class for storage backends.

    Implementations:
        SQLiteStorage — persistent preference store, default
        InMemoryStorage — for testing

    Every provider gets typed subscripts for free:
        storage[Keys.number_of_cakes] = 4
        storage[Keys.number_of_cakes]        # 4
        del storage[Keys.number_of_cakes]
    """

    @abstractmethod
    def get(self, name: str) -> Any | None:
        """Get the raw cell value. Returns None if not found."""
        ...

    @abstractmethod
    def set(self, name: str, value: Any | None) -> None:
        """Set the raw cell value. None removes the cell."""
        ...

    def close(self) -> None:
        """Release any resources held by the backend."""
        return None

    # ── Typed access ─────────────────────────────────────────────────────────

    def __getitem__(self, key: TypedKey[V]) -> V | None:
        return get_value(self, key)

    def __setitem__(self, key: TypedKey[V], value: V | None) -> None:
        set_value(self, key, value)

    def __delitem__(self, key: TypedKey[Any]) -> None:
        delete_value(self, key)

    def __enter__(self) -> StorageProvider:
        return self

    def __exit__(self, *exc: object) -> None:
        self.close()
