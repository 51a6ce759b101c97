"""
In-memory storage backend — for testing.

Simple dict-based storage. Data lost when the instance is discarded.
"""

from __future__ import annotations

import copy
from typing import Any

from typedkeys.store.base import StorageProvider


class InMemoryStorage(StorageProvider):
    """
    In-memory cell store for testing.

    Values are copied in and out so a stored cell never aliases a caller's
    list or dict, the same as a round trip through the SQLite store.

    Usage:
        storage = InMemoryStorage()
        storage[Keys.number_of_cakes] = 4
        assert storage[Keys.number_of_cakes] == 4
    """

    def __init__(self) -> None:
        self._data: dict[str, Any] = {}

    def get(self, name: str) -> Any | None:
        return copy.deepcopy(self._data.get(name))

    def set(self, name: str, value: Any | None) -> None:
        if value is None:
            self._data.pop(name, None)
        else:
            self._data[name] = copy.deepcopy(value)

    def close(self) -> None:
        self._data.clear()
