"""
typedkeys — declare a preference key once, read and write it with its type.

Public API:
    from typedkeys import TypedKey, KeyNamespace, SQLiteStorage, InMemoryStorage
"""

__version__ = "0.1.0"

# Core
from typedkeys.core.accessor import delete_value, get_value, set_value
from typedkeys.core.config import TypedKeysConfig
from typedkeys.core.errors import (
    KeyDeclarationError,
    KeyTypeError,
    StorageError,
    TypedKeysError,
)
from typedkeys.core.keys import KeyNamespace, Strategy, TypedKey
from typedkeys.core.shapes import classify, is_storable

# Storage
from typedkeys.store.base import StorageProvider
from typedkeys.store.factory import open_storage
from typedkeys.store.memory import InMemoryStorage
from typedkeys.store.sqlite import SQLiteStorage

__all__ = [
    # Core
    "TypedKey",
    "KeyNamespace",
    "Strategy",
    "classify",
    "is_storable",
    "get_value",
    "set_value",
    "delete_value",
    "TypedKeysConfig",
    # Errors
    "TypedKeysError",
    "KeyDeclarationError",
    "KeyTypeError",
    "StorageError",
    # Storage
    "StorageProvider",
    "InMemoryStorage",
    "SQLiteStorage",
    "open_storage",
]
