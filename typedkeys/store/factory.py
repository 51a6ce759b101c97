"""
Backend registry — build a StorageProvider by name.

Built-in backends:
    "sqlite"  SQLiteStorage at storage.path, suite storage.suite
    "memory"  InMemoryStorage
"""

from __future__ import annotations

import logging
from typing import Callable

from typedkeys.core.config import TypedKeysConfig
from typedkeys.core.errors import BackendNotFoundError, RegistryError
from typedkeys.store.base import StorageProvider
from typedkeys.store.memory import InMemoryStorage
from typedkeys.store.sqlite import SQLiteStorage

logger = logging.getLogger(__name__)

BackendFactory = Callable[[TypedKeysConfig], StorageProvider]


class BackendRegistry:
    """
    Maps backend names to factories.

    Usage:
        registry = BackendRegistry()
        registry.register("sqlite", lambda cfg: SQLiteStorage(cfg.get_storage_path()))
        storage = registry.create("sqlite", config)
    """

    def __init__(self) -> None:
        self._factories: dict[str, BackendFactory] = {}

    def register(self, name: str, factory: BackendFactory, replace: bool = False) -> None:
        """Register a factory. Raises RegistryError on a duplicate name unless replace=True."""
        if name in self._factories and not replace:
            raise RegistryError(f"Backend '{name}' is already registered")
        self._factories[name] = factory
        logger.debug(f"Registered backend '{name}'")

    def create(self, name: str, config: TypedKeysConfig) -> StorageProvider:
        """
        Build a backend.

        Raises:
            BackendNotFoundError: If no factory is registered under `name`
        """
        factory = self._factories.get(name)
        if factory is None:
            available = ", ".join(self._factories) or "none"
            raise BackendNotFoundError(
                f"Backend '{name}' not found. Available: {available}"
            )
        return factory(config)

    def has(self, name: str) -> bool:
        return name in self._factories

    def get_names(self) -> list[str]:
        """List backend names, in registration order."""
        return list(self._factories)


def _sqlite_factory(config: TypedKeysConfig) -> StorageProvider:
    return SQLiteStorage(config.get_storage_path(), suite=config.storage.suite)


def _memory_factory(config: TypedKeysConfig) -> StorageProvider:
    return InMemoryStorage()


default_registry = BackendRegistry()
default_registry.register("sqlite", _sqlite_factory)
default_registry.register("memory", _memory_factory)


def open_storage(
    config: TypedKeysConfig | None = None,
    registry: BackendRegistry | None = None,
) -> StorageProvider:
    """Open the backend named by config.storage.backend."""
    config = config or TypedKeysConfig.load()
    registry = registry or default_registry
    storage = registry.create(config.storage.backend, config)
    logger.debug(f"Opened {config.storage.backend} storage")
    return storage
