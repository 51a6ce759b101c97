"""Shared test fixtures for typedkeys."""

import logging

import pytest
from typedkeys.core.config import TypedKeysConfig
from typedkeys.store.memory import InMemoryStorage
from typedkeys.store.sqlite import SQLiteStorage


@pytest.fixture(autouse=True)
def reset_logging():
    """Drop handlers attached by setup_logging so they don't outlive a test."""
    yield
    logger = logging.getLogger("typedkeys")
    for handler in logger.handlers:
        handler.close()
    logger.handlers = []
    logger.setLevel(logging.NOTSET)


@pytest.fixture
def config(tmp_path):
    """A config pointing at a temporary database, without loading from disk."""
    return TypedKeysConfig(storage={"path": str(tmp_path / "prefs.db")})


@pytest.fixture
def memory_storage():
    storage = InMemoryStorage()
    yield storage
    storage.close()


@pytest.fixture
def sqlite_storage(tmp_path):
    storage = SQLiteStorage(tmp_path / "prefs.db", suite="test-suite")
    yield storage
    storage.close()


@pytest.fixture(params=["memory", "sqlite"])
def storage(request, tmp_path):
    """Each backend in turn; tests using it must behave identically on both."""
    if request.param == "memory":
        backend = InMemoryStorage()
    else:
        backend = SQLiteStorage(tmp_path / "prefs.db", suite="test-suite")
    yield backend
    backend.close()
