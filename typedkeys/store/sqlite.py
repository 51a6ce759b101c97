"""
SQLite preference store.

DB: ~/.typedkeys/preferences.db

Table: preferences
    suite      TEXT  (namespace, like a preferences domain)
    name       TEXT
    value      BLOB  (binary property list holding the cell value)
    updated_at REAL
    PRIMARY KEY (suite, name)

Cells are written as binary property lists, so every natively storable
value (str, bool, int, float, datetime, bytes, lists, str-keyed dicts)
comes back with the same type it was written with.
"""

from __future__ import annotations

import logging
import plistlib
import sqlite3
import threading
import time
from pathlib import Path
from typing import Any

from typedkeys.core.errors import StorageError
from typedkeys.store.base import StorageProvider

logger = logging.getLogger(__name__)

DEFAULT_SUITE = "default"

# Top-level wrapper key inside each stored property list
_CELL = "v"


def _dump_cell(value: Any) -> bytes:
    return plistlib.dumps({_CELL: value}, fmt=plistlib.FMT_BINARY, sort_keys=False)


def _load_cell(data: bytes) -> Any:
    return plistlib.loads(data)[_CELL]


class SQLiteStorage(StorageProvider):
    """
    Persistent cell store backed by SQLite, partitioned into suites.

    Thread-safe: one connection, guarded by a lock.

    Usage:
        storage = SQLiteStorage("~/.typedkeys/preferences.db", suite="playground")
        storage[Keys.number_of_cakes] = 4
        storage.remove_suite()   # clear everything in "playground"
        storage.close()
    """

    def __init__(self, db_path: str | Path | None = None, suite: str = DEFAULT_SUITE) -> None:
        self._db_path = Path(db_path or Path.home() / ".typedkeys" / "preferences.db").expanduser()
        self._suite = suite
        self._db: sqlite3.Connection | None = None
        self._lock = threading.Lock()

    @property
    def suite(self) -> str:
        return self._suite

    @property
    def db_path(self) -> Path:
        return self._db_path

    def initialize(self) -> None:
        """Create the database file and table. Called lazily on first use."""
        with self._lock:
            self._init_locked()

    def _init_locked(self) -> None:
        if self._db is not None:
            return
        try:
            self._db_path.parent.mkdir(parents=True, exist_ok=True)
            db = sqlite3.connect(str(self._db_path), check_same_thread=False)
            db.execute("PRAGMA journal_mode=WAL")
            db.execute(
                """
                CREATE TABLE IF NOT EXISTS preferences (
                    suite      TEXT NOT NULL,
                    name       TEXT NOT NULL,
                    value      BLOB NOT NULL,
                    updated_at REAL NOT NULL,
                    PRIMARY KEY (suite, name)
                )
                """
            )
            db.commit()
        except (sqlite3.Error, OSError) as e:
            raise StorageError(f"Failed to initialize SQLite at {self._db_path}: {e}") from e
        self._db = db
        logger.debug(f"Preference store initialized at {self._db_path} (suite '{self._suite}')")

    def _conn(self) -> sqlite3.Connection:
        self._init_locked()
        return self._db  # type: ignore[return-value]

    # ── Cell access ──────────────────────────────────────────────────────────

    def get(self, name: str) -> Any | None:
        with self._lock:
            try:
                row = self._conn().execute(
                    "SELECT value FROM preferences WHERE suite = ? AND name = ?",
                    (self._suite, name),
                ).fetchone()
            except sqlite3.Error as e:
                raise StorageError(f"Failed to get key '{name}': {e}") from e
        if row is None:
            return None
        try:
            return _load_cell(row[0])
        except (plistlib.InvalidFileException, KeyError, TypeError, ValueError) as e:
            # Unreadable cell: same as absent for the caller
            logger.warning(f"Key '{name}' in suite '{self._suite}' holds an unreadable cell: {e}")
            return None

    def set(self, name: str, value: Any | None) -> None:
        if value is None:
            self._delete(name)
            return
        try:
            data = _dump_cell(value)
        except (TypeError, OverflowError, ValueError) as e:
            raise StorageError(
                f"Cannot store {type(value).__name__} under '{name}': {e}",
                details={"name": name, "suite": self._suite},
            ) from e
        with self._lock:
            try:
                db = self._conn()
                db.execute(
                    """
                    INSERT INTO preferences (suite, name, value, updated_at)
                    VALUES (?, ?, ?, ?)
                    ON CONFLICT(suite, name) DO UPDATE SET
                        value = excluded.value, updated_at = excluded.updated_at
                    """,
                    (self._suite, name, data, time.time()),
                )
                db.commit()
            except sqlite3.Error as e:
                raise StorageError(f"Failed to set key '{name}': {e}") from e

    def _delete(self, name: str) -> None:
        with self._lock:
            try:
                db = self._conn()
                db.execute(
                    "DELETE FROM preferences WHERE suite = ? AND name = ?",
                    (self._suite, name),
                )
                db.commit()
            except sqlite3.Error as e:
                raise StorageError(f"Failed to delete key '{name}': {e}") from e

    # ── Suite management ─────────────────────────────────────────────────────

    def remove_suite(self) -> int:
        """Delete every cell in this suite. Returns the number removed."""
        with self._lock:
            try:
                db = self._conn()
                cur = db.execute("DELETE FROM preferences WHERE suite = ?", (self._suite,))
                db.commit()
            except sqlite3.Error as e:
                raise StorageError(f"Failed to remove suite '{self._suite}': {e}") from e
        logger.info(f"Removed suite '{self._suite}' ({cur.rowcount} cells)")
        return cur.rowcount

    def close(self) -> None:
        with self._lock:
            if self._db:
                self._db.close()
                self._db = None
