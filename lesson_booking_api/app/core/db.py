"""
SQLite database handle and simple migration system.

The ``Database`` class owns a single cached connection with an
explicit lifecycle: ``init()`` opens it once and applies migrations,
``get()`` returns it (failing with ``StoreNotInitializedError`` before
``init``), and ``close()`` releases it and resets the handle.  Stores
receive a ``Database`` instance instead of reaching for module-level
state, so tests can build as many isolated handles as they need.

The migration mechanism stores applied migration versions in the
``migrations`` table and executes new migrations in order.
"""

import logging
import os
import sqlite3
import threading
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Optional

from .config import PACKAGE_DIR
from .errors import StoreNotInitializedError, StoreUnavailableError


logger = logging.getLogger(__name__)

MEMORY_URL = ":memory:"

# (version, script) pairs.  Append new migrations with an incremented
# version number; never edit a migration that has shipped.
MIGRATIONS: list[tuple[int, str]] = [
    # Migration 1: lessons catalog and orders
    (
        1,
        """
        CREATE TABLE IF NOT EXISTS lessons (
            seq INTEGER PRIMARY KEY AUTOINCREMENT,
            id TEXT NOT NULL UNIQUE,
            topic TEXT NOT NULL,
            location TEXT NOT NULL,
            price REAL NOT NULL DEFAULT 0 CHECK (price >= 0),
            space INTEGER NOT NULL DEFAULT 0 CHECK (space >= 0),
            image TEXT
        );

        CREATE TABLE IF NOT EXISTS orders (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            name TEXT NOT NULL,
            phone TEXT NOT NULL,
            items TEXT NOT NULL,
            created_at TIMESTAMP NOT NULL
        );
        """,
    ),
    # Migration 2: indices used by search and order listing
    (
        2,
        """
        CREATE INDEX IF NOT EXISTS idx_lessons_topic ON lessons(topic);
        CREATE INDEX IF NOT EXISTS idx_lessons_location ON lessons(location);
        CREATE INDEX IF NOT EXISTS idx_orders_created_at ON orders(created_at);
        """,
    ),
]


def resolve_database_path(database_url: str) -> str:
    """Compute the path to the SQLite database file.

    ``:memory:`` and absolute paths are returned unchanged.  Relative
    paths are resolved against the package root.
    """
    if database_url == MEMORY_URL or os.path.isabs(database_url):
        return database_url
    return str((PACKAGE_DIR / database_url).resolve())


def _casefold(value):
    # SQLite's lower() only folds ASCII letters.
    return value.casefold() if isinstance(value, str) else value


class Database:
    """Lazily opened, explicitly closed SQLite connection."""

    def __init__(self, database_url: str, timeout: float = 20.0) -> None:
        self.database_url = database_url
        self.timeout = timeout
        self._conn: Optional[sqlite3.Connection] = None
        # The connection is shared between the event loop and worker
        # threads (uvicorn, TestClient); every statement runs under this lock.
        self._lock = threading.RLock()

    @property
    def name(self) -> str:
        if self.database_url == MEMORY_URL:
            return MEMORY_URL
        return Path(self.database_url).stem

    @property
    def is_initialized(self) -> bool:
        return self._conn is not None

    def init(self) -> sqlite3.Connection:
        """Open the connection and apply pending migrations.

        Calling ``init`` again on an open handle returns the existing
        connection without touching the database.
        """
        with self._lock:
            if self._conn is not None:
                return self._conn
            path = resolve_database_path(self.database_url)
            try:
                if path != MEMORY_URL:
                    Path(path).parent.mkdir(parents=True, exist_ok=True)
                # Autocommit: each statement is its own transaction, which is
                # what the conditional seat decrement relies on.
                conn = sqlite3.connect(
                    path,
                    timeout=self.timeout,
                    isolation_level=None,
                    check_same_thread=False,
                )
                conn.row_factory = sqlite3.Row
                conn.create_function("casefold", 1, _casefold, deterministic=True)
                apply_migrations(conn)
            except (sqlite3.Error, OSError) as exc:
                raise StoreUnavailableError(f"Cannot open database {path}: {exc}") from exc
            self._conn = conn
            logger.info("Connected to SQLite database %s", path)
            return conn

    def get(self) -> sqlite3.Connection:
        """Return the open connection."""
        if self._conn is None:
            raise StoreNotInitializedError()
        return self._conn

    def close(self) -> None:
        with self._lock:
            if self._conn is None:
                return
            self._conn.close()
            self._conn = None
            logger.info("Closed SQLite database %s", self.database_url)

    @contextmanager
    def cursor(self) -> Iterator[sqlite3.Cursor]:
        """Yield a cursor on the shared connection.

        Any ``sqlite3.Error`` raised inside the block is re-raised as
        ``StoreUnavailableError``.
        """
        with self._lock:
            conn = self.get()
            cursor = conn.cursor()
            try:
                yield cursor
            except sqlite3.Error as exc:
                raise StoreUnavailableError(f"Database error: {exc}") from exc
            finally:
                cursor.close()

    def ping(self) -> None:
        with self.cursor() as cursor:
            cursor.execute("SELECT 1").fetchone()


def apply_migrations(conn: sqlite3.Connection) -> int:
    """Apply migrations newer than the recorded schema version.

    Returns the schema version after the run.
    """
    cursor = conn.cursor()
    try:
        cursor.execute("CREATE TABLE IF NOT EXISTS migrations (version INTEGER PRIMARY KEY)")
        row = cursor.execute("SELECT MAX(version) AS version FROM migrations").fetchone()
        current_version = row["version"] if row and row["version"] is not None else 0

        for version, sql in MIGRATIONS:
            if version > current_version:
                cursor.executescript(sql)
                cursor.execute("INSERT INTO migrations (version) VALUES (?)", (version,))
                logger.debug("Applied migration %s", version)
                current_version = version
        return current_version
    finally:
        cursor.close()
