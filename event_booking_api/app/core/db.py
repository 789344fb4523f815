"""
SQLite database integration and simple migration system.

``Database`` is the store client used by every service.  It is built
once per application, opened on startup (which fills the connection
pool and applies pending migrations) and closed on shutdown.  Services
receive it through FastAPI dependencies rather than importing a
module-level connection.

Every query runs in a worker thread via ``asyncio.to_thread`` and
borrows one pooled connection for exactly one statement, so no request
holds a connection across its own queries.  Failures surface as
``StoreError`` (``UniqueViolationError`` for UNIQUE constraints); this
layer never retries.
"""

import asyncio
import logging
import os
import queue
import sqlite3
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Sequence, TypeVar

from .errors import StoreError, UniqueViolationError

logger = logging.getLogger(__name__)

T = TypeVar("T")
Row = Dict[str, Any]

# Millisecond resolution so rows created within the same second still
# sort by creation time.
_NOW = "(strftime('%Y-%m-%d %H:%M:%f', 'now'))"

MIGRATIONS: List[tuple] = [
    # Migration 1: initial schema
    (
        1,
        f"""
        CREATE TABLE IF NOT EXISTS users (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            username TEXT NOT NULL UNIQUE,
            password_hash TEXT NOT NULL,
            role TEXT NOT NULL,
            created_at TIMESTAMP NOT NULL DEFAULT {_NOW}
        );

        CREATE TABLE IF NOT EXISTS bookings (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            name TEXT NOT NULL,
            email TEXT NOT NULL,
            phone TEXT NOT NULL,
            service TEXT,
            event_type TEXT,
            event_date TEXT,
            event_time TEXT,
            location TEXT,
            guests INTEGER,
            -- untyped: keeps "5 hours" as text and 5 as a number
            duration,
            notes TEXT,
            created_at TIMESTAMP NOT NULL DEFAULT {_NOW}
        );
        """,
    ),
    # Migration 2: both list endpoints order by creation time
    (
        2,
        """
        CREATE INDEX IF NOT EXISTS idx_users_created_at ON users(created_at);
        CREATE INDEX IF NOT EXISTS idx_bookings_created_at ON bookings(created_at);
        """,
    ),
]


def get_database_path(database_url: str) -> str:
    """Resolve ``database_url`` to a filesystem path.

    Absolute paths are used as is; relative paths are resolved against
    the project root.
    """
    if os.path.isabs(database_url):
        return database_url
    base_dir = Path(__file__).resolve().parents[3]
    return str((base_dir / database_url).resolve())


def apply_migrations(conn: sqlite3.Connection) -> int:
    """Apply pending migrations on ``conn`` and return the schema version."""
    cursor = conn.cursor()
    cursor.execute("CREATE TABLE IF NOT EXISTS migrations (version INTEGER PRIMARY KEY)")
    row = cursor.execute("SELECT MAX(version) FROM migrations").fetchone()
    current_version = row[0] if row and row[0] is not None else 0

    for version, sql in MIGRATIONS:
        if version > current_version:
            logger.info("Applying migration %s", version)
            cursor.executescript(sql)
            cursor.execute("INSERT INTO migrations (version) VALUES (?)", (version,))
            current_version = version
    conn.commit()
    return current_version


class Database:
    """Pooled SQLite client with an explicit open/close lifecycle."""

    def __init__(self, database_url: str, pool_size: int = 5, timeout: float = 5.0) -> None:
        if pool_size < 1:
            raise ValueError("pool_size must be at least 1")
        self.path = get_database_path(database_url)
        self.pool_size = pool_size
        self.timeout = timeout
        self._pool: Optional["queue.Queue[sqlite3.Connection]"] = None

    @property
    def is_open(self) -> bool:
        return self._pool is not None

    def _connect(self) -> sqlite3.Connection:
        # Pooled connections are handed to whichever worker thread runs
        # the query, one thread at a time.
        conn = sqlite3.connect(self.path, timeout=self.timeout, check_same_thread=False)
        conn.row_factory = sqlite3.Row
        return conn

    def open(self) -> None:
        """Create the pool and bring the schema up to date."""
        if self._pool is not None:
            return
        pool: "queue.Queue[sqlite3.Connection]" = queue.Queue(maxsize=self.pool_size)
        try:
            for _ in range(self.pool_size):
                pool.put(self._connect())
            conn = pool.get()
            try:
                version = apply_migrations(conn)
            finally:
                pool.put(conn)
        except sqlite3.Error as exc:
            while not pool.empty():
                pool.get_nowait().close()
            raise StoreError(f"cannot open database {self.path}: {exc}") from exc
        self._pool = pool
        logger.info("Database %s opened (schema version %s, pool size %s)", self.path, version, self.pool_size)

    def close(self) -> None:
        if self._pool is None:
            return
        pool, self._pool = self._pool, None
        while not pool.empty():
            pool.get_nowait().close()
        logger.info("Database %s closed", self.path)

    def _acquire(self) -> sqlite3.Connection:
        if self._pool is None:
            raise StoreError("database is not open")
        try:
            return self._pool.get(timeout=self.timeout)
        except queue.Empty:
            raise StoreError("timed out waiting for a pooled connection") from None

    def _release(self, conn: sqlite3.Connection) -> None:
        if self._pool is None:
            # Closed while the query was running.
            conn.close()
        else:
            self._pool.put(conn)

    def _run(self, work: Callable[[sqlite3.Cursor], T]) -> T:
        conn = self._acquire()
        try:
            result = work(conn.cursor())
            conn.commit()
            return result
        except sqlite3.IntegrityError as exc:
            conn.rollback()
            if "UNIQUE constraint failed" in str(exc):
                raise UniqueViolationError(str(exc)) from exc
            raise StoreError(str(exc)) from exc
        except sqlite3.Error as exc:
            conn.rollback()
            raise StoreError(str(exc)) from exc
        finally:
            self._release(conn)

    async def fetch_all(self, sql: str, params: Sequence[Any] = ()) -> List[Row]:
        """Run a query and return every row as a dict."""

        def work(cursor: sqlite3.Cursor) -> List[Row]:
            return [dict(row) for row in cursor.execute(sql, tuple(params)).fetchall()]

        return await asyncio.to_thread(self._run, work)

    async def fetch_one(self, sql: str, params: Sequence[Any] = ()) -> Optional[Row]:
        """Run a query and return the first row, or ``None``."""

        def work(cursor: sqlite3.Cursor) -> Optional[Row]:
            row = cursor.execute(sql, tuple(params)).fetchone()
            return dict(row) if row is not None else None

        return await asyncio.to_thread(self._run, work)

    async def execute(self, sql: str, params: Sequence[Any] = ()) -> int:
        """Run a mutation and return the number of affected rows."""
        return await asyncio.to_thread(self._run, lambda cursor: cursor.execute(sql, tuple(params)).rowcount)

    async def insert(self, sql: str, params: Sequence[Any] = ()) -> int:
        """Run an INSERT and return the generated row id."""
        return await asyncio.to_thread(self._run, lambda cursor: cursor.execute(sql, tuple(params)).lastrowid)
