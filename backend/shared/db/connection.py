"""SQLite database connection, schema, and transaction management."""

from __future__ import annotations

import asyncio
import contextlib
import os
import sqlite3
from pathlib import Path
from typing import TYPE_CHECKING

import structlog

from shared.db.errors import store_errors
from shared.db.transaction import SqliteStores

if TYPE_CHECKING:
    from collections.abc import AsyncIterator

logger = structlog.get_logger()

_DB_FILE_PERMISSIONS = 0o600
DEFAULT_BUSY_TIMEOUT_MS = 1000

_SCHEMA_SQL = """\
CREATE TABLE IF NOT EXISTS players (
    id TEXT PRIMARY KEY,
    login TEXT NOT NULL,
    password_hash TEXT NOT NULL,
    nickname TEXT NOT NULL,
    wins INTEGER NOT NULL DEFAULT 0,
    losses INTEGER NOT NULL DEFAULT 0,
    draws INTEGER NOT NULL DEFAULT 0
);

CREATE UNIQUE INDEX IF NOT EXISTS idx_players_login
    ON players (login COLLATE NOCASE);

CREATE INDEX IF NOT EXISTS idx_players_ranking
    ON players (wins DESC, draws DESC, losses ASC);

CREATE TABLE IF NOT EXISTS games (
    id TEXT PRIMARY KEY,
    host_id TEXT NOT NULL REFERENCES players (id),
    guest_id TEXT NOT NULL REFERENCES players (id),
    phase TEXT NOT NULL,
    data TEXT NOT NULL
);

CREATE TABLE IF NOT EXISTS rooms (
    id TEXT PRIMARY KEY,
    host_id TEXT NOT NULL REFERENCES players (id),
    guest_id TEXT REFERENCES players (id),
    game_id TEXT REFERENCES games (id),
    phase TEXT NOT NULL,
    data TEXT NOT NULL
);

CREATE UNIQUE INDEX IF NOT EXISTS idx_rooms_host_id
    ON rooms (host_id);

CREATE UNIQUE INDEX IF NOT EXISTS idx_rooms_guest_id
    ON rooms (guest_id) WHERE guest_id IS NOT NULL;

CREATE INDEX IF NOT EXISTS idx_rooms_phase
    ON rooms (phase);
"""


class Database:
    """SQLite database wrapper with schema management and units of work.

    Two connections are kept open. The reader runs in autocommit mode and, with
    WAL enabled, only ever observes committed state. The writer runs every unit
    of work as ``BEGIN IMMEDIATE ... COMMIT``; units of work are serialized
    in-process by an asyncio lock and across processes by SQLite's write lock.
    A file path is required: ``:memory:`` would give each connection its own
    database.
    """

    def __init__(self, path: str | Path, *, busy_timeout_ms: int = DEFAULT_BUSY_TIMEOUT_MS) -> None:
        self._path = str(path)
        self._busy_timeout_ms = busy_timeout_ms
        self._reader: sqlite3.Connection | None = None
        self._writer: sqlite3.Connection | None = None
        self._write_lock = asyncio.Lock()

    @property
    def connection(self) -> sqlite3.Connection:
        """Return the read connection or raise if disconnected."""
        if self._reader is None:
            raise RuntimeError("Database is not connected")
        return self._reader

    @property
    def writer(self) -> sqlite3.Connection:
        """Return the write connection or raise if disconnected."""
        if self._writer is None:
            raise RuntimeError("Database is not connected")
        return self._writer

    def connect(self) -> None:
        """Open both connections, apply pragmas, create schema, and harden file permissions."""
        parent = Path(self._path).parent
        parent.mkdir(parents=True, exist_ok=True)

        self._writer = self._open()
        self._writer.executescript(_SCHEMA_SQL)
        self._reader = self._open()

        self._harden_permissions()

    def close(self) -> None:
        """Close both connections."""
        for conn in (self._reader, self._writer):
            if conn is not None:
                conn.close()
        self._reader = None
        self._writer = None

    def stores(self) -> SqliteStores:
        """Return stores bound to the read connection (no locking, committed state only)."""
        return SqliteStores(self.connection)

    @contextlib.asynccontextmanager
    async def transaction(self) -> AsyncIterator[sqlite3.Connection]:
        """Yield the write connection inside ``BEGIN IMMEDIATE``.

        Commits on normal exit; rolls back and re-raises on any exception,
        including cancellation. A lock that cannot be acquired within the busy
        timeout, or a failed commit, surfaces as GenericError.
        """
        async with self._write_lock:
            conn = self.writer
            with store_errors("transaction begin"):
                conn.execute("BEGIN IMMEDIATE")
            try:
                yield conn
                with store_errors("transaction commit"):
                    conn.execute("COMMIT")
            except BaseException:
                if conn.in_transaction:
                    with store_errors("transaction rollback"):
                        conn.execute("ROLLBACK")
                logger.warning("transaction rolled back")
                raise

    def _open(self) -> sqlite3.Connection:
        conn = sqlite3.connect(self._path, check_same_thread=False, isolation_level=None)
        conn.execute("PRAGMA journal_mode=WAL")
        conn.execute("PRAGMA foreign_keys=ON")
        conn.execute(f"PRAGMA busy_timeout={int(self._busy_timeout_ms)}")
        return conn

    def _harden_permissions(self) -> None:
        """Set restrictive file permissions on POSIX systems (best effort).

        Hardens the main DB file and WAL/SHM sibling files created by WAL mode,
        since they also contain database content (password hashes).
        """
        if os.name != "posix":  # pragma: no cover
            return
        for suffix in ("", "-wal", "-shm"):
            p = Path(self._path + suffix)
            if p.exists():
                try:
                    p.chmod(_DB_FILE_PERMISSIONS)
                except OSError:
                    logger.warning("could not set file permissions", permissions=oct(_DB_FILE_PERMISSIONS), path=str(p))
