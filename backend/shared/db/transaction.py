"""SQLite unit of work: stores bound to one connection, and the transaction runner."""

from __future__ import annotations

from typing import TYPE_CHECKING

from shared.dal.transaction import Stores, TransactionRunner
from shared.db.game_repository import SqliteGameRepository
from shared.db.player_repository import SqlitePlayerRepository
from shared.db.room_repository import SqliteRoomRepository

if TYPE_CHECKING:
    import sqlite3
    from collections.abc import Awaitable, Callable

    from shared.db.connection import Database


class SqliteStores(Stores):
    """Room, game, and player repositories sharing one SQLite connection."""

    def __init__(self, conn: sqlite3.Connection) -> None:
        self._rooms = SqliteRoomRepository(conn)
        self._games = SqliteGameRepository(conn)
        self._players = SqlitePlayerRepository(conn)

    @property
    def rooms(self) -> SqliteRoomRepository:
        return self._rooms

    @property
    def games(self) -> SqliteGameRepository:
        return self._games

    @property
    def players(self) -> SqlitePlayerRepository:
        return self._players


class SqliteTransactionRunner(TransactionRunner):
    """Run each callable inside ``Database.transaction()`` with freshly bound stores."""

    def __init__(self, db: Database) -> None:
        self._db = db

    async def run[T](self, fn: Callable[[Stores], Awaitable[T]]) -> T:
        async with self._db.transaction() as conn:
            return await fn(SqliteStores(conn))
