"""SQLite-backed game repository."""

import sqlite3
from uuid import uuid4

from shared.dal.game_repository import GameRepository
from shared.dal.models import Game
from shared.db.errors import store_errors
from shared.errors import NotFoundError


class SqliteGameRepository(GameRepository):
    """SQLite implementation of GameRepository.

    Stores full game snapshots as JSON with indexed participant columns.
    """

    def __init__(self, conn: sqlite3.Connection) -> None:
        self._conn = conn

    async def get_by_id(self, game_id: str) -> Game:
        with store_errors("game lookup"):
            row = self._conn.execute("SELECT data FROM games WHERE id = ?", (game_id,)).fetchone()
        if row is None:
            raise NotFoundError(f"game '{game_id}' does not exist")
        return Game.model_validate_json(row[0])

    async def create(self, game: Game) -> str:
        """Insert a game under a fresh id and return the id."""
        game_id = str(uuid4())
        stored = game.model_copy(update={"game_id": game_id})
        with store_errors("game insert"):
            self._conn.execute(
                "INSERT INTO games (id, host_id, guest_id, phase, data) VALUES (?, ?, ?, ?, ?)",
                (
                    game_id,
                    stored.host.player_id,
                    stored.guest.player_id,
                    stored.phase.value,
                    stored.model_dump_json(),
                ),
            )
        return game_id

    async def update(self, game: Game) -> None:
        with store_errors("game update"):
            cursor = self._conn.execute(
                "UPDATE games SET phase = ?, data = ? WHERE id = ?",
                (game.phase.value, game.model_dump_json(), game.game_id),
            )
        if cursor.rowcount == 0:
            raise NotFoundError(f"game '{game.game_id}' does not exist")
