"""SQLite-backed player repository."""

import sqlite3

from shared.dal.models import Player, PlayerStats
from shared.dal.player_repository import PlayerRepository
from shared.db.errors import store_errors
from shared.errors import GenericError, NotFoundError, ValidationError

_PLAYER_COLUMNS = "id, login, password_hash, nickname, wins, losses, draws"


def _row_to_player(row: tuple) -> Player:
    player_id, login, password_hash, nickname, wins, losses, draws = row
    return Player(
        player_id=player_id,
        login=login,
        password_hash=password_hash,
        nickname=nickname,
        stats=PlayerStats(wins=wins, losses=losses, draws=draws),
    )


class SqlitePlayerRepository(PlayerRepository):
    """SQLite implementation of PlayerRepository.

    Relies on the unique login index for duplicate detection and maps
    IntegrityError to ValidationError.
    """

    def __init__(self, conn: sqlite3.Connection) -> None:
        self._conn = conn

    async def create_player(self, player: Player) -> None:
        """Insert a player. Raises ValidationError on duplicate id or login."""
        try:
            self._conn.execute(
                f"INSERT INTO players ({_PLAYER_COLUMNS}) VALUES (?, ?, ?, ?, ?, ?, ?)",  # noqa: S608
                (
                    player.player_id,
                    player.login,
                    player.password_hash,
                    player.nickname,
                    player.stats.wins,
                    player.stats.losses,
                    player.stats.draws,
                ),
            )
        except sqlite3.IntegrityError as exc:
            error_msg = str(exc).lower()
            if "players.id" in error_msg:
                raise ValidationError(f"Player with id '{player.player_id}' already exists") from exc
            if "players.login" in error_msg or "idx_players_login" in error_msg:
                raise ValidationError(f"Login '{player.login}' already taken") from exc
            raise GenericError("player insert failed") from exc
        except sqlite3.Error as exc:
            raise GenericError("player insert failed") from exc

    async def get_by_id(self, player_id: str) -> Player:
        with store_errors("player lookup"):
            row = self._conn.execute(
                f"SELECT {_PLAYER_COLUMNS} FROM players WHERE id = ?",  # noqa: S608
                (player_id,),
            ).fetchone()
        if row is None:
            raise NotFoundError(f"player '{player_id}' does not exist")
        return _row_to_player(row)

    async def get_by_login(self, login: str) -> Player:
        """Look up a player by login (case-insensitive)."""
        with store_errors("player lookup"):
            row = self._conn.execute(
                f"SELECT {_PLAYER_COLUMNS} FROM players WHERE login = ? COLLATE NOCASE",  # noqa: S608
                (login,),
            ).fetchone()
        if row is None:
            raise NotFoundError(f"player '{login}' does not exist")
        return _row_to_player(row)

    async def update_stats(self, player: Player) -> None:
        with store_errors("player stats update"):
            cursor = self._conn.execute(
                "UPDATE players SET wins = ?, losses = ?, draws = ? WHERE id = ?",
                (player.stats.wins, player.stats.losses, player.stats.draws, player.player_id),
            )
        if cursor.rowcount == 0:
            raise NotFoundError(f"player '{player.player_id}' does not exist")

    async def get_ranking(self, page: int, page_size: int) -> tuple[list[Player], int]:
        """Return one page of players ordered by wins, then draws, then fewest losses."""
        with store_errors("ranking query"):
            total = self._conn.execute("SELECT COUNT(*) FROM players").fetchone()[0]
            rows = self._conn.execute(
                f"SELECT {_PLAYER_COLUMNS} FROM players "  # noqa: S608
                "ORDER BY wins DESC, draws DESC, losses ASC, nickname ASC "
                "LIMIT ? OFFSET ?",
                (page_size, (page - 1) * page_size),
            ).fetchall()
        return [_row_to_player(row) for row in rows], total
