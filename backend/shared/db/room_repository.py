"""SQLite-backed room repository."""

import sqlite3
from uuid import uuid4

from shared.dal.models import Room, RoomPhase
from shared.dal.room_repository import RoomRepository
from shared.db.errors import store_errors
from shared.errors import GenericError, NotFoundError, ValidationError


class SqliteRoomRepository(RoomRepository):
    """SQLite implementation of RoomRepository.

    Stores the full room snapshot as JSON with indexed columns for lookups.
    SQLite has no row locks: an exclusive read is only legal inside a unit of
    work, whose ``BEGIN IMMEDIATE`` already holds the database write lock.
    """

    def __init__(self, conn: sqlite3.Connection) -> None:
        self._conn = conn

    async def get_by_id(self, room_id: str, *, exclusive: bool = False) -> Room:
        if exclusive and not self._conn.in_transaction:
            raise GenericError("exclusive room read requires an open transaction")
        with store_errors("room lookup"):
            row = self._conn.execute("SELECT data FROM rooms WHERE id = ?", (room_id,)).fetchone()
        if row is None:
            raise NotFoundError(f"room '{room_id}' does not exist")
        return Room.model_validate_json(row[0])

    async def get_by_player_id(self, player_id: str) -> Room:
        """Return the room the player occupies as host or guest."""
        with store_errors("room lookup"):
            row = self._conn.execute(
                "SELECT data FROM rooms WHERE host_id = ? OR guest_id = ?",
                (player_id, player_id),
            ).fetchone()
        if row is None:
            raise NotFoundError(f"player '{player_id}' is not in a room")
        return Room.model_validate_json(row[0])

    async def list_by_phase(self, phase: RoomPhase) -> list[Room]:
        with store_errors("room listing"):
            rows = self._conn.execute(
                "SELECT data FROM rooms WHERE phase = ? ORDER BY rowid",
                (phase.value,),
            ).fetchall()
        return [Room.model_validate_json(row[0]) for row in rows]

    async def create(self, room: Room) -> str:
        """Insert a room under a fresh id and return the id."""
        room_id = str(uuid4())
        stored = room.model_copy(update={"room_id": room_id})
        try:
            self._conn.execute(
                "INSERT INTO rooms (id, host_id, guest_id, game_id, phase, data) VALUES (?, ?, ?, ?, ?, ?)",
                (room_id, *self._indexed_columns(stored), stored.model_dump_json()),
            )
        except sqlite3.IntegrityError as exc:
            if "rooms.host_id" in str(exc) or "rooms.guest_id" in str(exc):
                raise ValidationError("player is part of other room") from exc
            raise GenericError("room insert failed") from exc
        except sqlite3.Error as exc:
            raise GenericError("room insert failed") from exc
        return room_id

    async def update(self, room: Room) -> None:
        try:
            cursor = self._conn.execute(
                "UPDATE rooms SET host_id = ?, guest_id = ?, game_id = ?, phase = ?, data = ? WHERE id = ?",
                (*self._indexed_columns(room), room.model_dump_json(), room.room_id),
            )
        except sqlite3.IntegrityError as exc:
            if "rooms.host_id" in str(exc) or "rooms.guest_id" in str(exc):
                raise ValidationError("player is part of other room") from exc
            raise GenericError("room update failed") from exc
        except sqlite3.Error as exc:
            raise GenericError("room update failed") from exc
        if cursor.rowcount == 0:
            raise NotFoundError(f"room '{room.room_id}' does not exist")

    async def delete(self, room_id: str) -> None:
        with store_errors("room delete"):
            cursor = self._conn.execute("DELETE FROM rooms WHERE id = ?", (room_id,))
        if cursor.rowcount == 0:
            raise NotFoundError(f"room '{room_id}' does not exist")

    @staticmethod
    def _indexed_columns(room: Room) -> tuple[str, str | None, str | None, str]:
        guest_id = room.guest.player_id if room.guest is not None else None
        return room.host.player_id, guest_id, room.game_id, room.phase.value
