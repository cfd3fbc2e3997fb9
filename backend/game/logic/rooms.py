"""Room lifecycle: who may create, join, and leave a room.

Pure functions over frozen models. Persistence, locking, and the forfeit of a
running game are the orchestrator's job.
"""

from shared.dal.models import Room, RoomPhase, RoomPlayer
from shared.errors import ValidationError

MAX_ROOM_TITLE_LENGTH = 30
MAX_ROOM_DESCRIPTION_LENGTH = 150


def is_occupant(room: Room, player_id: str) -> bool:
    return room.host.player_id == player_id or (room.guest is not None and room.guest.player_id == player_id)


def create_room(host_id: str, title: str, description: str, *, current_room: Room | None) -> Room:
    """Build a new open room hosted by ``host_id``.

    ``current_room`` is the room the host already occupies, if any.
    """
    if current_room is not None:
        raise ValidationError("player is part of other room")
    if not title:
        raise ValidationError("title is required")
    if len(title) > MAX_ROOM_TITLE_LENGTH:
        raise ValidationError(f"title is too long. Max length is {MAX_ROOM_TITLE_LENGTH}")
    if len(description) > MAX_ROOM_DESCRIPTION_LENGTH:
        raise ValidationError(f"description is too long. Max length is {MAX_ROOM_DESCRIPTION_LENGTH}")

    return Room(
        host=RoomPlayer(player_id=host_id, wants_new_game=True),
        title=title,
        description=description,
        phase=RoomPhase.OPEN,
    )


def join_room(room: Room, player_id: str, *, current_room: Room | None) -> Room:
    """Seat ``player_id`` as guest. The room becomes full.

    ``current_room`` is the room the player already occupies, if any.
    """
    if room.guest is not None and room.guest.player_id != player_id:
        raise ValidationError("room is full")
    if room.host.player_id == player_id:
        raise ValidationError("player is already part of the room as host")
    if room.guest is not None:
        raise ValidationError("player is already part of the room as guest")
    if current_room is not None:
        raise ValidationError("player is part of other room")

    return room.model_copy(
        update={
            "guest": RoomPlayer(player_id=player_id, wants_new_game=True),
            "phase": RoomPhase.FULL,
        },
    )


def leave_room(room: Room, player_id: str) -> Room | None:
    """Remove ``player_id`` from the room.

    A leaving guest frees the guest seat. A leaving host hands the room to the
    guest. Returns None when the leaver was the only occupant and the room
    must be deleted.
    """
    if not is_occupant(room, player_id):
        raise ValidationError("player is not part of the room")

    if room.host.player_id == player_id:
        if room.guest is None:
            return None
        return room.model_copy(update={"host": room.guest, "guest": None, "phase": RoomPhase.OPEN})

    return room.model_copy(update={"guest": None, "phase": RoomPhase.OPEN})
