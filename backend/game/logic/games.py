"""Game sessions: starting games, applying moves, and settling statistics.

Pure functions over frozen models. Randomness (mark assignment and the
first turn of an unrelated pairing) comes from an injected ``random.Random``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from game.logic.board import EMPTY_BOARD, MARKS, evaluate_win, is_free, is_full, is_valid_position, place_mark
from game.logic.rooms import is_occupant
from shared.dal.models import Game, GamePhase, GamePlayer
from shared.errors import AuthorizationError, ValidationError

if TYPE_CHECKING:
    import random

    from shared.dal.models import Player, Room


def request_new_game(room: Room, player_id: str) -> Room:
    """Flag that ``player_id`` wants a new game."""
    if room.host.player_id == player_id:
        return room.model_copy(update={"host": room.host.model_copy(update={"wants_new_game": True})})
    if room.guest is not None and room.guest.player_id == player_id:
        return room.model_copy(update={"guest": room.guest.model_copy(update={"wants_new_game": True})})
    raise ValidationError("player is not part of the room")


def should_start_game(room: Room, current_game: Game | None) -> bool:
    """Both occupants want a new game and no game is running."""
    if room.guest is None:
        return False
    if current_game is not None and current_game.phase == GamePhase.IN_PROGRESS:
        return False
    return room.host.wants_new_game and room.guest.wants_new_game


def _same_pairing(room: Room, game: Game) -> bool:
    return room.guest is not None and {room.host.player_id, room.guest.player_id} == set(game.participant_ids())


def start_game(room: Room, previous_game: Game | None, rng: random.Random) -> tuple[Room, Game]:
    """Create a new in-progress game for a full room and clear both request flags.

    A rematch between the same two players keeps each player's mark and
    gives the first move to whoever did not move first last time. Any other
    pairing gets shuffled marks and a random first player.
    """
    if room.guest is None:
        raise ValidationError("room has no guest")
    host_id = room.host.player_id
    guest_id = room.guest.player_id

    if previous_game is not None and _same_pairing(room, previous_game):
        host_mark = previous_game.mark_of(host_id)
        guest_mark = previous_game.mark_of(guest_id)
        first_player_id = previous_game.opponent_of(previous_game.first_player_id)
    else:
        host_mark, guest_mark = rng.sample(MARKS, k=2)
        first_player_id = rng.choice((host_id, guest_id))

    game = Game(
        host=GamePlayer(player_id=host_id, mark=host_mark),
        guest=GamePlayer(player_id=guest_id, mark=guest_mark),
        board=EMPTY_BOARD,
        current_player_id=first_player_id,
        first_player_id=first_player_id,
        phase=GamePhase.IN_PROGRESS,
    )
    room = room.model_copy(
        update={
            "host": room.host.model_copy(update={"wants_new_game": False}),
            "guest": room.guest.model_copy(update={"wants_new_game": False}),
        },
    )
    return room, game


def apply_move(game: Game, player_id: str, position: int) -> Game:
    """Place the player's mark and advance the game.

    Checks run in a fixed order: participant, game still running, player's
    turn, position in range, cell free.
    """
    if player_id not in game.participant_ids():
        raise ValidationError("player is not part of the game")
    if game.phase == GamePhase.COMPLETED:
        raise ValidationError("game is completed")
    if game.current_player_id != player_id:
        raise ValidationError("player not in turn")
    if not is_valid_position(position):
        raise ValidationError("invalid position index")
    if not is_free(game.board, position):
        raise ValidationError("position occupied")

    board = place_mark(game.board, position, game.mark_of(player_id))
    if evaluate_win(board):
        return game.model_copy(update={"board": board, "phase": GamePhase.COMPLETED, "winner_id": player_id})
    if is_full(board):
        return game.model_copy(update={"board": board, "phase": GamePhase.COMPLETED, "winner_id": None})
    return game.model_copy(update={"board": board, "current_player_id": game.opponent_of(player_id)})


def forfeit_game(game: Game, leaver_id: str) -> Game:
    """Complete a running game in favour of the participant who stays."""
    if game.phase == GamePhase.COMPLETED:
        raise ValidationError("game is completed")
    if leaver_id not in game.participant_ids():
        raise ValidationError("player is not part of the game")
    return game.model_copy(update={"phase": GamePhase.COMPLETED, "winner_id": game.opponent_of(leaver_id)})


def settle_stats(game: Game, host: Player, guest: Player) -> tuple[Player, Player]:
    """Return host and guest with the completed game's result added to their stats."""
    if game.phase != GamePhase.COMPLETED:
        raise ValidationError("game is not completed")

    def _bump(player: Player, field: str) -> Player:
        stats = player.stats.model_copy(update={field: getattr(player.stats, field) + 1})
        return player.model_copy(update={"stats": stats})

    if game.winner_id is None:
        return _bump(host, "draws"), _bump(guest, "draws")
    if game.winner_id == host.player_id:
        return _bump(host, "wins"), _bump(guest, "losses")
    return _bump(host, "losses"), _bump(guest, "wins")


def ensure_can_view(room: Room, player_id: str) -> None:
    if not is_occupant(room, player_id):
        raise AuthorizationError("player is not part of the room")
