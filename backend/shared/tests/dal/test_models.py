"""Tests for DAL persistence models."""

import pytest
from pydantic import ValidationError

from shared.dal.models import Game, GamePhase, GamePlayer, Player, Room, RoomPhase, RoomPlayer

EMPTY = "_________"


def _game(**overrides) -> Game:
    fields = {
        "host": GamePlayer(player_id="p1", mark="X"),
        "guest": GamePlayer(player_id="p2", mark="O"),
        "board": EMPTY,
        "current_player_id": "p1",
        "first_player_id": "p1",
    }
    fields.update(overrides)
    return Game(**fields)


class TestRoom:
    def test_open_room_without_guest(self):
        room = Room(host=RoomPlayer(player_id="p1"), title="t")
        assert room.phase == RoomPhase.OPEN
        assert room.room_id == ""
        assert room.game_id is None

    def test_full_room_requires_guest(self):
        with pytest.raises(ValidationError, match="exactly when a guest is present"):
            Room(host=RoomPlayer(player_id="p1"), title="t", phase=RoomPhase.FULL)

    def test_open_room_rejects_guest(self):
        with pytest.raises(ValidationError, match="exactly when a guest is present"):
            Room(host=RoomPlayer(player_id="p1"), guest=RoomPlayer(player_id="p2"), title="t")

    def test_is_frozen(self):
        room = Room(host=RoomPlayer(player_id="p1"), title="t")
        with pytest.raises(ValidationError):
            room.title = "other"


class TestGame:
    def test_defaults(self):
        game = _game()
        assert game.phase == GamePhase.IN_PROGRESS
        assert game.winner_id is None
        assert game.participant_ids() == ("p1", "p2")

    def test_mark_and_opponent_lookup(self):
        game = _game()
        assert game.mark_of("p2") == "O"
        assert game.opponent_of("p1") == "p2"
        assert game.opponent_of("p2") == "p1"

    @pytest.mark.parametrize(
        ("overrides", "message"),
        [
            ({"guest": GamePlayer(player_id="p1", mark="O")}, "different players"),
            ({"guest": GamePlayer(player_id="p2", mark="X")}, "different marks"),
            ({"current_player_id": "p3"}, "Turn must belong"),
            ({"first_player_id": "p3"}, "Turn must belong"),
            ({"winner_id": "p3"}, "Winner must be"),
        ],
    )
    def test_rejects_inconsistent_games(self, overrides, message):
        with pytest.raises(ValidationError, match=message):
            _game(**overrides)

    @pytest.mark.parametrize("board", ["", "________", "__________"])
    def test_board_has_nine_cells(self, board):
        with pytest.raises(ValidationError):
            _game(board=board)

    def test_json_roundtrip_keeps_phase(self):
        game = _game(phase=GamePhase.COMPLETED, winner_id="p2")
        assert Game.model_validate_json(game.model_dump_json()) == game


class TestPlayer:
    def test_new_player_has_zero_stats(self):
        player = Player(player_id="p1", login="alice", password_hash="h", nickname="Alice")
        assert (player.stats.wins, player.stats.losses, player.stats.draws) == (0, 0, 0)
