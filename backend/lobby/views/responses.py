"""JSON shapes returned by the API."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from shared.dal.models import Game, Player, RankingPage, Room


def room_payload(room: Room) -> dict[str, Any]:
    return room.model_dump(mode="json")


def game_payload(game: Game) -> dict[str, Any]:
    return game.model_dump(mode="json")


def player_payload(player: Player) -> dict[str, Any]:
    """Public view of a player; the password hash never leaves the server."""
    return player.model_dump(mode="json", exclude={"password_hash"})


def ranking_payload(ranking: RankingPage) -> dict[str, Any]:
    return {
        "players": [player_payload(p) for p in ranking.players],
        "total": ranking.total,
        "page": ranking.page,
        "page_size": ranking.page_size,
    }
