"""Data access layer: repository interfaces and shared persistence models."""

from shared.dal.game_repository import GameRepository
from shared.dal.models import (
    Game,
    GamePhase,
    GamePlayer,
    Player,
    PlayerStats,
    RankingPage,
    Room,
    RoomPhase,
    RoomPlayer,
)
from shared.dal.player_repository import PlayerRepository
from shared.dal.room_repository import RoomRepository
from shared.dal.transaction import Stores, TransactionRunner

__all__ = [
    "Game",
    "GamePhase",
    "GamePlayer",
    "GameRepository",
    "Player",
    "PlayerRepository",
    "PlayerStats",
    "RankingPage",
    "Room",
    "RoomPhase",
    "RoomPlayer",
    "RoomRepository",
    "Stores",
    "TransactionRunner",
]
