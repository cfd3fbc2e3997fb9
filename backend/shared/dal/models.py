"""Persistence models for the data access layer.

All models are frozen: state transitions produce new instances via
``model_copy(update=...)`` and the orchestrator writes them back.
"""

from enum import StrEnum
from typing import Self

from pydantic import BaseModel, Field, model_validator

BOARD_CELLS = 9


class RoomPhase(StrEnum):
    OPEN = "open"
    FULL = "full"


class GamePhase(StrEnum):
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"


class PlayerStats(BaseModel, frozen=True):
    wins: int = Field(default=0, ge=0)
    losses: int = Field(default=0, ge=0)
    draws: int = Field(default=0, ge=0)


class Player(BaseModel, frozen=True):
    """Registered player with cumulative statistics."""

    player_id: str
    login: str
    password_hash: str
    nickname: str
    stats: PlayerStats = Field(default_factory=PlayerStats)


class RoomPlayer(BaseModel, frozen=True):
    """Room occupant (host or guest) and whether they asked for a new game."""

    player_id: str
    wants_new_game: bool = False


class Room(BaseModel, frozen=True):
    """Two-seat room. ``room_id`` is empty until the store assigns one."""

    room_id: str = ""
    host: RoomPlayer
    guest: RoomPlayer | None = None
    game_id: str | None = None  # current game; earlier games stay addressable by id
    title: str
    description: str = ""
    phase: RoomPhase = RoomPhase.OPEN

    @model_validator(mode="after")
    def _validate_phase(self) -> Self:
        if (self.phase == RoomPhase.FULL) != (self.guest is not None):
            raise ValueError("Room phase must be 'full' exactly when a guest is present")
        return self


class GamePlayer(BaseModel, frozen=True):
    player_id: str
    mark: str = Field(min_length=1, max_length=1)


class Game(BaseModel, frozen=True):
    """Single tic-tac-toe game between the host and guest of a room."""

    game_id: str = ""
    host: GamePlayer
    guest: GamePlayer
    board: str = Field(min_length=BOARD_CELLS, max_length=BOARD_CELLS)
    current_player_id: str
    first_player_id: str  # who moved first; drives turn alternation on rematch
    phase: GamePhase = GamePhase.IN_PROGRESS
    winner_id: str | None = None  # None while in progress and on a draw

    @model_validator(mode="after")
    def _validate_players(self) -> Self:
        participants = {self.host.player_id, self.guest.player_id}
        if len(participants) != 2:  # noqa: PLR2004
            raise ValueError("Host and guest must be different players")
        if self.host.mark == self.guest.mark:
            raise ValueError("Host and guest must have different marks")
        if self.current_player_id not in participants or self.first_player_id not in participants:
            raise ValueError("Turn must belong to a participant")
        if self.winner_id is not None and self.winner_id not in participants:
            raise ValueError("Winner must be a participant")
        return self

    def participant_ids(self) -> tuple[str, str]:
        return self.host.player_id, self.guest.player_id

    def mark_of(self, player_id: str) -> str:
        return self.host.mark if player_id == self.host.player_id else self.guest.mark

    def opponent_of(self, player_id: str) -> str:
        return self.guest.player_id if player_id == self.host.player_id else self.host.player_id


class RankingPage(BaseModel, frozen=True):
    """One page of the player ranking."""

    players: list[Player]
    total: int
    page: int
    page_size: int
