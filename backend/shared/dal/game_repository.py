"""Abstract interface for game persistence."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from shared.dal.models import Game


class GameRepository(ABC):
    """Abstract interface for game persistence."""

    @abstractmethod
    async def get_by_id(self, game_id: str) -> Game: ...

    @abstractmethod
    async def create(self, game: Game) -> str: ...

    @abstractmethod
    async def update(self, game: Game) -> None: ...
