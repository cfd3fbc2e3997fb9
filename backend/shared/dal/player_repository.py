"""Abstract interface for player persistence."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from shared.dal.models import Player


class PlayerRepository(ABC):
    """Abstract interface for player persistence.

    Lookups raise NotFoundError when the player does not exist.
    """

    @abstractmethod
    async def create_player(self, player: Player) -> None: ...

    @abstractmethod
    async def get_by_id(self, player_id: str) -> Player: ...

    @abstractmethod
    async def get_by_login(self, login: str) -> Player: ...

    @abstractmethod
    async def update_stats(self, player: Player) -> None: ...

    @abstractmethod
    async def get_ranking(self, page: int, page_size: int) -> tuple[list[Player], int]: ...
