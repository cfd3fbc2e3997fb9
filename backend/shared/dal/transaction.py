"""Unit-of-work interfaces: a bundle of stores and a runner that scopes them to one transaction."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

    from shared.dal.game_repository import GameRepository
    from shared.dal.player_repository import PlayerRepository
    from shared.dal.room_repository import RoomRepository


class Stores(ABC):
    """Room, game, and player stores bound to the same connection or transaction."""

    @property
    @abstractmethod
    def rooms(self) -> RoomRepository: ...

    @property
    @abstractmethod
    def games(self) -> GameRepository: ...

    @property
    @abstractmethod
    def players(self) -> PlayerRepository: ...


class TransactionRunner(ABC):
    """Run a callable against one atomic unit of work.

    Commits when the callable returns and rolls back when it raises; the
    exception propagates unchanged.
    """

    @abstractmethod
    async def run[T](self, fn: Callable[[Stores], Awaitable[T]]) -> T: ...
