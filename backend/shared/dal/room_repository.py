"""Abstract interface for room persistence."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from shared.dal.models import Room, RoomPhase


class RoomRepository(ABC):
    """Abstract interface for room persistence.

    ``get_by_id(..., exclusive=True)`` must take an exclusive lock on the room
    that is held until the surrounding unit of work ends. Implementations pick
    the locking read appropriate to their backend.
    """

    @abstractmethod
    async def get_by_id(self, room_id: str, *, exclusive: bool = False) -> Room: ...

    @abstractmethod
    async def get_by_player_id(self, player_id: str) -> Room: ...

    @abstractmethod
    async def list_by_phase(self, phase: RoomPhase) -> list[Room]: ...

    @abstractmethod
    async def create(self, room: Room) -> str: ...

    @abstractmethod
    async def update(self, room: Room) -> None: ...

    @abstractmethod
    async def delete(self, room_id: str) -> None: ...
