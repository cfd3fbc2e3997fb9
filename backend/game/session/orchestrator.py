"""Session orchestrator: the transaction boundary for every player action.

Each mutating operation runs as one unit of work: load the room with an
exclusive read, load the room's game in the same unit of work, run the pure
rules from ``game.logic``, write back every changed entity, commit. Any
exception rolls the whole unit back and propagates unchanged. Reads go to
the lock-free stores and see the last committed state.
"""

from __future__ import annotations

import random
from typing import TYPE_CHECKING

import structlog

from game.logic import games, rooms
from shared.dal.models import GamePhase, RankingPage, RoomPhase
from shared.errors import NotFoundError, ValidationError

if TYPE_CHECKING:
    from shared.dal.models import Game, Room
    from shared.dal.room_repository import RoomRepository
    from shared.dal.transaction import Stores, TransactionRunner

logger = structlog.get_logger()

MAX_RANKING_PAGE_SIZE = 100


async def _find_player_room(room_repo: RoomRepository, player_id: str) -> Room | None:
    try:
        return await room_repo.get_by_player_id(player_id)
    except NotFoundError:
        return None


async def _load_game(stores: Stores, game_id: str | None) -> Game | None:
    if game_id is None:
        return None
    return await stores.games.get_by_id(game_id)


async def _insert_game(stores: Stores, game: Game) -> Game:
    game_id = await stores.games.create(game)
    return game.model_copy(update={"game_id": game_id})


async def _finalize_game(stores: Stores, game: Game) -> None:
    """Persist a completed game together with both players' updated stats."""
    host = await stores.players.get_by_id(game.host.player_id)
    guest = await stores.players.get_by_id(game.guest.player_id)
    host, guest = games.settle_stats(game, host, guest)
    await stores.players.update_stats(host)
    await stores.players.update_stats(guest)
    await stores.games.update(game)


class SessionOrchestrator:
    """Public surface of the room/game service.

    ``runner`` scopes mutating operations to one unit of work; ``stores``
    serves lock-free reads. ``rng`` drives mark assignment and first-turn
    choice for new pairings.
    """

    def __init__(
        self,
        runner: TransactionRunner,
        stores: Stores,
        *,
        rng: random.Random | None = None,
    ) -> None:
        self._runner = runner
        self._stores = stores
        self._rng = rng if rng is not None else random.Random()  # noqa: S311

    # -- rooms --

    async def create_room(self, player_id: str, title: str, description: str = "") -> Room:
        async def _create(stores: Stores) -> Room:
            await stores.players.get_by_id(player_id)
            current_room = await _find_player_room(stores.rooms, player_id)
            room = rooms.create_room(player_id, title, description, current_room=current_room)
            room_id = await stores.rooms.create(room)
            return room.model_copy(update={"room_id": room_id})

        with structlog.contextvars.bound_contextvars(player_id=player_id):
            room = await self._runner.run(_create)
            logger.info("room created", room_id=room.room_id)
        return room

    async def get_room(self, player_id: str) -> Room:
        """Return the room the player currently occupies."""
        return await self._stores.rooms.get_by_player_id(player_id)

    async def get_room_by_id(self, room_id: str) -> Room:
        return await self._stores.rooms.get_by_id(room_id)

    async def get_open_rooms(self) -> list[Room]:
        return await self._stores.rooms.list_by_phase(RoomPhase.OPEN)

    async def join_room(self, room_id: str, player_id: str) -> Game:
        """Seat the player as guest and start the room's game. Returns the new game."""

        async def _join(stores: Stores) -> Game:
            room = await stores.rooms.get_by_id(room_id, exclusive=True)
            await stores.players.get_by_id(player_id)
            current_room = await _find_player_room(stores.rooms, player_id)
            room = rooms.join_room(room, player_id, current_room=current_room)

            previous_game = await _load_game(stores, room.game_id)
            room, game = games.start_game(room, previous_game, self._rng)
            game = await _insert_game(stores, game)
            await stores.rooms.update(room.model_copy(update={"game_id": game.game_id}))
            return game

        with structlog.contextvars.bound_contextvars(room_id=room_id, player_id=player_id):
            game = await self._runner.run(_join)
            logger.info("player joined room")
            logger.info("game started", game_id=game.game_id, first_player_id=game.first_player_id)
        return game

    async def leave_room(self, room_id: str, player_id: str) -> None:
        """Remove the player from the room, forfeiting a running game.

        The room is deleted when its last occupant leaves.
        """

        async def _leave(stores: Stores) -> Room | None:
            room = await stores.rooms.get_by_id(room_id, exclusive=True)
            remaining = rooms.leave_room(room, player_id)

            current_game = await _load_game(stores, room.game_id)
            if current_game is not None and current_game.phase == GamePhase.IN_PROGRESS:
                forfeited = games.forfeit_game(current_game, player_id)
                await _finalize_game(stores, forfeited)
                logger.info("game completed", game_id=forfeited.game_id, winner_id=forfeited.winner_id, forfeit=True)

            if remaining is None:
                await stores.rooms.delete(room.room_id)
            else:
                await stores.rooms.update(remaining)
            return remaining

        with structlog.contextvars.bound_contextvars(room_id=room_id, player_id=player_id):
            remaining = await self._runner.run(_leave)
            logger.info("player left room")
            if remaining is None:
                logger.info("room deleted")

    # -- games --

    async def request_or_create_game(self, room_id: str, player_id: str) -> Game | None:
        """Record that the player wants a new game; start it once both occupants do.

        Returns the new game, or None when no game was created.
        """

        async def _request(stores: Stores) -> Game | None:
            room = await stores.rooms.get_by_id(room_id, exclusive=True)
            room = games.request_new_game(room, player_id)

            current_game = await _load_game(stores, room.game_id)
            created = None
            if games.should_start_game(room, current_game):
                room, game = games.start_game(room, current_game, self._rng)
                created = await _insert_game(stores, game)
                room = room.model_copy(update={"game_id": created.game_id})
            await stores.rooms.update(room)
            return created

        with structlog.contextvars.bound_contextvars(room_id=room_id, player_id=player_id):
            created = await self._runner.run(_request)
            if created is None:
                logger.debug("new game requested")
            else:
                logger.info("game started", game_id=created.game_id, first_player_id=created.first_player_id)
        return created

    async def get_game_state(self, room_id: str, player_id: str) -> Game:
        room = await self._stores.rooms.get_by_id(room_id)
        games.ensure_can_view(room, player_id)
        if room.game_id is None:
            raise NotFoundError(f"room '{room_id}' has no game")
        return await self._stores.games.get_by_id(room.game_id)

    async def apply_move(self, room_id: str, player_id: str, position: int) -> Game:
        """Apply a move and, when it ends the game, settle both players' stats."""

        async def _move(stores: Stores) -> Game:
            room = await stores.rooms.get_by_id(room_id, exclusive=True)
            if room.game_id is None:
                raise NotFoundError(f"room '{room_id}' has no game")
            game = await stores.games.get_by_id(room.game_id)
            game = games.apply_move(game, player_id, position)
            if game.phase == GamePhase.COMPLETED:
                await _finalize_game(stores, game)
            else:
                await stores.games.update(game)
            return game

        with structlog.contextvars.bound_contextvars(room_id=room_id, player_id=player_id):
            game = await self._runner.run(_move)
            logger.info("move applied", game_id=game.game_id, position=position)
            if game.phase == GamePhase.COMPLETED:
                logger.info("game completed", game_id=game.game_id, winner_id=game.winner_id)
        return game

    # -- players --

    async def get_ranking(self, page: int = 1, page_size: int = 20) -> RankingPage:
        if page < 1:
            raise ValidationError("page must be at least 1")
        if not 1 <= page_size <= MAX_RANKING_PAGE_SIZE:
            raise ValidationError(f"page size must be between 1 and {MAX_RANKING_PAGE_SIZE}")
        players, total = await self._stores.players.get_ranking(page, page_size)
        return RankingPage(players=players, total=total, page=page, page_size=page_size)
