"""Game and ranking endpoints."""

from __future__ import annotations

from typing import TYPE_CHECKING

from starlette.responses import JSONResponse

from lobby.views.responses import game_payload, ranking_payload
from lobby.views.types import MoveRequest, parse_body
from shared.errors import ValidationError

if TYPE_CHECKING:
    from starlette.requests import Request

    from game.session.orchestrator import SessionOrchestrator

DEFAULT_PAGE_SIZE = 20


def _int_query_param(request: Request, name: str, default: int) -> int:
    raw = request.query_params.get(name)
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValidationError(f"{name} must be an integer") from None


async def get_game(request: Request) -> JSONResponse:
    """GET /api/rooms/{room_id}/game - current game of a room the caller occupies."""
    orchestrator: SessionOrchestrator = request.app.state.orchestrator
    game = await orchestrator.get_game_state(request.path_params["room_id"], request.user.player_id)
    return JSONResponse({"game": game_payload(game)})


async def make_move(request: Request) -> JSONResponse:
    """POST /api/rooms/{room_id}/game/moves {position} - place the caller's mark (1-9)."""
    orchestrator: SessionOrchestrator = request.app.state.orchestrator
    body = await parse_body(request, MoveRequest)
    game = await orchestrator.apply_move(request.path_params["room_id"], request.user.player_id, body.position)
    return JSONResponse({"game": game_payload(game)})


async def ranking(request: Request) -> JSONResponse:
    orchestrator: SessionOrchestrator = request.app.state.orchestrator
    page = _int_query_param(request, "page", 1)
    page_size = _int_query_param(request, "page_size", DEFAULT_PAGE_SIZE)
    result = await orchestrator.get_ranking(page, page_size)
    return JSONResponse(ranking_payload(result))
