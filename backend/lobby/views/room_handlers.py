"""Room endpoints. The caller is always ``request.user``."""

from __future__ import annotations

from typing import TYPE_CHECKING

from starlette.responses import JSONResponse, Response

from lobby.views.responses import game_payload, room_payload
from lobby.views.types import CreateRoomRequest, parse_body

if TYPE_CHECKING:
    from starlette.requests import Request

    from game.session.orchestrator import SessionOrchestrator


def _orchestrator(request: Request) -> SessionOrchestrator:
    return request.app.state.orchestrator


async def list_open_rooms(request: Request) -> JSONResponse:
    """GET /api/rooms - rooms waiting for a guest."""
    rooms = await _orchestrator(request).get_open_rooms()
    return JSONResponse({"rooms": [room_payload(r) for r in rooms]})


async def create_room(request: Request) -> JSONResponse:
    """POST /api/rooms {title, description?} - create a room hosted by the caller."""
    body = await parse_body(request, CreateRoomRequest)
    room = await _orchestrator(request).create_room(request.user.player_id, body.title, body.description)
    return JSONResponse({"room": room_payload(room)}, status_code=201)


async def my_room(request: Request) -> JSONResponse:
    """GET /api/rooms/mine - the room the caller occupies."""
    room = await _orchestrator(request).get_room(request.user.player_id)
    return JSONResponse({"room": room_payload(room)})


async def get_room(request: Request) -> JSONResponse:
    room = await _orchestrator(request).get_room_by_id(request.path_params["room_id"])
    return JSONResponse({"room": room_payload(room)})


async def join_room(request: Request) -> JSONResponse:
    """POST /api/rooms/{room_id}/join - take the guest seat; the first game starts immediately."""
    game = await _orchestrator(request).join_room(request.path_params["room_id"], request.user.player_id)
    return JSONResponse({"game": game_payload(game)})


async def leave_room(request: Request) -> Response:
    await _orchestrator(request).leave_room(request.path_params["room_id"], request.user.player_id)
    return Response(status_code=204)


async def request_game(request: Request) -> JSONResponse:
    """POST /api/rooms/{room_id}/games - ask for a new game.

    Responds 201 with the game once both occupants have asked, otherwise
    202 with ``game: null``.
    """
    game = await _orchestrator(request).request_or_create_game(request.path_params["room_id"], request.user.player_id)
    if game is None:
        return JSONResponse({"game": None}, status_code=202)
    return JSONResponse({"game": game_payload(game)}, status_code=201)
