"""Auth endpoints: player registration and login."""

from __future__ import annotations

from typing import TYPE_CHECKING

from starlette.responses import JSONResponse

from lobby.views.responses import player_payload
from lobby.views.types import LoginRequest, RegisterRequest, parse_body

if TYPE_CHECKING:
    from starlette.requests import Request

    from shared.auth.service import AuthService


async def register(request: Request) -> JSONResponse:
    """POST /api/auth/register {login, password, nickname} - create a player."""
    auth_service: AuthService = request.app.state.auth_service
    body = await parse_body(request, RegisterRequest)
    player = await auth_service.register(body.login, body.password, body.nickname)
    return JSONResponse({"player": player_payload(player)}, status_code=201)


async def login(request: Request) -> JSONResponse:
    """POST /api/auth/login {login, password} - exchange credentials for an access token."""
    auth_service: AuthService = request.app.state.auth_service
    body = await parse_body(request, LoginRequest)
    token = await auth_service.login(body.login, body.password)
    return JSONResponse({"access_token": token, "token_type": "bearer"})
