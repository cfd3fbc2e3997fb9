from __future__ import annotations

import contextlib
from typing import TYPE_CHECKING

import structlog
from starlette.applications import Starlette
from starlette.exceptions import HTTPException
from starlette.middleware.authentication import AuthenticationMiddleware
from starlette.middleware.cors import CORSMiddleware
from starlette.responses import JSONResponse
from starlette.routing import Route

from game.session.orchestrator import SessionOrchestrator
from lobby.auth.backend import BearerTokenBackend
from lobby.auth.policy import collect_protected_api_patterns, protected_api, public_route, validate_route_auth_policy
from lobby.server.errors import auth_error_handler, make_http_error_handler, service_error_handler
from lobby.server.middleware import SecurityHeadersMiddleware, SlashNormalizationMiddleware
from lobby.server.settings import LobbyServerSettings
from lobby.views import (
    create_room,
    get_game,
    get_room,
    join_room,
    leave_room,
    list_open_rooms,
    login,
    make_move,
    my_room,
    ranking,
    register,
    request_game,
)
from shared.auth import AuthError, AuthService, get_hasher
from shared.auth.settings import AuthSettings
from shared.build_info import APP_VERSION, GIT_COMMIT
from shared.db import Database, SqliteTransactionRunner
from shared.errors import GameServiceError
from shared.logging import setup_logging

logger = structlog.get_logger()

if TYPE_CHECKING:
    from collections.abc import AsyncGenerator

    from starlette.requests import Request


async def health(_request: Request) -> JSONResponse:
    return JSONResponse({"status": "ok", "version": APP_VERSION, "commit": GIT_COMMIT})


def create_app(
    settings: LobbyServerSettings | None = None,
    auth_settings: AuthSettings | None = None,  # required in production (via get_app)
) -> Starlette:
    if settings is None:  # pragma: no cover
        settings = LobbyServerSettings()
    if auth_settings is None:  # pragma: no cover
        auth_settings = AuthSettings()  # type: ignore[call-arg]

    routes = [
        # Public routes
        Route("/health", public_route(health), methods=["GET"], name="health"),
        Route("/api/auth/register", public_route(register), methods=["POST"], name="register"),
        Route("/api/auth/login", public_route(login), methods=["POST"], name="login"),
        # Protected JSON routes (return 401 JSON when unauthenticated)
        Route("/api/rooms", protected_api(list_open_rooms), methods=["GET"], name="list_open_rooms"),
        Route("/api/rooms", protected_api(create_room), methods=["POST"], name="create_room"),
        Route("/api/rooms/mine", protected_api(my_room), methods=["GET"], name="my_room"),
        Route("/api/rooms/{room_id}", protected_api(get_room), methods=["GET"], name="get_room"),
        Route("/api/rooms/{room_id}/join", protected_api(join_room), methods=["POST"], name="join_room"),
        Route("/api/rooms/{room_id}/leave", protected_api(leave_room), methods=["POST"], name="leave_room"),
        Route("/api/rooms/{room_id}/games", protected_api(request_game), methods=["POST"], name="request_game"),
        Route("/api/rooms/{room_id}/game", protected_api(get_game), methods=["GET"], name="get_game"),
        Route("/api/rooms/{room_id}/game/moves", protected_api(make_move), methods=["POST"], name="make_move"),
        Route("/api/ranking", protected_api(ranking), methods=["GET"], name="ranking"),
    ]

    validate_route_auth_policy(routes)
    protected_api_patterns = collect_protected_api_patterns(routes)

    db = Database(settings.database_path, busy_timeout_ms=settings.database_busy_timeout_ms)
    db.connect()
    runner = SqliteTransactionRunner(db)
    stores = db.stores()
    orchestrator = SessionOrchestrator(runner, stores)
    auth_service = AuthService(
        runner,
        stores,
        password_hasher=get_hasher(auth_settings.password_hasher),
        token_secret=auth_settings.token_secret,
        token_ttl_seconds=auth_settings.token_ttl_seconds,
    )

    @contextlib.asynccontextmanager
    async def lifespan(_app: Starlette) -> AsyncGenerator[None]:
        yield
        db.close()

    app = Starlette(
        routes=routes,
        lifespan=lifespan,
        exception_handlers={
            HTTPException: make_http_error_handler(protected_api_patterns),
            GameServiceError: service_error_handler,
            AuthError: auth_error_handler,
        },
    )
    app.add_middleware(SlashNormalizationMiddleware)  # type: ignore[arg-type]
    app.add_middleware(
        AuthenticationMiddleware,  # type: ignore[arg-type]
        backend=BearerTokenBackend(auth_settings.token_secret, auth_settings.token_ttl_seconds),
    )
    app.add_middleware(
        CORSMiddleware,  # type: ignore[arg-type]
        allow_origins=settings.cors_origins,
        allow_methods=["GET", "POST"],
        allow_headers=["Authorization", "Content-Type"],
    )
    app.add_middleware(SecurityHeadersMiddleware)  # type: ignore[arg-type]

    app.state.db = db
    app.state.settings = settings
    app.state.auth_settings = auth_settings
    app.state.orchestrator = orchestrator
    app.state.auth_service = auth_service

    logger.info("lobby server ready", database_path=settings.database_path)
    return app


def get_app() -> Starlette:  # pragma: no cover
    """Factory function for uvicorn --factory lobby.server.app:get_app."""
    s = LobbyServerSettings()
    auth = AuthSettings()  # ty: ignore[missing-argument]
    setup_logging(log_dir=s.log_dir)
    return create_app(settings=s, auth_settings=auth)
