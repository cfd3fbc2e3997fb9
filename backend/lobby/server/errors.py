"""Translate service errors into JSON error responses.

Every error body has the shape ``{"error_code": ..., "error_message": ...}``.
"""

from __future__ import annotations

from http import HTTPStatus
from typing import TYPE_CHECKING, cast

import structlog
from starlette.responses import JSONResponse, PlainTextResponse, Response

from shared.errors import ErrorKind

if TYPE_CHECKING:
    import re
    from collections.abc import Awaitable, Callable

    from starlette.exceptions import HTTPException
    from starlette.requests import Request

    from shared.errors import GameServiceError

logger = structlog.get_logger()

UNAUTHORIZED_CODE = "UNAUTHORIZED"
GENERIC_ERROR_MESSAGE = "internal server error"


def status_for(kind: ErrorKind) -> tuple[HTTPStatus, str]:
    """Return the HTTP status and public error code for an error kind."""
    match kind:
        case ErrorKind.VALIDATION:
            return HTTPStatus.UNPROCESSABLE_ENTITY, "INVALID_INPUT"
        case ErrorKind.NOT_FOUND:
            return HTTPStatus.NOT_FOUND, "NOT_FOUND"
        case ErrorKind.AUTHORIZATION:
            return HTTPStatus.FORBIDDEN, "FORBIDDEN"
        case ErrorKind.GENERIC:
            return HTTPStatus.INTERNAL_SERVER_ERROR, "INTERNAL_SERVER_ERROR"


def error_response(status: HTTPStatus, code: str, message: str) -> JSONResponse:
    return JSONResponse({"error_code": code, "error_message": message}, status_code=status)


async def service_error_handler(request: Request, exc: Exception) -> Response:
    err = cast("GameServiceError", exc)
    status, code = status_for(err.kind)
    if err.kind == ErrorKind.GENERIC:
        logger.error("request failed", path=request.url.path, error=err.message, exc_info=err)
        return error_response(status, code, GENERIC_ERROR_MESSAGE)
    return error_response(status, code, err.message)


async def auth_error_handler(_request: Request, exc: Exception) -> Response:
    return error_response(HTTPStatus.UNAUTHORIZED, UNAUTHORIZED_CODE, str(exc))


def make_http_error_handler(
    protected_api_patterns: list[re.Pattern[str]],
) -> Callable[[Request, Exception], Awaitable[Response]]:
    """Build an HTTPException handler that rewrites 401s on protected endpoints to JSON.

    All other HTTP exceptions keep Starlette's plain-text behaviour.
    """

    async def _http_error_handler(request: Request, exc: Exception) -> Response:
        http_exc = cast("HTTPException", exc)
        path = request.url.path
        if http_exc.status_code == HTTPStatus.UNAUTHORIZED and any(p.match(path) for p in protected_api_patterns):
            return error_response(HTTPStatus.UNAUTHORIZED, UNAUTHORIZED_CODE, "Authentication required")
        if http_exc.status_code in {HTTPStatus.NO_CONTENT, HTTPStatus.NOT_MODIFIED}:
            return Response(status_code=http_exc.status_code, headers=http_exc.headers)
        return PlainTextResponse(http_exc.detail or "", status_code=http_exc.status_code, headers=http_exc.headers)

    return _http_error_handler

