"""Starlette AuthenticationBackend that validates bearer access tokens."""

from __future__ import annotations

from typing import TYPE_CHECKING

from starlette.authentication import AuthCredentials, AuthenticationBackend

from lobby.auth.models import AuthenticatedPlayer
from shared.auth.tokens import DEFAULT_TOKEN_TTL_SECONDS, verify_access_token

if TYPE_CHECKING:
    from starlette.requests import HTTPConnection

_BEARER_PREFIX = "bearer "


class BearerTokenBackend(AuthenticationBackend):
    """Authenticate requests via ``Authorization: Bearer <token>``.

    A missing, malformed, forged, or expired token leaves the request
    unauthenticated; protected routes then answer 401.
    """

    def __init__(self, token_secret: str, max_ttl_seconds: int = DEFAULT_TOKEN_TTL_SECONDS) -> None:
        self._token_secret = token_secret
        self._max_ttl_seconds = max_ttl_seconds

    async def authenticate(
        self,
        conn: HTTPConnection,
    ) -> tuple[AuthCredentials, AuthenticatedPlayer] | None:
        header = conn.headers.get("authorization", "")
        if not header.lower().startswith(_BEARER_PREFIX):
            return None
        raw = header[len(_BEARER_PREFIX) :].strip()
        if not raw:
            return None

        token = verify_access_token(raw, self._token_secret, self._max_ttl_seconds)
        if token is None:
            return None
        return AuthCredentials(["authenticated"]), AuthenticatedPlayer(player_id=token.player_id, login=token.login)
