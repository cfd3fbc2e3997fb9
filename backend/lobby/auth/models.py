"""User model for Starlette AuthenticationMiddleware integration."""

from __future__ import annotations

from starlette.authentication import BaseUser


class AuthenticatedPlayer(BaseUser):
    """Player behind a verified access token, exposed as ``request.user``."""

    def __init__(self, player_id: str, login: str) -> None:
        self._player_id = player_id
        self._login = login

    @property
    def is_authenticated(self) -> bool:  # pragma: no cover
        return True

    @property
    def display_name(self) -> str:  # pragma: no cover
        return self._login

    @property
    def identity(self) -> str:  # pragma: no cover
        return self._player_id

    @property
    def player_id(self) -> str:
        return self._player_id

    @property
    def login(self) -> str:
        return self._login
