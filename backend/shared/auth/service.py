"""Auth service coordinating player registration and login."""

from __future__ import annotations

import re
from typing import TYPE_CHECKING
from uuid import uuid4

import structlog

from shared.auth.tokens import DEFAULT_TOKEN_TTL_SECONDS, issue_access_token
from shared.dal.models import Player, PlayerStats
from shared.errors import NotFoundError, ValidationError

if TYPE_CHECKING:
    from shared.auth.password import PasswordHasher
    from shared.dal.transaction import Stores, TransactionRunner

logger = structlog.get_logger()

LOGIN_MIN_LENGTH = 3
LOGIN_MAX_LENGTH = 30
LOGIN_PATTERN = re.compile(r"[a-zA-Z0-9_]+")

PASSWORD_MIN_LENGTH = 8
PASSWORD_MAX_LENGTH = 72  # bcrypt truncates at 72 bytes

NICKNAME_MAX_LENGTH = 30


class AuthError(Exception):
    """Authentication failure: unknown login or wrong password."""


class AuthService:
    """Register players and exchange credentials for access tokens."""

    def __init__(
        self,
        runner: TransactionRunner,
        stores: Stores,
        *,
        password_hasher: PasswordHasher,
        token_secret: str,
        token_ttl_seconds: int = DEFAULT_TOKEN_TTL_SECONDS,
    ) -> None:
        self._runner = runner
        self._stores = stores
        self._hasher = password_hasher
        self._token_secret = token_secret
        self._token_ttl_seconds = token_ttl_seconds

    async def register(self, login: str, password: str, nickname: str) -> Player:
        """Create a player with zero stats. Raises ValidationError on bad input or a taken login."""
        _validate_login(login)
        _validate_password(password)
        _validate_nickname(nickname)

        player = Player(
            player_id=str(uuid4()),
            login=login,
            password_hash=await self._hasher.hash(password),
            nickname=nickname,
            stats=PlayerStats(),
        )

        async def _create(stores: Stores) -> None:
            await stores.players.create_player(player)

        await self._runner.run(_create)
        logger.info("player registered", player_id=player.player_id, login=login)
        return player

    async def login(self, login: str, password: str) -> str:
        """Validate credentials and return a signed access token."""
        try:
            player = await self._stores.players.get_by_login(login)
        except NotFoundError:
            raise AuthError("Invalid credentials") from None
        if not await self._hasher.verify(password, player.password_hash):
            raise AuthError("Invalid credentials")
        return issue_access_token(player.player_id, player.login, self._token_secret, self._token_ttl_seconds)


def _validate_login(login: str) -> None:
    """Validate login: 3-30 chars, alphanumeric + underscores."""
    if len(login) < LOGIN_MIN_LENGTH or len(login) > LOGIN_MAX_LENGTH:
        raise ValidationError(f"login must be between {LOGIN_MIN_LENGTH} and {LOGIN_MAX_LENGTH} characters")
    if not LOGIN_PATTERN.fullmatch(login):
        raise ValidationError("login must contain only letters, numbers, and underscores")


def _validate_password(password: str) -> None:
    if len(password) < PASSWORD_MIN_LENGTH or len(password) > PASSWORD_MAX_LENGTH:
        raise ValidationError(f"password must be between {PASSWORD_MIN_LENGTH} and {PASSWORD_MAX_LENGTH} characters")
    if len(password.encode("utf-8")) > PASSWORD_MAX_LENGTH:
        raise ValidationError(f"password must not exceed {PASSWORD_MAX_LENGTH} bytes when encoded")


def _validate_nickname(nickname: str) -> None:
    if not nickname.strip():
        raise ValidationError("nickname is required")
    if len(nickname) > NICKNAME_MAX_LENGTH:
        raise ValidationError(f"nickname is too long. Max length is {NICKNAME_MAX_LENGTH}")
