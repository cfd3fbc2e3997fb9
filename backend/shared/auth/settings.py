"""Auth settings for the HTTP server."""

from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings

from shared.auth.tokens import DEFAULT_TOKEN_TTL_SECONDS


class AuthSettings(BaseSettings):
    model_config = {"env_prefix": "AUTH_"}

    # HMAC secret for access tokens -- required, no default.
    # The application fails to start if AUTH_TOKEN_SECRET is not set.
    token_secret: str = Field(min_length=1)

    token_ttl_seconds: int = Field(default=DEFAULT_TOKEN_TTL_SECONDS, ge=60)

    # "simple" is for tests only
    password_hasher: Literal["bcrypt", "simple"] = "bcrypt"
