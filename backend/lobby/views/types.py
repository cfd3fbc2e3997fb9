"""Request bodies accepted by the JSON API and the helper that parses them."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict, Field
from pydantic import ValidationError as PydanticValidationError

from shared.errors import ValidationError

if TYPE_CHECKING:
    from starlette.requests import Request


class RegisterRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    login: str
    password: str
    nickname: str


class LoginRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    login: str
    password: str


class CreateRoomRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    title: str
    description: str = ""


class MoveRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    position: int = Field(strict=True)


async def parse_body[M: BaseModel](request: Request, model: type[M]) -> M:
    """Decode the JSON body into ``model``. Raises ValidationError on any failure."""
    raw_body = await request.body()
    try:
        body = json.loads(raw_body) if raw_body.strip() else {}
    except (ValueError, UnicodeDecodeError) as e:
        raise ValidationError("invalid JSON body") from e
    if not isinstance(body, dict):
        raise ValidationError("JSON body must be an object")

    try:
        return model.model_validate(body)
    except PydanticValidationError as e:
        first = e.errors()[0]
        field = ".".join(str(part) for part in first["loc"]) or "body"
        raise ValidationError(f"{field}: {first['msg']}") from e
