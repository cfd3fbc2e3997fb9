"""Service error taxonomy shared by the stores, the game core, and the transport.

The hierarchy is closed: every error raised on purpose is one of the four
subclasses below, and each carries a fixed ``kind`` tag so the transport can
map errors with an exhaustive match instead of isinstance chains.
"""

from enum import StrEnum
from typing import ClassVar


class ErrorKind(StrEnum):
    VALIDATION = "validation"
    NOT_FOUND = "not_found"
    AUTHORIZATION = "authorization"
    GENERIC = "generic"


class GameServiceError(Exception):
    """Base class for all service errors. Use one of the concrete subclasses."""

    kind: ClassVar[ErrorKind]

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class ValidationError(GameServiceError):
    """Bad input or a rule violation. Never worth retrying."""

    kind = ErrorKind.VALIDATION


class NotFoundError(GameServiceError):
    """The addressed room, game, or player does not exist."""

    kind = ErrorKind.NOT_FOUND


class AuthorizationError(GameServiceError):
    """The caller is not a participant of the room or game they address."""

    kind = ErrorKind.AUTHORIZATION


class GenericError(GameServiceError):
    """Store failure or unexpected condition. The unit of work has been rolled back."""

    kind = ErrorKind.GENERIC
