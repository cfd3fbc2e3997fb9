"""Password hashing behind a small protocol.

BcryptHasher is the production hasher. bcrypt is CPU-bound (~100ms per call),
so both hashing and verification run in a worker thread via anyio to keep the
event loop responsive while players register and log in.

SimpleHasher stores a salted-free SHA-256 digest behind a ``simple$`` prefix.
It exists so test suites can register players without paying bcrypt's cost.
"""

from __future__ import annotations

import hashlib
from typing import Protocol, runtime_checkable

import bcrypt
from anyio import to_thread


@runtime_checkable
class PasswordHasher(Protocol):
    async def hash(self, plain: str) -> str: ...

    async def verify(self, plain: str, hashed: str) -> bool: ...


class BcryptHasher:
    def __init__(self, rounds: int = 12) -> None:
        self._rounds = rounds

    async def hash(self, plain: str) -> str:
        secret = plain.encode("utf-8")
        salt = bcrypt.gensalt(rounds=self._rounds)
        digest = await to_thread.run_sync(bcrypt.hashpw, secret, salt)
        return digest.decode("utf-8")

    async def verify(self, plain: str, hashed: str) -> bool:
        """Return False for malformed hashes instead of raising."""
        try:
            return await to_thread.run_sync(bcrypt.checkpw, plain.encode("utf-8"), hashed.encode("utf-8"))
        except ValueError:
            return False


_SIMPLE_PREFIX = "simple$"


class SimpleHasher:
    """Test-only hasher. Never configure it in production."""

    async def hash(self, plain: str) -> str:
        return _SIMPLE_PREFIX + hashlib.sha256(plain.encode("utf-8")).hexdigest()

    async def verify(self, plain: str, hashed: str) -> bool:
        return hashed.startswith(_SIMPLE_PREFIX) and hashed == await self.hash(plain)


def get_hasher(name: str = "bcrypt") -> PasswordHasher:
    """Return a PasswordHasher by name ("bcrypt" or "simple")."""
    match name:
        case "bcrypt":
            return BcryptHasher()
        case "simple":
            return SimpleHasher()
        case _:
            raise ValueError(f"Unknown password hasher: {name!r}")
