"""Register a player account from the command line.

Usage: uv run python bin/register-player.py <login> <nickname>

The password is read from the terminal without echo.
"""

import asyncio
import getpass
import sys
from pathlib import Path

# Add backend to path for imports
sys.path.insert(0, str(Path(__file__).resolve().parent.parent / "backend"))

from lobby.server.settings import LobbyServerSettings
from shared.auth.password import BcryptHasher
from shared.auth.service import AuthService
from shared.db import Database, SqliteTransactionRunner
from shared.errors import GameServiceError


async def main() -> None:
    if len(sys.argv) != 3:  # noqa: PLR2004
        print(f"Usage: {sys.argv[0]} <login> <nickname>")
        sys.exit(1)

    login, nickname = sys.argv[1], sys.argv[2]
    password = getpass.getpass("Password: ")
    if password != getpass.getpass("Repeat password: "):
        print("Error: passwords do not match")
        sys.exit(1)

    settings = LobbyServerSettings()
    db = Database(settings.database_path, busy_timeout_ms=settings.database_busy_timeout_ms)
    db.connect()

    try:
        # Registration never issues tokens, so no secret is needed here.
        auth_service = AuthService(
            SqliteTransactionRunner(db),
            db.stores(),
            password_hasher=BcryptHasher(),
            token_secret="unused",  # noqa: S106
        )
        try:
            player = await auth_service.register(login, password, nickname)
        except GameServiceError as e:
            print(f"Error: {e.message}")
            sys.exit(1)

        print(f"Player registered: {player.login} ({player.nickname}, id: {player.player_id})")
    finally:
        db.close()


if __name__ == "__main__":
    asyncio.run(main())
