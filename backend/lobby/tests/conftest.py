"""Shared fixtures for lobby tests."""

import os

import pytest
from starlette.testclient import TestClient

from lobby.server.app import create_app
from lobby.server.settings import LobbyServerSettings
from shared.auth.settings import AuthSettings

# AuthSettings requires AUTH_TOKEN_SECRET. Set a test default
# before any AuthSettings is instantiated.
os.environ.setdefault("AUTH_TOKEN_SECRET", "test-secret")


@pytest.fixture
def token_secret() -> str:
    return "lobby-test-secret"


@pytest.fixture
def client(tmp_path, token_secret):
    app = create_app(
        settings=LobbyServerSettings(database_path=str(tmp_path / "lobby.db"), log_dir=None),
        auth_settings=AuthSettings(token_secret=token_secret, password_hasher="simple"),
    )
    with TestClient(app) as test_client:
        yield test_client
