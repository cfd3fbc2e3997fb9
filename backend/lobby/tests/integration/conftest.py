"""Shared test helpers for lobby integration tests."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

if TYPE_CHECKING:
    from collections.abc import Callable

    from starlette.testclient import TestClient

PASSWORD = "securepass123"


@pytest.fixture
def signup(client: TestClient) -> Callable[[str], dict[str, str]]:
    """Register and log in a player; return the Authorization header for them."""

    def _signup(login: str) -> dict[str, str]:
        response = client.post(
            "/api/auth/register",
            json={"login": login, "password": PASSWORD, "nickname": login.title()},
        )
        assert response.status_code == 201, response.text
        response = client.post("/api/auth/login", json={"login": login, "password": PASSWORD})
        assert response.status_code == 200, response.text
        return {"Authorization": f"Bearer {response.json()['access_token']}"}

    return _signup
