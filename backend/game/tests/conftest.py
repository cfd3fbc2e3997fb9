"""Shared fixtures for game tests: registered players and a wired orchestrator."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from game.session.orchestrator import SessionOrchestrator
from game.tests.helpers.builders import GUEST, HOST, OTHER, HostFirstRandom, make_player

if TYPE_CHECKING:
    from shared.dal.transaction import Stores


@pytest.fixture
async def players(runner) -> None:
    """Register HOST, GUEST and OTHER with zero stats."""

    async def _create(stores: Stores) -> None:
        for pid in (HOST, GUEST, OTHER):
            await stores.players.create_player(make_player(pid))

    await runner.run(_create)


@pytest.fixture
def orchestrator(runner, stores, players) -> SessionOrchestrator:  # noqa: ARG001
    return SessionOrchestrator(runner, stores, rng=HostFirstRandom())
