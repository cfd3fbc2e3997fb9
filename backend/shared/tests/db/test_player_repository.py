"""Tests for SqlitePlayerRepository."""

from __future__ import annotations

import sqlite3
from unittest.mock import MagicMock

import pytest

from shared.dal.models import Player, PlayerStats
from shared.db.player_repository import SqlitePlayerRepository
from shared.errors import GenericError, NotFoundError, ValidationError

FAKE_HASH = "simple$fakehash"


def _player(player_id: str = "p1", login: str = "alice", nickname: str = "Alice", **stats: int) -> Player:
    return Player(
        player_id=player_id,
        login=login,
        password_hash=FAKE_HASH,
        nickname=nickname,
        stats=PlayerStats(**stats),
    )


@pytest.fixture
def repo(database):
    return SqlitePlayerRepository(database.writer)


class TestCreateAndRead:
    async def test_create_and_get_by_id(self, repo: SqlitePlayerRepository) -> None:
        await repo.create_player(_player())
        assert await repo.get_by_id("p1") == _player()

    async def test_get_by_login_is_case_insensitive(self, repo: SqlitePlayerRepository) -> None:
        await repo.create_player(_player())
        result = await repo.get_by_login("ALICE")
        assert result.player_id == "p1"

    async def test_unknown_player_raises_not_found(self, repo: SqlitePlayerRepository) -> None:
        with pytest.raises(NotFoundError):
            await repo.get_by_id("nobody")
        with pytest.raises(NotFoundError):
            await repo.get_by_login("nobody")

    async def test_duplicate_login_rejected(self, repo: SqlitePlayerRepository) -> None:
        await repo.create_player(_player())
        with pytest.raises(ValidationError, match="already taken"):
            await repo.create_player(_player(player_id="p2", login="Alice"))

    async def test_duplicate_id_rejected(self, repo: SqlitePlayerRepository) -> None:
        await repo.create_player(_player())
        with pytest.raises(ValidationError, match="already exists"):
            await repo.create_player(_player(login="bob"))

    async def test_driver_failure_becomes_generic_error(self) -> None:
        conn = MagicMock()
        conn.execute.side_effect = sqlite3.OperationalError("disk I/O error")
        repo = SqlitePlayerRepository(conn)
        with pytest.raises(GenericError, match="player lookup failed") as exc_info:
            await repo.get_by_id("p1")
        assert isinstance(exc_info.value.__cause__, sqlite3.OperationalError)


class TestUpdateStats:
    async def test_persists_new_stats(self, repo: SqlitePlayerRepository) -> None:
        await repo.create_player(_player())
        await repo.update_stats(_player(wins=2, losses=1, draws=3))

        stats = (await repo.get_by_id("p1")).stats
        assert (stats.wins, stats.losses, stats.draws) == (2, 1, 3)

    async def test_unknown_player_raises_not_found(self, repo: SqlitePlayerRepository) -> None:
        with pytest.raises(NotFoundError):
            await repo.update_stats(_player(player_id="ghost"))


class TestRanking:
    async def test_orders_by_wins_then_draws_then_fewest_losses(self, repo: SqlitePlayerRepository) -> None:
        await repo.create_player(_player("p1", "alice", "Alice", wins=1))
        await repo.create_player(_player("p2", "bob", "Bob", wins=3))
        await repo.create_player(_player("p3", "carol", "Carol", wins=1, draws=2))
        await repo.create_player(_player("p4", "dave", "Dave", wins=1, draws=2, losses=4))

        players, total = await repo.get_ranking(page=1, page_size=10)

        assert total == 4
        assert [p.player_id for p in players] == ["p2", "p3", "p4", "p1"]

    async def test_ties_break_by_nickname(self, repo: SqlitePlayerRepository) -> None:
        await repo.create_player(_player("p1", "zed", "Zed"))
        await repo.create_player(_player("p2", "amy", "Amy"))

        players, _ = await repo.get_ranking(page=1, page_size=10)
        assert [p.nickname for p in players] == ["Amy", "Zed"]

    async def test_pagination(self, repo: SqlitePlayerRepository) -> None:
        for i in range(5):
            await repo.create_player(_player(f"p{i}", f"user{i}", f"User{i}", wins=i))

        page_two, total = await repo.get_ranking(page=2, page_size=2)
        past_end, _ = await repo.get_ranking(page=4, page_size=2)

        assert total == 5
        assert [p.player_id for p in page_two] == ["p2", "p1"]
        assert past_end == []
