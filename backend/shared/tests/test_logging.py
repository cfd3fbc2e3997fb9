import json
import logging
from datetime import UTC, datetime
from enum import Enum
from pathlib import Path
from unittest.mock import patch

import pytest
import structlog

from shared.dal.models import GamePhase
from shared.logging import _serialize_enums, setup_logging


@pytest.fixture(autouse=True)
def _cleanup_root_logger():
    """Close and remove all handlers from the root logger after each test."""
    yield
    root = logging.getLogger()
    for handler in root.handlers[:]:
        handler.close()
        root.removeHandler(handler)


@pytest.fixture(autouse=True)
def _allow_file_logging():
    """Disable the _is_test guard so logging tests can create real file handlers."""
    with patch("shared.logging._is_test", return_value=False):
        yield


class TestSetupLogging:
    def test_configures_stdout_handler(self, monkeypatch):
        monkeypatch.delenv("LOG_LEVEL", raising=False)
        setup_logging()
        root = logging.getLogger()

        assert root.level == logging.INFO
        assert len(root.handlers) == 1
        handler = root.handlers[0]
        assert isinstance(handler, logging.StreamHandler)
        assert isinstance(handler.formatter, structlog.stdlib.ProcessorFormatter)

    def test_file_handler_name_has_prefix_and_timestamp(self, tmp_path):
        fixed_time = datetime(2025, 3, 15, 10, 30, 45, tzinfo=UTC)
        with patch("shared.logging.datetime") as mock_dt:
            mock_dt.now.return_value = fixed_time
            log_path = setup_logging(log_dir=tmp_path / "lobby")

        assert log_path is not None
        assert log_path.name == "lobby-2025-03-15_10-30-45.log"
        file_handler = logging.getLogger().handlers[1]
        assert isinstance(file_handler, logging.FileHandler)
        assert Path(file_handler.baseFilename) == log_path

    def test_custom_file_prefix(self, tmp_path):
        log_path = setup_logging(log_dir=tmp_path, file_prefix="register")
        assert log_path is not None
        assert log_path.name.startswith("register-")

    def test_returns_none_without_log_dir(self):
        assert setup_logging() is None

    def test_skips_file_handler_under_pytest(self, tmp_path):
        with patch("shared.logging._is_test", return_value=True):
            assert setup_logging(log_dir=tmp_path / "lobby") is None
        assert not (tmp_path / "lobby").exists()

    def test_creates_nested_log_directory(self, tmp_path):
        log_dir = tmp_path / "nested" / "dir"
        log_path = setup_logging(log_dir=str(log_dir))

        structlog.get_logger("test.nested").info("nested log")

        assert log_dir.is_dir()
        assert log_path is not None
        assert "nested log" in log_path.read_text()

    def test_clears_existing_handlers_on_repeated_calls(self):
        setup_logging()
        setup_logging()
        assert len(logging.getLogger().handlers) == 1

    def test_log_level_from_env(self, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", "debug")
        setup_logging()
        assert logging.getLogger().level == logging.DEBUG

    def test_explicit_level_wins_over_env(self, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", "debug")
        setup_logging(level=logging.WARNING)
        assert logging.getLogger().level == logging.WARNING

    def test_invalid_log_level_raises(self, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", "bogus")
        with pytest.raises(ValueError, match="Invalid LOG_LEVEL"):
            setup_logging()

    def test_invalid_log_format_raises(self, monkeypatch):
        monkeypatch.setenv("LOG_FORMAT", "xml")
        with pytest.raises(ValueError, match="Invalid LOG_FORMAT"):
            setup_logging()

    def test_json_lines_carry_bound_context(self, tmp_path, monkeypatch):
        monkeypatch.setenv("LOG_FORMAT", "json")
        log_path = setup_logging(log_dir=tmp_path)

        with structlog.contextvars.bound_contextvars(room_id="r1", player_id="p1"):
            structlog.get_logger("test.json").info("game completed", phase=GamePhase.COMPLETED)

        assert log_path is not None
        parsed = json.loads(log_path.read_text().strip().splitlines()[-1])
        assert parsed["event"] == "game completed"
        assert parsed["room_id"] == "r1"
        assert parsed["player_id"] == "p1"
        assert parsed["phase"] == "completed"

    def test_uvicorn_loggers_propagate_to_root(self):
        uvicorn_error = logging.getLogger("uvicorn.error")
        uvicorn_error.addHandler(logging.NullHandler())
        uvicorn_error.propagate = False

        setup_logging()

        assert uvicorn_error.handlers == []
        assert uvicorn_error.propagate is True
        assert logging.getLogger("uvicorn.access").level == logging.WARNING


class TestSerializeEnums:
    class _Color(Enum):
        RED = "red"
        BLUE = "blue"

    def test_replaces_enum_with_value(self):
        result = _serialize_enums(None, "", {"action": self._Color.RED, "msg": "hello"})
        assert result == {"action": "red", "msg": "hello"}

    def test_replaces_enum_inside_dict_value(self):
        result = _serialize_enums(None, "", {"data": {"color": self._Color.BLUE, "count": 3}})
        assert result["data"] == {"color": "blue", "count": 3}
