import pytest
from pydantic import ValidationError

from lobby.server.settings import LobbyServerSettings


class TestLobbyServerSettings:
    def test_defaults(self, monkeypatch):
        for name in ("LOBBY_LOG_DIR", "LOBBY_DATABASE_PATH", "LOBBY_DATABASE_BUSY_TIMEOUT_MS", "LOBBY_CORS_ORIGINS"):
            monkeypatch.delenv(name, raising=False)
        settings = LobbyServerSettings()
        assert settings.log_dir == "backend/logs/lobby"
        assert settings.database_path == "backend/data/tictactoe.db"
        assert settings.cors_origins == []
        assert settings.database_busy_timeout_ms == 1000

    def test_database_path_override(self, monkeypatch):
        monkeypatch.setenv("LOBBY_DATABASE_PATH", "/var/lib/tictactoe.db")
        assert LobbyServerSettings().database_path == "/var/lib/tictactoe.db"

    def test_busy_timeout_must_not_be_negative(self, monkeypatch):
        monkeypatch.setenv("LOBBY_DATABASE_BUSY_TIMEOUT_MS", "-1")
        with pytest.raises(ValidationError):
            LobbyServerSettings()

    def test_cors_origins_json_array(self, monkeypatch):
        monkeypatch.setenv("LOBBY_CORS_ORIGINS", '["http://x.com","http://y.com"]')
        assert LobbyServerSettings().cors_origins == ["http://x.com", "http://y.com"]

    def test_cors_origins_csv(self, monkeypatch):
        monkeypatch.setenv("LOBBY_CORS_ORIGINS", "http://x.com, http://y.com")
        assert LobbyServerSettings().cors_origins == ["http://x.com", "http://y.com"]

    def test_cors_origins_malformed_json(self, monkeypatch):
        monkeypatch.setenv("LOBBY_CORS_ORIGINS", "[http://x.com")
        with pytest.raises(ValidationError, match="Invalid JSON array"):
            LobbyServerSettings()

    def test_source_hooks_accept_deferred_annotations(self):
        # The source types are imported for type checking only.
        hints = LobbyServerSettings.settings_customise_sources.__annotations__
        assert hints["init_settings"] == "PydanticBaseSettingsSource"
