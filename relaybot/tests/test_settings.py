"""Tests for the settings layer."""

from __future__ import annotations

from pathlib import Path

import pytest

from relaybot.config import settings as settings_mod
from relaybot.config.settings import (
    DEFAULT_API_ENDPOINT,
    DEFAULT_DATA_ENDPOINT,
    PLATFORM_MAX_REPLY_MESSAGES,
    Settings,
)


class TestDefaults:
    def test_defaults(self) -> None:
        s = Settings()
        assert s.channel_secret == ""
        assert s.api_endpoint == DEFAULT_API_ENDPOINT
        assert s.data_endpoint == DEFAULT_DATA_ENDPOINT
        assert s.bot_port == 8080
        assert s.webhook_path == "/callback"
        assert s.max_reply_messages == PLATFORM_MAX_REPLY_MESSAGES
        assert s.http_timeout == 30.0
        assert s.log_level == "INFO"
        assert not s.credentials_configured

    def test_data_dir_from_env(self, data_dir: Path) -> None:
        s = Settings()
        assert s.data_dir == data_dir
        assert s.console_history_path == data_dir / ".console_history"


class TestSources:
    def test_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("LINE_CHANNEL_SECRET", "secret")
        monkeypatch.setenv("LINE_CHANNEL_ACCESS_TOKEN", "token")
        monkeypatch.setenv("BOT_PORT", "9001")
        monkeypatch.setenv("LINE_API_ENDPOINT", "http://localhost:9999/")
        monkeypatch.setenv("LOG_LEVEL", "debug")
        s = Settings()
        assert s.credentials_configured
        assert s.bot_port == 9001
        assert s.api_endpoint == "http://localhost:9999"
        assert s.log_level == "DEBUG"

    def test_dotenv_wins_over_environment(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        (tmp_path / ".env").write_text("WEBHOOK_PATH=/hook\n")
        monkeypatch.setenv("WEBHOOK_PATH", "/ignored")
        assert Settings().webhook_path == "/hook"

    def test_write_env_reloads(self) -> None:
        s = Settings()
        s.write_env(LINE_CHANNEL_SECRET="abc", LINE_CHANNEL_ACCESS_TOKEN="xyz")
        assert s.channel_secret == "abc"
        assert s.credentials_configured

    def test_data_dir_dotenv(self, data_dir: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("DOTENV_PATH")
        (data_dir / ".env").write_text("MAX_REPLY_MESSAGES=3\n")
        assert Settings().max_reply_messages == 3


class TestGroupedViews:
    def test_line_config(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("LINE_CHANNEL_SECRET", "secret")
        monkeypatch.setenv("HTTP_TIMEOUT_SECONDS", "5")
        line = Settings().line
        assert line.channel_secret == "secret"
        assert line.timeout_seconds == 5.0

    def test_server_config(self) -> None:
        server = Settings().server
        assert server.port == 8080
        assert server.webhook_path == "/callback"


class TestSingleton:
    def test_reset_rebuilds(self, monkeypatch: pytest.MonkeyPatch) -> None:
        from relaybot.util.singletons import reset_all_singletons

        before = settings_mod.cfg
        monkeypatch.setenv("BOT_PORT", "7000")
        reset_all_singletons()
        assert settings_mod.cfg is not before
        assert settings_mod.cfg.bot_port == 7000
