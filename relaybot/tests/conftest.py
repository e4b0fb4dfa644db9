"""Shared pytest fixtures for relaybot tests."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from relaybot.messaging.events import Event, parse_event
from relaybot.messaging.router import EventRouter
from relaybot.platform.memory import InMemoryClient

_FIXTURES = Path(__file__).parent / "fixtures"

_CONFIG_KEYS = (
    "LINE_CHANNEL_SECRET",
    "LINE_CHANNEL_ACCESS_TOKEN",
    "LINE_API_ENDPOINT",
    "LINE_DATA_ENDPOINT",
    "HTTP_TIMEOUT_SECONDS",
    "BOT_PORT",
    "WEBHOOK_PATH",
    "MAX_REPLY_MESSAGES",
    "LOG_LEVEL",
)


@pytest.fixture(autouse=True)
def _isolate_data_dir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    data_dir = tmp_path / "data"
    data_dir.mkdir()
    monkeypatch.setenv("RELAYBOT_DATA_DIR", str(data_dir))
    monkeypatch.setenv("DOTENV_PATH", str(tmp_path / ".env"))
    for key in _CONFIG_KEYS:
        monkeypatch.delenv(key, raising=False)
    return data_dir


@pytest.fixture(autouse=True)
def _reset_singletons(_isolate_data_dir: Path):
    from relaybot.util.singletons import reset_all_singletons

    reset_all_singletons()
    yield
    reset_all_singletons()


@pytest.fixture()
def data_dir(_isolate_data_dir: Path) -> Path:
    return _isolate_data_dir


@pytest.fixture()
def client() -> InMemoryClient:
    return InMemoryClient()


@pytest.fixture()
def router(client: InMemoryClient) -> EventRouter:
    return EventRouter(client)


@pytest.fixture()
def webhook_body() -> bytes:
    return (_FIXTURES / "webhook_batch.json").read_bytes()


@pytest.fixture()
def webhook_events(webhook_body: bytes) -> list[Event]:
    return [parse_event(e) for e in json.loads(webhook_body)["events"]]

