"""Application settings -- reads from environment and ``.env`` file.

All configuration is consolidated here.  Grouped dataclasses keep
related settings together without creating separate modules.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import ClassVar

from ..util.env_file import EnvFile
from ..util.singletons import register_singleton

DEFAULT_API_ENDPOINT = "https://api.line.me"
DEFAULT_DATA_ENDPOINT = "https://api-data.line.me"
PLATFORM_MAX_REPLY_MESSAGES = 5


@dataclass(frozen=True)
class LineConfig:
    channel_secret: str = ""
    channel_access_token: str = ""
    api_endpoint: str = DEFAULT_API_ENDPOINT
    data_endpoint: str = DEFAULT_DATA_ENDPOINT
    timeout_seconds: float = 30.0


@dataclass(frozen=True)
class ServerConfig:
    port: int = 8080
    webhook_path: str = "/callback"


class Settings:
    """Runtime configuration sourced from environment variables and ``.env``."""

    _DATA_DIR_ENV: ClassVar[str] = "RELAYBOT_DATA_DIR"

    def __init__(self) -> None:
        # Resolve .env path: explicit DOTENV_PATH > data_dir/.env > CWD/.env
        dotenv = os.getenv("DOTENV_PATH")
        if not dotenv:
            data_dir = os.getenv(self._DATA_DIR_ENV)
            dotenv = str(Path(data_dir) / ".env") if data_dir else ".env"
        self.env = EnvFile(dotenv)
        self.reload()

    def reload(self) -> None:
        """Re-read the ``.env`` file and environment variables."""
        e = self._read

        self.channel_secret: str = e("LINE_CHANNEL_SECRET")
        self.channel_access_token: str = e("LINE_CHANNEL_ACCESS_TOKEN")
        self.api_endpoint: str = (e("LINE_API_ENDPOINT") or DEFAULT_API_ENDPOINT).rstrip("/")
        self.data_endpoint: str = (e("LINE_DATA_ENDPOINT") or DEFAULT_DATA_ENDPOINT).rstrip("/")
        self.http_timeout: float = float(e("HTTP_TIMEOUT_SECONDS") or "30")

        self.bot_port: int = int(e("BOT_PORT") or "8080")
        self.webhook_path: str = e("WEBHOOK_PATH") or "/callback"
        self.max_reply_messages: int = int(
            e("MAX_REPLY_MESSAGES") or str(PLATFORM_MAX_REPLY_MESSAGES)
        )
        self.log_level: str = (e("LOG_LEVEL") or "INFO").upper()

    # -- grouped views -----------------------------------------------------

    @property
    def line(self) -> LineConfig:
        return LineConfig(
            channel_secret=self.channel_secret,
            channel_access_token=self.channel_access_token,
            api_endpoint=self.api_endpoint,
            data_endpoint=self.data_endpoint,
            timeout_seconds=self.http_timeout,
        )

    @property
    def server(self) -> ServerConfig:
        return ServerConfig(port=self.bot_port, webhook_path=self.webhook_path)

    # -- derived paths -----------------------------------------------------

    @property
    def data_dir(self) -> Path:
        return Path(os.getenv(self._DATA_DIR_ENV, str(Path.home() / ".relaybot")))

    @property
    def console_history_path(self) -> Path:
        return self.data_dir / ".console_history"

    @property
    def credentials_configured(self) -> bool:
        return bool(self.channel_secret and self.channel_access_token)

    # -- helpers -----------------------------------------------------------

    def _read(self, key: str) -> str:
        return self.env.read(key) or os.getenv(key, "")

    def ensure_dirs(self) -> None:
        self.data_dir.mkdir(parents=True, exist_ok=True)

    def write_env(self, **kwargs: str) -> None:
        self.env.write(**kwargs)
        self.reload()


# Module-level singleton
cfg = Settings()


def _reset_cfg() -> None:
    global cfg
    cfg = Settings()


register_singleton(_reset_cfg, name="relaybot.config.settings.cfg")
