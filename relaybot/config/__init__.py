"""Runtime configuration."""

from .settings import LineConfig, ServerConfig, Settings, cfg

__all__ = ["LineConfig", "ServerConfig", "Settings", "cfg"]
