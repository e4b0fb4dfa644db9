"""Webhook HTTP server."""

from .app import QuietAccessLogger, create_app, run
from .webhook import WebhookEndpoint

__all__ = ["QuietAccessLogger", "WebhookEndpoint", "create_app", "run"]
