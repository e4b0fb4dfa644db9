"""Webhook server -- app factory and runner."""

from __future__ import annotations

import logging

from aiohttp import web
from aiohttp.abc import AbstractAccessLogger

from .. import __version__
from ..config.settings import cfg
from ..messaging.router import EventRouter
from ..util.async_helpers import resolve
from .webhook import WebhookEndpoint

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s  %(name)s  %(levelname)s  %(message)s"
ROUTER_KEY = web.AppKey("router", EventRouter)

_QUIET_PATHS = frozenset({"/health"})


class QuietAccessLogger(AbstractAccessLogger):
    """Demotes health-probe log entries to DEBUG."""

    def log(self, request: web.BaseRequest, response: web.StreamResponse, time: float) -> None:
        level = logging.DEBUG if request.path in _QUIET_PATHS else logging.INFO
        self.logger.log(
            level,
            "%s %s %s %s %.3fs",
            request.remote,
            request.method,
            request.path,
            response.status,
            time,
        )


def create_app(router: EventRouter, webhook_path: str | None = None) -> web.Application:
    app = web.Application()
    app[ROUTER_KEY] = router

    WebhookEndpoint(router, webhook_path or cfg.webhook_path).register(app.router)
    app.router.add_get("/health", _health)
    app.on_cleanup.append(_close_client)
    return app


async def _health(_req: web.Request) -> web.Response:
    return web.json_response({"status": "ok", "version": __version__})


async def _close_client(app: web.Application) -> None:
    close = getattr(app[ROUTER_KEY].client, "close", None)
    if close is not None:
        await resolve(close())


def configure_logging(level: str | None = None) -> None:
    logging.basicConfig(level=level or cfg.log_level, format=LOG_FORMAT)


def run(router: EventRouter, port: int | None = None) -> None:
    configure_logging()
    port = port or cfg.bot_port
    if not cfg.credentials_configured:
        logger.warning("LINE_CHANNEL_SECRET / LINE_CHANNEL_ACCESS_TOKEN not set; signatures will not verify")
    logger.info("Starting webhook server on port %d (path %s) ...", port, cfg.webhook_path)
    web.run_app(create_app(router), host="0.0.0.0", port=port, access_log_class=QuietAccessLogger)
