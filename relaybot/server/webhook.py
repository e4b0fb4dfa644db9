"""Webhook endpoint -- POST <webhook path>."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from aiohttp import web

from ..errors import RequestParseFailed, SignatureInvalid
from ..platform.client import SIGNATURE_HEADER

if TYPE_CHECKING:
    from ..messaging.router import EventRouter

logger = logging.getLogger(__name__)


class WebhookEndpoint:
    """Verifies, parses and dispatches incoming webhook batches.

    A bad signature answers 400 and a malformed body 500, before any
    handler runs. Otherwise every event is dispatched in order and the
    answer is 200 whatever the handlers did; their failures only reach the
    router's error handlers.
    """

    def __init__(self, router: EventRouter, path: str = "/callback") -> None:
        self._router = router
        self.path = path

    def register(self, router: web.UrlDispatcher) -> None:
        router.add_post(self.path, self.handle)
        router.add_get(self.path, self._probe)

    async def _probe(self, _req: web.Request) -> web.Response:
        """GET <webhook path> -- simple health probe for the endpoint."""
        return web.json_response({
            "status": "ok",
            "endpoint": self.path,
            "method": "POST required",
            "handlers": len(self._router.handlers),
        })

    async def handle(self, req: web.Request) -> web.Response:
        logger.info(
            "[webhook] POST %s from %s | content-length=%s",
            self.path, req.remote, req.headers.get("Content-Length", "?"),
        )

        try:
            raw_body = await req.read()
        except Exception as exc:
            logger.error("[webhook] Failed to read request body: %s", exc)
            return web.json_response(
                {"status": "error", "message": "Failed to read request body"},
                status=400,
            )

        signature = req.headers.get(SIGNATURE_HEADER, "")
        try:
            events = self._router.client.parse_events(raw_body, signature)
        except SignatureInvalid as exc:
            logger.warning("[webhook] Rejected: %s", exc)
            return web.json_response({"status": "error", "message": str(exc)}, status=400)
        except RequestParseFailed as exc:
            logger.error("[webhook] Failed to parse body: %s | raw=%s", exc, raw_body[:500])
            return web.json_response({"status": "error", "message": str(exc)}, status=500)

        logger.info(
            "[webhook] Dispatching %d event(s): %s",
            len(events), ", ".join(e.type for e in events) or "-",
        )

        try:
            await self._router.dispatch_all(events)
        except Exception as exc:
            logger.exception("[webhook] Error dispatching batch: %s", exc)
            return web.json_response(
                {"status": "error", "message": f"Processing failed: {exc}"},
                status=500,
            )
        return web.Response(status=200)
