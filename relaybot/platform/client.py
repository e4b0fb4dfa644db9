"""Chat-platform client -- the narrow capability surface the router uses.

``PlatformClient`` is what the rest of the package depends on.
``LineClient`` implements it over the LINE Messaging API with aiohttp.
"""

from __future__ import annotations

import asyncio
import base64
import hashlib
import hmac
import logging
from collections.abc import Sequence
from typing import Any, Protocol

import aiohttp
from pydantic import ValidationError

from ..config.settings import DEFAULT_API_ENDPOINT, DEFAULT_DATA_ENDPOINT, Settings
from ..errors import (
    ContentFetchFailed,
    DeliveryFailed,
    PlatformError,
    ProfileFetchFailed,
    RequestParseFailed,
    SignatureInvalid,
)
from ..messaging.base import PlatformModel
from ..messaging.events import Event, UserProfile, WebhookPayload

logger = logging.getLogger(__name__)

SIGNATURE_HEADER = "X-Line-Signature"


class PlatformClient(Protocol):
    def parse_events(self, body: bytes, signature: str) -> list[Event]: ...

    async def fetch_content(self, message_id: str) -> bytes: ...

    async def fetch_profile(self, user_id: str) -> UserProfile: ...

    async def send_reply(self, reply_token: str, messages: Sequence[PlatformModel]) -> None: ...

    async def send_push(self, to: str, messages: Sequence[PlatformModel]) -> None: ...


def compute_signature(channel_secret: str, body: bytes) -> str:
    digest = hmac.new(channel_secret.encode(), body, hashlib.sha256).digest()
    return base64.b64encode(digest).decode()


def verify_signature(channel_secret: str, body: bytes, signature: str) -> bool:
    if not signature:
        return False
    return hmac.compare_digest(compute_signature(channel_secret, body), signature)


def parse_webhook(body: bytes) -> list[Event]:
    try:
        return list(WebhookPayload.model_validate_json(body).events)
    except ValidationError as exc:
        raise RequestParseFailed(f"Invalid webhook payload: {exc.error_count()} error(s)") from exc


class LineClient:
    """aiohttp-backed LINE Messaging API client.

    The HTTP session is created on first use inside the running loop; call
    :meth:`close` (or use ``async with``) to release it.
    """

    def __init__(
        self,
        channel_secret: str,
        channel_access_token: str,
        *,
        api_endpoint: str = DEFAULT_API_ENDPOINT,
        data_endpoint: str = DEFAULT_DATA_ENDPOINT,
        timeout: float = 30.0,
        session: aiohttp.ClientSession | None = None,
    ) -> None:
        self._channel_secret = channel_secret
        self._token = channel_access_token
        self.api_endpoint = api_endpoint.rstrip("/")
        self.data_endpoint = data_endpoint.rstrip("/")
        self._timeout = timeout
        self._session = session
        self._owns_session = session is None

    @classmethod
    def from_settings(cls, settings: Settings) -> LineClient:
        line = settings.line
        return cls(
            line.channel_secret,
            line.channel_access_token,
            api_endpoint=line.api_endpoint,
            data_endpoint=line.data_endpoint,
            timeout=line.timeout_seconds,
        )

    # -- lifecycle ---------------------------------------------------------

    def _get_session(self) -> aiohttp.ClientSession:
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(
                timeout=aiohttp.ClientTimeout(total=self._timeout),
            )
            self._owns_session = True
        return self._session

    async def close(self) -> None:
        if self._session is not None and self._owns_session and not self._session.closed:
            await self._session.close()
        self._session = None

    async def __aenter__(self) -> LineClient:
        return self

    async def __aexit__(self, *exc: object) -> None:
        await self.close()

    # -- capabilities ------------------------------------------------------

    def parse_events(self, body: bytes, signature: str) -> list[Event]:
        if not verify_signature(self._channel_secret, body, signature):
            raise SignatureInvalid("Webhook signature mismatch")
        return parse_webhook(body)

    async def fetch_content(self, message_id: str) -> bytes:
        url = f"{self.data_endpoint}/v2/bot/message/{message_id}/content"
        return await self._request("GET", url, ContentFetchFailed)

    async def fetch_profile(self, user_id: str) -> UserProfile:
        url = f"{self.api_endpoint}/v2/bot/profile/{user_id}"
        body = await self._request("GET", url, ProfileFetchFailed)
        try:
            return UserProfile.model_validate_json(body)
        except ValidationError as exc:
            raise ProfileFetchFailed(f"Unexpected profile payload for {user_id}") from exc

    async def send_reply(self, reply_token: str, messages: Sequence[PlatformModel]) -> None:
        payload = {"replyToken": reply_token, "messages": [m.to_payload() for m in messages]}
        await self._request("POST", f"{self.api_endpoint}/v2/bot/message/reply", DeliveryFailed, json=payload)

    async def send_push(self, to: str, messages: Sequence[PlatformModel]) -> None:
        payload = {"to": to, "messages": [m.to_payload() for m in messages]}
        await self._request("POST", f"{self.api_endpoint}/v2/bot/message/push", DeliveryFailed, json=payload)

    # -- transport ---------------------------------------------------------

    async def _request(
        self,
        method: str,
        url: str,
        error_cls: type[PlatformError],
        **kwargs: Any,
    ) -> bytes:
        headers = {"Authorization": f"Bearer {self._token}"}
        logger.debug("[line] %s %s", method, url)
        try:
            async with self._get_session().request(method, url, headers=headers, **kwargs) as resp:
                body = await resp.read()
                if resp.status >= 400:
                    logger.warning(
                        "[line] %s %s -> HTTP %d: %s", method, url, resp.status, body[:200],
                    )
                    raise error_cls(f"{method} {url} returned HTTP {resp.status}")
                return body
        except (aiohttp.ClientError, asyncio.TimeoutError) as exc:
            raise error_cls(f"{method} {url} failed: {exc}") from exc
