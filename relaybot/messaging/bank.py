"""Message Bank -- per-event accumulator of outbound messages.

A bank holds at most ``max_messages`` messages (the platform's per-request
limit) and delivers them either as one reply to an event's reply token or
as a push to a user/group/room id. ``PostMan`` is the push-oriented
variant used outside of a webhook turn.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from typing import TYPE_CHECKING

from ..config.settings import PLATFORM_MAX_REPLY_MESSAGES
from ..errors import DeliveryFailed, TooManyMessages
from ..util.result import Result
from .base import PlatformModel
from .messages import (
    AudioMessage,
    ImageMessage,
    LocationMessage,
    StickerMessage,
    TextMessage,
    VideoMessage,
)

if TYPE_CHECKING:
    from ..platform.client import PlatformClient

logger = logging.getLogger(__name__)


class MessageBank:
    def __init__(
        self,
        client: PlatformClient,
        max_messages: int = PLATFORM_MAX_REPLY_MESSAGES,
    ) -> None:
        self._client = client
        self._messages: list[PlatformModel] = []
        self.max_messages = max_messages

    def add_message(self, message: PlatformModel) -> None:
        if len(self._messages) >= self.max_messages:
            raise TooManyMessages(self.max_messages)
        self._messages.append(message)

    def add_text_message(self, text: str) -> None:
        self.add_message(TextMessage(text=text))

    def add_sticker_message(self, package_id: str, sticker_id: str) -> None:
        self.add_message(StickerMessage(package_id=package_id, sticker_id=sticker_id))

    def add_location_message(
        self, title: str, address: str, latitude: float, longitude: float
    ) -> None:
        self.add_message(
            LocationMessage(title=title, address=address, latitude=latitude, longitude=longitude)
        )

    def add_audio_message(self, content_url: str, duration: int) -> None:
        self.add_message(AudioMessage(original_content_url=content_url, duration=duration))

    def add_video_message(self, content_url: str, preview_url: str) -> None:
        self.add_message(
            VideoMessage(original_content_url=content_url, preview_image_url=preview_url)
        )

    def add_image_message(self, content_url: str, preview_url: str) -> None:
        self.add_message(
            ImageMessage(original_content_url=content_url, preview_image_url=preview_url)
        )

    @property
    def messages(self) -> tuple[PlatformModel, ...]:
        return tuple(self._messages)

    def clear(self) -> None:
        self._messages.clear()

    def __len__(self) -> int:
        return len(self._messages)

    def __iter__(self) -> Iterator[PlatformModel]:
        return iter(tuple(self._messages))

    async def reply(self, reply_token: str) -> None:
        """Send all messages as one reply; does nothing when empty."""
        if not self._messages:
            return
        if not reply_token:
            raise DeliveryFailed("Cannot reply without a reply token")
        await self._client.send_reply(reply_token, list(self._messages))

    async def push(self, to: str) -> None:
        """Push all messages to *to*, even when there are none."""
        await self._client.send_push(to, list(self._messages))


class PostMan(MessageBank):
    """Accumulates messages and pushes them to one or more targets."""

    async def send_immediately(self, *targets: str) -> Result:
        succeeded: list[str] = []
        for to in targets:
            try:
                await self.push(to)
            except DeliveryFailed as exc:
                logger.warning(
                    "[postman] push to %s failed after %d/%d target(s): %s",
                    to, len(succeeded), len(targets), exc,
                )
                return Result.fail(value=succeeded, error=exc)
            succeeded.append(to)

        self.clear()
        return Result.ok(f"delivered to {len(succeeded)} target(s)", value=succeeded)
