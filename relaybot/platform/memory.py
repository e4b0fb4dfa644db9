"""In-memory platform client for the local console and for tests."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field

from ..errors import ContentFetchFailed, DeliveryFailed, ProfileFetchFailed
from ..messaging.base import PlatformModel
from ..messaging.events import Event, UserProfile
from .client import parse_webhook


@dataclass
class Delivery:
    target: str
    messages: list[PlatformModel]


@dataclass
class InMemoryClient:
    """Serves content and profiles from dicts and records every delivery.

    ``parse_events`` skips signature checks. Targets listed in
    ``failing_targets`` make ``send_push``/``send_reply`` raise
    :class:`DeliveryFailed`.
    """

    contents: dict[str, bytes] = field(default_factory=dict)
    profiles: dict[str, UserProfile] = field(default_factory=dict)
    failing_targets: set[str] = field(default_factory=set)
    replies: list[Delivery] = field(default_factory=list)
    pushes: list[Delivery] = field(default_factory=list)
    profile_lookups: int = 0

    def parse_events(self, body: bytes, signature: str) -> list[Event]:
        return parse_webhook(body)

    async def fetch_content(self, message_id: str) -> bytes:
        try:
            return self.contents[message_id]
        except KeyError:
            raise ContentFetchFailed(f"No content for message {message_id}") from None

    async def fetch_profile(self, user_id: str) -> UserProfile:
        self.profile_lookups += 1
        try:
            return self.profiles[user_id]
        except KeyError:
            raise ProfileFetchFailed(f"No profile for user {user_id}") from None

    async def send_reply(self, reply_token: str, messages: Sequence[PlatformModel]) -> None:
        if reply_token in self.failing_targets:
            raise DeliveryFailed(f"Reply to {reply_token} rejected")
        self.replies.append(Delivery(reply_token, list(messages)))

    async def send_push(self, to: str, messages: Sequence[PlatformModel]) -> None:
        if to in self.failing_targets:
            raise DeliveryFailed(f"Push to {to} rejected")
        self.pushes.append(Delivery(to, list(messages)))
