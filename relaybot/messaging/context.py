"""Per-event state handed to every handler in the chain."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from ..errors import InvalidUserId
from .bank import MessageBank
from .events import Event, UserProfile

if TYPE_CHECKING:
    from ..platform.client import PlatformClient

logger = logging.getLogger(__name__)


class BotContext:
    """Mutable companion of one immutable event.

    ``params`` holds the placeholders captured by the last successful text
    pattern match, ``data`` is a scratch map for passing values between
    handlers, and ``messages`` collects the reply sent once the chain ends.
    """

    def __init__(
        self,
        client: PlatformClient,
        event: Event,
        messages: MessageBank,
    ) -> None:
        self.client = client
        self.event = event
        self.messages = messages
        self.params: dict[str, str] = {}
        self.data: dict[str, Any] = {}
        self._user_profile: UserProfile | None = None

    def set(self, name: str, value: Any) -> None:
        self.data[name] = value

    def get(self, name: str, default: Any = None) -> Any:
        return self.data.get(name, default)

    @property
    def user_id(self) -> str:
        return self.event.source.user_id

    async def get_user(self) -> UserProfile:
        """Fetch the sender's profile once and cache it for this event."""
        if self._user_profile is not None:
            return self._user_profile
        if not self.user_id:
            raise InvalidUserId()
        logger.debug("[context] fetching profile for %s", self.user_id)
        self._user_profile = await self.client.fetch_profile(self.user_id)
        return self._user_profile
