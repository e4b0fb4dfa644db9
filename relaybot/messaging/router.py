"""Event router -- ordered, short-circuiting handler chain.

Every event gets a fresh :class:`BotContext` and is passed through the
registered handlers in registration order. A handler reports its outcome
either as a bool (``True`` = continue with the next handler) or as a
``(continue, error)`` pair; raising is the same as returning an error.
Any error is handed to every error handler and ends the chain. Once the
chain ends the context's Message Bank is flushed as the event's reply.

Typed registrations (``on_text``, ``on_image``, ``on_join`` ...) wrap the
handler in a filter that simply continues when the event is of another
kind, so handlers for different kinds can live in one chain.
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable, Iterable
from typing import TYPE_CHECKING, Any, TypeVar, Union

from ..config import settings
from ..errors import UnsupportedJoinSource
from ..util.async_helpers import resolve
from .bank import MessageBank
from .context import BotContext
from .events import (
    AudioContent,
    BeaconEvent,
    BeaconType,
    Event,
    FollowEvent,
    ImageContent,
    JoinEvent,
    LeaveEvent,
    LocationContent,
    MessageEvent,
    PostbackEvent,
    SourceType,
    StickerContent,
    TextContent,
    UnfollowEvent,
    VideoContent,
)
from .patterns import TextPattern

if TYPE_CHECKING:
    from ..platform.client import PlatformClient

logger = logging.getLogger(__name__)

Outcome = Union[bool, tuple[bool, BaseException | None], None]
MaybeAwaitable = Union[Outcome, Awaitable[Outcome]]

EventHandler = Callable[[BotContext], MaybeAwaitable]
TextHandler = Callable[[BotContext, str], MaybeAwaitable]
TextFilter = Callable[[BotContext, str], Union[bool, Awaitable[bool]]]
BinaryDataHandler = Callable[[BotContext, bytes], MaybeAwaitable]
LocationHandler = Callable[[BotContext, LocationContent], MaybeAwaitable]
StickerHandler = Callable[[BotContext, StickerContent], MaybeAwaitable]
JoinHandler = Callable[[BotContext, str, str], MaybeAwaitable]
LeaveHandler = Callable[[BotContext, str], MaybeAwaitable]
PostbackHandler = Callable[[BotContext, str], MaybeAwaitable]
BeaconHandler = Callable[[BotContext, str], MaybeAwaitable]
ErrorHandler = Callable[[BotContext, BaseException], Union[None, Awaitable[None]]]

H = TypeVar("H", bound=Callable[..., Any])

_JOINABLE = (SourceType.GROUP, SourceType.ROOM)


def _unpack(outcome: Outcome) -> tuple[bool, BaseException | None]:
    if isinstance(outcome, tuple):
        proceed, error = outcome
        return bool(proceed), error
    return bool(outcome), None


def _message_content(event: Event, kind: type) -> Any:
    if isinstance(event, MessageEvent) and isinstance(event.message, kind):
        return event.message
    return None


class EventRouter:
    def __init__(self, client: PlatformClient, max_messages: int | None = None) -> None:
        self.client = client
        # MAX_REPLY_MESSAGES unless given explicitly
        self.max_messages = max_messages or settings.cfg.max_reply_messages
        self._handlers: list[EventHandler] = []
        self._error_handlers: list[ErrorHandler] = []

    @property
    def handlers(self) -> tuple[EventHandler, ...]:
        return tuple(self._handlers)

    @property
    def error_handlers(self) -> tuple[ErrorHandler, ...]:
        return tuple(self._error_handlers)

    def new_context(self, event: Event) -> BotContext:
        bank = MessageBank(self.client, max_messages=self.max_messages)
        return BotContext(self.client, event, bank)

    # -- dispatch ----------------------------------------------------------

    async def dispatch(self, event: Event) -> BotContext:
        ctx = self.new_context(event)
        logger.debug("[router] dispatching %s event through %d handler(s)", event.type, len(self._handlers))

        for handler in self._handlers:
            try:
                proceed, error = _unpack(await resolve(handler(ctx)))
            except Exception as exc:
                proceed, error = False, exc
            if error is not None:
                await self._report(ctx, error)
                break
            if not proceed:
                break

        try:
            await ctx.messages.reply(event.reply_token)
        except Exception as exc:
            await self._report(ctx, exc)
        return ctx

    async def dispatch_all(self, events: Iterable[Event]) -> list[BotContext]:
        """Dispatch *events* one at a time, each to completion."""
        return [await self.dispatch(event) for event in events]

    async def _report(self, ctx: BotContext, error: BaseException) -> None:
        if not self._error_handlers:
            logger.error("[router] unhandled %s event error: %s", ctx.event.type, error, exc_info=error)
            return
        for error_handler in self._error_handlers:
            try:
                await resolve(error_handler(ctx, error))
            except Exception:
                logger.exception("[router] error handler %r raised", error_handler)

    # -- registration ------------------------------------------------------

    def on_event(self, handler: H) -> H:
        self._handlers.append(handler)
        return handler

    def on_error(self, handler: H) -> H:
        self._error_handlers.append(handler)
        return handler

    def on_text(self, handler: H) -> H:
        async def wrapper(ctx: BotContext) -> Outcome:
            content = _message_content(ctx.event, TextContent)
            if content is None:
                return True
            return await resolve(handler(ctx, content.text))

        self.on_event(wrapper)
        return handler

    def on_filtered_text(self, text_filter: TextFilter, handler: TextHandler | None = None) -> Any:
        """Register *handler* for text messages accepted by *text_filter*.

        Without *handler* this returns a decorator.
        """

        def register(fn: H) -> H:
            async def wrapper(ctx: BotContext) -> Outcome:
                content = _message_content(ctx.event, TextContent)
                if content is None:
                    return True
                if not await resolve(text_filter(ctx, content.text)):
                    return True
                return await resolve(fn(ctx, content.text))

            self.on_event(wrapper)
            return fn

        return register(handler) if handler is not None else register

    def on_text_with(self, template: str, handler: TextHandler | None = None) -> Any:
        """Register *handler* for text matching a ``{{name}}`` template.

        Captured placeholders replace ``ctx.params`` before the handler
        runs. Without *handler* this returns a decorator.
        """
        pattern = TextPattern(template)

        def text_filter(ctx: BotContext, text: str) -> bool:
            params = pattern.match(text)
            if params is None:
                return False
            ctx.params = params
            return True

        return self.on_filtered_text(text_filter, handler)

    def _on_binary(self, kind: type, handler: BinaryDataHandler) -> None:
        async def wrapper(ctx: BotContext) -> Outcome:
            content = _message_content(ctx.event, kind)
            if content is None:
                return True
            data = await ctx.client.fetch_content(content.id)
            return await resolve(handler(ctx, data))

        self.on_event(wrapper)

    def on_image(self, handler: H) -> H:
        self._on_binary(ImageContent, handler)
        return handler

    def on_video(self, handler: H) -> H:
        self._on_binary(VideoContent, handler)
        return handler

    def on_audio(self, handler: H) -> H:
        self._on_binary(AudioContent, handler)
        return handler

    def on_location(self, handler: H) -> H:
        async def wrapper(ctx: BotContext) -> Outcome:
            content = _message_content(ctx.event, LocationContent)
            if content is None:
                return True
            return await resolve(handler(ctx, content))

        self.on_event(wrapper)
        return handler

    def on_sticker(self, handler: H) -> H:
        async def wrapper(ctx: BotContext) -> Outcome:
            content = _message_content(ctx.event, StickerContent)
            if content is None:
                return True
            return await resolve(handler(ctx, content))

        self.on_event(wrapper)
        return handler

    def on_follow(self, handler: H) -> H:
        async def wrapper(ctx: BotContext) -> Outcome:
            if not isinstance(ctx.event, FollowEvent):
                return True
            return await resolve(handler(ctx))

        self.on_event(wrapper)
        return handler

    def on_unfollow(self, handler: H) -> H:
        async def wrapper(ctx: BotContext) -> Outcome:
            if not isinstance(ctx.event, UnfollowEvent):
                return True
            return await resolve(handler(ctx))

        self.on_event(wrapper)
        return handler

    def on_join(self, handler: H) -> H:
        """Handler receives ``(ctx, source_type, group_or_room_id)``."""

        async def wrapper(ctx: BotContext) -> Outcome:
            if not isinstance(ctx.event, JoinEvent):
                return True
            source = ctx.event.source
            if source.type not in _JOINABLE:
                raise UnsupportedJoinSource(source.type.value)
            return await resolve(handler(ctx, source.type.value, source.id))

        self.on_event(wrapper)
        return handler

    def on_leave(self, handler: H) -> H:
        """Handler receives ``(ctx, group_id)``; only group sources are valid."""

        async def wrapper(ctx: BotContext) -> Outcome:
            if not isinstance(ctx.event, LeaveEvent):
                return True
            source = ctx.event.source
            if source.type is not SourceType.GROUP:
                raise UnsupportedJoinSource(source.type.value)
            return await resolve(handler(ctx, source.group_id))

        self.on_event(wrapper)
        return handler

    def on_postback(self, handler: H) -> H:
        async def wrapper(ctx: BotContext) -> Outcome:
            if not isinstance(ctx.event, PostbackEvent):
                return True
            return await resolve(handler(ctx, ctx.event.postback.data))

        self.on_event(wrapper)
        return handler

    def _on_beacon(self, beacon_type: BeaconType, handler: BeaconHandler) -> None:
        async def wrapper(ctx: BotContext) -> Outcome:
            event = ctx.event
            if not isinstance(event, BeaconEvent) or event.beacon.type is not beacon_type:
                return True
            return await resolve(handler(ctx, event.beacon.hwid))

        self.on_event(wrapper)

    def on_beacon_enter(self, handler: H) -> H:
        self._on_beacon(BeaconType.ENTER, handler)
        return handler

    def on_beacon_leave(self, handler: H) -> H:
        self._on_beacon(BeaconType.LEAVE, handler)
        return handler
