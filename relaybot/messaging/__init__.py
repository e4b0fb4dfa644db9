"""Event routing and outbound message construction."""

from .bank import MessageBank, PostMan
from .builders import (
    ActionAccumulator,
    Actionable,
    ButtonMessageBuilder,
    CarouselColumn,
    CarouselMessageBuilder,
    ColumnTemplate,
    ConfirmMessageBuilder,
    ImageMapBuilder,
)
from .context import BotContext
from .patterns import TextPattern
from .router import EventRouter

__all__ = [
    "ActionAccumulator",
    "Actionable",
    "BotContext",
    "ButtonMessageBuilder",
    "CarouselColumn",
    "CarouselMessageBuilder",
    "ColumnTemplate",
    "ConfirmMessageBuilder",
    "EventRouter",
    "ImageMapBuilder",
    "MessageBank",
    "PostMan",
    "TextPattern",
]
