"""relaybot -- event routing and message building for LINE-style chat bots."""

__version__ = "0.1.0"

from .messaging import (  # noqa: E402
    BotContext,
    ButtonMessageBuilder,
    CarouselMessageBuilder,
    ConfirmMessageBuilder,
    EventRouter,
    ImageMapBuilder,
    MessageBank,
    PostMan,
)
from .platform import InMemoryClient, LineClient, PlatformClient  # noqa: E402

__all__ = [
    "BotContext",
    "ButtonMessageBuilder",
    "CarouselMessageBuilder",
    "ConfirmMessageBuilder",
    "EventRouter",
    "ImageMapBuilder",
    "InMemoryClient",
    "LineClient",
    "MessageBank",
    "PlatformClient",
    "PostMan",
    "__version__",
]
