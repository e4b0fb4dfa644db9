"""Inbound webhook events.

Events are immutable descriptions of what happened on the platform. The
event kind and, for message events, the message kind are modelled as
discriminated unions on the ``type`` field so that routing is a plain
``isinstance`` check on the parsed value.
"""

from __future__ import annotations

from enum import Enum
from typing import Annotated, Literal, Union

from pydantic import Field, TypeAdapter

from .base import PlatformModel


class SourceType(str, Enum):
    USER = "user"
    GROUP = "group"
    ROOM = "room"


class BeaconType(str, Enum):
    ENTER = "enter"
    LEAVE = "leave"
    BANNER = "banner"
    STAY = "stay"


class EventSource(PlatformModel):
    type: SourceType
    user_id: str = ""
    group_id: str = ""
    room_id: str = ""

    @property
    def id(self) -> str:
        """The id a push to this source should be addressed to."""
        if self.type is SourceType.GROUP:
            return self.group_id
        if self.type is SourceType.ROOM:
            return self.room_id
        return self.user_id


# -- message contents ------------------------------------------------------


class TextContent(PlatformModel):
    type: Literal["text"] = "text"
    id: str
    text: str


class ImageContent(PlatformModel):
    type: Literal["image"] = "image"
    id: str


class VideoContent(PlatformModel):
    type: Literal["video"] = "video"
    id: str
    duration: int | None = None


class AudioContent(PlatformModel):
    type: Literal["audio"] = "audio"
    id: str
    duration: int | None = None


class LocationContent(PlatformModel):
    type: Literal["location"] = "location"
    id: str
    title: str = ""
    address: str = ""
    latitude: float
    longitude: float


class StickerContent(PlatformModel):
    type: Literal["sticker"] = "sticker"
    id: str
    package_id: str
    sticker_id: str


MessageContent = Annotated[
    Union[TextContent, ImageContent, VideoContent, AudioContent, LocationContent, StickerContent],
    Field(discriminator="type"),
]

BinaryContent = (ImageContent, VideoContent, AudioContent)


# -- events ----------------------------------------------------------------


class BaseEvent(PlatformModel):
    timestamp: int = 0
    source: EventSource
    reply_token: str = ""


class MessageEvent(BaseEvent):
    type: Literal["message"] = "message"
    message: MessageContent


class FollowEvent(BaseEvent):
    type: Literal["follow"] = "follow"


class UnfollowEvent(BaseEvent):
    type: Literal["unfollow"] = "unfollow"


class JoinEvent(BaseEvent):
    type: Literal["join"] = "join"


class LeaveEvent(BaseEvent):
    type: Literal["leave"] = "leave"


class Postback(PlatformModel):
    data: str
    params: dict[str, str] | None = None


class PostbackEvent(BaseEvent):
    type: Literal["postback"] = "postback"
    postback: Postback


class Beacon(PlatformModel):
    hwid: str
    type: BeaconType
    dm: str = ""


class BeaconEvent(BaseEvent):
    type: Literal["beacon"] = "beacon"
    beacon: Beacon


Event = Annotated[
    Union[
        MessageEvent,
        FollowEvent,
        UnfollowEvent,
        JoinEvent,
        LeaveEvent,
        PostbackEvent,
        BeaconEvent,
    ],
    Field(discriminator="type"),
]


class WebhookPayload(PlatformModel):
    destination: str = ""
    events: list[Event] = Field(default_factory=list)


event_adapter: TypeAdapter[Event] = TypeAdapter(Event)


def parse_event(data: dict) -> Event:
    """Validate a single raw event dict into its typed model."""
    return event_adapter.validate_python(data)


class UserProfile(PlatformModel):
    user_id: str
    display_name: str = ""
    picture_url: str = ""
    status_message: str = ""
