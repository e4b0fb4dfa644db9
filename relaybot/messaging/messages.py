"""Outbound message values.

Frozen pydantic models that serialize to the platform's JSON message
objects via ``to_payload()``. Builders in :mod:`.builders` produce the
validated template and imagemap variants; the simple ones are built
directly.
"""

from __future__ import annotations

from typing import Annotated, Literal, Union

from pydantic import Field

from .base import PlatformModel

# -- template actions ------------------------------------------------------


class MessageAction(PlatformModel):
    type: Literal["message"] = "message"
    label: str
    text: str


class UriAction(PlatformModel):
    type: Literal["uri"] = "uri"
    label: str
    uri: str


class PostbackAction(PlatformModel):
    type: Literal["postback"] = "postback"
    label: str
    data: str
    text: str | None = None


TemplateAction = Annotated[
    Union[MessageAction, UriAction, PostbackAction],
    Field(discriminator="type"),
]


# -- imagemap actions ------------------------------------------------------


class ImagemapArea(PlatformModel):
    x: int
    y: int
    width: int
    height: int


class ImagemapBaseSize(PlatformModel):
    width: int
    height: int


class MessageImagemapAction(PlatformModel):
    type: Literal["message"] = "message"
    text: str
    area: ImagemapArea


class UriImagemapAction(PlatformModel):
    type: Literal["uri"] = "uri"
    link_uri: str
    area: ImagemapArea


ImagemapAction = Annotated[
    Union[MessageImagemapAction, UriImagemapAction],
    Field(discriminator="type"),
]


# -- templates -------------------------------------------------------------


class ButtonsTemplate(PlatformModel):
    type: Literal["buttons"] = "buttons"
    thumbnail_image_url: str | None = None
    title: str | None = None
    text: str
    actions: list[TemplateAction] = Field(default_factory=list)


class ConfirmTemplate(PlatformModel):
    type: Literal["confirm"] = "confirm"
    text: str
    actions: list[TemplateAction] = Field(default_factory=list)


class Column(PlatformModel):
    thumbnail_image_url: str | None = None
    title: str | None = None
    text: str
    actions: list[TemplateAction] = Field(default_factory=list)


class CarouselTemplate(PlatformModel):
    type: Literal["carousel"] = "carousel"
    columns: list[Column] = Field(default_factory=list)


Template = Annotated[
    Union[ButtonsTemplate, ConfirmTemplate, CarouselTemplate],
    Field(discriminator="type"),
]


# -- messages --------------------------------------------------------------


class TextMessage(PlatformModel):
    type: Literal["text"] = "text"
    text: str


class StickerMessage(PlatformModel):
    type: Literal["sticker"] = "sticker"
    package_id: str
    sticker_id: str


class ImageMessage(PlatformModel):
    type: Literal["image"] = "image"
    original_content_url: str
    preview_image_url: str


class VideoMessage(PlatformModel):
    type: Literal["video"] = "video"
    original_content_url: str
    preview_image_url: str


class AudioMessage(PlatformModel):
    type: Literal["audio"] = "audio"
    original_content_url: str
    duration: int


class LocationMessage(PlatformModel):
    type: Literal["location"] = "location"
    title: str
    address: str
    latitude: float
    longitude: float


class TemplateMessage(PlatformModel):
    type: Literal["template"] = "template"
    alt_text: str
    template: Template


class ImagemapMessage(PlatformModel):
    type: Literal["imagemap"] = "imagemap"
    base_url: str
    alt_text: str
    base_size: ImagemapBaseSize
    actions: list[ImagemapAction] = Field(default_factory=list)


Message = Annotated[
    Union[
        TextMessage,
        StickerMessage,
        ImageMessage,
        VideoMessage,
        AudioMessage,
        LocationMessage,
        TemplateMessage,
        ImagemapMessage,
    ],
    Field(discriminator="type"),
]


def to_payloads(messages: list[PlatformModel]) -> list[dict]:
    return [m.to_payload() for m in messages]
