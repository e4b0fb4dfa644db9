"""Fluent builders for template and imagemap messages.

Builders accumulate fields through chained ``with_*`` calls and produce a
frozen, validated message from ``build``. A failed build raises the
specific validation error and leaves the builder as it was, so it can be
fixed and built again.

Button, confirm and carousel-column builders share one
:class:`ActionAccumulator` each, reached through the three
``with_*_action`` methods of the :class:`Actionable` protocol.
"""

from __future__ import annotations

import dataclasses
import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any, Literal, Protocol, TypeVar

from jinja2 import Environment, StrictUndefined
from jinja2 import Template as JinjaTemplate
from pydantic import BaseModel

from ..errors import MissingMandatoryParameter, NoColumnTemplate
from . import validation
from .messages import (
    ButtonsTemplate,
    CarouselTemplate,
    Column,
    ConfirmTemplate,
    ImagemapArea,
    ImagemapBaseSize,
    ImagemapMessage,
    MessageAction,
    MessageImagemapAction,
    PostbackAction,
    TemplateMessage,
    UriAction,
    UriImagemapAction,
)

logger = logging.getLogger(__name__)

Action = MessageAction | UriAction | PostbackAction
_A = TypeVar("_A", bound="Actionable")
_D = TypeVar("_D", bound="_DelegatesActions")


class Actionable(Protocol):
    def with_message_action(self: _A, label: str, text: str) -> _A: ...

    def with_uri_action(self: _A, label: str, uri: str) -> _A: ...

    def with_postback_action(self: _A, label: str, data: str, text: str = "") -> _A: ...


class ActionAccumulator:
    """Ordered list of template actions shared by a builder."""

    def __init__(self) -> None:
        self._actions: list[Action] = []

    def add(self, action: Action) -> None:
        self._actions.append(action)

    def with_message_action(self, label: str, text: str) -> ActionAccumulator:
        self.add(MessageAction(label=label, text=text))
        return self

    def with_uri_action(self, label: str, uri: str) -> ActionAccumulator:
        self.add(UriAction(label=label, uri=uri))
        return self

    def with_postback_action(self, label: str, data: str, text: str = "") -> ActionAccumulator:
        self.add(PostbackAction(label=label, data=data, text=text or None))
        return self

    def snapshot(self) -> list[Action]:
        return list(self._actions)

    def __len__(self) -> int:
        return len(self._actions)


class _DelegatesActions:
    """Forwards the ``Actionable`` methods to ``self._actions``."""

    _actions: ActionAccumulator

    def with_message_action(self: _D, label: str, text: str) -> _D:
        self._actions.with_message_action(label, text)
        return self

    def with_uri_action(self: _D, label: str, uri: str) -> _D:
        self._actions.with_uri_action(label, uri)
        return self

    def with_postback_action(self: _D, label: str, data: str, text: str = "") -> _D:
        self._actions.with_postback_action(label, data, text)
        return self

    @property
    def actions(self) -> list[Action]:
        return self._actions.snapshot()


# -- buttons / confirm -----------------------------------------------------


class ButtonMessageBuilder(_DelegatesActions):
    def __init__(self, thumbnail_image_url: str = "", title: str = "", text: str = "") -> None:
        self._actions = ActionAccumulator()
        self.thumbnail_image_url = thumbnail_image_url
        self.title = title
        self.text = text

    def with_image(self, thumbnail_image_url: str) -> ButtonMessageBuilder:
        self.thumbnail_image_url = thumbnail_image_url
        return self

    def with_title(self, title: str) -> ButtonMessageBuilder:
        self.title = title
        return self

    def with_text(self, text: str) -> ButtonMessageBuilder:
        self.text = text
        return self

    def build(self, alt_text: str) -> TemplateMessage:
        actions = self._actions.snapshot()
        validation.validate_buttons(self.thumbnail_image_url, self.title, self.text, actions)
        template = ButtonsTemplate(
            thumbnail_image_url=self.thumbnail_image_url or None,
            title=self.title or None,
            text=self.text,
            actions=actions,
        )
        return TemplateMessage(alt_text=alt_text, template=template)


class ConfirmMessageBuilder(_DelegatesActions):
    def __init__(self, text: str = "") -> None:
        self._actions = ActionAccumulator()
        self.text = text

    def with_text(self, text: str) -> ConfirmMessageBuilder:
        self.text = text
        return self

    def build(self, alt_text: str) -> TemplateMessage:
        actions = self._actions.snapshot()
        validation.validate_confirm(self.text, actions)
        return TemplateMessage(
            alt_text=alt_text,
            template=ConfirmTemplate(text=self.text, actions=actions),
        )


# -- carousel --------------------------------------------------------------


class CarouselColumn(_DelegatesActions):
    def __init__(self, thumbnail_image_url: str = "", title: str = "", text: str = "") -> None:
        self._actions = ActionAccumulator()
        self.thumbnail_image_url = thumbnail_image_url
        self.title = title
        self.text = text

    def with_image(self, thumbnail_image_url: str) -> CarouselColumn:
        self.thumbnail_image_url = thumbnail_image_url
        return self

    def with_title(self, title: str) -> CarouselColumn:
        self.title = title
        return self

    def with_text(self, text: str) -> CarouselColumn:
        self.text = text
        return self

    def to_column(self) -> Column:
        return Column(
            thumbnail_image_url=self.thumbnail_image_url or None,
            title=self.title or None,
            text=self.text,
            actions=self._actions.snapshot(),
        )


_env = Environment(undefined=StrictUndefined, autoescape=False, keep_trailing_newline=True)


@dataclass
class ActionTemplate:
    action_type: Literal["message", "uri", "postback"]
    label: JinjaTemplate
    text_or_uri: JinjaTemplate | None = None
    data: JinjaTemplate | None = None


@dataclass(frozen=True)
class RenderError:
    index: int
    field: str
    error: Exception


@dataclass
class ColumnTemplate:
    """Blueprint rendered against a sequence of records, one column each.

    Sub-templates use Jinja2 syntax and see the record's fields as
    top-level names (``{{ name }}``) plus the record itself as ``item``.
    A field whose template fails to render for a record is left empty and
    the failure is appended to ``render_errors``; other fields and other
    records are unaffected. ``render_errors`` only describes the latest
    ``generate`` call.
    """

    image_url: JinjaTemplate | None = None
    title: JinjaTemplate | None = None
    text: JinjaTemplate | None = None
    action_templates: list[ActionTemplate] = field(default_factory=list)
    render_errors: list[RenderError] = field(default_factory=list)

    def with_image(self, template: str) -> ColumnTemplate:
        self.image_url = _env.from_string(template)
        return self

    def with_title(self, template: str) -> ColumnTemplate:
        self.title = _env.from_string(template)
        return self

    def with_text(self, template: str) -> ColumnTemplate:
        self.text = _env.from_string(template)
        return self

    def with_message_action(self, label: str, text: str) -> ColumnTemplate:
        self.action_templates.append(
            ActionTemplate("message", _env.from_string(label), _env.from_string(text))
        )
        return self

    def with_uri_action(self, label: str, uri: str) -> ColumnTemplate:
        self.action_templates.append(
            ActionTemplate("uri", _env.from_string(label), _env.from_string(uri))
        )
        return self

    def with_postback_action(self, label: str, data: str, text: str = "") -> ColumnTemplate:
        self.action_templates.append(
            ActionTemplate(
                "postback",
                _env.from_string(label),
                _env.from_string(text) if text else None,
                _env.from_string(data),
            )
        )
        return self

    def generate(self, records: Iterable[Any] | None) -> list[CarouselColumn]:
        if records is None:
            raise MissingMandatoryParameter("records")

        self.render_errors.clear()
        columns: list[CarouselColumn] = []
        for index, record in enumerate(records):
            ctx = _record_context(record)

            def render(template: JinjaTemplate | None, name: str) -> str:
                return self._render(template, ctx, index, name)

            column = CarouselColumn(
                thumbnail_image_url=render(self.image_url, "image_url"),
                title=render(self.title, "title"),
                text=render(self.text, "text"),
            )
            for pos, action in enumerate(self.action_templates):
                label = render(action.label, f"actions[{pos}].label")
                text_or_uri = render(action.text_or_uri, f"actions[{pos}].text")
                if action.action_type == "message":
                    column.with_message_action(label, text_or_uri)
                elif action.action_type == "uri":
                    column.with_uri_action(label, text_or_uri)
                else:
                    data = render(action.data, f"actions[{pos}].data")
                    column.with_postback_action(label, data, text_or_uri)
            columns.append(column)
        return columns

    def _render(
        self,
        template: JinjaTemplate | None,
        ctx: dict[str, Any],
        index: int,
        name: str,
    ) -> str:
        if template is None:
            return ""
        try:
            return template.render(ctx)
        except Exception as exc:
            logger.warning("Column template %s failed for record %d: %s", name, index, exc)
            self.render_errors.append(RenderError(index, name, exc))
            return ""


def _record_context(record: Any) -> dict[str, Any]:
    if isinstance(record, Mapping):
        ctx = {str(k): v for k, v in record.items()}
    elif isinstance(record, BaseModel):
        ctx = dict(record)
    elif dataclasses.is_dataclass(record) and not isinstance(record, type):
        ctx = {f.name: getattr(record, f.name) for f in dataclasses.fields(record)}
    elif hasattr(record, "__dict__"):
        ctx = dict(vars(record))
    else:
        ctx = {}
    ctx.setdefault("item", record)
    return ctx


class CarouselMessageBuilder:
    def __init__(self) -> None:
        self.columns: list[CarouselColumn] = []
        self._column_template: ColumnTemplate | None = None

    def add_column(
        self, thumbnail_image_url: str = "", title: str = "", text: str = ""
    ) -> CarouselColumn:
        column = CarouselColumn(thumbnail_image_url, title, text)
        self.columns.append(column)
        return column

    def new_column_template(self) -> ColumnTemplate:
        """Start a fresh column template, replacing any previous one."""
        self._column_template = ColumnTemplate()
        return self._column_template

    @property
    def column_template(self) -> ColumnTemplate | None:
        return self._column_template

    def generate_columns_with(self, *records: Any) -> list[CarouselColumn]:
        if self._column_template is None:
            raise NoColumnTemplate()
        generated = self._column_template.generate(records)
        self.columns.extend(generated)
        return generated

    def build(self, alt_text: str) -> TemplateMessage:
        columns = [c.to_column() for c in self.columns]
        validation.validate_carousel(columns)
        return TemplateMessage(alt_text=alt_text, template=CarouselTemplate(columns=columns))


# -- imagemap --------------------------------------------------------------


class ImageMapBuilder:
    def __init__(
        self, base_url: str = "", alt_text: str = "", width: int = 0, height: int = 0
    ) -> None:
        self.base_url = base_url
        self.alt_text = alt_text
        self.width = width
        self.height = height
        self._actions: list[MessageImagemapAction | UriImagemapAction] = []

    def with_message_action(
        self, text: str, x: int, y: int, width: int, height: int
    ) -> ImageMapBuilder:
        area = ImagemapArea(x=x, y=y, width=width, height=height)
        self._actions.append(MessageImagemapAction(text=text, area=area))
        return self

    def with_uri_action(
        self, link_uri: str, x: int, y: int, width: int, height: int
    ) -> ImageMapBuilder:
        area = ImagemapArea(x=x, y=y, width=width, height=height)
        self._actions.append(UriImagemapAction(link_uri=link_uri, area=area))
        return self

    @property
    def actions(self) -> list[MessageImagemapAction | UriImagemapAction]:
        return list(self._actions)

    def build(self) -> ImagemapMessage:
        actions = list(self._actions)
        validation.validate_imagemap(self.width, self.height, actions)
        return ImagemapMessage(
            base_url=self.base_url,
            alt_text=self.alt_text,
            base_size=ImagemapBaseSize(width=self.width, height=self.height),
            actions=actions,
        )
