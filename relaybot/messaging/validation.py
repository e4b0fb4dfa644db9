"""Platform limit checks for template and imagemap messages.

Every check raises the specific :class:`~relaybot.errors.MessageValidationError`
subclass for the first violated rule. Lengths are counted in code points,
which is what ``len()`` on ``str`` already does.
"""

from __future__ import annotations

from collections.abc import Sequence
from urllib.parse import urlsplit

from ..errors import (
    ActionCountInconsistent,
    InvalidMapSize,
    InvalidUrl,
    MissingMandatoryParameter,
    NoAction,
    TextExceedsLimit,
    TooManyActions,
    TooManyColumns,
)
from .messages import (
    Column,
    ImagemapArea,
    MessageAction,
    MessageImagemapAction,
    PostbackAction,
    UriAction,
    UriImagemapAction,
)

# -- limits ----------------------------------------------------------------

ACTION_LABEL_MAX = 20
ACTION_TEXT_MAX = 300
POSTBACK_DATA_MAX = 300
IMAGEMAP_TEXT_MAX = 400
IMAGEMAP_LINK_MAX = 1000

BUTTONS_TITLE_MAX = 40
BUTTONS_TEXT_MAX = 160
BUTTONS_TEXT_WITH_HEADER_MAX = 60
BUTTONS_ACTIONS_MAX = 4

CONFIRM_TEXT_MAX = 240
CONFIRM_ACTIONS_MAX = 2

CAROUSEL_COLUMNS_MAX = 5
COLUMN_ACTIONS_MAX = 3
COLUMN_THUMBNAIL_MAX = 1000
COLUMN_TITLE_MAX = 40
COLUMN_TEXT_MAX = 120
COLUMN_TEXT_WITH_HEADER_MAX = 60


def check_length(field: str, value: str | None, limit: int) -> None:
    if value and len(value) > limit:
        raise TextExceedsLimit(field, limit, len(value))


def require_text(field: str, value: str | None) -> None:
    if not value:
        raise MissingMandatoryParameter(field)


def require_https(url: str) -> None:
    try:
        scheme = urlsplit(url).scheme
    except ValueError as exc:
        raise InvalidUrl(url) from exc
    if scheme != "https":
        raise InvalidUrl(url)


def check_action_count(actions: Sequence[object], limit: int) -> None:
    if len(actions) > limit:
        raise TooManyActions(limit, len(actions))


def validate_action_texts(action: object) -> None:
    """Check the per-type text limits of a template or imagemap action."""
    if isinstance(action, UriAction):
        check_length("uri action label", action.label, ACTION_LABEL_MAX)
    elif isinstance(action, MessageAction):
        check_length("message action label", action.label, ACTION_LABEL_MAX)
        check_length("message action text", action.text, ACTION_TEXT_MAX)
    elif isinstance(action, PostbackAction):
        check_length("postback action label", action.label, ACTION_LABEL_MAX)
        check_length("postback action text", action.text, ACTION_TEXT_MAX)
        check_length("postback action data", action.data, POSTBACK_DATA_MAX)
    elif isinstance(action, MessageImagemapAction):
        check_length("imagemap message text", action.text, IMAGEMAP_TEXT_MAX)
    elif isinstance(action, UriImagemapAction):
        check_length("imagemap link uri", action.link_uri, IMAGEMAP_LINK_MAX)


def validate_buttons(
    thumbnail_image_url: str,
    title: str,
    text: str,
    actions: Sequence[object],
) -> None:
    require_text("text", text)
    if thumbnail_image_url:
        require_https(thumbnail_image_url)
    check_length("title", title, BUTTONS_TITLE_MAX)
    if title and thumbnail_image_url:
        check_length("text", text, BUTTONS_TEXT_WITH_HEADER_MAX)
    else:
        check_length("text", text, BUTTONS_TEXT_MAX)
    check_action_count(actions, BUTTONS_ACTIONS_MAX)
    for action in actions:
        validate_action_texts(action)


def validate_confirm(text: str, actions: Sequence[object]) -> None:
    require_text("text", text)
    check_length("text", text, CONFIRM_TEXT_MAX)
    check_action_count(actions, CONFIRM_ACTIONS_MAX)
    for action in actions:
        validate_action_texts(action)


def validate_column(column: Column) -> None:
    check_action_count(column.actions, COLUMN_ACTIONS_MAX)
    for action in column.actions:
        validate_action_texts(action)
    check_length("thumbnail image url", column.thumbnail_image_url, COLUMN_THUMBNAIL_MAX)
    check_length("title", column.title, COLUMN_TITLE_MAX)
    require_text("text", column.text)
    if column.thumbnail_image_url and column.title:
        check_length("text", column.text, COLUMN_TEXT_WITH_HEADER_MAX)
    else:
        check_length("text", column.text, COLUMN_TEXT_MAX)


def validate_carousel(columns: Sequence[Column]) -> None:
    if len(columns) > CAROUSEL_COLUMNS_MAX:
        raise TooManyColumns(CAROUSEL_COLUMNS_MAX, len(columns))
    expected: int | None = None
    for column in columns:
        count = len(column.actions)
        if count > COLUMN_ACTIONS_MAX:
            raise TooManyActions(COLUMN_ACTIONS_MAX, count)
        if expected is None:
            expected = count
        elif count != expected:
            raise ActionCountInconsistent(expected, count)
        validate_column(column)


def validate_area(area: ImagemapArea) -> None:
    if area.width == 0 or area.height == 0:
        raise InvalidMapSize(area.width, area.height)


def validate_imagemap(
    width: int,
    height: int,
    actions: Sequence[MessageImagemapAction | UriImagemapAction],
) -> None:
    if not actions:
        raise NoAction()
    if width == 0 or height == 0:
        raise InvalidMapSize(width, height)
    for action in actions:
        validate_area(action.area)
        validate_action_texts(action)
