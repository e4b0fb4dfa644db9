"""Raw-event factories shared by the router and webhook tests."""

from __future__ import annotations

from typing import Any

from relaybot.messaging.events import Event, parse_event

USER_ID = "u206d25c2ea6bd87c17655609a1c37cb8"
GROUP_ID = "cxxxxxxxxxxxxxxxxxxxxxxxxxxxxxxxxx"
ROOM_ID = "rxxxxxxxxxxxxxxxxxxxxxxxxxxxxxxxxx"
REPLY_TOKEN = "nHuyWiB7yP5Zw52FIkcQobQuGDXCTA"

USER_SOURCE = {"type": "user", "userId": USER_ID}
GROUP_SOURCE = {"type": "group", "groupId": GROUP_ID, "userId": USER_ID}
ROOM_SOURCE = {"type": "room", "roomId": ROOM_ID}


def make_event(kind: str, *, source: dict[str, Any] | None = None, **extra: Any) -> Event:
    data: dict[str, Any] = {
        "type": kind,
        "replyToken": REPLY_TOKEN,
        "timestamp": 1462629479859,
        "source": source or USER_SOURCE,
    }
    data.update(extra)
    return parse_event(data)


def message_event(message: dict[str, Any], **kw: Any) -> Event:
    return make_event("message", message={"id": "325708", **message}, **kw)


def text_event(text: str, **kw: Any) -> Event:
    return message_event({"type": "text", "text": text}, **kw)
