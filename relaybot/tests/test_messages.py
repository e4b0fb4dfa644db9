"""Tests for outbound message serialization."""

from __future__ import annotations

from relaybot.messaging.messages import (
    AudioMessage,
    ButtonsTemplate,
    ImagemapArea,
    ImagemapBaseSize,
    ImagemapMessage,
    LocationMessage,
    MessageAction,
    PostbackAction,
    StickerMessage,
    TemplateMessage,
    TextMessage,
    UriImagemapAction,
    to_payloads,
)


class TestPayloads:
    def test_text(self) -> None:
        assert TextMessage(text="hi").to_payload() == {"type": "text", "text": "hi"}

    def test_camel_case_keys(self) -> None:
        assert StickerMessage(package_id="1", sticker_id="2").to_payload() == {
            "type": "sticker",
            "packageId": "1",
            "stickerId": "2",
        }
        assert AudioMessage(original_content_url="https://a/b.m4a", duration=1000).to_payload() == {
            "type": "audio",
            "originalContentUrl": "https://a/b.m4a",
            "duration": 1000,
        }

    def test_location(self) -> None:
        payload = LocationMessage(title="t", address="a", latitude=1.5, longitude=2.5).to_payload()
        assert payload["latitude"] == 1.5
        assert payload["type"] == "location"

    def test_optional_fields_omitted(self) -> None:
        message = TemplateMessage(
            alt_text="alt",
            template=ButtonsTemplate(
                text="pick",
                actions=[PostbackAction(label="buy", data="action=buy")],
            ),
        )
        assert message.to_payload() == {
            "type": "template",
            "altText": "alt",
            "template": {
                "type": "buttons",
                "text": "pick",
                "actions": [{"type": "postback", "label": "buy", "data": "action=buy"}],
            },
        }

    def test_imagemap(self) -> None:
        message = ImagemapMessage(
            base_url="https://example.com/bot/images/rm001",
            alt_text="map",
            base_size=ImagemapBaseSize(width=1040, height=1040),
            actions=[
                UriImagemapAction(
                    link_uri="https://example.com/",
                    area=ImagemapArea(x=0, y=0, width=520, height=1040),
                )
            ],
        )
        payload = message.to_payload()
        assert payload["baseSize"] == {"width": 1040, "height": 1040}
        assert payload["actions"][0] == {
            "type": "uri",
            "linkUri": "https://example.com/",
            "area": {"x": 0, "y": 0, "width": 520, "height": 1040},
        }

    def test_to_payloads(self) -> None:
        payloads = to_payloads([TextMessage(text="a"), TextMessage(text="b")])
        assert [p["text"] for p in payloads] == ["a", "b"]

    def test_value_equality(self) -> None:
        assert MessageAction(label="l", text="t") == MessageAction(label="l", text="t")
