"""Tests for MessageBank and PostMan."""

from __future__ import annotations

import pytest

from relaybot.errors import DeliveryFailed, TooManyMessages
from relaybot.messaging.bank import MessageBank, PostMan
from relaybot.messaging.messages import (
    AudioMessage,
    ImageMessage,
    LocationMessage,
    StickerMessage,
    TextMessage,
    VideoMessage,
)
from relaybot.platform.memory import InMemoryClient


class TestAccumulate:
    def test_helpers_build_messages(self, client: InMemoryClient) -> None:
        bank = MessageBank(client)
        bank.add_text_message("hi")
        bank.add_sticker_message("1", "2")
        bank.add_location_message("home", "addr", 1.0, 2.0)
        bank.add_audio_message("https://a/s.m4a", 1000)
        bank.add_video_message("https://a/v.mp4", "https://a/v.jpg")
        assert [type(m) for m in bank] == [
            TextMessage,
            StickerMessage,
            LocationMessage,
            AudioMessage,
            VideoMessage,
        ]

    def test_cap_at_five(self, client: InMemoryClient) -> None:
        bank = MessageBank(client)
        for i in range(5):
            bank.add_text_message(str(i))
        with pytest.raises(TooManyMessages):
            bank.add_image_message("https://a/i.jpg", "https://a/p.jpg")
        assert len(bank) == 5
        assert all(isinstance(m, TextMessage) for m in bank.messages)

    def test_custom_cap(self, client: InMemoryClient) -> None:
        bank = MessageBank(client, max_messages=1)
        bank.add_text_message("one")
        with pytest.raises(TooManyMessages) as exc_info:
            bank.add_text_message("two")
        assert exc_info.value.limit == 1

    def test_clear(self, client: InMemoryClient) -> None:
        bank = MessageBank(client)
        bank.add_text_message("x")
        bank.clear()
        assert len(bank) == 0


class TestDelivery:
    @pytest.mark.asyncio
    async def test_reply_empty_is_noop(self, client: InMemoryClient) -> None:
        await MessageBank(client).reply("token")
        assert client.replies == []

    @pytest.mark.asyncio
    async def test_reply_sends_all(self, client: InMemoryClient) -> None:
        bank = MessageBank(client)
        bank.add_text_message("a")
        bank.add_text_message("b")
        await bank.reply("token")
        assert len(client.replies) == 1
        assert client.replies[0].target == "token"
        assert [m.text for m in client.replies[0].messages] == ["a", "b"]

    @pytest.mark.asyncio
    async def test_reply_without_token(self, client: InMemoryClient) -> None:
        bank = MessageBank(client)
        bank.add_text_message("a")
        with pytest.raises(DeliveryFailed):
            await bank.reply("")

    @pytest.mark.asyncio
    async def test_push_even_when_empty(self, client: InMemoryClient) -> None:
        await MessageBank(client).push("U1")
        assert len(client.pushes) == 1
        assert client.pushes[0].messages == []

    @pytest.mark.asyncio
    async def test_push_failure(self, client: InMemoryClient) -> None:
        client.failing_targets.add("U1")
        with pytest.raises(DeliveryFailed):
            await MessageBank(client).push("U1")


class TestPostMan:
    @pytest.mark.asyncio
    async def test_sends_to_all_and_clears(self, client: InMemoryClient) -> None:
        postman = PostMan(client)
        postman.add_text_message("news")
        result = await postman.send_immediately("U1", "U2", "C1")
        assert result
        assert result.value == ["U1", "U2", "C1"]
        assert [d.target for d in client.pushes] == ["U1", "U2", "C1"]
        assert len(postman) == 0

    @pytest.mark.asyncio
    async def test_stops_at_first_failure(self, client: InMemoryClient) -> None:
        client.failing_targets.add("U2")
        postman = PostMan(client)
        postman.add_text_message("news")
        result = await postman.send_immediately("U1", "U2", "U3")
        assert not result
        reached, error = result
        assert reached == ["U1"]
        assert isinstance(error, DeliveryFailed)
        assert [d.target for d in client.pushes] == ["U1"]
        assert len(postman) == 1

    @pytest.mark.asyncio
    async def test_no_targets(self, client: InMemoryClient) -> None:
        postman = PostMan(client)
        postman.add_text_message("x")
        result = await postman.send_immediately()
        assert result
        assert client.pushes == []
        assert len(postman) == 0
