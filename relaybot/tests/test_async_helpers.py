"""Tests for async helpers."""

from __future__ import annotations

import pytest

from relaybot.util.async_helpers import resolve


class TestResolve:
    @pytest.mark.asyncio
    async def test_plain_value(self) -> None:
        assert await resolve(42) == 42

    @pytest.mark.asyncio
    async def test_coroutine(self) -> None:
        async def produce() -> str:
            return "awaited"

        assert await resolve(produce()) == "awaited"

    @pytest.mark.asyncio
    async def test_none(self) -> None:
        assert await resolve(None) is None
