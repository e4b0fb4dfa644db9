"""Tests for the singleton reset registry."""

from __future__ import annotations

from relaybot.util import singletons


class TestSingletons:
    def test_reset_calls_registered(self) -> None:
        calls: list[str] = []
        singletons.register_singleton(lambda: calls.append("a"), name="test.a")
        singletons.reset_all_singletons()
        assert calls == ["a"]
        singletons._reset_fns.pop("test.a")

    def test_same_name_replaces(self) -> None:
        calls: list[str] = []
        singletons.register_singleton(lambda: calls.append("old"), name="test.b")
        singletons.register_singleton(lambda: calls.append("new"), name="test.b")
        singletons.reset_all_singletons()
        assert calls == ["new"]
        singletons._reset_fns.pop("test.b")

    def test_returns_function(self) -> None:
        def reset() -> None:
            pass

        assert singletons.register_singleton(reset, name="test.c") is reset
        singletons._reset_fns.pop("test.c")

    def test_settings_registered(self) -> None:
        assert "relaybot.config.settings.cfg" in singletons._reset_fns
