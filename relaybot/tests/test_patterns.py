"""Tests for mustache-style text patterns."""

from __future__ import annotations

from relaybot.messaging.patterns import TextPattern


class TestTextPattern:
    def test_single_placeholder(self) -> None:
        assert TextPattern("Hello, {{name}}").match("Hello, Brown") == {"name": "Brown"}

    def test_multiple_placeholders(self) -> None:
        pattern = TextPattern("{{greeting}}, {{name}}!")
        assert pattern.names == ["greeting", "name"]
        assert pattern.match("Hi, Cony!") == {"greeting": "Hi", "name": "Cony"}

    def test_no_match(self) -> None:
        assert TextPattern("Hello, {{name}}").match("Goodbye, Brown") is None

    def test_matches_inside_longer_text(self) -> None:
        assert TextPattern("Hello, {{name}}").match("Oh, Hello, Julian") == {"name": "Julian"}
        pattern = TextPattern("weather in {{city}}")
        assert pattern.match("what is the weather in Tokyo") == {"city": "Tokyo"}

    def test_placeholder_requires_text(self) -> None:
        assert TextPattern("Hello, {{name}}").match("Hello, ") is None

    def test_literal_regex_characters(self) -> None:
        pattern = TextPattern("price? {{amount}} (yen)")
        assert pattern.match("price? 100 (yen)") == {"amount": "100"}
        assert pattern.match("price 100 yen") is None

    def test_capture_stops_at_line_break(self) -> None:
        assert TextPattern("note: {{body}}").match("note: first\nsecond") == {"body": "first"}

    def test_adjacent_placeholders_are_greedy(self) -> None:
        assert TextPattern("{{a}}{{b}}").match("xyz") == {"a": "xy", "b": "z"}

    def test_no_placeholders(self) -> None:
        pattern = TextPattern("help")
        assert pattern.match("help") == {}
        assert pattern.match("please help me") == {}
        assert pattern.match("hlp") is None
