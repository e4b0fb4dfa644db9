"""Mustache-style text patterns, e.g. ``"Hello, {{name}}"``.

Literal parts of the template are matched verbatim and each ``{{name}}``
placeholder becomes a greedy capture group that stops at a line break.
The pattern may match anywhere in the text, so ``"Hello, {{name}}"`` also
accepts ``"Oh, Hello, Brown"``.

When two placeholders are not separated by literal text the first one
takes as much as it can and the second gets the rest (``"{{a}}{{b}}"`` against ``"xyz"`` gives
``a="xy", b="z"``); write a literal separator between placeholders when
that split matters.
"""

from __future__ import annotations

import re

_PLACEHOLDER = re.compile(r"\{\{(\w+)\}\}")


class TextPattern:
    def __init__(self, template: str) -> None:
        self.template = template
        self.names: list[str] = []

        parts: list[str] = []
        pos = 0
        for m in _PLACEHOLDER.finditer(template):
            parts.append(re.escape(template[pos:m.start()]))
            parts.append("(.+)")
            self.names.append(m.group(1))
            pos = m.end()
        parts.append(re.escape(template[pos:]))
        self.regex = re.compile("".join(parts))

    def match(self, text: str) -> dict[str, str] | None:
        """Return the captured placeholders, or ``None`` if *text* does not match."""
        m = self.regex.search(text)
        if m is None:
            return None
        return dict(zip(self.names, m.groups()))

    def __repr__(self) -> str:
        return f"TextPattern({self.template!r})"
