"""Minimal ``.env`` reader/writer used by the settings layer."""

from __future__ import annotations

from pathlib import Path


class EnvFile:
    """Reads and updates ``KEY=value`` pairs in a dotenv-style file.

    Comments and blank lines are ignored on read. Writing an empty value
    removes the key.
    """

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)

    def read_all(self) -> dict[str, str]:
        if not self.path.is_file():
            return {}
        values: dict[str, str] = {}
        for raw in self.path.read_text().splitlines():
            line = raw.strip()
            if not line or line.startswith("#") or "=" not in line:
                continue
            key, _, value = line.partition("=")
            values[key.strip()] = _unquote(value.strip())
        return values

    def read(self, key: str) -> str:
        return self.read_all().get(key, "")

    def write(self, **kwargs: str) -> None:
        values = self.read_all()
        for key, value in kwargs.items():
            if value:
                values[key] = value
            else:
                values.pop(key, None)
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text("".join(f"{k}={_quote(v)}\n" for k, v in values.items()))


def _unquote(value: str) -> str:
    if len(value) >= 2 and value[0] == value[-1] and value[0] in ("'", '"'):
        return value[1:-1]
    return value


def _quote(value: str) -> str:
    if any(ch.isspace() for ch in value) or "#" in value:
        return f'"{value}"'
    return value
