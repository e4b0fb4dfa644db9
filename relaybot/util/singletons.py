"""Singleton registry for test isolation."""

from __future__ import annotations

from collections.abc import Callable

_reset_fns: dict[str, Callable[[], None]] = {}


def register_singleton(reset_fn: Callable[[], None], name: str | None = None) -> Callable[[], None]:
    """Register *reset_fn* under *name* (defaults to its qualified name).

    Registering the same name twice replaces the earlier function, so a
    re-imported module does not leave a stale resetter behind.
    """
    key = name or f"{reset_fn.__module__}.{reset_fn.__qualname__}"
    _reset_fns[key] = reset_fn
    return reset_fn


def reset_all_singletons() -> None:
    """Reset every registered singleton -- intended for test isolation."""
    for fn in list(_reset_fns.values()):
        fn()
