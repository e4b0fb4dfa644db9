"""Async helpers for calling user code that may or may not be a coroutine."""

from __future__ import annotations

import inspect
from typing import Any


async def resolve(value: Any) -> Any:
    """Await *value* if it is awaitable, otherwise return it unchanged.

    Lets handler registrations accept both ``async def`` and plain
    functions without the caller caring which one it got.
    """
    if inspect.isawaitable(value):
        return await value
    return value
