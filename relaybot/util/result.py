"""Lightweight result type for multi-step delivery outcomes."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True, slots=True)
class Result:
    """Outcome of an operation that may partially succeed.

    Supports boolean evaluation and tuple unpacking into
    ``(value, error)``; *value* carries whatever was completed (for a
    push fan-out, the targets that were reached) even on failure.

    Examples::

        r = postman.send_immediately("U1", "U2")
        if not r:
            logger.warning("stopped after %s: %s", r.value, r.error)

        reached, err = r
    """

    success: bool
    message: str = ""
    value: Any = field(default=None, repr=False)
    error: BaseException | None = field(default=None, repr=False)

    # -- constructors ------------------------------------------------------

    @classmethod
    def ok(cls, message: str = "", *, value: Any = None) -> Result:
        return cls(success=True, message=message, value=value)

    @classmethod
    def fail(
        cls,
        message: str = "",
        *,
        value: Any = None,
        error: BaseException | None = None,
    ) -> Result:
        return cls(success=False, message=message or str(error or ""), value=value, error=error)

    # -- protocols ---------------------------------------------------------

    def __bool__(self) -> bool:
        return self.success

    def __iter__(self):
        yield self.value
        yield self.error
