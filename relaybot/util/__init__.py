"""Shared utilities."""

from .async_helpers import resolve
from .env_file import EnvFile
from .result import Result
from .singletons import register_singleton, reset_all_singletons

__all__ = [
    "EnvFile",
    "Result",
    "register_singleton",
    "reset_all_singletons",
    "resolve",
]
