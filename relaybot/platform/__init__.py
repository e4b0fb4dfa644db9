"""Chat-platform client capability and its implementations."""

from .client import (
    SIGNATURE_HEADER,
    LineClient,
    PlatformClient,
    compute_signature,
    parse_webhook,
    verify_signature,
)
from .memory import Delivery, InMemoryClient

__all__ = [
    "Delivery",
    "InMemoryClient",
    "LineClient",
    "PlatformClient",
    "SIGNATURE_HEADER",
    "compute_signature",
    "parse_webhook",
    "verify_signature",
]
