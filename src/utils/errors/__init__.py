"""Exceções utilitárias compartilhadas."""

from .exceptions import (
    BridgeError,
    MappingFileError,
    WebhookDeliveryError,
)

__all__ = [
    "BridgeError",
    "MappingFileError",
    "WebhookDeliveryError",
]
