"""Protocolos e contratos do core da aplicação."""

from .dedupe import AsyncDedupeProtocol
from .identity import LidMappingSource, MappingWatcherProtocol
from .models import (
    ContactEntry,
    LocationData,
    MessageType,
    NormalizedMessage,
    PollData,
    QuotedMessage,
    ReactionData,
)
from .normalizer import MessageNormalizerProtocol
from .webhook_sender import WebhookSenderProtocol

__all__ = [
    "AsyncDedupeProtocol",
    "ContactEntry",
    "LidMappingSource",
    "LocationData",
    "MappingWatcherProtocol",
    "MessageNormalizerProtocol",
    "MessageType",
    "NormalizedMessage",
    "PollData",
    "QuotedMessage",
    "ReactionData",
    "WebhookSenderProtocol",
]
