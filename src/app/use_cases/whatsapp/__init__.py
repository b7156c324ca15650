"""Use cases do canal WhatsApp (cliente do protocolo)."""

from .process_messages_upsert import (
    ProcessMessagesUpsertUseCase,
    UpsertProcessingResult,
)

__all__ = [
    "ProcessMessagesUpsertUseCase",
    "UpsertProcessingResult",
]
