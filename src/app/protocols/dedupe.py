"""Protocolo de domínio para o store de dedupe.

Interface leve (ABC) dependida pelo use case de messages.upsert.
"""

from __future__ import annotations

from abc import ABC, abstractmethod


class AsyncDedupeProtocol(ABC):
    """Contrato assíncrono de deduplicação.

    - is_duplicate(key, ttl) -> bool
    - mark_processed(key, ttl) -> None
    """

    @abstractmethod
    async def is_duplicate(self, key: str, ttl: int = 3600) -> bool:
        """Retorna True se a chave já foi processada."""

    @abstractmethod
    async def mark_processed(self, key: str, ttl: int = 3600) -> None:
        """Marca a chave como processada com TTL."""
