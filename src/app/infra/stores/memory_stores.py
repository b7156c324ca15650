"""Stores em memória.

Sem persistência entre reinícios: serve ao dedupe de reentregas do
protocolo dentro da vida do processo.
"""

from __future__ import annotations

import time

from app.protocols.dedupe import AsyncDedupeProtocol


class MemoryDedupeStore(AsyncDedupeProtocol):
    """Store de dedupe em memória com TTL e limite de chaves.

    Args:
        max_entries: Acima deste total as entradas são descartadas por inteiro.
    """

    def __init__(self, max_entries: int = 5000) -> None:
        self._store: dict[str, float] = {}  # key -> expires_at
        self._max_entries = max_entries

    def __len__(self) -> int:
        return len(self._store)

    def _cleanup(self) -> None:
        """Remove expiradas; estourando o limite, zera o store."""
        now = time.time()
        expired = [k for k, v in self._store.items() if v < now]
        for k in expired:
            del self._store[k]
        if len(self._store) >= self._max_entries:
            self._store.clear()

    async def is_duplicate(self, key: str, ttl: int = 3600) -> bool:
        """Verifica se chave já foi processada."""
        expires_at = self._store.get(key)
        return expires_at is not None and expires_at > time.time()

    async def mark_processed(self, key: str, ttl: int = 3600) -> None:
        """Marca chave como processada."""
        self._cleanup()
        self._store[key] = time.time() + ttl
