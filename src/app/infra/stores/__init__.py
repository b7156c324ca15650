"""Stores — implementações concretas de persistência.

Módulos disponíveis:
    - memory_stores: dedupe em memória
"""

from __future__ import annotations

from app.infra.stores.memory_stores import MemoryDedupeStore

__all__ = [
    "MemoryDedupeStore",
]
