"""Testes do store de dedupe em memória."""

from __future__ import annotations

import pytest

from app.infra.stores.memory_stores import MemoryDedupeStore


class TestMemoryDedupeStore:
    """Testes do MemoryDedupeStore."""

    @pytest.mark.asyncio
    async def test_unknown_key_is_not_duplicate(self) -> None:
        """Chave nunca marcada não é duplicada."""
        store = MemoryDedupeStore()
        assert await store.is_duplicate("msg-123") is False

    @pytest.mark.asyncio
    async def test_marked_key_is_duplicate(self) -> None:
        """Depois de marcada, a chave é duplicada."""
        store = MemoryDedupeStore()
        await store.mark_processed("msg-456", ttl=3600)
        assert await store.is_duplicate("msg-456", ttl=3600) is True

    @pytest.mark.asyncio
    async def test_expired_key_is_new_again(self) -> None:
        store = MemoryDedupeStore()
        await store.mark_processed("msg-789", ttl=-1)
        assert await store.is_duplicate("msg-789") is False

    @pytest.mark.asyncio
    async def test_expired_keys_are_cleaned_on_mark(self) -> None:
        store = MemoryDedupeStore()
        await store.mark_processed("old", ttl=-1)
        await store.mark_processed("new", ttl=3600)
        assert len(store) == 1

    @pytest.mark.asyncio
    async def test_limit_clears_store(self) -> None:
        store = MemoryDedupeStore(max_entries=3)
        for key in ("a", "b", "c"):
            await store.mark_processed(key, ttl=3600)
        await store.mark_processed("d", ttl=3600)

        assert len(store) == 1
        assert await store.is_duplicate("a") is False
        assert await store.is_duplicate("d") is True
