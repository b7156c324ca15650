"""Factories das dependências concretas a partir das settings."""

from __future__ import annotations

import logging
from functools import lru_cache
from typing import TYPE_CHECKING, Any

from api.normalizers.baileys import BaileysMessageNormalizer
from app.infra.http import WebhookClient, WebhookClientConfig
from app.infra.identity import IdentityCache, MappingDirectory, MappingDirectoryWatcher
from app.infra.stores import MemoryDedupeStore
from app.services.identifier_resolver import IdentifierResolver, socket_lid_mapping
from app.use_cases.whatsapp import ProcessMessagesUpsertUseCase
from config.settings import (
    get_bridge_settings,
    get_dedupe_settings,
    get_webhook_settings,
)

if TYPE_CHECKING:
    from app.protocols import WebhookSenderProtocol

logger = logging.getLogger(__name__)


def create_mapping_directory() -> MappingDirectory:
    settings = get_bridge_settings()
    return MappingDirectory(settings.session_path, settings.mapping_prefix)


def create_mapping_watcher() -> MappingDirectoryWatcher | None:
    settings = get_bridge_settings()
    if not settings.watch_enabled:
        return None
    return MappingDirectoryWatcher(
        settings.session_path,
        settings.mapping_prefix,
        interval_seconds=settings.watch_interval_seconds,
    )


@lru_cache(maxsize=1)
def get_identity_cache() -> IdentityCache:
    """Cache de identidade do processo (um por diretório de sessão)."""
    cache = IdentityCache(create_mapping_directory(), create_mapping_watcher())
    logger.info("identity_cache_created", extra={"auth_dir": str(cache.directory.path)})
    return cache


def create_identifier_resolver(sock: Any | None = None) -> IdentifierResolver:
    """Resolver sobre o cache do processo, ligado à conexão `sock` se houver."""
    live_table = socket_lid_mapping(sock) if sock is not None else None
    return IdentifierResolver(get_identity_cache(), live_table=live_table)


@lru_cache(maxsize=1)
def get_dedupe_store() -> MemoryDedupeStore:
    return MemoryDedupeStore(max_entries=get_dedupe_settings().max_entries)


def create_webhook_sender() -> WebhookSenderProtocol | None:
    settings = get_webhook_settings()
    if not settings.enabled:
        logger.warning("webhook_not_configured")
        return None
    return WebhookClient(
        WebhookClientConfig(url=settings.url, timeout_seconds=settings.timeout_seconds)
    )


def create_process_messages_upsert(sock: Any | None = None) -> ProcessMessagesUpsertUseCase:
    """Use case de `messages.upsert` para a conexão `sock`."""
    return ProcessMessagesUpsertUseCase(
        normalizer=BaileysMessageNormalizer(create_identifier_resolver(sock)),
        dedupe=get_dedupe_store(),
        webhook_sender=create_webhook_sender(),
        dedupe_ttl_seconds=get_dedupe_settings().ttl_seconds,
    )
