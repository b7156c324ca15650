"""Handlers dos eventos emitidos pelo cliente do protocolo.

O cliente do protocolo (externo) chama estes handlers:
- `connection.update` com `connection == "open"`: valida e aquece o cache
- `messages.upsert`: normaliza e entrega no webhook
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from app.observability import get_correlation_id, reset_correlation_id, set_correlation_id

if TYPE_CHECKING:
    from app.infra.identity import IdentityCache, MappingValidation
    from app.use_cases.whatsapp import ProcessMessagesUpsertUseCase, UpsertProcessingResult

logger = logging.getLogger(__name__)


def handle_connection_update(
    update: dict[str, Any],
    cache: IdentityCache,
) -> MappingValidation | None:
    """Na abertura da conexão, valida o diretório e pré-carrega os mapeamentos.

    Returns:
        Resultado da validação, ou None se o update não é uma abertura.
    """
    if update.get("connection") != "open":
        return None

    validation = cache.validate()
    if validation.auth_dir_exists:
        cache.preload()
        logger.info(
            "lid_resolution_ready",
            extra={"mapping_count": validation.mapping_count, "cached_lids": len(cache)},
        )
    else:
        logger.error("lid_resolution_degraded", extra={"reason": "auth_dir_missing"})
    return validation


async def handle_messages_upsert(
    event: dict[str, Any],
    use_case: ProcessMessagesUpsertUseCase,
    correlation_id: str | None = None,
) -> UpsertProcessingResult:
    """Processa um lote `messages.upsert` sob um correlation_id próprio."""
    token = set_correlation_id(correlation_id)
    try:
        result = await use_case.execute(event=event, correlation_id=get_correlation_id())
    finally:
        reset_correlation_id(token)

    logger.info(
        "upsert_processed",
        extra={
            "received": result.received,
            "delivered": result.delivered,
            "skipped": result.skipped,
            "failed": result.failed,
        },
    )
    return result
