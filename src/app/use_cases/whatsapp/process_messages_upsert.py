"""Use case de processamento do evento `messages.upsert` do protocolo.

Fluxo por mensagem:
1. Só lotes `notify` (mensagens ao vivo); `append`/histórico são ignorados
2. Mensagens próprias (`fromMe`) não vão ao webhook
3. Dedupe por message_id
4. Normalização (resolve identidades)
5. Entrega no webhook; falha de uma mensagem não interrompe o lote
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from api.payload_builders import build_message_received_payload
from utils.errors import WebhookDeliveryError

if TYPE_CHECKING:
    from app.protocols import (
        AsyncDedupeProtocol,
        MessageNormalizerProtocol,
        WebhookSenderProtocol,
    )

logger = logging.getLogger(__name__)

LIVE_NOTIFICATION = "notify"


@dataclass(frozen=True, slots=True)
class UpsertProcessingResult:
    """Contagens do processamento de um lote."""

    received: int
    delivered: int
    skipped: int
    failed: int


class ProcessMessagesUpsertUseCase:
    """Normaliza e entrega as mensagens de um evento `messages.upsert`."""

    def __init__(
        self,
        *,
        normalizer: MessageNormalizerProtocol,
        dedupe: AsyncDedupeProtocol,
        webhook_sender: WebhookSenderProtocol | None,
        dedupe_ttl_seconds: int = 3600,
    ) -> None:
        self._normalizer = normalizer
        self._dedupe = dedupe
        self._webhook_sender = webhook_sender
        self._dedupe_ttl = dedupe_ttl_seconds

    async def execute(
        self,
        *,
        event: dict[str, Any],
        correlation_id: str,
    ) -> UpsertProcessingResult:
        messages = event.get("messages") or []
        if not isinstance(messages, list):
            messages = []
        received = len(messages)

        if self._webhook_sender is None or event.get("type") != LIVE_NOTIFICATION:
            logger.debug(
                "upsert_batch_ignored",
                extra={
                    "batch_type": event.get("type"),
                    "webhook_configured": self._webhook_sender is not None,
                    "correlation_id": correlation_id,
                },
            )
            return UpsertProcessingResult(received, delivered=0, skipped=received, failed=0)

        delivered, skipped, failed = 0, 0, 0
        for raw in messages:
            outcome = await self._process_single_message(raw, correlation_id)
            if outcome == "delivered":
                delivered += 1
            elif outcome == "failed":
                failed += 1
            else:
                skipped += 1

        return UpsertProcessingResult(received, delivered, skipped, failed)

    async def _process_single_message(self, raw: Any, correlation_id: str) -> str:
        if not isinstance(raw, dict):
            return "skipped"
        key = raw.get("key") if isinstance(raw.get("key"), dict) else {}
        message_id = key.get("id")
        if not message_id or key.get("fromMe"):
            return "skipped"

        if await self._dedupe.is_duplicate(message_id, self._dedupe_ttl):
            logger.info("duplicate_message_skipped", extra={"message_id": message_id})
            return "skipped"
        await self._dedupe.mark_processed(message_id, self._dedupe_ttl)

        content = raw.get("message") if isinstance(raw.get("message"), dict) else {}
        logger.info(
            "message_received",
            extra={
                "message_id": message_id,
                "content_key": next(iter(content), None),
                "correlation_id": correlation_id,
            },
        )

        normalized = self._normalizer.normalize(raw)
        payload = build_message_received_payload(normalized)
        try:
            await self._webhook_sender.send(payload)  # type: ignore[union-attr]
        except WebhookDeliveryError as exc:
            logger.error(
                "webhook_delivery_failed",
                extra={
                    "message_id": message_id,
                    "status_code": exc.status_code,
                    "error": str(exc),
                },
            )
            return "failed"
        return "delivered"
