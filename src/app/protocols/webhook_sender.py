"""Protocolo de entrega no webhook de saída."""

from __future__ import annotations

from typing import Any, Protocol


class WebhookSenderProtocol(Protocol):
    """Entrega um envelope JSON ao webhook configurado.

    Levanta WebhookDeliveryError em falha; não faz retry.
    """

    async def send(self, payload: dict[str, Any]) -> None: ...
