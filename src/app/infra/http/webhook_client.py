"""Cliente HTTP do webhook de saída.

Uma tentativa por evento; falha vira WebhookDeliveryError sem dados
sensíveis (nem payload, nem URL com credenciais).
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any

import httpx

from utils.errors import WebhookDeliveryError

logger = logging.getLogger(__name__)


@dataclass
class WebhookClientConfig:
    """Configuração do cliente do webhook."""

    url: str
    timeout_seconds: float = 10.0
    default_headers: dict[str, str] = field(
        default_factory=lambda: {"Content-Type": "application/json"}
    )
    verify_ssl: bool = True


class WebhookClient:
    """Entrega envelopes JSON via POST (implementa WebhookSenderProtocol).

    Args:
        config: URL e timeouts.
        transport: Transport httpx opcional (testes usam httpx.MockTransport).
    """

    def __init__(
        self,
        config: WebhookClientConfig,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._config = config
        self._transport = transport

    async def send(self, payload: dict[str, Any]) -> None:
        """POST do envelope no webhook.

        Raises:
            WebhookDeliveryError: Erro de rede/timeout ou status >= 400.
        """
        try:
            async with httpx.AsyncClient(
                verify=self._config.verify_ssl,
                transport=self._transport,
            ) as client:
                response = await client.post(
                    self._config.url,
                    json=payload,
                    headers=self._config.default_headers,
                    timeout=self._config.timeout_seconds,
                )
        except httpx.TimeoutException as exc:
            raise WebhookDeliveryError("webhook_timeout") from exc
        except httpx.HTTPError as exc:
            raise WebhookDeliveryError("webhook_connection_error") from exc

        if response.status_code >= 400:
            raise WebhookDeliveryError(
                "webhook_rejected",
                status_code=response.status_code,
            )

        logger.info(
            "webhook_delivered",
            extra={"event": payload.get("event"), "status_code": response.status_code},
        )
