"""Settings do webhook de saída (entrega de mensagens normalizadas)."""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache


@dataclass(frozen=True)
class WebhookSettings:
    """Configurações do webhook de saída.

    Attributes:
        url: URL que recebe os eventos `message.received` (vazio = desligado)
        timeout_seconds: Timeout da requisição HTTP
    """

    url: str = ""
    timeout_seconds: float = 10.0

    @property
    def enabled(self) -> bool:
        """Retorna True se há URL configurada."""
        return bool(self.url)

    def validate(self) -> list[str]:
        """Valida configurações do webhook.

        Returns:
            Lista de erros de validação (vazia = tudo OK).
        """
        errors: list[str] = []

        if self.url and not self.url.startswith(("http://", "https://")):
            errors.append("WEBHOOK_URL deve começar com http:// ou https://")

        if self.timeout_seconds <= 0:
            errors.append("WEBHOOK_TIMEOUT_SECONDS deve ser > 0")

        return errors


def _load_from_env() -> WebhookSettings:
    return WebhookSettings(
        url=os.getenv("WEBHOOK_URL", "").strip(),
        timeout_seconds=float(os.getenv("WEBHOOK_TIMEOUT_SECONDS", "10")),
    )


@lru_cache(maxsize=1)
def get_webhook_settings() -> WebhookSettings:
    """Retorna instância cacheada de WebhookSettings."""
    return _load_from_env()
