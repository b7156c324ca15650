"""Settings de dedupe de mensagens inbound.

O protocolo pode reentregar a mesma mensagem (reconexão, retransmissão);
o dedupe evita que o webhook receba o mesmo message_id duas vezes.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache


@dataclass(frozen=True)
class DedupeSettings:
    """Configurações de dedupe.

    Attributes:
        ttl_seconds: Tempo em que um message_id é lembrado
        max_entries: Limite de chaves mantidas em memória
    """

    ttl_seconds: int = 3600
    max_entries: int = 5000

    def validate(self) -> list[str]:
        """Valida configurações de dedupe.

        Returns:
            Lista de erros de validação.
        """
        errors: list[str] = []

        if self.ttl_seconds <= 0:
            errors.append("DEDUPE_TTL_SECONDS deve ser > 0")

        if self.max_entries <= 0:
            errors.append("DEDUPE_MAX_ENTRIES deve ser > 0")

        return errors


def _load_dedupe_from_env() -> DedupeSettings:
    return DedupeSettings(
        ttl_seconds=int(os.getenv("DEDUPE_TTL_SECONDS", "3600")),
        max_entries=int(os.getenv("DEDUPE_MAX_ENTRIES", "5000")),
    )


@lru_cache(maxsize=1)
def get_dedupe_settings() -> DedupeSettings:
    """Retorna instância cacheada de DedupeSettings."""
    return _load_dedupe_from_env()
