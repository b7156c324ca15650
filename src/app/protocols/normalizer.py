"""Protocolos de normalização inbound."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

if TYPE_CHECKING:
    from .models import NormalizedMessage


class MessageNormalizerProtocol(Protocol):
    """Contrato mínimo: uma mensagem bruta do protocolo -> um registro normalizado.

    Implementações são totais: nunca levantam para payloads desconhecidos.
    """

    def normalize(self, raw: dict[str, Any]) -> NormalizedMessage: ...
