"""Builder do envelope entregue ao webhook de saída."""

from __future__ import annotations

import time
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from app.protocols.models import NormalizedMessage

MESSAGE_RECEIVED_EVENT = "message.received"


def build_message_received_payload(
    message: NormalizedMessage,
    timestamp_ms: int | None = None,
) -> dict[str, Any]:
    """Monta `{event, timestamp, data}` para uma mensagem normalizada.

    Args:
        message: Mensagem normalizada.
        timestamp_ms: Momento do envio em epoch ms (padrão: agora).
    """
    return {
        "event": MESSAGE_RECEIVED_EVENT,
        "timestamp": timestamp_ms if timestamp_ms is not None else int(time.time() * 1000),
        "data": message.to_payload(),
    }
