"""Payload builders — construção de payloads para destinos externos.

- webhook: envelope `message.received` do webhook de saída
"""

from .webhook import MESSAGE_RECEIVED_EVENT, build_message_received_payload

__all__ = [
    "MESSAGE_RECEIVED_EVENT",
    "build_message_received_payload",
]
