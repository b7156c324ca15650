"""Normalizers — conversão de payloads externos para modelos internos.

Estrutura:
- baileys/: mensagens do cliente do protocolo (WAMessage)
"""

from .baileys import BaileysMessageNormalizer, normalize_message

__all__ = [
    "BaileysMessageNormalizer",
    "normalize_message",
]
