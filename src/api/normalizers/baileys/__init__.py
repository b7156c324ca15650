"""Normalizer das mensagens do cliente do protocolo (formato WAMessage).

Tipos suportados: text, image, video, audio/voice, document, sticker,
location, contact, contacts, poll, reaction. Demais chaves viram
`unsupported`; mensagem sem conteúdo vira `unknown`.
"""

from .extractor import (
    CONTENT_KEY_PRIORITY,
    detect_content_key,
    extract_content_fields,
    summarize_quoted_content,
)
from .normalizer import BaileysMessageNormalizer, normalize_message

__all__ = [
    "CONTENT_KEY_PRIORITY",
    "BaileysMessageNormalizer",
    "detect_content_key",
    "extract_content_fields",
    "normalize_message",
    "summarize_quoted_content",
]
