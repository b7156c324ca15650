"""Extrator do bloco de conteúdo de mensagens do protocolo.

Responsabilidades:
- Detectar o tipo de conteúdo pela chave presente, em ordem fixa de prioridade
- Delegar a extração de campos ao helper do tipo
- Resumir mensagens citadas em uma linha

Chave desconhecida não é erro: vira `unsupported` com o nome da chave,
para que tipos novos do protocolo apareçam no webhook sem quebrar nada.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from ._extraction_helpers import (
    as_dict,
    extract_audio_message,
    extract_contact_message,
    extract_contacts_array_message,
    extract_document_message,
    extract_image_message,
    extract_location_message,
    extract_poll_message,
    extract_reaction_message,
    extract_sticker_message,
    extract_video_message,
    optional_str,
)

if TYPE_CHECKING:
    from collections.abc import Callable

    from app.services.identifier_resolver import IdentifierResolver

logger = logging.getLogger(__name__)

# (chave do conteúdo, messageType) na ordem em que são testadas
CONTENT_KEY_PRIORITY: tuple[tuple[str, str], ...] = (
    ("conversation", "text"),
    ("extendedTextMessage", "text"),
    ("imageMessage", "image"),
    ("videoMessage", "video"),
    ("audioMessage", "audio"),
    ("documentMessage", "document"),
    ("stickerMessage", "sticker"),
    ("locationMessage", "location"),
    ("contactMessage", "contact"),
    ("contactsArrayMessage", "contacts"),
    ("pollCreationMessage", "poll"),
    ("pollCreationMessageV2", "poll"),
    ("pollCreationMessageV3", "poll"),
    ("reactionMessage", "reaction"),
)

# Chaves que acompanham o conteúdo mas não são conteúdo
METADATA_KEYS = frozenset({"messageContextInfo", "senderKeyDistributionMessage"})

# Envelopes cujo `message` interno carrega o conteúdo real
WRAPPER_KEYS = (
    "ephemeralMessage",
    "viewOnceMessage",
    "viewOnceMessageV2",
    "viewOnceMessageV2Extension",
    "documentWithCaptionMessage",
)
_MAX_WRAPPER_DEPTH = 4

_FIELD_EXTRACTORS: dict[str, Callable[[dict[str, Any]], dict[str, Any]]] = {
    "imageMessage": extract_image_message,
    "videoMessage": extract_video_message,
    "audioMessage": extract_audio_message,
    "documentMessage": extract_document_message,
    "stickerMessage": extract_sticker_message,
    "locationMessage": extract_location_message,
    "contactMessage": extract_contact_message,
    "contactsArrayMessage": extract_contacts_array_message,
    "pollCreationMessage": extract_poll_message,
    "pollCreationMessageV2": extract_poll_message,
    "pollCreationMessageV3": extract_poll_message,
    "reactionMessage": extract_reaction_message,
}

_QUOTED_PLACEHOLDERS = {
    "image": "[Image]",
    "video": "[Video]",
    "audio": "[Audio]",
    "document": "[Document]",
    "sticker": "[Sticker]",
    "location": "[Location]",
    "contact": "[Contact]",
    "contacts": "[Contacts]",
    "poll": "[Poll]",
    "reaction": "[Reaction]",
}
UNKNOWN_QUOTED_PLACEHOLDER = "[Unknown]"

_MESSAGE_TYPE_BY_KEY = dict(CONTENT_KEY_PRIORITY)


def unwrap_content(content: dict[str, Any]) -> dict[str, Any]:
    """Desembrulha ephemeral/viewOnce até chegar ao conteúdo real."""
    for _ in range(_MAX_WRAPPER_DEPTH):
        for wrapper in WRAPPER_KEYS:
            inner = as_dict(as_dict(content.get(wrapper)).get("message"))
            if inner:
                content = inner
                break
        else:
            return content
    return content


def detect_content_key(content: dict[str, Any]) -> str | None:
    """Primeira chave reconhecida presente; bloco vazio `{}` conta como presente."""
    for key, _ in CONTENT_KEY_PRIORITY:
        if key == "conversation":
            if content.get(key):
                return key
        elif content.get(key) is not None:
            return key
    return None


def first_unrecognized_key(content: dict[str, Any]) -> str | None:
    for key in content:
        if key not in METADATA_KEYS:
            return key
    return next(iter(content), None)


def summarize_quoted_content(quoted: dict[str, Any]) -> str:
    """Resumo de uma linha do conteúdo citado.

    Texto vira o próprio texto; mídia usa a legenda (ou o nome do arquivo,
    para documentos) e cai no placeholder, ex: `[Image]`.
    """
    quoted = unwrap_content(quoted)
    key = detect_content_key(quoted)
    if key is None:
        return UNKNOWN_QUOTED_PLACEHOLDER

    message_type = _MESSAGE_TYPE_BY_KEY[key]
    if key == "conversation":
        return str(quoted[key])
    block = as_dict(quoted[key])
    if key == "extendedTextMessage":
        return optional_str(block.get("text")) or ""
    if message_type in ("image", "video"):
        return optional_str(block.get("caption")) or _QUOTED_PLACEHOLDERS[message_type]
    if message_type == "document":
        return optional_str(block.get("fileName")) or _QUOTED_PLACEHOLDERS[message_type]
    return _QUOTED_PLACEHOLDERS.get(message_type, UNKNOWN_QUOTED_PLACEHOLDER)


def extract_content_fields(
    content: dict[str, Any],
    resolver: IdentifierResolver,
) -> dict[str, Any]:
    """Extrai `message_type` e os campos do tipo a partir do bloco de conteúdo."""
    key = detect_content_key(content)
    if key is None:
        content_key = first_unrecognized_key(content)
        logger.info("unsupported_message_type_received", extra={"content_key": content_key})
        return {"message_type": "unsupported", "content": content_key}

    fields: dict[str, Any] = {"message_type": _MESSAGE_TYPE_BY_KEY[key]}
    if key == "conversation":
        fields["content"] = str(content[key])
    elif key == "extendedTextMessage":
        fields.update(_extract_extended_text(as_dict(content[key]), resolver))
    else:
        fields.update(_FIELD_EXTRACTORS[key](as_dict(content[key])))
    return fields


def _extract_extended_text(
    block: dict[str, Any],
    resolver: IdentifierResolver,
) -> dict[str, Any]:
    fields: dict[str, Any] = {"content": optional_str(block.get("text"))}
    context_info = as_dict(block.get("contextInfo"))

    quoted = as_dict(context_info.get("quotedMessage"))
    if quoted:
        participant_jid = optional_str(context_info.get("participant"))
        identity = resolver.resolve(participant_jid)
        fields["quoted_message"] = {
            "message_id": optional_str(context_info.get("stanzaId")),
            "participant": identity.phone_number,
            "participant_lid": identity.lid,
            "participant_jid": participant_jid,
            "content": summarize_quoted_content(quoted),
        }

    mentioned = context_info.get("mentionedJid")
    if isinstance(mentioned, list):
        jids = [str(jid) for jid in mentioned if jid]
        phones = (resolver.extract_phone_number(jid) for jid in jids)
        lids = (resolver.extract_lid(jid) for jid in jids)
        fields["mentions"] = [phone for phone in phones if phone]
        fields["mention_lids"] = [lid for lid in lids if lid]

    return fields
