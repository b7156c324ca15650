"""Normalizer de mensagens do protocolo para NormalizedMessage.

Função total: qualquer dict de entrada produz um NormalizedMessage.
Campos de identidade passam todos pelo IdentifierResolver; identidade
não resolvida fica None e é logada com o message_id.
"""

from __future__ import annotations

import logging
import time
from typing import TYPE_CHECKING, Any

from app.domain.jid import is_lid_jid
from app.protocols.models import NormalizedMessage
from app.services.identifier_resolver import ResolvedIdentity

from ._extraction_helpers import as_dict, coerce_int, optional_str
from .extractor import extract_content_fields, first_unrecognized_key, unwrap_content

if TYPE_CHECKING:
    from app.services.identifier_resolver import IdentifierResolver

logger = logging.getLogger(__name__)


def _now_ms() -> int:
    return int(time.time() * 1000)


def _timestamp_ms(value: Any) -> int:
    seconds = coerce_int(value)
    return seconds * 1000 if seconds else _now_ms()


def _resolve_party(
    resolver: IdentifierResolver,
    jid: str | None,
    *,
    message_id: str | None,
    field: str,
) -> ResolvedIdentity:
    try:
        identity = resolver.resolve(jid)
    except Exception:
        logger.exception(
            "identity_resolution_error",
            extra={"message_id": message_id, "field": field},
        )
        return ResolvedIdentity(raw=jid, phone_number=None, lid=None, canonical_identifier=None)

    if jid and identity.phone_number is None:
        logger.error(
            "identity_resolution_failed",
            extra={
                "message_id": message_id,
                "field": field,
                "jid_kind": "lid" if is_lid_jid(jid) else "other",
            },
        )
    return identity


def _content_fields(
    content: dict[str, Any],
    resolver: IdentifierResolver,
    message_id: str | None,
) -> dict[str, Any]:
    if not content:
        return {"message_type": "unknown"}
    try:
        return extract_content_fields(unwrap_content(content), resolver)
    except Exception:
        logger.exception(
            "message_content_extraction_failed",
            extra={"message_id": message_id},
        )
        return {"message_type": "unsupported", "content": first_unrecognized_key(content)}


def normalize_message(raw: dict[str, Any], resolver: IdentifierResolver) -> NormalizedMessage:
    """Normaliza uma mensagem bruta (`WAMessage` em formato dict).

    Args:
        raw: Mensagem com `key`, `messageTimestamp` e `message`.
        resolver: Resolver ligado à conexão atual.

    Returns:
        NormalizedMessage com exatamente um message_type.
    """
    raw = as_dict(raw)
    key = as_dict(raw.get("key"))
    message_id = optional_str(key.get("id"))
    remote_jid = optional_str(key.get("remoteJid"))
    participant_jid = optional_str(key.get("participant"))

    sender = _resolve_party(resolver, remote_jid, message_id=message_id, field="from")
    participant = (
        _resolve_party(resolver, participant_jid, message_id=message_id, field="participant")
        if participant_jid
        else None
    )

    content = as_dict(raw.get("message"))
    fields = _content_fields(content, resolver, message_id)

    return NormalizedMessage(
        message_id=message_id,
        timestamp=_timestamp_ms(raw.get("messageTimestamp")),
        from_number=sender.phone_number,
        from_lid=sender.lid,
        from_jid=sender.canonical_identifier,
        from_jid_raw=remote_jid,
        from_me=bool(key.get("fromMe")),
        participant=participant.phone_number if participant else None,
        participant_lid=participant.lid if participant else None,
        participant_jid=participant.canonical_identifier if participant else None,
        participant_jid_raw=participant_jid,
        is_group=resolver.is_group(remote_jid),
        raw_message=content,
        **fields,
    )


class BaileysMessageNormalizer:
    """Adapter do normalizer para MessageNormalizerProtocol.

    Args:
        resolver: Resolver ligado à conexão atual do protocolo.
    """

    def __init__(self, resolver: IdentifierResolver) -> None:
        self._resolver = resolver

    @property
    def resolver(self) -> IdentifierResolver:
        return self._resolver

    def normalize(self, raw: dict[str, Any]) -> NormalizedMessage:
        return normalize_message(raw, self._resolver)
