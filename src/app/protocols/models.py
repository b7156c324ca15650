"""Contratos de dados do pipeline inbound.

NormalizedMessage é o formato estável entregue ao webhook. Nomes de
campo em snake_case no Python e camelCase no JSON (`by_alias=True`).
"""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

MessageType = Literal[
    "text",
    "image",
    "video",
    "audio",
    "voice",
    "document",
    "sticker",
    "location",
    "contact",
    "contacts",
    "poll",
    "reaction",
    "unsupported",
    "unknown",
]


class _CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        ser_json_bytes="base64",
    )


class QuotedMessage(_CamelModel):
    """Resumo da mensagem citada em uma resposta."""

    message_id: str | None = None
    participant: str | None = None
    participant_lid: str | None = None
    participant_jid: str | None = None
    content: str


class LocationData(_CamelModel):
    latitude: float | None = None
    longitude: float | None = None
    name: str | None = None
    address: str | None = None


class ContactEntry(_CamelModel):
    display_name: str | None = None
    vcard: str | None = None


class PollData(_CamelModel):
    name: str | None = None
    options: list[str] = Field(default_factory=list)
    selectable_count: int | None = None


class ReactionData(_CamelModel):
    emoji: str | None = None
    target_message_id: str | None = None


class NormalizedMessage(_CamelModel):
    """Mensagem inbound normalizada.

    Exatamente um `message_type`; campos que não se aplicam ao tipo
    ficam None, lista vazia ou False.
    """

    # Identidade
    message_id: str | None
    timestamp: int
    from_number: str | None = Field(default=None, alias="from")
    from_lid: str | None = None
    from_jid: str | None = None
    from_jid_raw: str | None = None
    from_me: bool = False
    participant: str | None = None
    participant_lid: str | None = None
    participant_jid: str | None = None
    participant_jid_raw: str | None = None
    is_group: bool = False

    # Conteúdo
    message_type: MessageType
    content: str | None = None
    caption: str | None = None
    quoted_message: QuotedMessage | None = None
    mentions: list[str] = Field(default_factory=list)
    mention_lids: list[str] = Field(default_factory=list)
    has_media: bool = False
    media_url: str | None = None
    mime_type: str | None = None
    file_name: str | None = None
    file_size: int | None = None
    duration: int | None = None
    location: LocationData | None = None
    contacts: list[ContactEntry] | None = None
    poll_data: PollData | None = None
    reaction_data: ReactionData | None = None

    # Cópia literal do bloco de conteúdo para auditoria
    raw_message: dict[str, Any] = Field(default_factory=dict)

    def to_payload(self) -> dict[str, Any]:
        """Dict JSON-serializável com nomes camelCase."""
        return self.model_dump(mode="json", by_alias=True)
