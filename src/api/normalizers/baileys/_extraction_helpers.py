"""Helpers de extração de campos por tipo de conteúdo.

Cada função recebe o bloco do tipo (ex: `imageMessage`) e devolve só os
campos que aquele tipo preenche. Blocos com formato inesperado viram
valores None, nunca exceção.
"""

from __future__ import annotations

import math
from typing import Any


def as_dict(value: Any) -> dict[str, Any]:
    return value if isinstance(value, dict) else {}


def optional_str(value: Any) -> str | None:
    if value is None or value == "":
        return None
    return str(value)


def coerce_int(value: Any) -> int | None:
    """Inteiro a partir de int, float, string numérica ou Long `{low, high}`."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if math.isfinite(value) else None
    if isinstance(value, str) and value.strip().isdecimal():
        return int(value.strip())
    if isinstance(value, dict) and isinstance(value.get("low"), int):
        high = value.get("high") if isinstance(value.get("high"), int) else 0
        return (high << 32) + (value["low"] & 0xFFFFFFFF)
    return None


def coerce_float(value: Any) -> float | None:
    if isinstance(value, bool):
        return None
    if not isinstance(value, (int, float, str)):
        return None
    try:
        number = float(value)
    except (ValueError, OverflowError):
        return None
    return number if math.isfinite(number) else None


def extract_media_fields(block: dict[str, Any]) -> dict[str, Any]:
    """Campos comuns a image, video, audio, document e sticker."""
    return {
        "has_media": True,
        "mime_type": optional_str(block.get("mimetype")),
        "file_size": coerce_int(block.get("fileLength")),
        "media_url": optional_str(block.get("url")),
    }


def extract_image_message(block: dict[str, Any]) -> dict[str, Any]:
    return {
        **extract_media_fields(block),
        "caption": optional_str(block.get("caption")),
    }


def extract_video_message(block: dict[str, Any]) -> dict[str, Any]:
    return {
        **extract_media_fields(block),
        "caption": optional_str(block.get("caption")),
        "duration": coerce_int(block.get("seconds")),
    }


def extract_audio_message(block: dict[str, Any]) -> dict[str, Any]:
    return {
        **extract_media_fields(block),
        "message_type": "voice" if block.get("ptt") else "audio",
        "duration": coerce_int(block.get("seconds")),
    }


def extract_document_message(block: dict[str, Any]) -> dict[str, Any]:
    return {
        **extract_media_fields(block),
        "file_name": optional_str(block.get("fileName")),
        "caption": optional_str(block.get("caption")),
    }


def extract_sticker_message(block: dict[str, Any]) -> dict[str, Any]:
    return extract_media_fields(block)


def extract_location_message(block: dict[str, Any]) -> dict[str, Any]:
    return {
        "location": {
            "latitude": coerce_float(block.get("degreesLatitude")),
            "longitude": coerce_float(block.get("degreesLongitude")),
            "name": optional_str(block.get("name")),
            "address": optional_str(block.get("address")),
        }
    }


def _contact_entry(block: Any) -> dict[str, Any]:
    card = as_dict(block)
    return {
        "display_name": optional_str(card.get("displayName")),
        "vcard": optional_str(card.get("vcard")),
    }


def extract_contact_message(block: dict[str, Any]) -> dict[str, Any]:
    return {"contacts": [_contact_entry(block)]}


def extract_contacts_array_message(block: dict[str, Any]) -> dict[str, Any]:
    contacts = block.get("contacts")
    if not isinstance(contacts, list):
        contacts = []
    return {"contacts": [_contact_entry(contact) for contact in contacts]}


def extract_poll_message(block: dict[str, Any]) -> dict[str, Any]:
    options = block.get("options")
    labels: list[str] = []
    if isinstance(options, list):
        for option in options:
            label = optional_str(as_dict(option).get("optionName"))
            if label is not None:
                labels.append(label)
    return {
        "poll_data": {
            "name": optional_str(block.get("name")),
            "options": labels,
            "selectable_count": coerce_int(block.get("selectableOptionsCount")),
        }
    }


def extract_reaction_message(block: dict[str, Any]) -> dict[str, Any]:
    return {
        "reaction_data": {
            "emoji": optional_str(block.get("text")),
            "target_message_id": optional_str(as_dict(block.get("key")).get("id")),
        }
    }
