"""Testes do normalizer de mensagens do cliente do protocolo."""

from __future__ import annotations

from pathlib import Path
from unittest.mock import MagicMock

import pytest

from api.normalizers.baileys import BaileysMessageNormalizer, normalize_message
from app.infra.identity import IdentityCache, MappingDirectory
from app.services import IdentifierResolver


@pytest.fixture
def resolver(auth_dir: Path, write_mapping) -> IdentifierResolver:
    write_mapping("5511999999999", "123456789")
    write_mapping("5511888888888", "987654321")
    return IdentifierResolver(IdentityCache(MappingDirectory(auth_dir)))


def _raw(message: dict, *, remote_jid: str = "123456789@lid", **key_fields) -> dict:
    return {
        "key": {"id": "MSG1", "remoteJid": remote_jid, "fromMe": False, **key_fields},
        "messageTimestamp": 1700000000,
        "message": message,
    }


class TestIdentityFields:
    def test_text_from_lid_sender(self, resolver: IdentifierResolver) -> None:
        normalized = normalize_message(_raw({"conversation": "hi"}), resolver)

        assert normalized.message_id == "MSG1"
        assert normalized.timestamp == 1700000000000
        assert normalized.from_number == "5511999999999"
        assert normalized.from_lid == "123456789"
        assert normalized.from_jid == "5511999999999@s.whatsapp.net"
        assert normalized.from_jid_raw == "123456789@lid"
        assert normalized.message_type == "text"
        assert normalized.content == "hi"
        assert normalized.is_group is False
        assert normalized.raw_message == {"conversation": "hi"}

    def test_group_participant(self, resolver: IdentifierResolver) -> None:
        raw = _raw(
            {"conversation": "oi"},
            remote_jid="5511777777777-1600000000@g.us",
            participant="987654321@lid",
        )

        normalized = normalize_message(raw, resolver)

        assert normalized.is_group is True
        assert normalized.from_jid == "5511777777777-1600000000@g.us"
        assert normalized.participant == "5511888888888"
        assert normalized.participant_lid == "987654321"
        assert normalized.participant_jid == "5511888888888@s.whatsapp.net"
        assert normalized.participant_jid_raw == "987654321@lid"

    def test_unresolved_lid_is_none_and_logged(
        self, resolver: IdentifierResolver, caplog: pytest.LogCaptureFixture
    ) -> None:
        with caplog.at_level("ERROR"):
            normalized = normalize_message(_raw({"conversation": "hi"}, remote_jid="42@lid"), resolver)

        assert normalized.from_number is None
        assert normalized.from_lid == "42"
        assert normalized.from_jid is None
        failures = [r for r in caplog.records if r.getMessage() == "identity_resolution_failed"]
        assert failures
        assert failures[0].message_id == "MSG1"

    def test_missing_timestamp_uses_now(self, resolver: IdentifierResolver) -> None:
        raw = _raw({"conversation": "hi"})
        raw.pop("messageTimestamp")
        assert normalize_message(raw, resolver).timestamp > 1700000000000

    def test_resolver_exception_does_not_break_normalization(self) -> None:
        resolver = MagicMock(spec=IdentifierResolver)
        resolver.resolve.side_effect = RuntimeError("boom")
        resolver.is_group.return_value = False

        normalized = normalize_message(_raw({"conversation": "hi"}), resolver)

        assert normalized.from_number is None
        assert normalized.content == "hi"


class TestContentTypes:
    def test_image(self, resolver: IdentifierResolver) -> None:
        raw = _raw(
            {
                "imageMessage": {
                    "caption": "look",
                    "mimetype": "image/jpeg",
                    "fileLength": {"low": 2048, "high": 0},
                    "url": "https://mmg.whatsapp.net/x",
                }
            }
        )

        normalized = normalize_message(raw, resolver)

        assert normalized.message_type == "image"
        assert normalized.caption == "look"
        assert normalized.has_media is True
        assert normalized.mime_type == "image/jpeg"
        assert normalized.file_size == 2048
        assert normalized.content is None

    def test_voice_note(self, resolver: IdentifierResolver) -> None:
        raw = _raw({"audioMessage": {"ptt": True, "seconds": 7, "mimetype": "audio/ogg"}})
        normalized = normalize_message(raw, resolver)
        assert normalized.message_type == "voice"
        assert normalized.duration == 7

    def test_document_inside_wrapper(self, resolver: IdentifierResolver) -> None:
        raw = _raw(
            {
                "documentWithCaptionMessage": {
                    "message": {"documentMessage": {"fileName": "a.pdf", "caption": "doc"}}
                }
            }
        )
        normalized = normalize_message(raw, resolver)
        assert normalized.message_type == "document"
        assert normalized.file_name == "a.pdf"

    def test_location(self, resolver: IdentifierResolver) -> None:
        raw = _raw({"locationMessage": {"degreesLatitude": -23.5, "degreesLongitude": -46.6}})
        normalized = normalize_message(raw, resolver)
        assert normalized.message_type == "location"
        assert normalized.location is not None
        assert normalized.location.latitude == -23.5

    def test_contacts_array(self, resolver: IdentifierResolver) -> None:
        raw = _raw(
            {
                "contactsArrayMessage": {
                    "contacts": [
                        {"displayName": "Ana", "vcard": "BEGIN:VCARD"},
                        {"displayName": "Bia"},
                    ]
                }
            }
        )
        normalized = normalize_message(raw, resolver)
        assert normalized.message_type == "contacts"
        assert [c.display_name for c in normalized.contacts or []] == ["Ana", "Bia"]

    def test_poll(self, resolver: IdentifierResolver) -> None:
        raw = _raw(
            {
                "pollCreationMessageV3": {
                    "name": "Almoço?",
                    "options": [{"optionName": "Sim"}, {"optionName": "Não"}],
                    "selectableOptionsCount": 1,
                }
            }
        )
        normalized = normalize_message(raw, resolver)
        assert normalized.message_type == "poll"
        assert normalized.poll_data is not None
        assert normalized.poll_data.options == ["Sim", "Não"]

    def test_reaction(self, resolver: IdentifierResolver) -> None:
        raw = _raw({"reactionMessage": {"text": "👍", "key": {"id": "ORIG"}}})
        normalized = normalize_message(raw, resolver)
        assert normalized.message_type == "reaction"
        assert normalized.reaction_data is not None
        assert normalized.reaction_data.target_message_id == "ORIG"

    def test_unsupported_key_is_reported(self, resolver: IdentifierResolver) -> None:
        raw = _raw({"messageContextInfo": {}, "fooMessage": {"x": 1}})

        normalized = normalize_message(raw, resolver)

        assert normalized.message_type == "unsupported"
        assert normalized.content == "fooMessage"
        assert normalized.raw_message == {"messageContextInfo": {}, "fooMessage": {"x": 1}}

    def test_empty_media_block_keeps_its_type(self, resolver: IdentifierResolver) -> None:
        """Bloco `{}` de um tipo conhecido não vira unsupported."""
        normalized = normalize_message(_raw({"imageMessage": {}}), resolver)

        assert normalized.message_type == "image"
        assert normalized.has_media is True
        assert normalized.content is None

    def test_non_finite_timestamp_falls_back_to_now(self, resolver: IdentifierResolver) -> None:
        for value in (float("nan"), float("inf")):
            raw = _raw({"conversation": "hi"})
            raw["messageTimestamp"] = value

            assert normalize_message(raw, resolver).timestamp > 1700000000000

    def test_empty_content_is_unknown(self, resolver: IdentifierResolver) -> None:
        normalized = normalize_message(_raw({}), resolver)
        assert normalized.message_type == "unknown"
        assert normalized.content is None

    def test_garbage_input_never_raises(self, resolver: IdentifierResolver) -> None:
        normalized = normalize_message({"key": "nope", "message": ["x"]}, resolver)
        assert normalized.message_id is None
        assert normalized.message_type == "unknown"


class TestExtendedText:
    def test_quoted_message_and_mentions(self, resolver: IdentifierResolver) -> None:
        raw = _raw(
            {
                "extendedTextMessage": {
                    "text": "@5511888888888 veja",
                    "contextInfo": {
                        "stanzaId": "QUOTED1",
                        "participant": "987654321@lid",
                        "quotedMessage": {"imageMessage": {"mimetype": "image/jpeg"}},
                        "mentionedJid": ["987654321@lid", "5511777777777@s.whatsapp.net", "42@lid"],
                    },
                }
            }
        )

        normalized = normalize_message(raw, resolver)

        assert normalized.message_type == "text"
        assert normalized.content == "@5511888888888 veja"
        quoted = normalized.quoted_message
        assert quoted is not None
        assert quoted.message_id == "QUOTED1"
        assert quoted.participant == "5511888888888"
        assert quoted.participant_lid == "987654321"
        assert quoted.content == "[Image]"
        assert normalized.mentions == ["5511888888888", "5511777777777"]
        assert normalized.mention_lids == ["987654321", "42"]


class TestPayloadShape:
    def test_camel_case_aliases(self, resolver: IdentifierResolver) -> None:
        payload = BaileysMessageNormalizer(resolver).normalize(
            _raw({"conversation": "hi"})
        ).to_payload()

        assert payload["from"] == "5511999999999"
        assert payload["fromLid"] == "123456789"
        assert payload["fromJid"] == "5511999999999@s.whatsapp.net"
        assert payload["messageType"] == "text"
        assert payload["messageId"] == "MSG1"
        assert payload["rawMessage"] == {"conversation": "hi"}
