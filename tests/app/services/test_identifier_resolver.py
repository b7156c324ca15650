"""Testes do IdentifierResolver e da cadeia de estratégias."""

from __future__ import annotations

from pathlib import Path
from types import SimpleNamespace
from unittest.mock import patch

import pytest

from app.infra.identity import IdentityCache, MappingDirectory
from app.services import IdentifierResolver, socket_lid_mapping


def _resolver(path: Path, **kwargs) -> IdentifierResolver:
    return IdentifierResolver(IdentityCache(MappingDirectory(path)), **kwargs)


class TestResolveLid:
    def test_cache_hit(self, auth_dir: Path, write_mapping) -> None:
        write_mapping("5511999999999", "123456789")
        resolution = _resolver(auth_dir).resolve_lid("123456789")

        assert resolution.phone_number == "5511999999999"
        assert resolution.source == "cache"
        assert resolution.verified is True

    def test_live_table_wins_over_files(self, auth_dir: Path) -> None:
        resolver = _resolver(auth_dir, live_table=lambda: {"123456789": "5511777777777"})
        resolver.cache.load()
        (auth_dir / "lid-mapping-123456789_reverse.json").write_text(
            '"5511999999999"', encoding="utf-8"
        )

        resolution = resolver.resolve_lid("123456789")

        assert resolution.phone_number == "5511777777777"
        assert resolution.source == "live_table"
        assert resolver.cache.get_lid("5511777777777") == "123456789"

    def test_live_table_value_with_jid_suffix(self, auth_dir: Path) -> None:
        resolver = _resolver(
            auth_dir, live_table=lambda: {"123456789@lid": "5511777777777:3@s.whatsapp.net"}
        )
        assert resolver.resolve_lid("123456789").phone_number == "5511777777777"

    def test_reverse_file_written_after_load(self, auth_dir: Path) -> None:
        resolver = _resolver(auth_dir)
        resolver.cache.load()
        (auth_dir / "lid-mapping-123456789_reverse.json").write_text(
            '"5511999999999"', encoding="utf-8"
        )

        resolution = resolver.resolve_lid("123456789")

        assert resolution.source == "reverse_file"
        assert resolution.verified is True
        assert resolver.cache.get_phone("123456789") == "5511999999999"

    def test_forward_scan_when_only_forward_exists(self, auth_dir: Path, write_mapping) -> None:
        resolver = _resolver(auth_dir)
        resolver.cache.load()
        write_mapping("5511999999999", "123456789", reverse=False)

        resolution = resolver.resolve_lid("123456789")

        assert resolution.source == "forward_scan"
        assert resolution.phone_number == "5511999999999"

    def test_second_resolution_hits_cache_without_disk(self, auth_dir: Path, write_mapping) -> None:
        resolver = _resolver(auth_dir)
        resolver.cache.load()
        write_mapping("5511999999999", "123456789", reverse=False)
        first = resolver.resolve_lid("123456789")

        with patch.object(MappingDirectory, "scan_forward") as scan, patch.object(
            MappingDirectory, "read_reverse"
        ) as read_reverse:
            second = resolver.resolve_lid("123456789")

        assert first.phone_number == second.phone_number == "5511999999999"
        assert second.source == "cache"
        scan.assert_not_called()
        read_reverse.assert_not_called()

    def test_phone_shaped_lid_is_unverified_fallback(self, auth_dir: Path) -> None:
        resolver = _resolver(auth_dir)

        resolution = resolver.resolve_lid("5511999999999")
        again = resolver.resolve_lid("5511999999999")

        assert resolution.phone_number == "5511999999999"
        assert resolution.source == "heuristic"
        assert resolution.verified is False
        assert again.source == "cache"
        assert again.verified is False

    def test_heuristic_does_not_evict_verified_mapping(self, auth_dir: Path, write_mapping) -> None:
        write_mapping("5511999999999", "200000000000000001", reverse=False)
        resolver = _resolver(auth_dir)

        resolution = resolver.resolve_lid("5511999999999")

        assert resolution.source == "heuristic"
        assert resolver.resolve_lid("200000000000000001").phone_number == "5511999999999"
        assert resolver.cache.get_lid("5511999999999") == "200000000000000001"

    @pytest.mark.parametrize("lid", ["123456789", "abc123def45", "1234567890123456"])
    def test_unresolvable_returns_none(self, auth_dir: Path, lid: str) -> None:
        resolution = _resolver(auth_dir).resolve_lid(lid)

        assert resolution.phone_number is None
        assert resolution.source == "unresolved"
        assert resolution.resolved is False

    def test_missing_directory_still_resolves_heuristic(self, tmp_path: Path) -> None:
        resolver = _resolver(tmp_path / "missing")
        assert resolver.resolve_lid("123456789").phone_number is None
        assert resolver.resolve_lid("5511999999999").phone_number == "5511999999999"

    def test_empty_lid(self, auth_dir: Path) -> None:
        assert _resolver(auth_dir).resolve_lid("").resolved is False


class TestResolve:
    def test_lid_jid(self, auth_dir: Path, write_mapping) -> None:
        write_mapping("5511999999999", "123456789")
        identity = _resolver(auth_dir).resolve("123456789@lid")

        assert identity.phone_number == "5511999999999"
        assert identity.lid == "123456789"
        assert identity.canonical_identifier == "5511999999999@s.whatsapp.net"
        assert identity.source == "cache"

    def test_unresolved_lid_jid_never_leaks_lid_as_phone(self, auth_dir: Path) -> None:
        identity = _resolver(auth_dir).resolve("123456789@lid")

        assert identity.phone_number is None
        assert identity.lid == "123456789"
        assert identity.canonical_identifier is None

    def test_direct_jid_with_device(self, auth_dir: Path) -> None:
        identity = _resolver(auth_dir).resolve("5511999999999:7@s.whatsapp.net")

        assert identity.phone_number == "5511999999999"
        assert identity.lid is None
        assert identity.canonical_identifier == "5511999999999:7@s.whatsapp.net"

    def test_group_jid_passes_through(self, auth_dir: Path) -> None:
        resolver = _resolver(auth_dir)
        jid = "5511999999999-1600000000@g.us"

        assert resolver.extract_phone_number(jid) == "5511999999999"
        assert resolver.to_canonical_identifier(jid) == jid
        assert resolver.is_group(jid) is True

    def test_unknown_form_uses_leading_digits(self, auth_dir: Path) -> None:
        resolver = _resolver(auth_dir)

        assert resolver.extract_phone_number("5511999999999") == "5511999999999"
        assert resolver.to_canonical_identifier("5511999999999") == (
            "5511999999999@s.whatsapp.net"
        )
        assert resolver.extract_phone_number("status@broadcast") is None

    def test_none(self, auth_dir: Path) -> None:
        identity = _resolver(auth_dir).resolve(None)
        assert identity.phone_number is None
        assert identity.canonical_identifier is None

    def test_extract_lid(self) -> None:
        assert IdentifierResolver.extract_lid("123456789@lid") == "123456789"
        assert IdentifierResolver.extract_lid("5511999999999@s.whatsapp.net") is None


class TestSocketLidMapping:
    def test_reads_attribute_chain(self) -> None:
        mapping = {"123": "5511999999999"}
        sock = SimpleNamespace(
            authState=SimpleNamespace(creds=SimpleNamespace(lid=SimpleNamespace(mapping=mapping)))
        )
        assert socket_lid_mapping(sock)() == mapping

    def test_reads_dict_chain(self) -> None:
        sock = {"authState": {"creds": {"lid": {"mapping": {"123": "5511999999999"}}}}}
        assert socket_lid_mapping(sock)() == {"123": "5511999999999"}

    def test_missing_table(self) -> None:
        sock = SimpleNamespace(authState=SimpleNamespace(creds=SimpleNamespace()))
        assert socket_lid_mapping(sock)() is None

    def test_with_live_table_shares_cache(self, auth_dir: Path) -> None:
        resolver = _resolver(auth_dir)
        bound = resolver.with_live_table(lambda: {"123": "5511999999999"})

        assert bound.cache is resolver.cache
        assert bound.resolve_lid("123").source == "live_table"
        assert resolver.resolve_lid("123").source == "cache"
