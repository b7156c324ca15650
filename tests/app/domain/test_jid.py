"""Testes das formas de JID."""

from __future__ import annotations

import pytest

from app.domain.jid import (
    group_owner_part,
    is_group_jid,
    is_lid_jid,
    is_phone_shaped,
    is_user_jid,
    leading_digits,
    to_user_jid,
    user_part,
)


def test_suffix_predicates() -> None:
    assert is_lid_jid("123@lid")
    assert is_user_jid("5511999999999@s.whatsapp.net")
    assert is_group_jid("5511999999999-1600000000@g.us")
    assert not is_lid_jid(None)
    assert not is_user_jid("")


def test_user_part_strips_device_suffix() -> None:
    assert user_part("5511999999999:12@s.whatsapp.net") == "5511999999999"
    assert user_part("123456789@lid") == "123456789"


def test_group_owner_part() -> None:
    assert group_owner_part("5511999999999-1600000000@g.us") == "5511999999999"
    assert group_owner_part("120363000000000000@g.us") == "120363000000000000"


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        ("1234567890", True),
        ("123456789012345", True),
        ("123456789", False),
        ("1234567890123456", False),
        ("12345abc90", False),
    ],
)
def test_is_phone_shaped(value: str, expected: bool) -> None:
    assert is_phone_shaped(value) is expected


def test_leading_digits_and_user_jid() -> None:
    assert leading_digits("5511abc") == "5511"
    assert leading_digits("abc") is None
    assert to_user_jid("5511999999999") == "5511999999999@s.whatsapp.net"
