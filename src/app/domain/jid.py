"""Formas de identificador (JID) do protocolo.

Um JID tem a forma `<user>[:<device>]@<server>`. Os servidores relevantes:
- `lid`: identificador local vinculado (LID), opaco, não é telefone
- `s.whatsapp.net`: usuário em formato direto (o user é o telefone)
- `g.us`: grupo (`<criador>-<timestamp>@g.us` ou id numérico)
"""

from __future__ import annotations

import re

LID_SUFFIX = "@lid"
USER_SUFFIX = "@s.whatsapp.net"
GROUP_SUFFIX = "@g.us"

# LIDs de contatos novos frequentemente têm formato de telefone antes do mapeamento existir
PHONE_SHAPED = re.compile(r"^\d{10,15}$")
_LEADING_DIGITS = re.compile(r"^(\d+)")


def is_lid_jid(jid: str | None) -> bool:
    return bool(jid) and jid.endswith(LID_SUFFIX)


def is_user_jid(jid: str | None) -> bool:
    return bool(jid) and jid.endswith(USER_SUFFIX)


def is_group_jid(jid: str | None) -> bool:
    return bool(jid) and jid.endswith(GROUP_SUFFIX)


def local_part(jid: str) -> str:
    """Parte antes do `@` (o JID inteiro se não houver `@`)."""
    return jid.split("@", 1)[0]


def user_part(jid: str) -> str:
    """Parte local sem o sufixo de dispositivo (`5511999:12@...` -> `5511999`)."""
    return local_part(jid).split(":", 1)[0]


def group_owner_part(jid: str) -> str:
    """Trecho numérico do id de grupo, antes do `-`."""
    return local_part(jid).split("-", 1)[0]


def leading_digits(value: str) -> str | None:
    match = _LEADING_DIGITS.match(value)
    return match.group(1) if match else None


def is_phone_shaped(value: str) -> bool:
    return bool(PHONE_SHAPED.match(value))


def to_user_jid(phone_number: str) -> str:
    """Monta o JID canônico `<telefone>@s.whatsapp.net`."""
    return f"{phone_number}{USER_SUFFIX}"
