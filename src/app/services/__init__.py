"""Serviços de aplicação.

Unidades reutilizáveis sem IO direto próprio; o IO de arquivos fica
em app/infra/identity e é injetado.
"""

from app.services.identifier_resolver import (
    IdentifierResolver,
    LidResolution,
    ResolvedIdentity,
    socket_lid_mapping,
)

__all__ = [
    "IdentifierResolver",
    "LidResolution",
    "ResolvedIdentity",
    "socket_lid_mapping",
]
