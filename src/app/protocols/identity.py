"""Protocolos do subsistema de identidade (LID <-> telefone)."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from app.infra.identity.watcher import MappingChangeEvent

# Tabela viva do cliente do protocolo (creds.lid.mapping), lida sob demanda
LidMappingSource = Callable[[], Mapping[str, str] | None]


class MappingWatcherProtocol(Protocol):
    """Canal de eventos de mudança no diretório de mapeamentos."""

    def subscribe(self, callback: Callable[[MappingChangeEvent], None]) -> None: ...

    def start(self) -> None: ...

    def stop(self, timeout: float = 5.0) -> None: ...
