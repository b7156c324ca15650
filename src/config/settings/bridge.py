"""Settings da ponte com o cliente do protocolo (sessão e mapeamentos LID).

O cliente do protocolo persiste o auth state em um diretório com um
arquivo JSON por chave. Os arquivos `lid-mapping-*` desse diretório são a
fonte do cache de identidade.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path

DEFAULT_SESSION_DIRNAME = "auth_info_baileys"
DEFAULT_MAPPING_PREFIX = "lid-mapping-"


@dataclass(frozen=True)
class BridgeSettings:
    """Configurações da sessão do protocolo.

    Attributes:
        session_path: Diretório do auth state (contém os lid-mapping-*.json)
        mapping_prefix: Prefixo dos arquivos de mapeamento LID
        watch_enabled: Liga o watcher de recarga a quente
        watch_interval_seconds: Intervalo de polling do watcher
    """

    session_path: Path = Path(DEFAULT_SESSION_DIRNAME)
    mapping_prefix: str = DEFAULT_MAPPING_PREFIX
    watch_enabled: bool = True
    watch_interval_seconds: float = 2.0

    def validate(self) -> list[str]:
        """Valida configurações da sessão.

        Returns:
            Lista de erros de validação (vazia = tudo OK).
        """
        errors: list[str] = []

        if not str(self.session_path):
            errors.append("SESSION_PATH não pode ser vazio")

        if not self.mapping_prefix:
            errors.append("LID_MAPPING_PREFIX não pode ser vazio")

        if self.watch_interval_seconds <= 0:
            errors.append("LID_WATCH_INTERVAL_SECONDS deve ser > 0")

        return errors


def _load_from_env() -> BridgeSettings:
    raw_path = os.getenv("SESSION_PATH", "")
    session_path = Path(raw_path) if raw_path else Path.cwd() / DEFAULT_SESSION_DIRNAME
    return BridgeSettings(
        session_path=session_path,
        mapping_prefix=os.getenv("LID_MAPPING_PREFIX", DEFAULT_MAPPING_PREFIX),
        watch_enabled=os.getenv("LID_WATCH_ENABLED", "true").lower() in ("true", "1", "yes"),
        watch_interval_seconds=float(os.getenv("LID_WATCH_INTERVAL_SECONDS", "2")),
    )


@lru_cache(maxsize=1)
def get_bridge_settings() -> BridgeSettings:
    """Retorna instância cacheada de BridgeSettings."""
    return _load_from_env()
