"""Identidade — cache LID <-> telefone sobre o auth state do protocolo.

Módulos:
    - mapping_directory: leitura dos arquivos lid-mapping-*.json
    - identity_cache: cache bidirecional com carga lazy e recarga a quente
    - watcher: canal de eventos de mudança do diretório (polling)
"""

from __future__ import annotations

from app.infra.identity.identity_cache import IdentityCache, MappingValidation
from app.infra.identity.mapping_directory import MappingDirectory, MappingRecord
from app.infra.identity.watcher import MappingChangeEvent, MappingDirectoryWatcher

__all__ = [
    "IdentityCache",
    "MappingChangeEvent",
    "MappingDirectory",
    "MappingDirectoryWatcher",
    "MappingRecord",
    "MappingValidation",
]
