"""Cache bidirecional LID <-> telefone sobre o diretório de mapeamentos.

Ciclo de vida:
- criado vazio, `loaded=False`
- `load()` (lazy, na primeira consulta, ou explícito via `preload()`)
  lê o diretório e liga o watcher uma única vez
- mutado pelo resolver (write-through) e por eventos do watcher
- `invalidate()` zera tudo e força nova carga

O cache só lê o diretório; quem persiste mapeamentos novos é o cliente
do protocolo. Toda escrita de um fato verificado atualiza as duas direções
sob o mesmo lock, então nenhum leitor vê LID->telefone sem telefone->LID.
Palpites da heurística numérica ficam só em LID->telefone.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from utils.errors import MappingFileError

if TYPE_CHECKING:
    from app.infra.identity.mapping_directory import MappingDirectory
    from app.infra.identity.watcher import MappingChangeEvent
    from app.protocols.identity import MappingWatcherProtocol

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class MappingValidation:
    """Diagnóstico do diretório de mapeamentos."""

    auth_dir_exists: bool
    mapping_count: int
    valid: bool
    message: str

    @property
    def ok(self) -> bool:
        return self.valid

    def as_dict(self) -> dict[str, Any]:
        return {
            "authDirExists": self.auth_dir_exists,
            "mappingCount": self.mapping_count,
            "valid": self.valid,
            "message": self.message,
        }


class IdentityCache:
    """Tabela de identidade em memória, espelho do diretório de mapeamentos.

    Args:
        directory: Diretório de mapeamentos (injetado; uma instância por sessão).
        watcher: Canal de mudanças do diretório. None desliga recarga a quente.
    """

    def __init__(
        self,
        directory: MappingDirectory,
        watcher: MappingWatcherProtocol | None = None,
    ) -> None:
        self._directory = directory
        self._watcher = watcher
        self._lid_to_phone: dict[str, str] = {}
        self._phone_to_lid: dict[str, str] = {}
        self._unverified: set[str] = set()
        self._loaded = False
        self._watching = False
        self._lock = threading.RLock()
        self._reload_gate = threading.Lock()

    @property
    def directory(self) -> MappingDirectory:
        return self._directory

    @property
    def loaded(self) -> bool:
        return self._loaded

    def __len__(self) -> int:
        return len(self._lid_to_phone)

    def load(self) -> None:
        """Carrega todos os mapeamentos do diretório. No-op se já carregado.

        Diretório ausente é o estado normal de uma sessão nova: marca como
        carregado e segue vazio. Arquivos malformados são ignorados.
        """
        with self._lock:
            if self._loaded:
                return

            if not self._directory.exists():
                logger.warning(
                    "lid_mapping_dir_missing",
                    extra={
                        "auth_dir": str(self._directory.path),
                        "detail": "normal for new sessions; mappings appear as messages arrive",
                    },
                )
                self._loaded = True
                return

            try:
                filenames = self._directory.list_filenames()
            except OSError as exc:
                logger.error(
                    "lid_mappings_load_failed",
                    extra={
                        "auth_dir": str(self._directory.path),
                        "error_type": type(exc).__name__,
                    },
                )
                # Sem retry em loop; a próxima mudança no diretório dispara nova carga
                self._loaded = True
                return

            loaded_count = self._load_entries(filenames)
            self._loaded = True
            logger.info(
                "lid_mappings_loaded",
                extra={"entries": loaded_count, "unique_lids": len(self._lid_to_phone)},
            )

        self._start_watching()

    def preload(self) -> None:
        """Aquecimento explícito (ex.: ao abrir a conexão)."""
        self.load()

    def get_phone(self, lid: str) -> str | None:
        self.load()
        return self._lid_to_phone.get(lid)

    def get_lid(self, phone_number: str) -> str | None:
        self.load()
        return self._phone_to_lid.get(phone_number)

    def is_verified(self, lid: str) -> bool:
        """False para mapeamentos vindos da heurística numérica."""
        return lid in self._lid_to_phone and lid not in self._unverified

    def insert(self, lid: str, phone_number: str, *, verified: bool = True) -> None:
        """Write-through em memória. Não persiste em disco.

        Fato verificado atualiza as duas direções; palpite (`verified=False`)
        só grava LID->telefone e é ignorado se o LID já tem fato verificado.
        """
        with self._lock:
            self._insert_locked(lid, phone_number, verified=verified)

    def invalidate(self) -> None:
        """Zera o cache; a próxima consulta recarrega do diretório."""
        with self._lock:
            self._clear_locked()

    def handle_change(self, event: MappingChangeEvent) -> None:
        """Assinante do watcher: arquivo forward mudou -> recarrega.

        Gatilhos que chegam durante uma recarga em andamento são
        absorvidos por ela.
        """
        if not self._directory.is_forward_file(event.filename):
            return
        if not self._reload_gate.acquire(blocking=False):
            logger.debug("lid_mapping_reload_coalesced", extra={"file": event.filename})
            return
        try:
            logger.info(
                "lid_mapping_file_changed",
                extra={"file": event.filename, "kind": event.kind},
            )
            with self._lock:
                self._clear_locked()
                self.load()
        finally:
            self._reload_gate.release()

    def validate(self) -> MappingValidation:
        """Diagnóstico independente de `load()`. Nunca levanta."""
        path = self._directory.path
        if not self._directory.exists():
            message = f"Auth directory not found at {path}. LID resolution will likely fail"
            logger.error("lid_mapping_validation_failed", extra={"auth_dir": str(path)})
            return MappingValidation(
                auth_dir_exists=False, mapping_count=0, valid=False, message=message
            )

        try:
            count = self._directory.count_forward_files()
        except OSError as exc:
            message = f"Error validating mappings: {type(exc).__name__}"
            logger.error(
                "lid_mapping_validation_failed",
                extra={"auth_dir": str(path), "error_type": type(exc).__name__},
            )
            return MappingValidation(
                auth_dir_exists=True, mapping_count=0, valid=False, message=message
            )

        if count == 0:
            message = "No LID mapping files found. This is normal for new sessions"
            logger.warning("lid_mapping_validation_empty", extra={"auth_dir": str(path)})
        else:
            message = f"Found {count} LID mapping file(s)"
            logger.info("lid_mapping_validation_ok", extra={"mapping_count": count})
        return MappingValidation(
            auth_dir_exists=True, mapping_count=count, valid=True, message=message
        )

    def stop_watching(self) -> None:
        if self._watcher is not None and self._watching:
            self._watcher.stop()
            self._watching = False

    def _load_entries(self, filenames: list[str]) -> int:
        loaded_count = 0
        for filename in filenames:
            if not self._directory.is_mapping_file(filename):
                continue
            try:
                record = self._directory.parse_entry(filename)
            except MappingFileError as exc:
                logger.warning(
                    "lid_mapping_entry_skipped",
                    extra={"file": exc.filename, "reason": exc.reason},
                )
                continue
            self._insert_locked(record.lid, record.phone_number, verified=True)
            loaded_count += 1
        return loaded_count

    def _insert_locked(self, lid: str, phone_number: str, *, verified: bool) -> None:
        if not verified:
            # Palpite só entra na direção LID->telefone e nunca cobre um fato verificado
            if lid in self._lid_to_phone and lid not in self._unverified:
                return
            self._lid_to_phone[lid] = phone_number
            self._unverified.add(lid)
            return

        # Remove contrapartes antigas para manter a relação 1:1
        previous_phone = self._lid_to_phone.get(lid)
        if previous_phone is not None and previous_phone != phone_number:
            if self._phone_to_lid.get(previous_phone) == lid:
                del self._phone_to_lid[previous_phone]
        previous_lid = self._phone_to_lid.get(phone_number)
        if previous_lid is not None and previous_lid != lid:
            if self._lid_to_phone.get(previous_lid) == phone_number:
                del self._lid_to_phone[previous_lid]
                self._unverified.discard(previous_lid)

        self._lid_to_phone[lid] = phone_number
        self._phone_to_lid[phone_number] = lid
        self._unverified.discard(lid)

    def _clear_locked(self) -> None:
        self._loaded = False
        self._lid_to_phone.clear()
        self._phone_to_lid.clear()
        self._unverified.clear()

    def _start_watching(self) -> None:
        if self._watcher is None or self._watching:
            return
        try:
            self._watcher.subscribe(self.handle_change)
            self._watcher.start()
        except (OSError, RuntimeError) as exc:
            logger.error(
                "lid_mapping_watch_unavailable",
                extra={"auth_dir": str(self._directory.path), "error_type": type(exc).__name__},
            )
            return
        self._watching = True
