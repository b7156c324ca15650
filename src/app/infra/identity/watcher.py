"""Watcher do diretório de mapeamentos — publica eventos de mudança.

O watcher não conhece o cache: ele só compara snapshots (mtime, tamanho)
dos arquivos `lid-mapping-*` e entrega MappingChangeEvent a quem assinou.
Roda em thread daemon com polling; `check_once()` faz uma rodada
síncrona e é o que os testes usam.
"""

from __future__ import annotations

import logging
import os
import threading
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Literal

from config.settings.bridge import DEFAULT_MAPPING_PREFIX

if TYPE_CHECKING:
    from collections.abc import Callable

logger = logging.getLogger(__name__)

ChangeKind = Literal["created", "modified", "deleted"]

_Snapshot = dict[str, tuple[int, int]]


@dataclass(frozen=True, slots=True)
class MappingChangeEvent:
    """Mudança observada em um arquivo de mapeamento."""

    filename: str
    kind: ChangeKind


class MappingDirectoryWatcher:
    """Observa o diretório por polling e notifica assinantes.

    Args:
        path: Diretório do auth state.
        prefix: Prefixo dos arquivos observados.
        interval_seconds: Intervalo entre rodadas de polling.
    """

    def __init__(
        self,
        path: Path | str,
        prefix: str = DEFAULT_MAPPING_PREFIX,
        interval_seconds: float = 2.0,
    ) -> None:
        self._path = Path(path)
        self._prefix = prefix
        self._interval = interval_seconds
        self._subscribers: list[Callable[[MappingChangeEvent], None]] = []
        self._snapshot: _Snapshot | None = None
        self._stop = threading.Event()
        self._thread: threading.Thread | None = None

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def subscribe(self, callback: Callable[[MappingChangeEvent], None]) -> None:
        if callback not in self._subscribers:
            self._subscribers.append(callback)

    def start(self) -> None:
        """Inicia a thread de polling. Idempotente."""
        if self.running:
            return
        self._snapshot = self._take_snapshot()
        self._stop.clear()
        self._thread = threading.Thread(
            target=self._run,
            name="lid-mapping-watcher",
            daemon=True,
        )
        self._thread.start()
        logger.info(
            "lid_mapping_watch_started",
            extra={"auth_dir": str(self._path), "interval_seconds": self._interval},
        )

    def stop(self, timeout: float = 5.0) -> None:
        self._stop.set()
        if self._thread is not None:
            self._thread.join(timeout)
            self._thread = None

    def check_once(self) -> list[MappingChangeEvent]:
        """Compara com o snapshot anterior e publica as diferenças.

        A primeira chamada só registra a linha de base.
        """
        current = self._take_snapshot()
        previous = self._snapshot
        self._snapshot = current
        if previous is None:
            return []

        events: list[MappingChangeEvent] = []
        for name, stat in current.items():
            if name not in previous:
                events.append(MappingChangeEvent(name, "created"))
            elif previous[name] != stat:
                events.append(MappingChangeEvent(name, "modified"))
        events.extend(
            MappingChangeEvent(name, "deleted") for name in previous if name not in current
        )

        for event in events:
            self._publish(event)
        return events

    def _run(self) -> None:
        while not self._stop.wait(self._interval):
            self.check_once()

    def _publish(self, event: MappingChangeEvent) -> None:
        for callback in list(self._subscribers):
            try:
                callback(event)
            except Exception:
                # Thread do watcher precisa sobreviver a um assinante com defeito
                logger.exception(
                    "lid_mapping_watch_callback_failed",
                    extra={"file": event.filename, "kind": event.kind},
                )

    def _take_snapshot(self) -> _Snapshot:
        snapshot: _Snapshot = {}
        try:
            entries = list(os.scandir(self._path))
        except FileNotFoundError:
            return snapshot
        except OSError as exc:
            logger.warning(
                "lid_mapping_watch_scan_failed",
                extra={"auth_dir": str(self._path), "error_type": type(exc).__name__},
            )
            return self._snapshot or snapshot

        for entry in entries:
            if not entry.name.startswith(self._prefix):
                continue
            try:
                stat = entry.stat()
            except FileNotFoundError:
                continue
            snapshot[entry.name] = (stat.st_mtime_ns, stat.st_size)
        return snapshot
