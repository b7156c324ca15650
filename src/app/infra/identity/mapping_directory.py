"""Leitura dos arquivos de mapeamento LID do auth state.

Layout (somente leitura para o zap_bridge; quem escreve é o cliente do protocolo):
- `lid-mapping-<telefone>.json`: conteúdo JSON é o LID (string)
- `lid-mapping-<lid>_reverse.json`: conteúdo JSON é o telefone (string)

Um valor por arquivo. Arquivos malformados levantam MappingFileError;
cabe ao chamador decidir se ignora ou propaga.
"""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass
from pathlib import Path

from config.settings.bridge import DEFAULT_MAPPING_PREFIX
from utils.errors import MappingFileError

logger = logging.getLogger(__name__)

REVERSE_MARKER = "_reverse"
JSON_EXTENSION = ".json"


@dataclass(frozen=True, slots=True)
class MappingRecord:
    """Um fato de identidade: LID <-> telefone."""

    lid: str
    phone_number: str


class MappingDirectory:
    """Acesso tipado ao diretório de mapeamentos.

    Args:
        path: Diretório do auth state.
        prefix: Prefixo dos arquivos de mapeamento.
    """

    def __init__(self, path: Path | str, prefix: str = DEFAULT_MAPPING_PREFIX) -> None:
        self._path = Path(path)
        self._prefix = prefix

    @property
    def path(self) -> Path:
        return self._path

    @property
    def prefix(self) -> str:
        return self._prefix

    def exists(self) -> bool:
        return self._path.is_dir()

    def list_filenames(self) -> list[str]:
        """Lista os arquivos do diretório em ordem estável.

        Raises:
            OSError: Se o diretório não puder ser lido.
        """
        return sorted(os.listdir(self._path))

    def is_mapping_file(self, filename: str) -> bool:
        return filename.startswith(self._prefix) and filename.endswith(JSON_EXTENSION)

    def is_reverse_file(self, filename: str) -> bool:
        return self.is_mapping_file(filename) and filename.endswith(
            f"{REVERSE_MARKER}{JSON_EXTENSION}"
        )

    def is_forward_file(self, filename: str) -> bool:
        return self.is_mapping_file(filename) and REVERSE_MARKER not in filename

    def forward_filename(self, phone_number: str) -> str:
        return f"{self._prefix}{phone_number}{JSON_EXTENSION}"

    def reverse_filename(self, lid: str) -> str:
        return f"{self._prefix}{lid}{REVERSE_MARKER}{JSON_EXTENSION}"

    def count_forward_files(self) -> int:
        """Conta arquivos forward (sem ler conteúdo).

        Raises:
            OSError: Se o diretório não puder ser lido.
        """
        return sum(1 for name in self.list_filenames() if self.is_forward_file(name))

    def parse_entry(self, filename: str) -> MappingRecord:
        """Lê um arquivo forward ou reverse e devolve o fato.

        Raises:
            MappingFileError: Nome fora do padrão ou conteúdo inválido.
        """
        if self.is_reverse_file(filename):
            lid = filename[len(self._prefix) : -len(REVERSE_MARKER + JSON_EXTENSION)]
            if not lid:
                raise MappingFileError(filename, "empty_lid_in_filename")
            return MappingRecord(lid=lid, phone_number=self._read_scalar(filename))
        if self.is_forward_file(filename):
            phone_number = filename[len(self._prefix) : -len(JSON_EXTENSION)]
            if not phone_number:
                raise MappingFileError(filename, "empty_phone_in_filename")
            return MappingRecord(lid=self._read_scalar(filename), phone_number=phone_number)
        raise MappingFileError(filename, "not_a_mapping_file")

    def read_reverse(self, lid: str) -> str | None:
        """Lê o telefone do arquivo reverse deste LID, direto do disco.

        Returns:
            Telefone, ou None se o arquivo não existe.

        Raises:
            MappingFileError: Se o arquivo existe mas está malformado.
        """
        filename = self.reverse_filename(lid)
        if not (self._path / filename).is_file():
            return None
        return self._read_scalar(filename)

    def scan_forward(self, lid: str) -> str | None:
        """Varre todos os arquivos forward procurando o LID (custo O(n) leituras).

        Arquivos malformados são ignorados com warning.

        Returns:
            Telefone do arquivo cujo conteúdo é o LID, ou None.

        Raises:
            OSError: Se o diretório não puder ser listado.
        """
        for filename in self.list_filenames():
            if not self.is_forward_file(filename):
                continue
            try:
                record = self.parse_entry(filename)
            except MappingFileError as exc:
                logger.warning(
                    "lid_mapping_entry_skipped",
                    extra={"file": exc.filename, "reason": exc.reason},
                )
                continue
            if record.lid == lid:
                return record.phone_number
        return None

    def _read_scalar(self, filename: str) -> str:
        try:
            value = json.loads((self._path / filename).read_text(encoding="utf-8"))
        except OSError as exc:
            raise MappingFileError(filename, f"unreadable: {type(exc).__name__}") from exc
        except json.JSONDecodeError as exc:
            raise MappingFileError(filename, "invalid_json") from exc

        if isinstance(value, bool):
            raise MappingFileError(filename, "unexpected_value_type")
        if isinstance(value, int):
            return str(value)
        if isinstance(value, str) and value.strip():
            return value.strip()
        raise MappingFileError(filename, "unexpected_value_type")
