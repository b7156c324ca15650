"""Configuração do pytest para o projeto zap-bridge."""

from __future__ import annotations

import json
import sys
from pathlib import Path

import pytest

# Adiciona src/ ao PYTHONPATH para permitir imports absolutos
src_path = Path(__file__).parent.parent / "src"
if str(src_path) not in sys.path:
    sys.path.insert(0, str(src_path))


@pytest.fixture
def auth_dir(tmp_path: Path) -> Path:
    """Diretório de auth state vazio."""
    path = tmp_path / "auth_info_baileys"
    path.mkdir()
    return path


@pytest.fixture
def write_mapping(auth_dir: Path):
    """Escreve pares forward/reverse no formato do cliente do protocolo."""

    def _write(phone_number: str, lid: str, *, reverse: bool = True) -> None:
        (auth_dir / f"lid-mapping-{phone_number}.json").write_text(
            json.dumps(lid), encoding="utf-8"
        )
        if reverse:
            (auth_dir / f"lid-mapping-{lid}_reverse.json").write_text(
                json.dumps(phone_number), encoding="utf-8"
            )

    return _write
