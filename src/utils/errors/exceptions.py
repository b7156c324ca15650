"""Exceções de domínio do zap_bridge."""

from __future__ import annotations


class BridgeError(RuntimeError):
    """Base para falhas recuperáveis da ponte."""


class MappingFileError(BridgeError):
    """Arquivo de mapeamento LID ilegível ou com conteúdo inválido.

    Tratado dentro da carga do cache: o arquivo é ignorado e a carga segue.
    """

    def __init__(self, filename: str, reason: str) -> None:
        super().__init__(f"{filename}: {reason}")
        self.filename = filename
        self.reason = reason


class WebhookDeliveryError(BridgeError):
    """Falha ao entregar um evento no webhook de saída."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code
