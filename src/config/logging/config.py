"""Configuração centralizada de logging.

Um único StreamHandler no root logger, formatado em JSON, com o
filter que injeta service e correlation_id.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from config.logging.filters import CorrelationIdFilter
from config.logging.formatters import create_json_formatter

if TYPE_CHECKING:
    from collections.abc import Callable

VALID_LOG_LEVELS = frozenset({"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"})

DEFAULT_SERVICE_NAME = "zap_bridge"


def configure_logging(
    level: str = "INFO",
    service_name: str = DEFAULT_SERVICE_NAME,
    correlation_id_getter: Callable[[], str] | None = None,
) -> None:
    """Configura logging JSON estruturado para o serviço.

    Chamada uma vez no bootstrap (app/bootstrap/). Chamadas repetidas
    substituem o handler anterior em vez de duplicar saída.

    Args:
        level: Nível de log (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        service_name: Nome do serviço gravado em cada record.
        correlation_id_getter: Função que retorna o correlation_id do
            contexto atual (ver app/observability).

    Raises:
        ValueError: Se o nível de log for inválido.
    """
    level_upper = level.upper()
    if level_upper not in VALID_LOG_LEVELS:
        raise ValueError(
            f"Nível de log inválido: {level}. "
            f"Válidos: {', '.join(sorted(VALID_LOG_LEVELS))}"
        )

    handler = logging.StreamHandler()
    handler.setLevel(level_upper)
    handler.setFormatter(create_json_formatter())
    handler.addFilter(CorrelationIdFilter(service_name, correlation_id_getter))

    root = logging.getLogger()
    root.setLevel(level_upper)
    root.handlers = [handler]


def get_logger(name: str) -> logging.Logger:
    """Retorna logger para o módulo (geralmente __name__)."""
    return logging.getLogger(name)


def log_fallback(
    logger: logging.Logger,
    component: str,
    reason: str | None = None,
    **fields: object,
) -> None:
    """Registra que um fallback foi aplicado no lugar do caminho principal.

    Usado, por exemplo, quando um LID só pôde ser resolvido pela
    heurística numérica e não por um mapeamento verificado.

    Args:
        logger: Logger do módulo chamador.
        component: Nome do componente (ex: "identifier_resolver").
        reason: Motivo curto do fallback (ex: "lid_mapping_not_found").
        **fields: Campos extras anexados ao record.
    """
    extra: dict[str, object] = {
        "fallback_used": True,
        "component": component,
    }
    if reason:
        extra["reason"] = reason
    extra.update(fields)

    logger.warning(
        "Fallback applied for %s",
        component,
        extra=extra,
    )
