"""Bootstrap da aplicação — inicialização e wiring.

Composition root: configura logging, valida settings e expõe as
factories que conectam implementações concretas aos protocolos.

Uso:
    from app.bootstrap import initialize_app, validate_runtime_settings

    initialize_app()
    validate_runtime_settings()
"""

from __future__ import annotations

import logging
import os

from app.observability import get_correlation_id
from config.logging import configure_logging
from config.settings import (
    get_base_settings,
    get_bridge_settings,
    get_dedupe_settings,
    get_webhook_settings,
)

SERVICE_NAME = "zap_bridge"

DEFAULT_LOG_LEVEL = "INFO"
DEBUG_LOG_LEVEL = "DEBUG"
STRICT_VALIDATION_ENVS = {"staging", "production"}

logger = logging.getLogger(__name__)


def initialize_app() -> None:
    """Configura logging estruturado JSON com correlation_id.

    Deve ser chamada uma vez no início do serviço. `LOG_LEVEL` explícito
    vence; sem ele, `DEBUG=true` liga o nível DEBUG.
    """
    configure_logging(
        level=resolve_log_level(),
        service_name=SERVICE_NAME,
        correlation_id_getter=get_correlation_id,
    )


def resolve_log_level() -> str:
    explicit = os.getenv("LOG_LEVEL")
    if explicit:
        return explicit.upper()
    return DEBUG_LOG_LEVEL if get_base_settings().debug else DEFAULT_LOG_LEVEL


def validate_runtime_settings() -> None:
    """Valida settings no startup.

    Em `staging`/`production` falha rápido; em `development` só alerta.
    """
    base = get_base_settings()
    strict_mode = base.environment in STRICT_VALIDATION_ENVS
    errors: list[str] = []

    errors.extend(f"base: {error}" for error in base.validate())
    errors.extend(f"bridge: {error}" for error in get_bridge_settings().validate())
    errors.extend(f"dedupe: {error}" for error in get_dedupe_settings().validate())
    errors.extend(f"webhook: {error}" for error in get_webhook_settings().validate())

    if not errors:
        logger.info(
            "settings_validated",
            extra={"component": "bootstrap", "result": "ok", "environment": base.environment},
        )
        return

    logger.warning(
        "settings_validation_failed",
        extra={
            "component": "bootstrap",
            "result": "failed",
            "environment": base.environment,
            "error_count": len(errors),
            "errors": errors,
        },
    )
    if strict_mode:
        details = "\n".join(f"- {error}" for error in errors)
        raise RuntimeError(f"Configuração inválida para {base.environment}:\n{details}")
