"""Entrypoint HTTP do zap-bridge.

Expõe health/readiness e diagnóstico de identidade. O cliente do
protocolo roda fora deste processo HTTP e chama os handlers de
`app.coordinators.whatsapp.inbound`.

Uso (produção):
    uvicorn app.app:app --host 0.0.0.0 --port 8080

Uso (desenvolvimento):
    uvicorn app.app:app --reload --host 0.0.0.0 --port 8080
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

from fastapi import FastAPI

from api.routes import create_api_router
from app.bootstrap import initialize_app, validate_runtime_settings
from app.bootstrap.dependencies import create_identifier_resolver, get_identity_cache
from app.coordinators.whatsapp.inbound.handler import handle_connection_update
from config.logging import get_logger

if TYPE_CHECKING:
    from collections.abc import AsyncGenerator

# Inicializar logging ANTES de qualquer import que use logger
initialize_app()

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Gerencia ciclo de vida da aplicação.

    Startup:
    - Valida configurações
    - Valida diretório de sessão e pré-carrega mapeamentos LID

    Shutdown:
    - Para o watcher do diretório de sessão
    """
    logger.info("app_starting", extra={"service": "zap-bridge"})
    validate_runtime_settings()

    cache = get_identity_cache()
    app.state.identity_cache = cache
    app.state.identifier_resolver = create_identifier_resolver()
    handle_connection_update({"connection": "open"}, cache)

    yield

    logger.info("app_shutting_down", extra={"service": "zap-bridge"})
    cache.stop_watching()


def create_app() -> FastAPI:
    """Cria e configura a aplicação FastAPI.

    Returns:
        Aplicação FastAPI configurada.
    """
    fastapi_app = FastAPI(
        title="zap-bridge",
        description="Ponte WhatsApp: resolução de identidade LID e normalização de mensagens",
        version="1.0.0",
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
    )

    fastapi_app.include_router(create_api_router())

    logger.info("app_configured", extra={"service": "zap-bridge"})

    return fastapi_app


# Aplicação ASGI exposta para uvicorn
app = create_app()


def main() -> None:
    """Entrypoint para execução direta (desenvolvimento)."""
    import uvicorn

    logger.info("Starting zap-bridge in development mode")
    uvicorn.run(
        "app.app:app",
        host="0.0.0.0",
        port=8080,
        reload=True,
    )


if __name__ == "__main__":
    main()
