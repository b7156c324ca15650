"""Endpoints de health check e readiness."""

from __future__ import annotations

import logging
from datetime import UTC, datetime
from typing import Any

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel

logger = logging.getLogger(__name__)

router = APIRouter()


class HealthResponse(BaseModel):
    """Resposta do health check."""

    status: str
    service: str
    timestamp: str
    version: str = "1.0.0"


@router.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Liveness probe — verifica se o serviço está rodando."""
    return HealthResponse(
        status="healthy",
        service="zap-bridge",
        timestamp=datetime.now(UTC).isoformat(),
    )


@router.get("/ready")
async def readiness_check(request: Request) -> JSONResponse:
    """Readiness probe: cache de identidade presente e diretório de sessão válido.

    Diretório ausente não derruba o serviço, mas deixa a resolução de LID
    degradada; o probe reporta `degraded` com status 200.
    """
    cache = getattr(request.app.state, "identity_cache", None)
    if cache is None:
        payload: dict[str, Any] = {
            "status": "not_ready",
            "checks": {"identity": {"status": "failed", "error": "not_configured"}},
            "timestamp": datetime.now(UTC).isoformat(),
        }
        return JSONResponse(content=payload, status_code=503)

    validation = cache.validate()
    identity_status = "ok" if validation.auth_dir_exists and validation.valid else "degraded"
    payload = {
        "status": "ready" if identity_status == "ok" else "degraded",
        "checks": {
            "identity": {
                "status": identity_status,
                "loaded": cache.loaded,
                "cached_lids": len(cache),
                **validation.as_dict(),
            },
        },
        "timestamp": datetime.now(UTC).isoformat(),
    }
    return JSONResponse(content=payload, status_code=200)
