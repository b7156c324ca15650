"""Endpoints de diagnóstico do subsistema de identidade."""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, HTTPException, Request, status

from app.services.identifier_resolver import IdentifierResolver

router = APIRouter()


def _get_resolver(request: Request) -> IdentifierResolver:
    resolver = getattr(request.app.state, "identifier_resolver", None)
    if resolver is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="identity resolver not initialized",
        )
    return resolver


@router.get("/mappings")
async def mappings_report(request: Request) -> dict[str, Any]:
    """Relatório do diretório de mapeamentos (mesmo de `validate()`)."""
    resolver = _get_resolver(request)
    report = resolver.cache.validate().as_dict()
    report["loaded"] = resolver.cache.loaded
    report["cachedLids"] = len(resolver.cache)
    return report


@router.get("/resolve/{jid:path}")
async def resolve_identifier(jid: str, request: Request) -> dict[str, Any]:
    """Resolve um JID e mostra de onde veio o telefone."""
    identity = _get_resolver(request).resolve(jid)
    return {
        "jid": identity.raw,
        "phoneNumber": identity.phone_number,
        "lid": identity.lid,
        "canonicalJid": identity.canonical_identifier,
        "source": identity.source,
        "verified": identity.verified,
    }
