"""Estratégias de resolução LID -> telefone, em ordem de precedência.

Cada estratégia é uma função pura `(lid, contexto) -> telefone | None`.
A ordem da tupla DEFAULT_STRATEGIES é a ordem de tentativa.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import TYPE_CHECKING, Literal

from app.domain.jid import is_phone_shaped, user_part
from utils.errors import MappingFileError

if TYPE_CHECKING:
    from app.infra.identity import IdentityCache, MappingDirectory
    from app.protocols.identity import LidMappingSource

logger = logging.getLogger(__name__)

ResolutionSource = Literal[
    "cache",
    "live_table",
    "reverse_file",
    "forward_scan",
    "heuristic",
    "unresolved",
]


@dataclass(frozen=True, slots=True)
class ResolverContext:
    cache: IdentityCache
    directory: MappingDirectory
    live_table: LidMappingSource | None = None


@dataclass(frozen=True, slots=True)
class ResolutionStrategy:
    """Uma camada da cadeia de fallback."""

    source: ResolutionSource
    lookup: Callable[[str, ResolverContext], str | None]
    verified: bool = True


def lookup_cache(lid: str, context: ResolverContext) -> str | None:
    return context.cache.get_phone(lid)


def lookup_live_table(lid: str, context: ResolverContext) -> str | None:
    if context.live_table is None:
        return None
    table = context.live_table()
    if not isinstance(table, Mapping) or not table:
        return None
    value = table.get(lid) or table.get(f"{lid}@lid")
    if not value:
        return None
    # Alguns clientes guardam o JID completo do usuário em vez do número
    return user_part(str(value))


def lookup_reverse_file(lid: str, context: ResolverContext) -> str | None:
    try:
        return context.directory.read_reverse(lid)
    except MappingFileError as exc:
        logger.warning(
            "lid_reverse_mapping_unreadable",
            extra={"file": exc.filename, "reason": exc.reason},
        )
        return None


def lookup_forward_scan(lid: str, context: ResolverContext) -> str | None:
    if not context.directory.exists():
        return None
    try:
        return context.directory.scan_forward(lid)
    except OSError as exc:
        logger.warning(
            "lid_forward_scan_failed",
            extra={"lid": lid, "error_type": type(exc).__name__},
        )
        return None


def lookup_phone_shaped(lid: str, context: ResolverContext) -> str | None:
    return lid if is_phone_shaped(lid) else None


DEFAULT_STRATEGIES: tuple[ResolutionStrategy, ...] = (
    ResolutionStrategy("cache", lookup_cache),
    ResolutionStrategy("live_table", lookup_live_table),
    ResolutionStrategy("reverse_file", lookup_reverse_file),
    ResolutionStrategy("forward_scan", lookup_forward_scan),
    ResolutionStrategy("heuristic", lookup_phone_shaped, verified=False),
)
