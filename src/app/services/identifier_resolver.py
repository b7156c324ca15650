"""Resolução de identificadores do protocolo para identidade estável.

Formas reconhecidas, nesta precedência:
1. `<lid>@lid`: LID opaco, resolvido pela cadeia de estratégias
2. `<telefone>@s.whatsapp.net`: formato direto, telefone = parte local
3. `<id>@g.us`: grupo, telefone = trecho antes do `-`; JID mantido
4. qualquer outra coisa: dígitos iniciais, ou None

Resultado não resolvido é sempre None explícito; o resolver nunca
devolve o próprio LID como se fosse telefone, exceto pela heurística
numérica, que é marcada `verified=False`.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from app.domain.jid import (
    group_owner_part,
    is_group_jid,
    is_lid_jid,
    is_user_jid,
    leading_digits,
    to_user_jid,
    user_part,
)
from app.services._resolver_strategies import (
    DEFAULT_STRATEGIES,
    ResolutionSource,
    ResolutionStrategy,
    ResolverContext,
)
from config.logging import log_fallback

if TYPE_CHECKING:
    from collections.abc import Mapping

    from app.infra.identity import IdentityCache, MappingDirectory
    from app.protocols.identity import LidMappingSource

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class LidResolution:
    """Telefone resolvido para um LID, com proveniência."""

    phone_number: str | None
    source: ResolutionSource
    verified: bool

    @property
    def resolved(self) -> bool:
        return self.phone_number is not None


UNRESOLVED = LidResolution(phone_number=None, source="unresolved", verified=False)


@dataclass(frozen=True, slots=True)
class ResolvedIdentity:
    """Identidade completa de um JID bruto."""

    raw: str | None
    phone_number: str | None
    lid: str | None
    canonical_identifier: str | None
    source: ResolutionSource | None = None
    verified: bool = False


class IdentifierResolver:
    """Resolve JIDs usando o IdentityCache e estratégias de fallback.

    Args:
        cache: Cache de identidade compartilhado.
        live_table: Fonte opcional da tabela viva do cliente do protocolo.
        strategies: Cadeia de estratégias (ordem = precedência).
    """

    def __init__(
        self,
        cache: IdentityCache,
        *,
        live_table: LidMappingSource | None = None,
        strategies: tuple[ResolutionStrategy, ...] = DEFAULT_STRATEGIES,
    ) -> None:
        self._cache = cache
        self._live_table = live_table
        self._strategies = strategies

    @property
    def cache(self) -> IdentityCache:
        return self._cache

    @property
    def directory(self) -> MappingDirectory:
        return self._cache.directory

    def with_live_table(self, live_table: LidMappingSource | None) -> IdentifierResolver:
        """Novo resolver sobre o mesmo cache, ligado a outra conexão."""
        return IdentifierResolver(self._cache, live_table=live_table, strategies=self._strategies)

    def resolve_lid(self, lid: str | None) -> LidResolution:
        """Resolve um LID cru (sem sufixo) tentando cada estratégia em ordem."""
        if not lid:
            return UNRESOLVED

        self._cache.load()
        context = ResolverContext(
            cache=self._cache,
            directory=self._cache.directory,
            live_table=self._live_table,
        )

        for strategy in self._strategies:
            phone_number = strategy.lookup(lid, context)
            if not phone_number:
                continue
            if strategy.source == "cache":
                return LidResolution(phone_number, "cache", self._cache.is_verified(lid))

            self._cache.insert(lid, phone_number, verified=strategy.verified)
            if strategy.verified:
                logger.info(
                    "lid_resolved",
                    extra={"lid": lid, "source": strategy.source},
                )
            else:
                log_fallback(
                    logger,
                    "identifier_resolver",
                    reason="lid_mapping_not_found",
                    lid=lid,
                    source=strategy.source,
                )
            return LidResolution(phone_number, strategy.source, strategy.verified)

        logger.error("lid_resolution_failed", extra={"lid": lid})
        return UNRESOLVED

    def resolve(self, jid: str | None) -> ResolvedIdentity:
        """Resolve telefone, LID e JID canônico de uma vez só."""
        if not jid:
            return ResolvedIdentity(raw=jid, phone_number=None, lid=None, canonical_identifier=None)

        if is_lid_jid(jid):
            lid = user_part(jid)
            resolution = self.resolve_lid(lid)
            return ResolvedIdentity(
                raw=jid,
                phone_number=resolution.phone_number,
                lid=lid,
                canonical_identifier=(
                    to_user_jid(resolution.phone_number) if resolution.resolved else None
                ),
                source=resolution.source,
                verified=resolution.verified,
            )

        if is_user_jid(jid):
            return ResolvedIdentity(
                raw=jid,
                phone_number=user_part(jid),
                lid=None,
                canonical_identifier=jid,
                verified=True,
            )

        if is_group_jid(jid):
            return ResolvedIdentity(
                raw=jid,
                phone_number=group_owner_part(jid),
                lid=None,
                canonical_identifier=jid,
            )

        phone_number = leading_digits(jid)
        return ResolvedIdentity(
            raw=jid,
            phone_number=phone_number,
            lid=None,
            canonical_identifier=to_user_jid(phone_number) if phone_number else None,
        )

    def extract_phone_number(self, jid: str | None) -> str | None:
        return self.resolve(jid).phone_number

    def to_canonical_identifier(self, jid: str | None) -> str | None:
        """Normaliza para `<telefone>@s.whatsapp.net`; grupos passam intactos."""
        return self.resolve(jid).canonical_identifier

    @staticmethod
    def extract_lid(jid: str | None) -> str | None:
        if not is_lid_jid(jid):
            return None
        return user_part(jid)

    @staticmethod
    def is_group(jid: str | None) -> bool:
        return is_group_jid(jid)


def socket_lid_mapping(sock: Any) -> LidMappingSource:
    """Adapta `sock.authState.creds.lid.mapping` do cliente do protocolo.

    Lido a cada chamada: a tabela muda durante a vida da conexão.
    Aceita tanto objetos com atributos quanto dicts aninhados.
    """

    def _source() -> Mapping[str, str] | None:
        node: Any = sock
        for name in ("authState", "creds", "lid", "mapping"):
            if node is None:
                return None
            node = node.get(name) if isinstance(node, dict) else getattr(node, name, None)
        return node if isinstance(node, dict) else None

    return _source
