"""Agregador de settings do zap_bridge.

Um módulo por preocupação; cada um expõe uma dataclass imutável,
um getter cacheado e `validate() -> list[str]`.
"""

from __future__ import annotations

from config.settings.base import (
    BaseSettings,
    DedupeSettings,
    Environment,
    get_base_settings,
    get_dedupe_settings,
)
from config.settings.bridge import (
    DEFAULT_MAPPING_PREFIX,
    BridgeSettings,
    get_bridge_settings,
)
from config.settings.webhook import (
    WebhookSettings,
    get_webhook_settings,
)

__all__ = [
    "DEFAULT_MAPPING_PREFIX",
    "BaseSettings",
    "BridgeSettings",
    "DedupeSettings",
    "Environment",
    "WebhookSettings",
    "get_base_settings",
    "get_bridge_settings",
    "get_dedupe_settings",
    "get_webhook_settings",
]
