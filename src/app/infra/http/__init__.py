"""Clientes HTTP de saída."""

from app.infra.http.webhook_client import WebhookClient, WebhookClientConfig

__all__ = [
    "WebhookClient",
    "WebhookClientConfig",
]
