"""Connectors: adapters de borda para as APIs dos provedores de streaming.

Estrutura:
- cloudflare/: Cloudflare Stream (cliente + normalizador)
- bunny/: Bunny Stream (cliente + normalizadores de API e webhook)
- webhooks/: verificação de assinatura e parse de webhooks
- http_base: cliente httpx com retry/backoff
- factory: seleção de cliente por provedor
"""

from api.connectors.factory import create_provider_client, normalize_webhook_payload

__all__ = [
    "create_provider_client",
    "normalize_webhook_payload",
]
