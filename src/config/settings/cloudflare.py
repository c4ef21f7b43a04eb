"""Settings específicas do Cloudflare Stream."""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache

CLOUDFLARE_API_BASE_URL: str = "https://api.cloudflare.com/client/v4"


@dataclass(frozen=True)
class CloudflareSettings:
    """Configurações do provedor Cloudflare Stream.

    Attributes:
        account_id: ID da conta Cloudflare
        api_token: Token de API com permissão Stream:Edit
        webhook_secret: Secret retornado no registro do webhook
        customer_subdomain: Subdomínio de playback (customer-xxxx)
        allowed_origins: Origens autorizadas a embutir o player
        api_base_url: URL base da API
    """

    account_id: str = ""
    api_token: str = ""
    webhook_secret: str = ""
    customer_subdomain: str = ""
    allowed_origins: tuple[str, ...] = ()
    api_base_url: str = CLOUDFLARE_API_BASE_URL

    @property
    def has_credentials(self) -> bool:
        """True quando conta e token estão configurados."""
        return bool(self.account_id and self.api_token)

    def validate(self) -> list[str]:
        """Valida configurações mínimas do Cloudflare.

        Returns:
            Lista de erros de validação (vazia = tudo OK).
        """
        errors: list[str] = []

        if self.account_id and not self.api_token:
            errors.append("CLOUDFLARE_API_TOKEN não configurado")

        if self.api_token and not self.account_id:
            errors.append("CLOUDFLARE_ACCOUNT_ID não configurado")

        if self.has_credentials and not self.webhook_secret:
            errors.append(
                "CLOUDFLARE_WEBHOOK_SECRET não configurado (webhooks serão rejeitados)"
            )

        if self.customer_subdomain and not self.customer_subdomain.startswith("customer-"):
            errors.append("CLOUDFLARE_CUSTOMER_SUBDOMAIN deve começar com 'customer-'")

        return errors


def _parse_origins(raw: str) -> tuple[str, ...]:
    return tuple(origin.strip() for origin in raw.split(",") if origin.strip())


def _load_from_env() -> CloudflareSettings:
    """Carrega CloudflareSettings a partir de variáveis de ambiente."""
    return CloudflareSettings(
        account_id=os.getenv("CLOUDFLARE_ACCOUNT_ID", ""),
        api_token=os.getenv("CLOUDFLARE_API_TOKEN", ""),
        webhook_secret=os.getenv("CLOUDFLARE_WEBHOOK_SECRET", ""),
        customer_subdomain=os.getenv("CLOUDFLARE_CUSTOMER_SUBDOMAIN", ""),
        allowed_origins=_parse_origins(os.getenv("CLOUDFLARE_ALLOWED_ORIGINS", "")),
        api_base_url=os.getenv("CLOUDFLARE_API_BASE_URL", CLOUDFLARE_API_BASE_URL),
    )


@lru_cache(maxsize=1)
def get_cloudflare_settings() -> CloudflareSettings:
    """Retorna instância cacheada de CloudflareSettings."""
    return _load_from_env()
