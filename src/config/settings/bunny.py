"""Settings específicas do Bunny Stream."""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache

BUNNY_STREAM_BASE_URL: str = "https://video.bunnycdn.com"
BUNNY_ACCOUNT_BASE_URL: str = "https://api.bunny.net"


@dataclass(frozen=True)
class BunnySettings:
    """Configurações do provedor Bunny Stream.

    Attributes:
        library_id: ID da biblioteca de vídeos
        api_key: Chave de API da biblioteca (header AccessKey)
        cdn_hostname: Hostname da pull zone (ex: vz-xxxx.b-cdn.net)
        api_base_url: URL base da API de stream
        account_api_base_url: URL base da API de conta (webhook da biblioteca)
    """

    library_id: str = ""
    api_key: str = ""
    cdn_hostname: str = ""
    api_base_url: str = BUNNY_STREAM_BASE_URL
    account_api_base_url: str = BUNNY_ACCOUNT_BASE_URL

    @property
    def has_credentials(self) -> bool:
        """True quando biblioteca e chave estão configuradas."""
        return bool(self.library_id and self.api_key)

    def validate(self) -> list[str]:
        """Valida configurações mínimas do Bunny.

        Returns:
            Lista de erros de validação (vazia = tudo OK).
        """
        errors: list[str] = []

        if self.library_id and not self.api_key:
            errors.append("BUNNY_API_KEY não configurado")

        if self.api_key and not self.library_id:
            errors.append("BUNNY_LIBRARY_ID não configurado")

        # Sem hostname não há manifest HLS e o vídeo nunca fica pronto.
        if self.has_credentials and not self.cdn_hostname:
            errors.append("BUNNY_CDN_HOSTNAME não configurado")

        return errors


def _load_from_env() -> BunnySettings:
    """Carrega BunnySettings a partir de variáveis de ambiente."""
    return BunnySettings(
        library_id=os.getenv("BUNNY_LIBRARY_ID", ""),
        api_key=os.getenv("BUNNY_API_KEY", ""),
        cdn_hostname=os.getenv("BUNNY_CDN_HOSTNAME", ""),
        api_base_url=os.getenv("BUNNY_API_BASE_URL", BUNNY_STREAM_BASE_URL),
        account_api_base_url=os.getenv("BUNNY_ACCOUNT_API_BASE_URL", BUNNY_ACCOUNT_BASE_URL),
    )


@lru_cache(maxsize=1)
def get_bunny_settings() -> BunnySettings:
    """Retorna instância cacheada de BunnySettings."""
    return _load_from_env()
