"""Settings do fluxo de streaming.

Provedor ativo, timeouts de chamadas HTTP e política de expiração de
uploads pendentes.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache

SUPPORTED_PROVIDERS: frozenset[str] = frozenset(
    {"cloudflare", "cloudflare_stream", "bunny", "bunny_stream"}
)


@dataclass(frozen=True)
class StreamSettings:
    """Configurações do fluxo de upload e status.

    Attributes:
        active_provider: Provedor usado em novos uploads
        status_timeout_seconds: Timeout de consultas de status/API
        upload_timeout_seconds: Timeout do envio do arquivo (uploads grandes)
        max_retries: Tentativas extras em chamadas idempotentes
        upload_time_ttl_seconds: Expiração do timestamp de início de upload
        stale_pending_seconds: Idade máxima de um vídeo pendente que o
            provedor não reconhece (0 desativa)
    """

    active_provider: str = "cloudflare"
    status_timeout_seconds: float = 15.0
    upload_timeout_seconds: float = 300.0
    max_retries: int = 2
    upload_time_ttl_seconds: int = 14 * 86400  # 14 dias
    stale_pending_seconds: int = 86400  # 24h

    def validate(self) -> list[str]:
        """Valida configurações de streaming.

        Returns:
            Lista de erros de validação (vazia = tudo OK).
        """
        errors: list[str] = []

        if self.active_provider not in SUPPORTED_PROVIDERS:
            errors.append(f"STREAM_PROVIDER inválido: {self.active_provider}")

        if self.status_timeout_seconds <= 0:
            errors.append("STREAM_STATUS_TIMEOUT_SECONDS deve ser > 0")

        if self.upload_timeout_seconds <= 0:
            errors.append("STREAM_UPLOAD_TIMEOUT_SECONDS deve ser > 0")

        if self.max_retries < 0:
            errors.append("STREAM_MAX_RETRIES deve ser >= 0")

        if self.upload_time_ttl_seconds <= 0:
            errors.append("STREAM_UPLOAD_TIME_TTL_SECONDS deve ser > 0")

        if self.stale_pending_seconds < 0:
            errors.append("STREAM_STALE_PENDING_SECONDS deve ser >= 0")

        return errors


def _load_stream_from_env() -> StreamSettings:
    """Carrega StreamSettings de variáveis de ambiente."""
    return StreamSettings(
        active_provider=os.getenv("STREAM_PROVIDER", "cloudflare").lower(),
        status_timeout_seconds=float(os.getenv("STREAM_STATUS_TIMEOUT_SECONDS", "15")),
        upload_timeout_seconds=float(os.getenv("STREAM_UPLOAD_TIMEOUT_SECONDS", "300")),
        max_retries=int(os.getenv("STREAM_MAX_RETRIES", "2")),
        upload_time_ttl_seconds=int(
            os.getenv("STREAM_UPLOAD_TIME_TTL_SECONDS", str(14 * 86400))
        ),
        stale_pending_seconds=int(os.getenv("STREAM_STALE_PENDING_SECONDS", "86400")),
    )


@lru_cache(maxsize=1)
def get_stream_settings() -> StreamSettings:
    """Retorna instância cacheada de StreamSettings."""
    return _load_stream_from_env()
