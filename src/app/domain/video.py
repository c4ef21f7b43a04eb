"""Tipos canônicos de vídeo e provedor.

Tudo aqui é imutável e independente de IO: leituras normalizadas de
payloads de provedor, snapshots de configuração e a decisão de prontidão.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum

_PROVIDER_ALIASES = {
    "cloudflare": "cloudflare_stream",
    "bunny": "bunny_stream",
}


class Provider(StrEnum):
    """Provedores de streaming suportados."""

    CLOUDFLARE_STREAM = "cloudflare_stream"
    BUNNY_STREAM = "bunny_stream"

    def __str__(self) -> str:
        return self.value

    @property
    def slug(self) -> str:
        """Nome curto usado em URLs (/webhook/cloudflare)."""
        return self.value.removesuffix("_stream")

    @property
    def error_prefix(self) -> str:
        """Prefixo dos códigos de erro da API do provedor."""
        return f"{self.slug}_api_error"

    @classmethod
    def parse(cls, value: str | Provider) -> Provider:
        """Aceita o valor canônico ou o alias curto.

        Raises:
            ValueError: Provedor desconhecido.
        """
        if isinstance(value, Provider):
            return value
        normalized = str(value).strip().lower()
        return cls(_PROVIDER_ALIASES.get(normalized, normalized))


@dataclass(frozen=True, slots=True)
class ProviderConfig:
    """Snapshot read-only da configuração de um provedor.

    Attributes:
        provider: Provedor
        account_id: ID da conta (Cloudflare) ou da biblioteca (Bunny)
        api_key: Token de API (Cloudflare) ou AccessKey (Bunny)
        webhook_secret: Secret de assinatura de webhooks (apenas Cloudflare)
        playback_host: Subdomínio customer-xxx (Cloudflare) ou hostname da CDN (Bunny)
        allowed_origins: Origens autorizadas a embutir o player
    """

    provider: Provider
    account_id: str = ""
    api_key: str = ""
    webhook_secret: str = ""
    playback_host: str = ""
    allowed_origins: tuple[str, ...] = ()

    @property
    def has_credentials(self) -> bool:
        return bool(self.account_id and self.api_key)


@dataclass(frozen=True, slots=True)
class UploadLimits:
    """Limites de upload vindos da configuração."""

    max_file_size_mb: int = 500
    allowed_formats: tuple[str, ...] = ("mp4", "mov", "webm", "avi")
    comment_video_enabled: bool = True

    @property
    def max_file_size_bytes(self) -> int:
        return self.max_file_size_mb * 1024 * 1024


@dataclass(frozen=True, slots=True)
class ProviderVideoInfo:
    """Leitura normalizada de um payload do provedor.

    Vem de webhook, consulta de status ou resposta de upload; o avaliador de
    prontidão só enxerga este formato.

    Attributes:
        video_id: ID do vídeo no provedor
        provider: Provedor de origem
        ready_claimed: O provedor afirma que o vídeo pode ser reproduzido
        pct_complete: Percentual de codificação de todas as renditions (0-100)
        manifest_url: URL do manifest HLS ("" se ausente)
        state: Estado bruto do provedor (ex: "inprogress", "error")
        error_code: Código de erro do provedor
        error_text: Texto de erro do provedor
        thumbnail_url: URL da miniatura
        player_url: URL do player embutível
    """

    video_id: str
    provider: Provider
    ready_claimed: bool = False
    pct_complete: float = 0.0
    manifest_url: str = ""
    state: str = ""
    error_code: str = ""
    error_text: str = ""
    thumbnail_url: str = ""
    player_url: str = ""

    @property
    def is_error(self) -> bool:
        return self.state == "error"


@dataclass(frozen=True, slots=True)
class ReadinessDecision:
    """Saída do avaliador de prontidão. Nunca é persistida."""

    is_ready: bool
    is_failed: bool
    reason: str
    error_code: str = ""
    error_text: str = ""

    @property
    def is_pending(self) -> bool:
        return not self.is_ready and not self.is_failed


@dataclass(frozen=True, slots=True)
class WebhookRegistration:
    """Resultado do registro de webhook no provedor."""

    provider: Provider
    notification_url: str
    secret: str = ""
