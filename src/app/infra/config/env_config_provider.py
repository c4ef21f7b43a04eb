"""ConfigProvider lido das settings de ambiente.

Monta snapshots ProviderConfig a partir de CloudflareSettings/BunnySettings.
"""

from __future__ import annotations

import logging

from app.domain import Provider, ProviderConfig, UploadLimits
from app.protocols.config_provider import ConfigProviderProtocol
from config.settings import (
    BunnySettings,
    CloudflareSettings,
    StreamSettings,
    UploadSettings,
    get_bunny_settings,
    get_cloudflare_settings,
    get_stream_settings,
    get_upload_settings,
)

logger = logging.getLogger(__name__)


class EnvConfigProvider(ConfigProviderProtocol):
    """Configuração read-only vinda das variáveis de ambiente.

    Args:
        stream: Settings de stream (default: get_stream_settings())
        cloudflare: Settings Cloudflare (default: get_cloudflare_settings())
        bunny: Settings Bunny (default: get_bunny_settings())
        upload: Settings de upload (default: get_upload_settings())
    """

    def __init__(
        self,
        *,
        stream: StreamSettings | None = None,
        cloudflare: CloudflareSettings | None = None,
        bunny: BunnySettings | None = None,
        upload: UploadSettings | None = None,
    ) -> None:
        self._stream = stream or get_stream_settings()
        self._cloudflare = cloudflare or get_cloudflare_settings()
        self._bunny = bunny or get_bunny_settings()
        self._upload = upload or get_upload_settings()

    def get_active_provider(self) -> Provider:
        try:
            return Provider.parse(self._stream.active_provider)
        except ValueError:
            logger.warning(
                "active_provider_invalid",
                extra={"configured": self._stream.active_provider},
            )
            return Provider.CLOUDFLARE_STREAM

    def get_provider_config(self, provider: Provider) -> ProviderConfig:
        if provider is Provider.CLOUDFLARE_STREAM:
            cf = self._cloudflare
            return ProviderConfig(
                provider=provider,
                account_id=cf.account_id,
                api_key=cf.api_token,
                webhook_secret=cf.webhook_secret,
                playback_host=cf.customer_subdomain,
                allowed_origins=cf.allowed_origins,
            )
        bunny = self._bunny
        return ProviderConfig(
            provider=provider,
            account_id=bunny.library_id,
            api_key=bunny.api_key,
            playback_host=bunny.cdn_hostname,
        )

    def get_credentials(self, provider: Provider) -> ProviderConfig | None:
        config = self.get_provider_config(provider)
        return config if config.has_credentials else None

    def get_upload_limits(self) -> UploadLimits:
        return UploadLimits(
            max_file_size_mb=self._upload.max_file_size_mb,
            allowed_formats=self._upload.allowed_formats,
            comment_video_enabled=self._upload.comment_video_enabled,
        )
