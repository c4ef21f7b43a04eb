"""Seleção do cliente e do normalizador de webhook por provedor."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from api.connectors.bunny import BunnyStreamClient, normalize_bunny_webhook
from api.connectors.cloudflare import CloudflareStreamClient, normalize_cloudflare_video
from app.domain import Provider
from config.settings import get_bunny_settings, get_cloudflare_settings, get_stream_settings

if TYPE_CHECKING:
    from collections.abc import Mapping

    import httpx

    from app.domain import ProviderConfig, ProviderVideoInfo
    from app.protocols.provider_client import VideoProviderClientProtocol


def create_provider_client(
    config: ProviderConfig,
    *,
    transport: httpx.AsyncBaseTransport | None = None,
) -> VideoProviderClientProtocol:
    """Instancia o cliente do provedor com timeouts das settings.

    Raises:
        MissingCredentialsError: Credenciais incompletas.
    """
    stream = get_stream_settings()
    if config.provider is Provider.CLOUDFLARE_STREAM:
        return CloudflareStreamClient(
            config,
            api_base_url=get_cloudflare_settings().api_base_url,
            status_timeout_seconds=stream.status_timeout_seconds,
            upload_timeout_seconds=stream.upload_timeout_seconds,
            max_retries=stream.max_retries,
            transport=transport,
        )
    bunny = get_bunny_settings()
    return BunnyStreamClient(
        config,
        api_base_url=bunny.api_base_url,
        account_api_base_url=bunny.account_api_base_url,
        status_timeout_seconds=stream.status_timeout_seconds,
        upload_timeout_seconds=stream.upload_timeout_seconds,
        max_retries=stream.max_retries,
        transport=transport,
    )


def normalize_webhook_payload(
    provider: Provider,
    payload: Mapping[str, Any],
    config: ProviderConfig,
) -> ProviderVideoInfo:
    """Converte o corpo de um webhook em ProviderVideoInfo.

    Raises:
        InvalidProviderPayloadError: Payload sem id de vídeo.
    """
    if provider is Provider.CLOUDFLARE_STREAM:
        return normalize_cloudflare_video(payload, config)
    return normalize_bunny_webhook(payload, config)
