"""Normalização de objetos de vídeo do Cloudflare Stream.

O mesmo formato chega pela API (`result` de GET /stream/{uid}), pela
resposta do upload e pelo corpo do webhook.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from api.connectors.provider_errors import InvalidProviderPayloadError
from app.domain import Provider, ProviderConfig, ProviderVideoInfo
from app.domain.playback import (
    cloudflare_player_url,
    cloudflare_thumbnail_url,
    resolve_customer_subdomain,
)


def parse_pct(value: Any) -> float:
    """pctComplete chega como string ("100.000000") ou número."""
    try:
        pct = float(value)
    except (TypeError, ValueError):
        return 0.0
    return max(0.0, min(pct, 100.0))


def normalize_cloudflare_video(
    data: Mapping[str, Any],
    config: ProviderConfig,
) -> ProviderVideoInfo:
    """Converte o objeto de vídeo em ProviderVideoInfo.

    Raises:
        InvalidProviderPayloadError: Sem `uid`.
    """
    video_id = str(data.get("uid") or "").strip()
    if not video_id:
        raise InvalidProviderPayloadError("uid ausente no payload Cloudflare")

    status = data.get("status")
    status = status if isinstance(status, Mapping) else {}
    playback = data.get("playback")
    playback = playback if isinstance(playback, Mapping) else {}

    manifest_url = str(playback.get("hls") or "")
    subdomain = resolve_customer_subdomain(
        manifest_url, config.playback_host, config.account_id
    )

    error_code = status.get("errReasonCode") or status.get("errorReasonCode") or ""
    error_text = status.get("errReasonText") or status.get("errorReasonText") or ""

    return ProviderVideoInfo(
        video_id=video_id,
        provider=Provider.CLOUDFLARE_STREAM,
        ready_claimed=bool(data.get("readyToStream")),
        pct_complete=parse_pct(status.get("pctComplete")),
        manifest_url=manifest_url,
        state=str(status.get("state") or ""),
        error_code=str(error_code),
        error_text=str(error_text),
        thumbnail_url=str(data.get("thumbnail") or cloudflare_thumbnail_url(subdomain, video_id)),
        player_url=cloudflare_player_url(subdomain, video_id),
    )
