"""Normalização de vídeos do Bunny Stream.

A API e o webhook usam códigos de status diferentes:

API (objeto de vídeo, chaves minúsculas):
    0 Created, 1 Uploaded, 2 Processing, 3 Transcoding, 4 Finished,
    5 Error, 6 UploadFailed

Webhook (VideoLibraryId, VideoGuid, Status):
    0 Queued, 1 Processing, 2 Encoding, 3 Finished, 4 ResolutionFinished,
    5 Failed, 6 PresignedUploadStarted, 7 PresignedUploadFinished,
    8 PresignedUploadFailed

"ResolutionFinished" significa que UMA rendition ficou pronta: o provedor
afirma que dá para reproduzir, mas o manifest completo ainda não existe.
"""

from __future__ import annotations

from collections.abc import Mapping
from enum import IntEnum
from typing import Any

from api.connectors.provider_errors import InvalidProviderPayloadError
from app.domain import Provider, ProviderConfig, ProviderVideoInfo
from app.domain.playback import bunny_manifest_url, bunny_player_url, bunny_thumbnail_url


class BunnyApiStatus(IntEnum):
    CREATED = 0
    UPLOADED = 1
    PROCESSING = 2
    TRANSCODING = 3
    FINISHED = 4
    ERROR = 5
    UPLOAD_FAILED = 6


class BunnyWebhookStatus(IntEnum):
    QUEUED = 0
    PROCESSING = 1
    ENCODING = 2
    FINISHED = 3
    RESOLUTION_FINISHED = 4
    FAILED = 5
    PRESIGNED_UPLOAD_STARTED = 6
    PRESIGNED_UPLOAD_FINISHED = 7
    PRESIGNED_UPLOAD_FAILED = 8


_API_FAILED = frozenset({BunnyApiStatus.ERROR, BunnyApiStatus.UPLOAD_FAILED})
_WEBHOOK_FAILED = frozenset(
    {BunnyWebhookStatus.FAILED, BunnyWebhookStatus.PRESIGNED_UPLOAD_FAILED}
)


def _as_int(value: Any, default: int = -1) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


def _parse_progress(value: Any) -> float | None:
    try:
        return max(0.0, min(float(value), 100.0))
    except (TypeError, ValueError):
        return None


def normalize_bunny_video(
    data: Mapping[str, Any],
    config: ProviderConfig,
) -> ProviderVideoInfo:
    """Converte o objeto de vídeo da API em ProviderVideoInfo.

    Raises:
        InvalidProviderPayloadError: Sem `guid`.
    """
    guid = str(data.get("guid") or "").strip()
    if not guid:
        raise InvalidProviderPayloadError("guid ausente no payload Bunny")

    status = _as_int(data.get("status"))
    progress = _parse_progress(data.get("encodeProgress"))
    has_renditions = bool(data.get("availableResolutions"))

    if status == BunnyApiStatus.FINISHED:
        ready_claimed = True
        pct = 100.0 if progress is None else progress
    else:
        # Transcoding com alguma resolução disponível já é "reproduzível" para o Bunny
        ready_claimed = status == BunnyApiStatus.TRANSCODING and has_renditions
        pct = progress or 0.0

    failed = status in _API_FAILED
    return ProviderVideoInfo(
        video_id=guid,
        provider=Provider.BUNNY_STREAM,
        ready_claimed=ready_claimed,
        pct_complete=pct,
        manifest_url=bunny_manifest_url(config.playback_host, guid),
        state="error" if failed else f"status_{status}",
        error_code=f"bunny_status_{status}" if failed else "",
        error_text=BunnyApiStatus(status).name.lower() if failed else "",
        thumbnail_url=bunny_thumbnail_url(
            config.playback_host, guid, str(data.get("thumbnailFileName") or "")
        ),
        player_url=bunny_player_url(config.account_id, guid),
    )


def normalize_bunny_webhook(
    data: Mapping[str, Any],
    config: ProviderConfig,
) -> ProviderVideoInfo:
    """Converte o corpo do webhook em ProviderVideoInfo.

    O webhook não traz percentual: FINISHED implica 100, RESOLUTION_FINISHED
    é uma afirmação parcial.

    Raises:
        InvalidProviderPayloadError: Sem `VideoGuid`.
    """
    guid = str(data.get("VideoGuid") or data.get("guid") or "").strip()
    if not guid:
        raise InvalidProviderPayloadError("VideoGuid ausente no webhook Bunny")

    status = _as_int(data.get("Status", data.get("status")))
    failed = status in _WEBHOOK_FAILED
    ready_claimed = status in (
        BunnyWebhookStatus.FINISHED,
        BunnyWebhookStatus.RESOLUTION_FINISHED,
    )
    pct = 100.0 if status == BunnyWebhookStatus.FINISHED else 0.0

    return ProviderVideoInfo(
        video_id=guid,
        provider=Provider.BUNNY_STREAM,
        ready_claimed=ready_claimed,
        pct_complete=pct,
        manifest_url=bunny_manifest_url(config.playback_host, guid),
        state="error" if failed else f"status_{status}",
        error_code=f"bunny_status_{status}" if failed else "",
        error_text=BunnyWebhookStatus(status).name.lower() if failed else "",
        thumbnail_url=bunny_thumbnail_url(config.playback_host, guid),
        player_url=bunny_player_url(config.account_id, guid),
    )
