"""Modelos de domínio: vídeo, provedor, registro persistido e upload."""

from app.domain.upload import (
    VALID_CONTEXTS,
    UploadContext,
    UploadRequest,
    UploadResult,
    VideoStatusView,
)
from app.domain.video import (
    Provider,
    ProviderConfig,
    ProviderVideoInfo,
    ReadinessDecision,
    UploadLimits,
    WebhookRegistration,
)
from app.domain.video_record import (
    META_VIDEO_KEY,
    ContentKind,
    VideoRecord,
    decode_meta,
    embed_video_record,
    encode_meta,
    extract_video_record,
)
from app.domain.webhook_event import WebhookEvent

__all__ = [
    "META_VIDEO_KEY",
    "VALID_CONTEXTS",
    "ContentKind",
    "Provider",
    "ProviderConfig",
    "ProviderVideoInfo",
    "ReadinessDecision",
    "UploadContext",
    "UploadLimits",
    "UploadRequest",
    "UploadResult",
    "VideoRecord",
    "VideoStatusView",
    "WebhookEvent",
    "WebhookRegistration",
    "decode_meta",
    "embed_video_record",
    "encode_meta",
    "extract_video_record",
]
