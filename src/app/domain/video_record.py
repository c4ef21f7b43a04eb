"""VideoRecord: estado de um vídeo embutido no metadado de um post/comentário.

O registro vive serializado em JSON dentro da coluna de metadados do
conteúdo, sob a chave META_VIDEO_KEY. Chaves desconhecidas são preservadas
em toda leitura/escrita.
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from enum import StrEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from app.domain.video import Provider
from fsm.states import VideoStatus, parse_status

META_VIDEO_KEY = "video"


class ContentKind(StrEnum):
    """Tipos de registro de conteúdo que podem carregar um vídeo."""

    POST = "post"
    COMMENT = "comment"


class VideoRecord(BaseModel):
    """Estado persistido de um vídeo."""

    model_config = ConfigDict(extra="allow")

    video_id: str = Field(..., min_length=1)
    provider: Provider
    status: VideoStatus = VideoStatus.PENDING
    html: str = ""
    thumbnail_url: str = ""
    manifest_url: str = ""
    error_code: str | None = None
    error_text: str | None = None
    uploaded_at: int | None = None

    @field_validator("provider", mode="before")
    @classmethod
    def _parse_provider(cls, value: Any) -> Provider:
        return Provider.parse(value)

    @field_validator("status", mode="before")
    @classmethod
    def _parse_status(cls, value: Any) -> VideoStatus:
        return parse_status(value)

    @property
    def is_ready(self) -> bool:
        return self.status is VideoStatus.READY

    def to_meta_dict(self) -> dict[str, Any]:
        """Dict JSON-compatível (inclui chaves extras preservadas)."""
        return self.model_dump(mode="json")


def decode_meta(raw: str | None) -> dict[str, Any]:
    """Desserializa o blob de metadados; conteúdo inválido vira {}."""
    if not raw:
        return {}
    try:
        data = json.loads(raw)
    except (TypeError, ValueError):
        return {}
    return data if isinstance(data, dict) else {}


def encode_meta(meta: Mapping[str, Any]) -> str:
    """Serializa o blob de metadados de forma estável."""
    return json.dumps(meta, ensure_ascii=False, separators=(",", ":"), sort_keys=True)


def extract_video_record(meta: Mapping[str, Any]) -> VideoRecord | None:
    """Retorna o VideoRecord embutido, ou None se ausente/inválido."""
    data = meta.get(META_VIDEO_KEY)
    if not isinstance(data, Mapping):
        return None
    try:
        return VideoRecord.model_validate(dict(data))
    except (ValidationError, ValueError):
        return None


def embed_video_record(meta: Mapping[str, Any], record: VideoRecord) -> dict[str, Any]:
    """Retorna cópia do metadado com o VideoRecord mesclado sob META_VIDEO_KEY."""
    merged = dict(meta)
    current = merged.get(META_VIDEO_KEY)
    base = dict(current) if isinstance(current, Mapping) else {}
    base.update(record.to_meta_dict())
    merged[META_VIDEO_KEY] = base
    return merged
