"""Entradas e saídas do fluxo de upload e consulta de status."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Literal

from app.domain.video import Provider
from fsm.states import VideoStatus

UploadContext = Literal["post", "comment"]
VALID_CONTEXTS: frozenset[str] = frozenset({"post", "comment"})


@dataclass(frozen=True, slots=True)
class UploadRequest:
    """Um arquivo recebido por requisição, já validado (arquivo temporário local)."""

    file_path: str
    filename: str
    size_bytes: int
    title: str = ""
    context: UploadContext = "post"

    @property
    def extension(self) -> str:
        _, dot, ext = self.filename.rpartition(".")
        return ext.lower() if dot else ""

    @property
    def size_mb(self) -> float:
        return round(self.size_bytes / (1024 * 1024), 2)


@dataclass(frozen=True, slots=True)
class UploadResult:
    """Resultado canônico de um upload, independente do provedor."""

    video_id: str
    provider: Provider
    status: VideoStatus
    thumbnail_url: str = ""
    player_url: str = ""
    html: str = ""
    uploaded_at: int | None = None

    @property
    def ready(self) -> bool:
        return self.status is VideoStatus.READY

    def to_dict(self) -> dict[str, Any]:
        return {
            "video_id": self.video_id,
            "provider": self.provider.value,
            "status": self.status.value,
            "ready": self.ready,
            "readyToStream": self.ready,
            "thumbnail_url": self.thumbnail_url,
            "player_url": self.player_url,
            "html": self.html,
            "uploaded_at": self.uploaded_at,
        }


@dataclass(frozen=True, slots=True)
class VideoStatusView:
    """Resposta da consulta de status servida aos clientes."""

    video_id: str
    provider: Provider
    status: VideoStatus
    html: str = ""
    thumbnail_url: str = ""
    error_code: str | None = None
    error_text: str | None = None

    @property
    def ready(self) -> bool:
        return self.status is VideoStatus.READY

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "video_id": self.video_id,
            "provider": self.provider.value,
            "status": self.status.value,
            "readyToStream": self.ready,
            "html": self.html,
            "thumbnail_url": self.thumbnail_url,
        }
        if self.status is VideoStatus.FAILED:
            data["error_code"] = self.error_code
            data["error_text"] = self.error_text
        return data
