"""Protocolo do store de timestamps de início de upload.

Best-effort: perder um registro afeta apenas métricas de time-to-ready e a
detecção de uploads abandonados, nunca a correção do status.
"""

from __future__ import annotations

from abc import ABC, abstractmethod


class UploadTimeStoreProtocol(ABC):
    """Contrato assíncrono com TTL."""

    @abstractmethod
    async def record_upload_start(self, video_id: str, started_at: int, ttl_seconds: int) -> None:
        """Grava o timestamp (epoch segundos) com expiração."""

    @abstractmethod
    async def get_upload_start(self, video_id: str) -> int | None:
        """Retorna o timestamp gravado ou None se ausente/expirado."""
