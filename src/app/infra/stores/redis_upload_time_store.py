"""Redis Upload Time Store: início de upload por vídeo, com TTL.

Usa SET EX; a chave expira sozinha (padrão 14 dias).
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from app.protocols.upload_time_store import UploadTimeStoreProtocol
from utils.errors import RedisConnectionError

if TYPE_CHECKING:
    from redis.asyncio import Redis as AsyncRedis

logger = logging.getLogger(__name__)

UPLOAD_TIME_PREFIX = "upload_started:"


class RedisUploadTimeStore(UploadTimeStoreProtocol):
    """Timestamps de upload no Redis (cliente assíncrono)."""

    def __init__(self, async_redis_client: AsyncRedis[bytes]) -> None:
        self._redis = async_redis_client

    @property
    def client(self) -> AsyncRedis[bytes]:
        return self._redis

    def _key(self, video_id: str) -> str:
        return f"{UPLOAD_TIME_PREFIX}{video_id}"

    async def record_upload_start(self, video_id: str, started_at: int, ttl_seconds: int) -> None:
        try:
            await self._redis.set(self._key(video_id), str(started_at), ex=ttl_seconds)
        except Exception as exc:
            raise RedisConnectionError("Falha ao gravar início de upload no Redis") from exc
        logger.debug("upload_start_recorded", extra={"video_id": video_id, "ttl": ttl_seconds})

    async def get_upload_start(self, video_id: str) -> int | None:
        try:
            raw = await self._redis.get(self._key(video_id))
        except Exception as exc:
            raise RedisConnectionError("Falha ao ler início de upload no Redis") from exc
        if raw is None:
            return None
        value = raw.decode() if isinstance(raw, bytes) else str(raw)
        try:
            return int(value)
        except ValueError:
            logger.warning("upload_start_corrupted", extra={"video_id": video_id})
            return None
