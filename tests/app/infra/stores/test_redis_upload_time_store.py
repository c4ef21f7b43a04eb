"""Testes do RedisUploadTimeStore com mock assíncrono."""

from __future__ import annotations

from unittest.mock import AsyncMock

import pytest

from app.infra.stores.redis_upload_time_store import RedisUploadTimeStore
from utils.errors import RedisConnectionError


class TestRedisUploadTimeStore:
    @pytest.mark.asyncio
    async def test_record_uses_set_with_expiry(self) -> None:
        redis = AsyncMock()
        store = RedisUploadTimeStore(redis)

        await store.record_upload_start("v1", 1_700_000_000, ttl_seconds=3600)

        redis.set.assert_awaited_once_with("upload_started:v1", "1700000000", ex=3600)

    @pytest.mark.asyncio
    async def test_get_decodes_bytes(self) -> None:
        redis = AsyncMock()
        redis.get.return_value = b"1700000000"

        assert await RedisUploadTimeStore(redis).get_upload_start("v1") == 1_700_000_000
        redis.get.assert_awaited_once_with("upload_started:v1")

    @pytest.mark.asyncio
    async def test_get_missing_and_corrupted(self) -> None:
        redis = AsyncMock()
        store = RedisUploadTimeStore(redis)

        redis.get.return_value = None
        assert await store.get_upload_start("v1") is None

        redis.get.return_value = b"not-a-number"
        assert await store.get_upload_start("v1") is None

    @pytest.mark.asyncio
    async def test_connection_errors_are_wrapped(self) -> None:
        redis = AsyncMock()
        redis.set.side_effect = ConnectionError("down")
        redis.get.side_effect = TimeoutError("slow")
        store = RedisUploadTimeStore(redis)

        with pytest.raises(RedisConnectionError):
            await store.record_upload_start("v1", 1, 60)
        with pytest.raises(RedisConnectionError):
            await store.get_upload_start("v1")
