"""Factories de clientes externos: Redis assíncrono e engine SQLAlchemy."""

from __future__ import annotations

import logging
from functools import lru_cache
from typing import TYPE_CHECKING

from sqlalchemy import create_engine

from config.settings import get_base_settings, get_database_settings

if TYPE_CHECKING:
    from redis.asyncio import Redis as AsyncRedis
    from sqlalchemy.engine import Engine

logger = logging.getLogger(__name__)


@lru_cache(maxsize=1)
def create_async_redis_client() -> AsyncRedis[bytes]:
    """Cria cliente Redis assíncrono (singleton).

    Raises:
        ValueError: Se REDIS_URL não configurado
    """
    from redis.asyncio import Redis as AsyncRedis

    redis_url = get_base_settings().redis_url
    if not redis_url:
        msg = "REDIS_URL não configurado"
        raise ValueError(msg)

    client: AsyncRedis[bytes] = AsyncRedis.from_url(
        redis_url,
        decode_responses=False,
        socket_timeout=5.0,
        socket_connect_timeout=5.0,
    )

    logger.info("async_redis_client_created")
    return client


@lru_cache(maxsize=1)
def create_database_engine() -> Engine:
    """Cria a engine SQLAlchemy do banco de conteúdo (singleton)."""
    settings = get_database_settings()
    engine = create_engine(settings.url, echo=settings.echo, pool_pre_ping=True)
    logger.info("database_engine_created", extra={"dialect": engine.dialect.name})
    return engine
