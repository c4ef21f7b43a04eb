"""Factories de stores: implementações concretas conforme configuração."""

from __future__ import annotations

import logging

from sqlalchemy import MetaData

from app.bootstrap.clients import create_async_redis_client, create_database_engine
from app.infra.stores import (
    MemoryContentRecordStore,
    MemoryUploadTimeStore,
    RedisUploadTimeStore,
    SqlContentRecordStore,
    build_content_tables,
)
from app.protocols.content_record_store import ContentRecordStoreProtocol
from app.protocols.upload_time_store import UploadTimeStoreProtocol
from config.settings import get_database_settings, get_store_settings

logger = logging.getLogger(__name__)


def create_content_store() -> ContentRecordStoreProtocol:
    """Cria store de registros de conteúdo.

    CONTENT_STORE_BACKEND:
    - "sql": SqlContentRecordStore (tabelas de posts/comentários existentes)
    - "memory": MemoryContentRecordStore (dev only)
    """
    backend = get_store_settings().content_backend

    if backend == "sql":
        db = get_database_settings()
        tables = build_content_tables(
            MetaData(),
            posts_table=db.posts_table,
            comments_table=db.comments_table,
            meta_column=db.meta_column,
        )
        logger.info(
            "content_store_created",
            extra={"backend": "sql", "posts_table": db.posts_table},
        )
        return SqlContentRecordStore(create_database_engine(), tables)

    logger.warning("content_store_memory_backend", extra={"backend": backend})
    return MemoryContentRecordStore()


def create_upload_time_store() -> UploadTimeStoreProtocol:
    """Cria store de timestamps de upload.

    UPLOAD_TIME_STORE_BACKEND:
    - "redis": RedisUploadTimeStore
    - "memory": MemoryUploadTimeStore
    """
    backend = get_store_settings().upload_time_backend

    if backend == "redis":
        logger.info("upload_time_store_created", extra={"backend": "redis"})
        return RedisUploadTimeStore(create_async_redis_client())

    logger.info("upload_time_store_created", extra={"backend": "memory"})
    return MemoryUploadTimeStore()
