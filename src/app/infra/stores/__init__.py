"""Stores: implementações concretas de persistência.

Módulos disponíveis:
    - sql_content_record_store: posts/comentários via SQLAlchemy
    - redis_upload_time_store: timestamps de upload no Redis
    - memory_stores: stores em memória para desenvolvimento/testes
"""

from __future__ import annotations

from app.infra.stores.memory_stores import MemoryContentRecordStore, MemoryUploadTimeStore
from app.infra.stores.redis_upload_time_store import RedisUploadTimeStore
from app.infra.stores.sql_content_record_store import (
    SqlContentRecordStore,
    build_content_tables,
)

__all__ = [
    # Memory (dev/test)
    "MemoryContentRecordStore",
    "MemoryUploadTimeStore",
    # Redis
    "RedisUploadTimeStore",
    # SQL
    "SqlContentRecordStore",
    "build_content_tables",
]
