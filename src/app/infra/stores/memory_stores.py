"""Stores em memória: apenas para desenvolvimento e testes.

ATENÇÃO: Não usar em staging/production. Sem persistência entre reinícios.
"""

from __future__ import annotations

import itertools
import time
from typing import Any

from app.domain import ContentKind, encode_meta
from app.protocols.content_record_store import ContentRecordRow, ContentRecordStoreProtocol
from app.protocols.upload_time_store import UploadTimeStoreProtocol


class MemoryContentRecordStore(ContentRecordStoreProtocol):
    """Posts e comentários em dicts, com a mesma semântica do store SQL.

    insert/delete fazem o papel do sistema de conteúdo dono das linhas.
    """

    def __init__(self) -> None:
        self._rows: dict[tuple[ContentKind, int], str] = {}
        self._ids = itertools.count(1)

    def insert(self, kind: ContentKind, meta: dict[str, Any] | str) -> int:
        """Cria uma linha e retorna o id."""
        record_id = next(self._ids)
        self._rows[(kind, record_id)] = meta if isinstance(meta, str) else encode_meta(meta)
        return record_id

    def delete(self, kind: ContentKind, record_id: int) -> bool:
        """Remove uma linha (o VideoRecord embutido vai junto)."""
        return self._rows.pop((kind, record_id), None) is not None

    def raw(self, kind: ContentKind, record_id: int) -> str | None:
        return self._rows.get((kind, record_id))

    async def search_meta(self, fragment: str) -> list[ContentRecordRow]:
        return [
            ContentRecordRow(kind=kind, record_id=record_id, meta=meta)
            for (kind, record_id), meta in self._rows.items()
            if fragment in meta
        ]

    async def get_meta(self, kind: ContentKind, record_id: int) -> str | None:
        return self._rows.get((kind, record_id))

    async def compare_and_swap_meta(
        self,
        kind: ContentKind,
        record_id: int,
        expected: str,
        new_meta: str,
    ) -> bool:
        key = (kind, record_id)
        if self._rows.get(key) != expected:
            return False
        self._rows[key] = new_meta
        return True

    async def ping(self) -> bool:
        return True


class MemoryUploadTimeStore(UploadTimeStoreProtocol):
    """Timestamps de upload em memória com expiração."""

    def __init__(self) -> None:
        self._store: dict[str, tuple[int, float]] = {}  # video_id -> (started_at, expires_at)

    async def record_upload_start(self, video_id: str, started_at: int, ttl_seconds: int) -> None:
        self._store[video_id] = (started_at, time.time() + ttl_seconds)

    async def get_upload_start(self, video_id: str) -> int | None:
        entry = self._store.get(video_id)
        if entry is None:
            return None
        started_at, expires_at = entry
        if time.time() > expires_at:
            del self._store[video_id]
            return None
        return started_at
