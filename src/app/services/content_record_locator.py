"""Localizador de registros de conteúdo que carregam um vídeo.

Não há índice por video_id: a busca é por substring no blob de metadados
(posts e comentários), seguida de decodificação e comparação exata. A
escrita é read-modify-write condicional: só grava se o blob não mudou
desde a leitura, com novas tentativas limitadas.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING

from app.domain import (
    ContentKind,
    VideoRecord,
    decode_meta,
    embed_video_record,
    encode_meta,
    extract_video_record,
)
from utils.errors import ContentRecordConflictError

if TYPE_CHECKING:
    from app.protocols.content_record_store import ContentRecordStoreProtocol

logger = logging.getLogger(__name__)

MAX_PATCH_ATTEMPTS = 3

VideoMutation = Callable[[VideoRecord], VideoRecord | None]


@dataclass(frozen=True, slots=True)
class ContentRecordHandle:
    """Uma linha de conteúdo cujo VideoRecord tem o video_id procurado."""

    kind: ContentKind
    record_id: int
    raw_meta: str
    record: VideoRecord


class ContentRecordLocator:
    """Encontra e atualiza VideoRecords embutidos em posts/comentários."""

    def __init__(self, *, store: ContentRecordStoreProtocol) -> None:
        self._store = store

    async def find_by_video_id(self, video_id: str) -> list[ContentRecordHandle]:
        """Todas as linhas cujo VideoRecord tem exatamente este video_id."""
        if not video_id:
            return []

        rows = await self._store.search_meta(video_id)
        handles: list[ContentRecordHandle] = []
        for row in rows:
            record = extract_video_record(decode_meta(row.meta))
            if record is None or record.video_id != video_id:
                continue
            handles.append(
                ContentRecordHandle(
                    kind=row.kind,
                    record_id=row.record_id,
                    raw_meta=row.meta,
                    record=record,
                )
            )
        return handles

    async def patch(
        self,
        handle: ContentRecordHandle,
        mutation: VideoMutation,
    ) -> VideoRecord | None:
        """Aplica a mutação com compare-and-set.

        Returns:
            O registro gravado, ou None se a mutação foi no-op (ou a linha
            sumiu / deixou de carregar o vídeo).

        Raises:
            ContentRecordConflictError: Concorrência persistente após
                MAX_PATCH_ATTEMPTS tentativas.
        """
        raw_meta = handle.raw_meta
        record: VideoRecord | None = handle.record

        for attempt in range(1, MAX_PATCH_ATTEMPTS + 1):
            if record is None or record.video_id != handle.record.video_id:
                return None

            updated = mutation(record)
            if updated is None:
                return None

            new_raw = encode_meta(embed_video_record(decode_meta(raw_meta), updated))
            if new_raw == raw_meta:
                return updated

            if await self._store.compare_and_swap_meta(
                handle.kind, handle.record_id, raw_meta, new_raw
            ):
                return updated

            logger.info(
                "content_record_patch_retry",
                extra={
                    "video_id": handle.record.video_id,
                    "content_kind": handle.kind.value,
                    "record_id": handle.record_id,
                    "attempt": attempt,
                },
            )
            current = await self._store.get_meta(handle.kind, handle.record_id)
            if current is None:
                return None
            raw_meta = current
            record = extract_video_record(decode_meta(current))

        raise ContentRecordConflictError(
            f"Conflito persistente ao atualizar {handle.kind.value}:{handle.record_id}"
        )

    async def apply(self, video_id: str, mutation: VideoMutation) -> list[VideoRecord]:
        """Aplica a mutação a todas as linhas do vídeo; retorna as gravadas."""
        updated: list[VideoRecord] = []
        for handle in await self.find_by_video_id(video_id):
            result = await self.patch(handle, mutation)
            if result is not None:
                updated.append(result)
        return updated
