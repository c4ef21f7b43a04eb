"""Store SQL de registros de conteúdo (posts e comentários).

As tabelas pertencem ao sistema de conteúdo; aqui só se lê e reescreve a
coluna de metadados. O engine é síncrono e cada chamada roda em
asyncio.to_thread para não bloquear o event loop.
"""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING

from sqlalchemy import Column, Integer, MetaData, Table, Text, select, text, update
from sqlalchemy.exc import SQLAlchemyError

from app.domain import ContentKind
from app.protocols.content_record_store import ContentRecordRow, ContentRecordStoreProtocol
from utils.errors import DatabaseError

if TYPE_CHECKING:
    from sqlalchemy.engine import Engine

logger = logging.getLogger(__name__)


def build_content_tables(
    metadata: MetaData,
    *,
    posts_table: str = "posts",
    comments_table: str = "post_comments",
    meta_column: str = "meta",
) -> dict[ContentKind, Table]:
    """Declara as tabelas de conteúdo (apenas as colunas usadas aqui)."""
    return {
        ContentKind.POST: Table(
            posts_table,
            metadata,
            Column("id", Integer, primary_key=True),
            Column(meta_column, Text, nullable=True, key="meta"),
        ),
        ContentKind.COMMENT: Table(
            comments_table,
            metadata,
            Column("id", Integer, primary_key=True),
            Column(meta_column, Text, nullable=True, key="meta"),
        ),
    }


class SqlContentRecordStore(ContentRecordStoreProtocol):
    """Busca por substring e compare-and-set na coluna de metadados."""

    def __init__(self, engine: Engine, tables: dict[ContentKind, Table]) -> None:
        self._engine = engine
        self._tables = tables

    async def search_meta(self, fragment: str) -> list[ContentRecordRow]:
        return await asyncio.to_thread(self._search_sync, fragment)

    def _search_sync(self, fragment: str) -> list[ContentRecordRow]:
        rows: list[ContentRecordRow] = []
        try:
            with self._engine.connect() as conn:
                for kind, table in self._tables.items():
                    stmt = select(table.c.id, table.c.meta.label("meta")).where(
                        table.c.meta.contains(fragment, autoescape=True)
                    )
                    rows.extend(
                        ContentRecordRow(kind=kind, record_id=int(row.id), meta=row.meta or "")
                        for row in conn.execute(stmt)
                    )
        except SQLAlchemyError as exc:
            logger.error(
                "content_record_search_failed",
                extra={"error_type": type(exc).__name__},
            )
            raise DatabaseError("Falha ao buscar registros de conteúdo") from exc
        return rows

    async def get_meta(self, kind: ContentKind, record_id: int) -> str | None:
        return await asyncio.to_thread(self._get_sync, kind, record_id)

    def _get_sync(self, kind: ContentKind, record_id: int) -> str | None:
        table = self._tables[kind]
        try:
            with self._engine.connect() as conn:
                row = conn.execute(
                    select(table.c.meta.label("meta")).where(table.c.id == record_id)
                ).first()
        except SQLAlchemyError as exc:
            raise DatabaseError("Falha ao ler registro de conteúdo") from exc
        if row is None:
            return None
        return row.meta or ""

    async def compare_and_swap_meta(
        self,
        kind: ContentKind,
        record_id: int,
        expected: str,
        new_meta: str,
    ) -> bool:
        return await asyncio.to_thread(self._cas_sync, kind, record_id, expected, new_meta)

    def _cas_sync(self, kind: ContentKind, record_id: int, expected: str, new_meta: str) -> bool:
        table = self._tables[kind]
        stmt = (
            update(table)
            .where(table.c.id == record_id, table.c.meta == expected)
            .values(meta=new_meta)
        )
        try:
            with self._engine.begin() as conn:
                result = conn.execute(stmt)
        except SQLAlchemyError as exc:
            logger.error(
                "content_record_update_failed",
                extra={
                    "kind": kind.value,
                    "record_id": record_id,
                    "error_type": type(exc).__name__,
                },
            )
            raise DatabaseError("Falha ao atualizar registro de conteúdo") from exc
        return result.rowcount == 1

    async def ping(self) -> bool:
        return await asyncio.to_thread(self._ping_sync)

    def _ping_sync(self) -> bool:
        try:
            with self._engine.connect() as conn:
                conn.execute(text("SELECT 1"))
        except SQLAlchemyError:
            return False
        return True
