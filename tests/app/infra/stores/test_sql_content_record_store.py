"""Testes do store SQL com SQLite em memória."""

from __future__ import annotations

from collections.abc import Iterator

import pytest
from sqlalchemy import MetaData, create_engine, insert
from sqlalchemy.pool import StaticPool

from app.domain import ContentKind
from app.infra.stores.sql_content_record_store import (
    SqlContentRecordStore,
    build_content_tables,
)
from utils.errors import DatabaseError


@pytest.fixture
def sql_env() -> Iterator[tuple[SqlContentRecordStore, dict]]:
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    metadata = MetaData()
    tables = build_content_tables(
        metadata, posts_table="wp_posts", comments_table="wp_comments", meta_column="meta_json"
    )
    metadata.create_all(engine)
    with engine.begin() as conn:
        conn.execute(
            insert(tables[ContentKind.POST]),
            [
                {"id": 1, "meta": '{"video":{"video_id":"abc"}}'},
                {"id": 2, "meta": '{"title":"100%_done"}'},
                {"id": 3, "meta": None},
            ],
        )
        conn.execute(
            insert(tables[ContentKind.COMMENT]),
            [{"id": 10, "meta": '{"video":{"video_id":"abc"}}'}],
        )
    yield SqlContentRecordStore(engine, tables), tables
    engine.dispose()


@pytest.mark.asyncio
async def test_search_returns_posts_and_comments(sql_env) -> None:
    store, _ = sql_env

    rows = await store.search_meta("abc")

    assert {(r.kind, r.record_id) for r in rows} == {
        (ContentKind.POST, 1),
        (ContentKind.COMMENT, 10),
    }


@pytest.mark.asyncio
async def test_search_escapes_like_wildcards(sql_env) -> None:
    store, _ = sql_env

    assert [r.record_id for r in await store.search_meta("100%_")] == [2]
    assert await store.search_meta("%") != []
    assert await store.search_meta("0%x") == []


@pytest.mark.asyncio
async def test_get_meta(sql_env) -> None:
    store, _ = sql_env

    assert await store.get_meta(ContentKind.COMMENT, 10) == '{"video":{"video_id":"abc"}}'
    assert await store.get_meta(ContentKind.POST, 3) == ""
    assert await store.get_meta(ContentKind.POST, 999) is None


@pytest.mark.asyncio
async def test_compare_and_swap(sql_env) -> None:
    store, _ = sql_env
    original = '{"video":{"video_id":"abc"}}'

    assert await store.compare_and_swap_meta(ContentKind.POST, 1, "stale", "x") is False
    assert await store.compare_and_swap_meta(ContentKind.POST, 1, original, "new") is True
    assert await store.get_meta(ContentKind.POST, 1) == "new"
    assert await store.compare_and_swap_meta(ContentKind.POST, 1, original, "again") is False


@pytest.mark.asyncio
async def test_ping(sql_env) -> None:
    store, _ = sql_env
    assert await store.ping() is True


@pytest.mark.asyncio
async def test_missing_table_raises_database_error() -> None:
    engine = create_engine(
        "sqlite://", connect_args={"check_same_thread": False}, poolclass=StaticPool
    )
    store = SqlContentRecordStore(engine, build_content_tables(MetaData()))

    with pytest.raises(DatabaseError):
        await store.search_meta("abc")
    with pytest.raises(DatabaseError):
        await store.compare_and_swap_meta(ContentKind.POST, 1, "a", "b")
