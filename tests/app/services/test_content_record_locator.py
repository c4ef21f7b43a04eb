"""Testes do localizador de registros (busca exata e compare-and-set)."""

from __future__ import annotations

import pytest

from app.domain import ContentKind, VideoRecord, decode_meta
from app.infra.stores.memory_stores import MemoryContentRecordStore
from app.services.content_record_locator import MAX_PATCH_ATTEMPTS, ContentRecordLocator
from app.services.readiness import mark_ready
from fsm import VideoStatus
from tests.fakes.fake_video_provider import video_meta
from utils.errors import ContentRecordConflictError


class ContendedStore(MemoryContentRecordStore):
    """Store em que outro escritor sempre altera a linha antes do CAS."""

    def __init__(self) -> None:
        super().__init__()
        self.cas_calls = 0

    async def compare_and_swap_meta(self, kind, record_id, expected, new_meta):
        self.cas_calls += 1
        self._rows[(kind, record_id)] = expected.replace("}", ',"bump":%d}' % self.cas_calls, 1)
        return await super().compare_and_swap_meta(kind, record_id, expected, new_meta)


@pytest.mark.asyncio
async def test_find_requires_exact_video_id() -> None:
    store = MemoryContentRecordStore()
    store.insert(ContentKind.POST, video_meta("abc"))
    store.insert(ContentKind.COMMENT, video_meta("abc123"))
    store.insert(ContentKind.COMMENT, video_meta("abc"))
    store.insert(ContentKind.POST, {"title": "mentions abc but no video"})

    handles = await ContentRecordLocator(store=store).find_by_video_id("abc")

    assert sorted(h.kind.value for h in handles) == ["comment", "post"]
    assert all(h.record.video_id == "abc" for h in handles)


@pytest.mark.asyncio
async def test_find_empty_id_returns_nothing() -> None:
    store = MemoryContentRecordStore()
    store.insert(ContentKind.POST, video_meta("abc"))
    assert await ContentRecordLocator(store=store).find_by_video_id("") == []


@pytest.mark.asyncio
async def test_patch_preserves_unknown_keys() -> None:
    store = MemoryContentRecordStore()
    record_id = store.insert(
        ContentKind.POST,
        {"title": "Meu post", **video_meta("v1", custom_flag=True)},
    )
    locator = ContentRecordLocator(store=store)
    [handle] = await locator.find_by_video_id("v1")

    updated = await locator.patch(handle, mark_ready(html="<div/>"))

    assert updated is not None
    meta = decode_meta(store.raw(ContentKind.POST, record_id))
    assert meta["title"] == "Meu post"
    assert meta["video"]["status"] == "ready"
    assert meta["video"]["custom_flag"] is True


@pytest.mark.asyncio
async def test_patch_noop_mutation_does_not_write() -> None:
    store = MemoryContentRecordStore()
    record_id = store.insert(ContentKind.POST, video_meta("v1", status="ready"))
    before = store.raw(ContentKind.POST, record_id)
    locator = ContentRecordLocator(store=store)
    [handle] = await locator.find_by_video_id("v1")

    assert await locator.patch(handle, mark_ready(html="<div/>")) is None
    assert store.raw(ContentKind.POST, record_id) == before


@pytest.mark.asyncio
async def test_patch_retries_after_concurrent_write() -> None:
    store = MemoryContentRecordStore()
    record_id = store.insert(ContentKind.POST, video_meta("v1"))
    locator = ContentRecordLocator(store=store)
    [handle] = await locator.find_by_video_id("v1")

    # Outro escritor altera a linha entre a leitura e o CAS
    store._rows[(ContentKind.POST, record_id)] = store.raw(ContentKind.POST, record_id).replace(
        "}", ',"other":1}', 1
    )

    updated = await locator.patch(handle, mark_ready(html="<div/>"))

    assert updated is not None
    meta = decode_meta(store.raw(ContentKind.POST, record_id))
    assert meta["video"]["status"] == "ready"
    assert meta["video"]["other"] == 1


@pytest.mark.asyncio
async def test_patch_stops_when_concurrent_writer_finished_first() -> None:
    store = MemoryContentRecordStore()
    record_id = store.insert(ContentKind.POST, video_meta("v1"))
    locator = ContentRecordLocator(store=store)
    [handle] = await locator.find_by_video_id("v1")
    store._rows[(ContentKind.POST, record_id)] = store.raw(ContentKind.POST, record_id).replace(
        '"pending"', '"failed"'
    )

    assert await locator.patch(handle, mark_ready(html="<div/>")) is None
    assert decode_meta(store.raw(ContentKind.POST, record_id))["video"]["status"] == "failed"


@pytest.mark.asyncio
async def test_patch_returns_none_when_row_deleted() -> None:
    store = MemoryContentRecordStore()
    record_id = store.insert(ContentKind.COMMENT, video_meta("v1"))
    locator = ContentRecordLocator(store=store)
    [handle] = await locator.find_by_video_id("v1")
    store.delete(ContentKind.COMMENT, record_id)

    assert await locator.patch(handle, mark_ready(html="x")) is None


@pytest.mark.asyncio
async def test_patch_raises_after_persistent_conflict() -> None:
    store = ContendedStore()
    store.insert(ContentKind.POST, video_meta("v1"))
    locator = ContentRecordLocator(store=store)
    [handle] = await locator.find_by_video_id("v1")

    with pytest.raises(ContentRecordConflictError):
        await locator.patch(handle, mark_ready(html="x"))

    assert store.cas_calls == MAX_PATCH_ATTEMPTS


@pytest.mark.asyncio
async def test_apply_updates_all_rows() -> None:
    store = MemoryContentRecordStore()
    store.insert(ContentKind.POST, video_meta("v1"))
    store.insert(ContentKind.COMMENT, video_meta("v1"))

    updated = await ContentRecordLocator(store=store).apply("v1", mark_ready(html="x"))

    assert len(updated) == 2
    assert all(isinstance(r, VideoRecord) and r.status is VideoStatus.READY for r in updated)
