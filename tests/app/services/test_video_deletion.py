"""Testes da remoção de vídeos no ciclo de vida do conteúdo."""

from __future__ import annotations

import pytest

from app.domain import ContentKind, Provider
from app.services.video_deletion import VideoDeletionHandler
from tests.fakes.fake_video_provider import (
    FakeClientFactory,
    FakeProviderClient,
    StaticConfigProvider,
    not_found_error,
    video_meta,
)


def _handler(
    client: FakeProviderClient, config_provider: StaticConfigProvider | None = None
) -> tuple[VideoDeletionHandler, FakeClientFactory]:
    factory = FakeClientFactory(client)
    handler = VideoDeletionHandler(
        config_provider=config_provider or StaticConfigProvider(),
        client_factory=factory,
    )
    return handler, factory


@pytest.mark.asyncio
async def test_deleted_content_removes_video() -> None:
    client = FakeProviderClient()
    handler, factory = _handler(client)

    assert await handler.handle_content_deleted(video_meta("v1")) is True
    assert client.deleted == ["v1"]
    assert factory.configs[0].provider is Provider.CLOUDFLARE_STREAM


@pytest.mark.asyncio
async def test_deleted_content_accepts_serialized_meta() -> None:
    client = FakeProviderClient(Provider.BUNNY_STREAM)
    handler, factory = _handler(client)

    meta = '{"video":{"video_id":"g1","provider":"bunny"}}'
    assert await handler.handle_content_deleted(meta) is True
    assert factory.configs[0].provider is Provider.BUNNY_STREAM


@pytest.mark.asyncio
@pytest.mark.parametrize("meta", [None, "", "not-json", {"title": "sem vídeo"}])
async def test_deleted_content_without_video(meta) -> None:
    client = FakeProviderClient()
    handler, _ = _handler(client)
    assert await handler.handle_content_deleted(meta) is False
    assert client.remote_calls == 0


@pytest.mark.asyncio
async def test_video_removed_on_edit() -> None:
    client = FakeProviderClient()
    handler, _ = _handler(client)

    deleted = await handler.handle_content_updated(
        ContentKind.POST, video_meta("v1"), {"title": "sem vídeo"}
    )

    assert deleted is True
    assert client.deleted == ["v1"]


@pytest.mark.asyncio
async def test_same_video_is_kept() -> None:
    client = FakeProviderClient()
    handler, _ = _handler(client)
    assert not await handler.handle_content_updated(
        ContentKind.POST, video_meta("v1"), video_meta("v1", status="ready")
    )
    assert client.remote_calls == 0


@pytest.mark.asyncio
async def test_comment_replacement_deletes_old_video() -> None:
    client = FakeProviderClient()
    handler, _ = _handler(client)

    assert await handler.handle_content_updated(
        ContentKind.COMMENT, video_meta("old"), video_meta("new")
    )
    assert client.deleted == ["old"]


@pytest.mark.asyncio
async def test_post_replacement_requires_marker() -> None:
    client = FakeProviderClient()
    handler, _ = _handler(client)

    assert not await handler.handle_content_updated(
        ContentKind.POST, video_meta("old"), video_meta("new")
    )
    assert client.remote_calls == 0


@pytest.mark.asyncio
async def test_post_replacement_with_marker_uses_replaced_provider() -> None:
    client = FakeProviderClient(Provider.BUNNY_STREAM)
    handler, factory = _handler(client)

    new_meta = video_meta(
        "new", replaces_video_id="old-guid", replaces_provider="bunny_stream"
    )
    assert await handler.handle_content_updated(ContentKind.POST, video_meta("old"), new_meta)
    assert client.deleted == ["old-guid"]
    assert factory.configs[0].provider is Provider.BUNNY_STREAM


@pytest.mark.asyncio
async def test_provider_failure_is_swallowed() -> None:
    client = FakeProviderClient(delete_error=not_found_error())
    handler, _ = _handler(client)
    assert await handler.delete_video("v1", "cloudflare") is False


@pytest.mark.asyncio
async def test_skips_unknown_provider_and_missing_credentials() -> None:
    client = FakeProviderClient()
    handler, _ = _handler(client, StaticConfigProvider(configs={}))

    assert await handler.delete_video("v1", "vimeo") is False
    assert await handler.delete_video("v1", None) is False
    assert await handler.delete_video("v1", "cloudflare") is False
    assert client.remote_calls == 0
