"""Testes do orquestrador de upload."""

from __future__ import annotations

from pathlib import Path

import pytest

from app.domain import Provider, UploadLimits
from app.infra.stores.memory_stores import MemoryUploadTimeStore
from app.services.upload_orchestrator import UploadOrchestrator
from fsm import VideoStatus
from tests.fakes.fake_video_provider import (
    FakeClientFactory,
    FakeProviderClient,
    RecordingTelemetry,
    StaticConfigProvider,
    cloudflare_info,
)
from utils.errors import (
    MissingCredentialsError,
    ProviderApiError,
    UploadFailedError,
    UploadValidationError,
)

MP4_BYTES = b"\x00\x00\x00\x18ftypisom\x00\x00\x02\x00isomiso2" + b"\x00" * 512


@pytest.fixture
def mp4_file(tmp_path: Path) -> str:
    path = tmp_path / "clip.mp4"
    path.write_bytes(MP4_BYTES)
    return str(path)


def _orchestrator(
    client: FakeProviderClient,
    *,
    config_provider: StaticConfigProvider | None = None,
    **kwargs,
) -> tuple[UploadOrchestrator, FakeClientFactory]:
    factory = FakeClientFactory(client)
    orchestrator = UploadOrchestrator(
        config_provider=config_provider or StaticConfigProvider(),
        client_factory=factory,
        clock=lambda: 1_700_000_000.0,
        **kwargs,
    )
    return orchestrator, factory


@pytest.mark.asyncio
async def test_pending_upload_result(mp4_file: str) -> None:
    client = FakeProviderClient(upload_info=cloudflare_info("v1", ready=True, pct=40))
    upload_times = MemoryUploadTimeStore()
    telemetry = RecordingTelemetry()
    orchestrator, factory = _orchestrator(
        client, upload_time_store=upload_times, telemetry=telemetry
    )

    result = await orchestrator.upload(mp4_file, "clip.mp4", {"title": "Meu vídeo"})

    assert result.video_id == "v1"
    assert result.provider is Provider.CLOUDFLARE_STREAM
    assert result.status is VideoStatus.PENDING
    assert result.html == ""
    assert result.uploaded_at == 1_700_000_000
    assert result.player_url.endswith("/v1/iframe")
    assert factory.configs[0].account_id == "acc123"
    assert await upload_times.get_upload_start("v1") == 1_700_000_000
    assert telemetry.names() == ["video_uploaded"]
    _, props = telemetry.events[0]
    assert props["format"] == "mp4"
    assert props["provider"] == "cloudflare_stream"


@pytest.mark.asyncio
async def test_ready_upload_includes_html(mp4_file: str) -> None:
    client = FakeProviderClient(upload_info=cloudflare_info("v1", ready=True, pct=100))
    orchestrator, _ = _orchestrator(client)

    result = await orchestrator.upload(mp4_file, "clip.mp4")

    assert result.ready
    assert "stream-bridge-video" in result.html
    assert result.to_dict()["readyToStream"] is True


@pytest.mark.asyncio
async def test_invalid_extension_never_calls_provider(tmp_path: Path) -> None:
    path = tmp_path / "malware.exe"
    path.write_bytes(MP4_BYTES)
    client = FakeProviderClient(upload_info=cloudflare_info("v1"))
    telemetry = RecordingTelemetry()
    orchestrator, _ = _orchestrator(client, telemetry=telemetry)

    with pytest.raises(UploadValidationError) as exc_info:
        await orchestrator.upload(str(path), "malware.exe")

    assert exc_info.value.code == "invalid_format"
    assert client.remote_calls == 0
    assert telemetry.events == [("video_validation_failed", {"code": "invalid_format"})]


@pytest.mark.asyncio
async def test_comment_upload_disabled(mp4_file: str) -> None:
    client = FakeProviderClient(upload_info=cloudflare_info("v1"))
    orchestrator, _ = _orchestrator(
        client,
        config_provider=StaticConfigProvider(limits=UploadLimits(comment_video_enabled=False)),
    )

    with pytest.raises(UploadValidationError) as exc_info:
        await orchestrator.upload(mp4_file, "clip.mp4", {"context": "comment"})

    assert exc_info.value.code == "comment_video_disabled"
    assert exc_info.value.status_code == 403
    assert client.remote_calls == 0


@pytest.mark.asyncio
async def test_invalid_context(mp4_file: str) -> None:
    orchestrator, _ = _orchestrator(FakeProviderClient())
    with pytest.raises(UploadValidationError) as exc_info:
        await orchestrator.upload(mp4_file, "clip.mp4", {"context": "story"})
    assert exc_info.value.code == "invalid_context"


@pytest.mark.asyncio
async def test_missing_credentials(mp4_file: str) -> None:
    client = FakeProviderClient()
    orchestrator, _ = _orchestrator(
        client,
        config_provider=StaticConfigProvider(
            active=Provider.BUNNY_STREAM,
            configs={},
        ),
    )

    with pytest.raises(MissingCredentialsError):
        await orchestrator.upload(mp4_file, "clip.mp4")
    assert client.remote_calls == 0


@pytest.mark.asyncio
async def test_provider_error_is_propagated(mp4_file: str) -> None:
    error = ProviderApiError("boom", code="cloudflare_api_error", http_status=500)
    telemetry = RecordingTelemetry()
    orchestrator, _ = _orchestrator(FakeProviderClient(upload_error=error), telemetry=telemetry)

    with pytest.raises(ProviderApiError):
        await orchestrator.upload(mp4_file, "clip.mp4")

    assert telemetry.events[-1] == (
        "video_upload_failed",
        {"provider": "cloudflare_stream", "code": "cloudflare_api_error"},
    )


@pytest.mark.asyncio
async def test_unexpected_error_becomes_upload_failed(mp4_file: str) -> None:
    orchestrator, _ = _orchestrator(FakeProviderClient(upload_error=OSError("disk")))

    with pytest.raises(UploadFailedError) as exc_info:
        await orchestrator.upload(mp4_file, "clip.mp4")

    assert exc_info.value.code == "upload_failed"
    assert isinstance(exc_info.value.__cause__, OSError)


@pytest.mark.asyncio
async def test_fifty_megabyte_mp4_is_accepted(tmp_path: Path) -> None:
    path = tmp_path / "big.mp4"
    with path.open("wb") as fh:
        fh.write(MP4_BYTES)
        fh.truncate(50 * 1024 * 1024)
    client = FakeProviderClient(upload_info=cloudflare_info("big", pct=0))
    telemetry = RecordingTelemetry()
    orchestrator, _ = _orchestrator(client, telemetry=telemetry)

    result = await orchestrator.upload(str(path), "big.mp4")

    assert result.status is VideoStatus.PENDING
    _, props = telemetry.events[0]
    assert props["file_size_mb"] == 50.0


@pytest.mark.asyncio
async def test_file_over_limit_is_rejected(tmp_path: Path) -> None:
    path = tmp_path / "big.mp4"
    with path.open("wb") as fh:
        fh.write(MP4_BYTES)
        fh.truncate(2 * 1024 * 1024 + 1)
    client = FakeProviderClient()
    orchestrator, _ = _orchestrator(
        client, config_provider=StaticConfigProvider(limits=UploadLimits(max_file_size_mb=2))
    )

    with pytest.raises(UploadValidationError) as exc_info:
        await orchestrator.upload(str(path), "big.mp4")

    assert exc_info.value.code == "file_too_large"
    assert exc_info.value.status_code == 413
    assert client.remote_calls == 0


@pytest.mark.asyncio
async def test_uppercase_extension_reports_normalized_format(tmp_path: Path) -> None:
    path = tmp_path / "CLIP.MP4"
    path.write_bytes(MP4_BYTES)
    client = FakeProviderClient(upload_info=cloudflare_info("v1"))
    telemetry = RecordingTelemetry()
    orchestrator, _ = _orchestrator(client, telemetry=telemetry)

    await orchestrator.upload(str(path), "CLIP.MP4", {"context": "comment"})

    assert client.calls == [("upload_file", "CLIP.MP4")]
    _, props = telemetry.events[0]
    assert props["format"] == "mp4"
