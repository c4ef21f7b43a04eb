"""Testes de POST /video-upload."""

from __future__ import annotations

import os
from dataclasses import replace

from fastapi.testclient import TestClient

from app.app import create_app
from app.services.upload_orchestrator import UploadOrchestrator
from tests.fakes.fake_video_provider import cloudflare_info

AUTH_HEADERS = {"Authorization": "Bearer session-token-123"}

MP4_BYTES = b"\x00\x00\x00\x18ftypisom\x00\x00\x02\x00isomiso2" + b"\x00" * 256


def test_upload_returns_canonical_result(route_env) -> None:
    route_env.provider_client.upload_info = cloudflare_info("v1", ready=True, pct=20)

    response = route_env.client.post(
        "/video-upload",
        files={"file": ("clip.mp4", MP4_BYTES, "video/mp4")},
        data={"context": "post", "title": "Meu vídeo"},
        headers=AUTH_HEADERS,
    )

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["video_id"] == "v1"
    assert data["provider"] == "cloudflare_stream"
    assert data["status"] == "pending"
    assert data["readyToStream"] is False
    assert route_env.provider_client.calls == [("upload_file", "clip.mp4")]


def test_upload_requires_session(route_env) -> None:
    response = route_env.client.post(
        "/video-upload", files={"file": ("clip.mp4", MP4_BYTES, "video/mp4")}
    )
    assert response.status_code == 401
    assert route_env.provider_client.remote_calls == 0


def test_invalid_format_never_reaches_provider(route_env) -> None:
    response = route_env.client.post(
        "/video-upload",
        files={"file": ("malware.exe", MP4_BYTES, "application/octet-stream")},
        headers=AUTH_HEADERS,
    )

    assert response.status_code == 400
    assert response.json()["code"] == "invalid_format"
    assert route_env.provider_client.remote_calls == 0


def test_missing_file(route_env) -> None:
    response = route_env.client.post(
        "/video-upload", data={"context": "post"}, headers=AUTH_HEADERS
    )
    assert response.status_code == 400
    assert response.json()["code"] == "file_not_found"


def test_temporary_file_is_removed(route_env) -> None:
    seen_paths: list[str] = []
    original = route_env.services.orchestrator

    class RecordingOrchestrator(UploadOrchestrator):
        async def upload(self, file_path, filename, metadata=None):
            seen_paths.append(file_path)
            assert os.path.exists(file_path)
            return await original.upload(file_path, filename, metadata)

    route_env.provider_client.upload_info = cloudflare_info("v1")
    services = replace(
        route_env.services,
        orchestrator=RecordingOrchestrator(
            config_provider=route_env.services.config_provider,
            client_factory=route_env.services.client_factory,
        ),
    )
    client = TestClient(create_app(services=services))

    response = client.post(
        "/video-upload",
        files={"file": ("clip.mp4", MP4_BYTES, "video/mp4")},
        headers=AUTH_HEADERS,
    )

    assert response.status_code == 200
    assert seen_paths and seen_paths[0].endswith(".mp4")
    assert not os.path.exists(seen_paths[0])


def test_temporary_file_removed_on_error(route_env) -> None:
    seen_paths: list[str] = []
    original = route_env.services.orchestrator

    class RecordingOrchestrator(UploadOrchestrator):
        async def upload(self, file_path, filename, metadata=None):
            seen_paths.append(file_path)
            return await original.upload(file_path, filename, metadata)

    route_env.provider_client.upload_error = RuntimeError("boom")
    services = replace(
        route_env.services,
        orchestrator=RecordingOrchestrator(
            config_provider=route_env.services.config_provider,
            client_factory=route_env.services.client_factory,
        ),
    )
    client = TestClient(create_app(services=services))

    response = client.post(
        "/video-upload",
        files={"file": ("clip.mp4", MP4_BYTES, "video/mp4")},
        headers=AUTH_HEADERS,
    )

    assert response.status_code == 500
    assert response.json()["code"] == "upload_failed"
    assert not os.path.exists(seen_paths[0])
