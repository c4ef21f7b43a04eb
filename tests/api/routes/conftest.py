"""Fixtures das rotas: app FastAPI com serviços em memória e provedor fake."""

from __future__ import annotations

from dataclasses import dataclass

import pytest
from fastapi.testclient import TestClient

from app.app import create_app
from app.bootstrap import VideoServices, build_video_services
from app.infra.stores.memory_stores import MemoryContentRecordStore, MemoryUploadTimeStore
from tests.fakes.fake_video_provider import (
    FakeClientFactory,
    FakeProviderClient,
    RecordingTelemetry,
    StaticConfigProvider,
)

SESSION_TOKEN = "session-token-123"
AUTH_HEADERS = {"Authorization": f"Bearer {SESSION_TOKEN}"}


@dataclass
class RouteEnv:
    client: TestClient
    services: VideoServices
    store: MemoryContentRecordStore
    provider_client: FakeProviderClient
    telemetry: RecordingTelemetry


@pytest.fixture
def route_env(monkeypatch: pytest.MonkeyPatch) -> RouteEnv:
    monkeypatch.setenv("API_SESSION_TOKENS", SESSION_TOKEN)
    store = MemoryContentRecordStore()
    provider_client = FakeProviderClient()
    telemetry = RecordingTelemetry()
    services = build_video_services(
        config_provider=StaticConfigProvider(),
        content_store=store,
        upload_time_store=MemoryUploadTimeStore(),
        client_factory=FakeClientFactory(provider_client),
        telemetry=telemetry,
    )
    return RouteEnv(
        client=TestClient(create_app(services=services)),
        services=services,
        store=store,
        provider_client=provider_client,
        telemetry=telemetry,
    )
