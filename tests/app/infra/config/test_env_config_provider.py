"""Testes do EnvConfigProvider."""

from __future__ import annotations

import pytest

from app.domain import Provider
from app.infra.config import EnvConfigProvider
from config.settings import BunnySettings, CloudflareSettings, StreamSettings, UploadSettings


def _provider(**overrides) -> EnvConfigProvider:
    kwargs = {
        "stream": StreamSettings(),
        "cloudflare": CloudflareSettings(
            account_id="acc",
            api_token="tok",
            webhook_secret="sec",
            customer_subdomain="customer-xyz",
            allowed_origins=("a.com",),
        ),
        "bunny": BunnySettings(library_id="42", api_key="key", cdn_hostname="vz.b-cdn.net"),
        "upload": UploadSettings(max_file_size_mb=10, allowed_formats=("mp4",)),
    }
    kwargs.update(overrides)
    return EnvConfigProvider(**kwargs)


def test_cloudflare_config_mapping() -> None:
    config = _provider().get_provider_config(Provider.CLOUDFLARE_STREAM)

    assert config.account_id == "acc"
    assert config.api_key == "tok"
    assert config.webhook_secret == "sec"
    assert config.playback_host == "customer-xyz"
    assert config.allowed_origins == ("a.com",)


def test_bunny_config_mapping() -> None:
    config = _provider().get_provider_config(Provider.BUNNY_STREAM)

    assert config.account_id == "42"
    assert config.api_key == "key"
    assert config.playback_host == "vz.b-cdn.net"
    assert config.webhook_secret == ""


def test_credentials_none_when_incomplete() -> None:
    provider = _provider(bunny=BunnySettings(library_id="42"))
    assert provider.get_credentials(Provider.BUNNY_STREAM) is None
    assert provider.get_credentials(Provider.CLOUDFLARE_STREAM) is not None


@pytest.mark.parametrize(
    ("configured", "expected"),
    [
        ("bunny", Provider.BUNNY_STREAM),
        ("cloudflare_stream", Provider.CLOUDFLARE_STREAM),
        ("vimeo", Provider.CLOUDFLARE_STREAM),
    ],
)
def test_active_provider(configured: str, expected: Provider) -> None:
    provider = _provider(stream=StreamSettings(active_provider=configured))
    assert provider.get_active_provider() is expected


def test_upload_limits() -> None:
    limits = _provider().get_upload_limits()
    assert limits.max_file_size_bytes == 10 * 1024 * 1024
    assert limits.allowed_formats == ("mp4",)


def test_defaults_come_from_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("STREAM_PROVIDER", "bunny")
    monkeypatch.setenv("BUNNY_LIBRARY_ID", "7")
    monkeypatch.setenv("BUNNY_API_KEY", "k")

    provider = EnvConfigProvider()

    assert provider.get_active_provider() is Provider.BUNNY_STREAM
    assert provider.get_credentials(Provider.BUNNY_STREAM).account_id == "7"
