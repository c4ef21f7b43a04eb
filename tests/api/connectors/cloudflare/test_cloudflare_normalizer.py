"""Testes da normalização de vídeos Cloudflare."""

from __future__ import annotations

import pytest

from api.connectors.cloudflare import normalize_cloudflare_video, parse_pct
from api.connectors.provider_errors import InvalidProviderPayloadError
from app.services.readiness import evaluate_readiness
from tests.fakes.fake_video_provider import CLOUDFLARE_CONFIG


def _payload(**overrides) -> dict:
    payload = {
        "uid": "v1",
        "readyToStream": True,
        "status": {"state": "inprogress", "pctComplete": "39.000000"},
        "playback": {"hls": "https://customer-q1w2.cloudflarestream.com/v1/manifest/video.m3u8"},
    }
    payload.update(overrides)
    return payload


@pytest.mark.parametrize(
    ("raw", "expected"),
    [("100.000000", 100.0), (42, 42.0), (None, 0.0), ("abc", 0.0), ("150", 100.0), ("-3", 0.0)],
)
def test_parse_pct(raw, expected: float) -> None:
    assert parse_pct(raw) == expected


def test_partial_ready_claim() -> None:
    info = normalize_cloudflare_video(_payload(), CLOUDFLARE_CONFIG)

    assert info.video_id == "v1"
    assert info.ready_claimed is True
    assert info.pct_complete == 39.0
    assert info.player_url == "https://customer-q1w2.cloudflarestream.com/v1/iframe"
    assert info.thumbnail_url.endswith("/v1/thumbnails/thumbnail.jpg")
    assert evaluate_readiness(info).reason == "encoding_incomplete"


def test_complete_is_ready() -> None:
    info = normalize_cloudflare_video(
        _payload(status={"state": "ready", "pctComplete": "100.000000"}), CLOUDFLARE_CONFIG
    )
    assert evaluate_readiness(info).is_ready


def test_error_state_carries_reason() -> None:
    info = normalize_cloudflare_video(
        _payload(
            readyToStream=False,
            status={"state": "error", "errReasonCode": "ERR_NON_VIDEO", "errReasonText": "bad"},
        ),
        CLOUDFLARE_CONFIG,
    )
    assert info.is_error
    assert (info.error_code, info.error_text) == ("ERR_NON_VIDEO", "bad")


def test_missing_playback_uses_configured_subdomain() -> None:
    info = normalize_cloudflare_video({"uid": "v2", "thumbnail": "https://t/x.jpg"}, CLOUDFLARE_CONFIG)

    assert info.manifest_url == ""
    assert info.thumbnail_url == "https://t/x.jpg"
    assert info.player_url == "https://customer-abc123.cloudflarestream.com/v2/iframe"


def test_missing_uid() -> None:
    with pytest.raises(InvalidProviderPayloadError):
        normalize_cloudflare_video({"readyToStream": True}, CLOUDFLARE_CONFIG)
