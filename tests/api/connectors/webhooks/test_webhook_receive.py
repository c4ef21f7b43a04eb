"""Testes do parse inicial de webhooks."""

from __future__ import annotations

import pytest

from api.connectors.webhooks import (
    InvalidJsonError,
    InvalidSignatureError,
    MissingWebhookSecretError,
    compute_cloudflare_signature,
    parse_webhook_request,
)
from app.domain import Provider

NOW = 1_700_000_000


def _signed(body: bytes, secret: str = "s") -> dict[str, str]:
    return {"webhook-signature": f"time={NOW},sig1={compute_cloudflare_signature(secret, str(NOW), body)}"}


def test_signed_cloudflare_payload() -> None:
    body = b'{"uid":"v1"}'

    event, result = parse_webhook_request(body, _signed(body), Provider.CLOUDFLARE_STREAM, "s", now=NOW)

    assert result.valid
    assert event.payload == {"uid": "v1"}
    assert event.signature_verified is True
    assert event.signature.startswith("time=")


def test_signature_checked_before_json() -> None:
    body = b"not json"
    with pytest.raises(InvalidSignatureError) as exc_info:
        parse_webhook_request(body, {}, Provider.CLOUDFLARE_STREAM, "s", now=NOW)
    assert str(exc_info.value) == "invalid_signature"
    assert exc_info.value.status_code == 401


def test_missing_secret_is_server_error() -> None:
    with pytest.raises(MissingWebhookSecretError) as exc_info:
        parse_webhook_request(b"{}", {}, Provider.CLOUDFLARE_STREAM, None)
    assert exc_info.value.status_code == 500


@pytest.mark.parametrize(("body", "reason"), [(b"{bad", "invalid_json"), (b"[1]", "payload_not_object")])
def test_invalid_json(body: bytes, reason: str) -> None:
    with pytest.raises(InvalidJsonError, match=reason):
        parse_webhook_request(body, _signed(body), Provider.CLOUDFLARE_STREAM, "s", now=NOW)


def test_bunny_payload_is_unverified() -> None:
    event, result = parse_webhook_request(
        b'{"VideoGuid":"g1","Status":3}', {}, Provider.BUNNY_STREAM, None
    )
    assert result.skipped
    assert event.signature_verified is False
    assert event.payload["Status"] == 3
