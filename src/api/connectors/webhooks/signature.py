"""Verificação de assinatura de webhooks de provedores.

Cloudflare Stream assina cada entrega com o cabeçalho
`Webhook-Signature: time=<unix>,sig1=<hex>`, onde
sig1 = HMAC-SHA256(secret, "<time>.<corpo bruto>").

Bunny Stream não assina webhooks; a verificação é um no-op registrado em
log (lacuna de confiança conhecida).
"""

from __future__ import annotations

import hashlib
import hmac
import logging
import re
import time
from dataclasses import dataclass
from typing import TYPE_CHECKING

from app.domain import Provider

if TYPE_CHECKING:
    from collections.abc import Mapping

logger = logging.getLogger(__name__)

SIGNATURE_HEADER = "webhook-signature"
MAX_SIGNATURE_AGE_SECONDS = 300
_SIG1_PATTERN = re.compile(r"[0-9a-f]{64}")


@dataclass(frozen=True, slots=True)
class SignatureResult:
    """Resultado da verificação.

    Attributes:
        valid: Assinatura aceita
        skipped: Provedor sem esquema de assinatura (aceito sem verificar)
        error: invalid_signature | expired_signature | missing_secret
    """

    valid: bool
    skipped: bool = False
    error: str | None = None


def get_header(headers: Mapping[str, str], name: str) -> str:
    value = headers.get(name)
    if value is None:
        # Mapping comum (dict) não é case-insensitive como starlette Headers
        lowered = {key.lower(): val for key, val in headers.items()}
        value = lowered.get(name.lower())
    return value or ""


def parse_signature_header(header: str) -> tuple[str, str]:
    """Extrai (time, sig1) do cabeçalho; campos ausentes voltam como ""."""
    fields: dict[str, str] = {}
    for part in header.split(","):
        key, sep, value = part.strip().partition("=")
        if sep:
            fields[key.strip()] = value.strip()
    return fields.get("time", ""), fields.get("sig1", "")


def compute_cloudflare_signature(secret: str, timestamp: str, raw_body: bytes) -> str:
    """HMAC-SHA256 hex de "<time>.<corpo>"."""
    message = timestamp.encode() + b"." + raw_body
    return hmac.new(secret.encode(), message, hashlib.sha256).hexdigest()


def verify_cloudflare_signature(
    raw_body: bytes,
    headers: Mapping[str, str],
    secret: str | None,
    *,
    now: float | None = None,
) -> SignatureResult:
    """Valida assinatura e janela de replay de um webhook Cloudflare."""
    if not secret:
        return SignatureResult(valid=False, error="missing_secret")

    timestamp, signature = parse_signature_header(get_header(headers, SIGNATURE_HEADER))
    if not timestamp or not signature:
        return SignatureResult(valid=False, error="invalid_signature")

    try:
        sent_at = int(timestamp)
    except ValueError:
        return SignatureResult(valid=False, error="invalid_signature")

    current = time.time() if now is None else now
    if abs(current - sent_at) > MAX_SIGNATURE_AGE_SECONDS:
        return SignatureResult(valid=False, error="expired_signature")

    signature = signature.lower()
    if not _SIG1_PATTERN.fullmatch(signature):
        return SignatureResult(valid=False, error="invalid_signature")

    expected = compute_cloudflare_signature(secret, timestamp, raw_body)
    if not hmac.compare_digest(expected.encode(), signature.encode()):
        return SignatureResult(valid=False, error="invalid_signature")

    return SignatureResult(valid=True)


def verify_webhook_signature(
    raw_body: bytes,
    headers: Mapping[str, str],
    provider: Provider,
    secret: str | None,
    *,
    now: float | None = None,
) -> SignatureResult:
    """Despacha a verificação conforme o provedor."""
    if provider is Provider.CLOUDFLARE_STREAM:
        return verify_cloudflare_signature(raw_body, headers, secret, now=now)

    logger.warning("webhook_signature_skipped", extra={"provider": provider.value})
    return SignatureResult(valid=True, skipped=True)
