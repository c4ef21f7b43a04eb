"""Parse e validação inicial do webhook (sem PII).

A assinatura é verificada sobre o corpo bruto antes de qualquer parse de
JSON ou mutação de estado.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING

from api.connectors.webhooks.signature import (
    SIGNATURE_HEADER,
    SignatureResult,
    get_header,
    verify_webhook_signature,
)
from app.domain import WebhookEvent

if TYPE_CHECKING:
    from collections.abc import Mapping

    from app.domain import Provider


class WebhookRequestError(ValueError):
    """Erro base para falhas de webhook."""

    status_code = 400


class InvalidSignatureError(WebhookRequestError):
    """Assinatura ausente, inválida ou expirada."""

    status_code = 401


class MissingWebhookSecretError(WebhookRequestError):
    """Secret do webhook não configurado no serviço."""

    status_code = 500


class InvalidJsonError(WebhookRequestError):
    """JSON inválido no payload do webhook."""


def parse_webhook_request(
    raw_body: bytes,
    headers: Mapping[str, str],
    provider: Provider,
    secret: str | None,
    *,
    now: float | None = None,
) -> tuple[WebhookEvent, SignatureResult]:
    """Valida assinatura e parseia JSON do webhook.

    Raises:
        InvalidSignatureError: invalid_signature | expired_signature
        MissingWebhookSecretError: provedor assina mas não há secret
        InvalidJsonError: JSON inválido ou não-objeto

    Returns:
        (WebhookEvent, SignatureResult)
    """
    signature_result = verify_webhook_signature(raw_body, headers, provider, secret, now=now)
    if not signature_result.valid:
        reason = signature_result.error or "invalid_signature"
        if reason == "missing_secret":
            raise MissingWebhookSecretError(reason)
        raise InvalidSignatureError(reason)

    try:
        payload = json.loads(raw_body or b"{}")
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise InvalidJsonError("invalid_json") from exc

    if not isinstance(payload, dict):
        raise InvalidJsonError("payload_not_object")

    event = WebhookEvent(
        provider=provider,
        raw_body=raw_body,
        signature=get_header(headers, SIGNATURE_HEADER),
        payload=payload,
        signature_verified=not signature_result.skipped,
    )
    return event, signature_result
