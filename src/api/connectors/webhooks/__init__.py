"""Autenticação e parse de webhooks de provedores."""

from api.connectors.webhooks.receive import (
    InvalidJsonError,
    InvalidSignatureError,
    MissingWebhookSecretError,
    WebhookRequestError,
    parse_webhook_request,
)
from api.connectors.webhooks.signature import (
    MAX_SIGNATURE_AGE_SECONDS,
    SIGNATURE_HEADER,
    SignatureResult,
    compute_cloudflare_signature,
    parse_signature_header,
    verify_cloudflare_signature,
    verify_webhook_signature,
)

__all__ = [
    "MAX_SIGNATURE_AGE_SECONDS",
    "SIGNATURE_HEADER",
    "InvalidJsonError",
    "InvalidSignatureError",
    "MissingWebhookSecretError",
    "SignatureResult",
    "WebhookRequestError",
    "compute_cloudflare_signature",
    "parse_signature_header",
    "parse_webhook_request",
    "verify_cloudflare_signature",
    "verify_webhook_signature",
]
