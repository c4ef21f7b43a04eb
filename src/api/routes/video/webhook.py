"""Webhook dos provedores de streaming.

Endpoint:
- POST /webhook/{provider}: notificação de mudança de estado de um vídeo

Fluxo:
1. Assinatura verificada sobre o corpo bruto (antes de qualquer parse)
2. Payload normalizado em ProviderVideoInfo
3. Reconciliação: avaliador de prontidão + escrita nos registros

Leituras ainda não prontas respondem 200 sem alterar estado, para o
provedor não reenviar.
"""

from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, Request, Response

from api.connectors import normalize_webhook_payload
from api.connectors.provider_errors import InvalidProviderPayloadError
from api.connectors.webhooks import WebhookRequestError, parse_webhook_request
from api.routes.video.dependencies import get_services
from api.routes.video.responses import error_json, internal_error_response
from app.domain import Provider
from app.observability import (
    CORRELATION_HEADER,
    get_correlation_id,
    reset_correlation_id,
    set_correlation_id,
)
from utils.errors import InfrastructureError

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/webhook/{provider}", response_model=None)
async def receive_webhook(provider: str, request: Request) -> Response | dict[str, Any]:
    """Recebe a notificação do provedor e reconcilia o estado do vídeo."""
    token = set_correlation_id(request.headers.get(CORRELATION_HEADER))

    try:
        try:
            resolved = Provider.parse(provider)
        except ValueError:
            logger.warning("webhook_provider_unsupported", extra={"provider": provider})
            return error_json(400, "unsupported_provider", f"Provedor desconhecido: {provider}")

        services = get_services(request)
        config = services.config_provider.get_provider_config(resolved)
        raw_body = await request.body()

        try:
            event, signature_result = parse_webhook_request(
                raw_body=raw_body,
                headers=dict(request.headers),
                provider=resolved,
                secret=config.webhook_secret or None,
            )
        except WebhookRequestError as exc:
            logger.warning(
                "webhook_rejected",
                extra={
                    "provider": resolved.value,
                    "reason": str(exc),
                    "status_code": exc.status_code,
                },
            )
            return error_json(exc.status_code, str(exc), "Webhook rejeitado")

        logger.info(
            "webhook_received",
            extra={
                "provider": resolved.value,
                "correlation_id": get_correlation_id(),
                "signature_verified": event.signature_verified,
                "signature_skipped": signature_result.skipped,
                "payload_size": len(raw_body),
            },
        )

        try:
            info = normalize_webhook_payload(resolved, event.payload, config)
        except InvalidProviderPayloadError as exc:
            logger.warning(
                "webhook_payload_invalid",
                extra={"provider": resolved.value, "error": str(exc)},
            )
            return error_json(400, "invalid_payload", "Payload sem identificador de vídeo")

        try:
            outcome = await services.reconciler.reconcile(info, trigger="webhook")
        except InfrastructureError:
            logger.exception(
                "webhook_reconcile_failed",
                extra={"provider": resolved.value, "video_id": info.video_id},
            )
            return internal_error_response()

        return {
            "success": True,
            "video_id": outcome.video_id,
            "status": outcome.status,
            "updated": outcome.updated,
        }

    finally:
        reset_correlation_id(token)
