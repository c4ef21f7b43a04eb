"""Registro de métricas via structured logging.

As métricas são linhas de log `metric_*` agregáveis depois (Cloud Logging,
Loki, BigQuery).

Métricas suportadas:
- Latência: tempo de chamadas ao provedor e de upload
- Eventos: contadores nomeados (video_uploaded, video_encoding_failed, ...)
- Time-to-ready: segundos entre o upload e a confirmação de prontidão
"""

from __future__ import annotations

import logging
from collections.abc import Mapping

from app.observability.correlation import get_correlation_id

logger = logging.getLogger(__name__)

MetricValue = str | int | float | bool | None


def record_latency(
    component: str,
    operation: str,
    latency_ms: float,
    correlation_id: str | None = None,
) -> None:
    """Registra latência de operação.

    Args:
        component: Nome do componente (ex: "cloudflare_client")
        operation: Nome da operação (ex: "get_video_info")
        latency_ms: Latência em milissegundos
        correlation_id: ID de correlação (usa o do contexto se None)
    """
    logger.info(
        "metric_latency",
        extra={
            "metric_type": "latency",
            "component": component,
            "operation": operation,
            "latency_ms": round(latency_ms, 2),
            "correlation_id": correlation_id or get_correlation_id(),
        },
    )


def record_event(
    name: str,
    properties: Mapping[str, MetricValue] | None = None,
    correlation_id: str | None = None,
) -> None:
    """Registra um evento nomeado com propriedades escalares.

    Propriedades não escalares são descartadas para não vazar payloads.
    """
    extra: dict[str, MetricValue] = {
        "metric_type": "event",
        "event_name": name,
        "correlation_id": correlation_id or get_correlation_id(),
    }
    for key, value in (properties or {}).items():
        if isinstance(value, str | int | float | bool) or value is None:
            extra[f"prop_{key}"] = value

    logger.info("metric_event", extra=extra)


def record_time_to_ready(
    provider: str,
    seconds: float,
    correlation_id: str | None = None,
) -> None:
    """Registra o tempo total entre upload e prontidão confirmada."""
    logger.info(
        "metric_time_to_ready",
        extra={
            "metric_type": "time_to_ready",
            "provider": provider,
            "time_to_ready_seconds": round(seconds, 1),
            "correlation_id": correlation_id or get_correlation_id(),
        },
    )
