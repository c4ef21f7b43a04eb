"""Observabilidade: correlation id e métricas via logs estruturados.

Uso:
    from app.observability import get_correlation_id, set_correlation_id
    from app.observability import record_event, record_latency
"""

from app.observability.correlation import (
    CORRELATION_HEADER,
    generate_correlation_id,
    get_correlation_id,
    reset_correlation_id,
    set_correlation_id,
)
from app.observability.metrics import (
    record_event,
    record_latency,
    record_time_to_ready,
)

__all__ = [
    "CORRELATION_HEADER",
    "generate_correlation_id",
    "get_correlation_id",
    "record_event",
    "record_latency",
    "record_time_to_ready",
    "reset_correlation_id",
    "set_correlation_id",
]
