"""Emissão de eventos de telemetria sem afetar o fluxo principal."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from app.protocols.telemetry import TelemetryProtocol, TelemetryValue

logger = logging.getLogger(__name__)


def emit_event(
    telemetry: TelemetryProtocol | None,
    name: str,
    props: Mapping[str, TelemetryValue] | None = None,
) -> None:
    """Fire-and-forget: falhas do sink são logadas e descartadas."""
    if telemetry is None:
        return
    try:
        telemetry.record_event(name, props or {})
    except Exception as exc:
        logger.warning(
            "telemetry_failed",
            extra={"event_name": name, "error_type": type(exc).__name__},
        )
