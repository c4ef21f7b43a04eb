"""Telemetria via structured logging (linhas metric_event)."""

from __future__ import annotations

from collections.abc import Mapping

from app.observability.metrics import record_event
from app.protocols.telemetry import TelemetryProtocol, TelemetryValue


class LogTelemetry(TelemetryProtocol):
    """Sink padrão: cada evento vira um log `metric_event`."""

    def record_event(self, name: str, props: Mapping[str, TelemetryValue] | None = None) -> None:
        record_event(name, props)
