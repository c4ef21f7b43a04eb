"""Implementações de telemetria."""

from app.infra.telemetry.log_telemetry import LogTelemetry

__all__ = ["LogTelemetry"]
