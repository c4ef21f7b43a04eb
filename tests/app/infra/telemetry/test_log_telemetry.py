"""Testes do sink de telemetria via logs."""

from __future__ import annotations

import logging

import pytest

from app.infra.telemetry import LogTelemetry


def test_event_becomes_metric_log(caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.INFO, logger="app.observability.metrics"):
        LogTelemetry().record_event(
            "video_uploaded",
            {"provider": "bunny_stream", "file_size_mb": 1.5, "nested": {"x": 1}},  # type: ignore[dict-item]
        )

    [record] = [r for r in caplog.records if r.getMessage() == "metric_event"]
    assert record.event_name == "video_uploaded"
    assert record.prop_provider == "bunny_stream"
    assert record.prop_file_size_mb == 1.5
    assert not hasattr(record, "prop_nested")
