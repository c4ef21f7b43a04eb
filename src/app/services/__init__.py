"""Serviços de aplicação.

Orquestração do ciclo de vida do vídeo sobre protocolos injetados.
Implementações concretas de IO ficam em app/infra/ e api/connectors/.
"""

from app.services.content_record_locator import (
    MAX_PATCH_ATTEMPTS,
    ContentRecordHandle,
    ContentRecordLocator,
)
from app.services.file_validation import sniff_video_mime, validate_upload_file
from app.services.player_html import render_pending_html, render_player_html
from app.services.readiness import evaluate_readiness, mark_failed, mark_ready
from app.services.readiness_reconciler import ReadinessReconciler, ReconcileOutcome
from app.services.status_query import VideoStatusService
from app.services.telemetry import emit_event
from app.services.upload_orchestrator import UploadOrchestrator
from app.services.video_deletion import VideoDeletionHandler

__all__ = [
    "MAX_PATCH_ATTEMPTS",
    "ContentRecordHandle",
    "ContentRecordLocator",
    "ReadinessReconciler",
    "ReconcileOutcome",
    "UploadOrchestrator",
    "VideoDeletionHandler",
    "VideoStatusService",
    "emit_event",
    "evaluate_readiness",
    "mark_failed",
    "mark_ready",
    "render_pending_html",
    "render_player_html",
    "sniff_video_mime",
    "validate_upload_file",
]
