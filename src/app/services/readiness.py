"""Avaliador de prontidão: regra única usada por webhook e polling.

Um payload dizendo "pronto" não basta. O vídeo só é considerado pronto
quando o provedor afirma prontidão, o manifest de playback está presente e
o percentual de codificação chegou a 100. Alguns provedores sinalizam
prontidão assim que a primeira rendition termina, enquanto o manifest só
responde de forma confiável depois de todas.

As mutações (mark_ready/mark_failed) passam pela FSM: transições negadas
viram no-op, o que torna a aplicação idempotente e monotônica.
"""

from __future__ import annotations

import logging

from app.domain import ProviderVideoInfo, ReadinessDecision, VideoRecord
from app.services.content_record_locator import VideoMutation
from fsm import VideoStatus, create_video_fsm

logger = logging.getLogger(__name__)

COMPLETE_PCT = 100.0


def evaluate_readiness(info: ProviderVideoInfo) -> ReadinessDecision:
    """Decide se o vídeo está de fato reproduzível.

    Função pura: sem IO, sem estado externo.
    """
    if info.is_error:
        return ReadinessDecision(
            is_ready=False,
            is_failed=True,
            reason="provider_error",
            error_code=info.error_code,
            error_text=info.error_text,
        )

    if not info.ready_claimed:
        return ReadinessDecision(is_ready=False, is_failed=False, reason="not_ready_to_stream")

    if not info.manifest_url:
        return ReadinessDecision(is_ready=False, is_failed=False, reason="manifest_missing")

    if info.pct_complete < COMPLETE_PCT:
        return ReadinessDecision(is_ready=False, is_failed=False, reason="encoding_incomplete")

    return ReadinessDecision(is_ready=True, is_failed=False, reason="ready")


def _transition(record: VideoRecord, target: VideoStatus, trigger: str) -> bool:
    machine = create_video_fsm(record.video_id, record.status)
    result = machine.transition(target, trigger)
    if not result.success:
        logger.debug(
            "video_transition_skipped",
            extra={
                "video_id": record.video_id,
                "from_state": record.status.value,
                "to_state": target.value,
                "reason": result.error_reason,
            },
        )
        return False
    if result.transition is None:
        return False
    logger.info("video_status_transition", extra=result.transition.to_log_dict())
    return True


def mark_ready(
    *,
    html: str,
    thumbnail_url: str = "",
    manifest_url: str = "",
    trigger: str = "webhook",
) -> VideoMutation:
    """Mutação pending → ready; no-op para registros já terminais."""

    def _apply(record: VideoRecord) -> VideoRecord | None:
        if not _transition(record, VideoStatus.READY, trigger):
            return None
        update: dict[str, object] = {
            "status": VideoStatus.READY,
            "html": html,
            "error_code": None,
            "error_text": None,
        }
        if thumbnail_url:
            update["thumbnail_url"] = thumbnail_url
        if manifest_url:
            update["manifest_url"] = manifest_url
        return record.model_copy(update=update)

    return _apply


def mark_failed(
    *,
    error_code: str,
    error_text: str,
    trigger: str = "webhook",
) -> VideoMutation:
    """Mutação pending → failed com código/texto do provedor preservados."""

    def _apply(record: VideoRecord) -> VideoRecord | None:
        if not _transition(record, VideoStatus.FAILED, trigger):
            return None
        return record.model_copy(
            update={
                "status": VideoStatus.FAILED,
                "html": "",
                "error_code": error_code or "encoding_failed",
                "error_text": error_text,
            }
        )

    return _apply
