"""Reconciliação de prontidão: aplica uma leitura do provedor aos registros.

Ponto único usado pelo webhook e pelo polling de status. A decisão vem do
avaliador puro; a escrita passa pelo localizador (compare-and-set) e pela
FSM (monotônica e idempotente). Entregas repetidas ou fora de ordem não
regridem um registro terminal.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING

from app.observability import record_time_to_ready
from app.services.player_html import render_player_html
from app.services.readiness import evaluate_readiness, mark_failed, mark_ready
from app.services.telemetry import emit_event
from utils.errors import InfrastructureError

if TYPE_CHECKING:
    from app.domain import ProviderVideoInfo, ReadinessDecision, VideoRecord
    from app.protocols import (
        ConfigProviderProtocol,
        TelemetryProtocol,
        UploadTimeStoreProtocol,
    )
    from app.services.content_record_locator import ContentRecordLocator

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ReconcileOutcome:
    """Resultado de uma reconciliação."""

    video_id: str
    decision: ReadinessDecision
    matched: int
    updated: int

    @property
    def status(self) -> str:
        if self.decision.is_ready:
            return "ready"
        if self.decision.is_failed:
            return "failed"
        return "pending"


class ReadinessReconciler:
    """Aplica leituras normalizadas do provedor aos VideoRecords."""

    def __init__(
        self,
        *,
        locator: ContentRecordLocator,
        config_provider: ConfigProviderProtocol,
        telemetry: TelemetryProtocol | None = None,
        upload_time_store: UploadTimeStoreProtocol | None = None,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._locator = locator
        self._config_provider = config_provider
        self._telemetry = telemetry
        self._upload_time_store = upload_time_store
        self._clock = clock

    async def reconcile(self, info: ProviderVideoInfo, trigger: str) -> ReconcileOutcome:
        """Avalia a leitura e atualiza todos os registros do vídeo.

        Raises:
            ContentRecordConflictError: Concorrência persistente na escrita.
            DatabaseError: Falha do store de conteúdo.
        """
        decision = evaluate_readiness(info)

        if decision.is_pending:
            logger.debug(
                "video_not_ready",
                extra={
                    "video_id": info.video_id,
                    "provider": info.provider.value,
                    "reason": decision.reason,
                    "pct_complete": info.pct_complete,
                    "trigger": trigger,
                },
            )
            return ReconcileOutcome(info.video_id, decision, matched=0, updated=0)

        handles = await self._locator.find_by_video_id(info.video_id)
        if not handles:
            logger.info(
                "video_record_not_found",
                extra={
                    "video_id": info.video_id,
                    "provider": info.provider.value,
                    "trigger": trigger,
                },
            )
            return ReconcileOutcome(info.video_id, decision, matched=0, updated=0)

        if decision.is_ready:
            config = self._config_provider.get_provider_config(info.provider)
            mutation = mark_ready(
                html=render_player_html(config, info.video_id, info.manifest_url),
                thumbnail_url=info.thumbnail_url,
                manifest_url=info.manifest_url,
                trigger=trigger,
            )
        else:
            mutation = mark_failed(
                error_code=decision.error_code,
                error_text=decision.error_text,
                trigger=trigger,
            )

        updated: list[VideoRecord] = []
        for handle in handles:
            record = await self._locator.patch(handle, mutation)
            if record is not None:
                updated.append(record)

        if updated:
            await self._after_transition(info, decision, updated[0], trigger)

        logger.info(
            "video_reconciled",
            extra={
                "video_id": info.video_id,
                "provider": info.provider.value,
                "status": "ready" if decision.is_ready else "failed",
                "matched": len(handles),
                "updated": len(updated),
                "trigger": trigger,
            },
        )
        return ReconcileOutcome(
            info.video_id, decision, matched=len(handles), updated=len(updated)
        )

    async def _after_transition(
        self,
        info: ProviderVideoInfo,
        decision: ReadinessDecision,
        record: VideoRecord,
        trigger: str,
    ) -> None:
        props = {
            "video_id": info.video_id,
            "provider": info.provider.value,
            "trigger": trigger,
        }
        if decision.is_failed:
            emit_event(
                self._telemetry,
                "video_encoding_failed",
                {**props, "error_code": decision.error_code},
            )
            return

        emit_event(self._telemetry, "video_ready", props)
        started_at = await self._upload_started_at(record)
        if started_at is not None:
            record_time_to_ready(info.provider.value, max(0.0, self._clock() - started_at))

    async def _upload_started_at(self, record: VideoRecord) -> int | None:
        if record.uploaded_at:
            return record.uploaded_at
        if self._upload_time_store is None:
            return None
        try:
            return await self._upload_time_store.get_upload_start(record.video_id)
        except InfrastructureError as exc:
            logger.warning(
                "upload_time_lookup_failed",
                extra={"video_id": record.video_id, "error_type": type(exc).__name__},
            )
            return None
