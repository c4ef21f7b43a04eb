"""Consulta de status: banco primeiro, API do provedor como fallback.

Um registro já "ready" é servido sem nenhuma chamada remota. Caso
contrário o provedor é consultado e a leitura passa pelo reconciliador
(write-through). Registros "failed" não são sobrescritos (a FSM nega a
transição), mas a resposta reflete a leitura atual do provedor. Falhas
transitórias do provedor (404, 5xx, timeout) viram "pending", ou o
"failed" gravado quando houver; uploads pendentes há tempo demais sem
vídeo no provedor são marcados como failed (upload_stale).
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from typing import TYPE_CHECKING

from app.domain import Provider, VideoRecord, VideoStatusView
from app.domain.playback import thumbnail_url_for
from app.services.player_html import render_pending_html, render_player_html
from app.services.readiness import mark_failed, mark_ready
from app.services.telemetry import emit_event
from config.logging import log_fallback
from fsm import VideoStatus
from utils.errors import (
    InfrastructureError,
    InvalidStatusError,
    MissingCredentialsError,
    ProviderApiError,
    UnsupportedProviderError,
)

if TYPE_CHECKING:
    from app.domain import ProviderConfig
    from app.protocols import (
        ConfigProviderProtocol,
        ProviderClientFactory,
        TelemetryProtocol,
        UploadTimeStoreProtocol,
    )
    from app.services.content_record_locator import (
        ContentRecordHandle,
        ContentRecordLocator,
    )
    from app.services.readiness_reconciler import ReadinessReconciler

logger = logging.getLogger(__name__)

STALE_ERROR_CODE = "upload_stale"


def view_from_record(record: VideoRecord) -> VideoStatusView:
    return VideoStatusView(
        video_id=record.video_id,
        provider=record.provider,
        status=record.status,
        html=record.html,
        thumbnail_url=record.thumbnail_url,
        error_code=record.error_code,
        error_text=record.error_text,
    )


class VideoStatusService:
    """Serve o status de um vídeo e a confirmação explícita de prontidão."""

    def __init__(
        self,
        *,
        locator: ContentRecordLocator,
        reconciler: ReadinessReconciler,
        config_provider: ConfigProviderProtocol,
        client_factory: ProviderClientFactory,
        upload_time_store: UploadTimeStoreProtocol | None = None,
        telemetry: TelemetryProtocol | None = None,
        stale_after_seconds: int = 86400,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._locator = locator
        self._reconciler = reconciler
        self._config_provider = config_provider
        self._client_factory = client_factory
        self._upload_time_store = upload_time_store
        self._telemetry = telemetry
        self._stale_after_seconds = stale_after_seconds
        self._clock = clock

    async def get_status(
        self,
        video_id: str,
        provider: Provider | str | None = None,
    ) -> VideoStatusView:
        """Status atual do vídeo.

        Raises:
            UnsupportedProviderError: Provedor informado é desconhecido
            MissingCredentialsError: Provedor sem credenciais
            ProviderApiError: Erro não transitório do provedor (401/403)
        """
        handles = await self._locator.find_by_video_id(video_id)

        for handle in handles:
            if handle.record.status is VideoStatus.READY:
                return view_from_record(handle.record)

        resolved = self._resolve_provider(provider, handles)
        config = self._config_provider.get_credentials(resolved)
        if config is None or not config.has_credentials:
            raise MissingCredentialsError(f"Credenciais de {resolved.slug} não configuradas")

        client = self._client_factory(config)
        try:
            info = await client.get_video_info(video_id)
        except ProviderApiError as exc:
            if not exc.is_transient:
                raise
            log_fallback(
                logger,
                "status_query",
                "provider_not_found" if exc.is_not_found else "provider_unavailable",
                video_id=video_id,
                provider=resolved.value,
            )
            for handle in handles:
                if handle.record.status is VideoStatus.FAILED:
                    return view_from_record(handle.record)
            stale = await self._expire_if_stale(handles)
            if stale is not None:
                return view_from_record(stale)
            return self._pending_view(config, video_id, handles)

        outcome = await self._reconciler.reconcile(info, trigger="status_poll")
        thumbnail = info.thumbnail_url or thumbnail_url_for(config, video_id, info.manifest_url)

        if outcome.decision.is_ready:
            return VideoStatusView(
                video_id=video_id,
                provider=resolved,
                status=VideoStatus.READY,
                html=render_player_html(config, video_id, info.manifest_url),
                thumbnail_url=thumbnail,
            )
        if outcome.decision.is_failed:
            return VideoStatusView(
                video_id=video_id,
                provider=resolved,
                status=VideoStatus.FAILED,
                thumbnail_url=thumbnail,
                error_code=outcome.decision.error_code or "encoding_failed",
                error_text=outcome.decision.error_text,
            )
        return VideoStatusView(
            video_id=video_id,
            provider=resolved,
            status=VideoStatus.PENDING,
            html=render_pending_html(config, video_id, thumbnail),
            thumbnail_url=thumbnail,
        )

    async def confirm_ready(self, video_id: str, status: str) -> int:
        """Marca como ready todos os registros do vídeo, sem chamar o provedor.

        Returns:
            Número de registros atualizados.

        Raises:
            InvalidStatusError: status diferente de "ready".
        """
        if status != VideoStatus.READY.value:
            raise InvalidStatusError("Apenas o status 'ready' pode ser confirmado")

        updated = 0
        for handle in await self._locator.find_by_video_id(video_id):
            config = self._config_provider.get_provider_config(handle.record.provider)
            mutation = mark_ready(
                html=render_player_html(config, video_id, handle.record.manifest_url),
                trigger="client_confirm",
            )
            if await self._locator.patch(handle, mutation) is not None:
                updated += 1

        logger.info(
            "video_ready_confirmed",
            extra={"video_id": video_id, "updated": updated},
        )
        return updated

    def _resolve_provider(
        self,
        provider: Provider | str | None,
        handles: list[ContentRecordHandle],
    ) -> Provider:
        if provider:
            try:
                return Provider.parse(provider)
            except ValueError as exc:
                raise UnsupportedProviderError(f"Provedor desconhecido: {provider}") from exc
        if handles:
            return handles[0].record.provider
        return self._config_provider.get_active_provider()

    def _pending_view(
        self,
        config: ProviderConfig,
        video_id: str,
        handles: list[ContentRecordHandle],
    ) -> VideoStatusView:
        thumbnail = handles[0].record.thumbnail_url if handles else ""
        thumbnail = thumbnail or thumbnail_url_for(config, video_id)
        return VideoStatusView(
            video_id=video_id,
            provider=config.provider,
            status=VideoStatus.PENDING,
            html=render_pending_html(config, video_id, thumbnail),
            thumbnail_url=thumbnail,
        )

    async def _expire_if_stale(self, handles: list[ContentRecordHandle]) -> VideoRecord | None:
        """Marca failed o primeiro registro pendente mais velho que o limite."""
        if self._stale_after_seconds <= 0 or not handles:
            return None

        record = handles[0].record
        started_at = record.uploaded_at or await self._lookup_upload_start(record.video_id)
        if not started_at:
            return None

        age = self._clock() - started_at
        if age <= self._stale_after_seconds:
            return None

        mutation = mark_failed(
            error_code=STALE_ERROR_CODE,
            error_text="Vídeo não encontrado no provedor após o prazo de processamento",
            trigger="status_poll",
        )
        failed: VideoRecord | None = None
        for handle in handles:
            result = await self._locator.patch(handle, mutation)
            failed = failed or result

        if failed is not None:
            logger.warning(
                "video_marked_stale",
                extra={
                    "video_id": record.video_id,
                    "provider": record.provider.value,
                    "age_seconds": int(age),
                },
            )
            emit_event(
                self._telemetry,
                "video_encoding_failed",
                {
                    "video_id": record.video_id,
                    "provider": record.provider.value,
                    "error_code": STALE_ERROR_CODE,
                },
            )
        return failed

    async def _lookup_upload_start(self, video_id: str) -> int | None:
        if self._upload_time_store is None:
            return None
        try:
            return await self._upload_time_store.get_upload_start(video_id)
        except InfrastructureError as exc:
            logger.warning(
                "upload_time_lookup_failed",
                extra={"video_id": video_id, "error_type": type(exc).__name__},
            )
            return None
