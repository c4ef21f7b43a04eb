"""Orquestrador de upload.

Valida o arquivo, escolhe o provedor ativo, delega o envio ao cliente do
provedor e devolve um UploadResult canônico. O status só é "ready" quando
a regra de prontidão real vale já na resposta do upload.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable, Mapping
from typing import TYPE_CHECKING

from app.domain import VALID_CONTEXTS, UploadRequest, UploadResult
from app.domain.playback import player_url_for, thumbnail_url_for
from app.services.file_validation import validate_upload_file
from app.services.player_html import render_player_html
from app.services.readiness import evaluate_readiness
from app.services.telemetry import emit_event
from fsm import VideoStatus
from utils.errors import (
    InfrastructureError,
    MissingCredentialsError,
    StreamError,
    UploadFailedError,
    UploadValidationError,
)

if TYPE_CHECKING:
    from app.protocols import (
        ConfigProviderProtocol,
        ProviderClientFactory,
        TelemetryProtocol,
        UploadTimeStoreProtocol,
    )

logger = logging.getLogger(__name__)

DEFAULT_UPLOAD_TIME_TTL_SECONDS = 14 * 24 * 3600


class UploadOrchestrator:
    """Fluxo de upload independente do provedor."""

    def __init__(
        self,
        *,
        config_provider: ConfigProviderProtocol,
        client_factory: ProviderClientFactory,
        upload_time_store: UploadTimeStoreProtocol | None = None,
        telemetry: TelemetryProtocol | None = None,
        upload_time_ttl_seconds: int = DEFAULT_UPLOAD_TIME_TTL_SECONDS,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._config_provider = config_provider
        self._client_factory = client_factory
        self._upload_time_store = upload_time_store
        self._telemetry = telemetry
        self._upload_time_ttl_seconds = upload_time_ttl_seconds
        self._clock = clock

    async def upload(
        self,
        file_path: str,
        filename: str,
        metadata: Mapping[str, str] | None = None,
    ) -> UploadResult:
        """Executa o upload completo.

        Args:
            file_path: Caminho do arquivo temporário local
            filename: Nome original (a extensão é validada)
            metadata: "context" (post|comment) e "title" opcionais

        Raises:
            UploadValidationError: Arquivo ou contexto rejeitado
            MissingCredentialsError: Provedor ativo sem credenciais
            ProviderApiError: Erro da API do provedor
            UploadFailedError: Qualquer outra falha inesperada
        """
        metadata = dict(metadata or {})
        limits = self._config_provider.get_upload_limits()

        try:
            size_bytes = validate_upload_file(file_path, filename, limits)
            context = metadata.get("context") or "post"
            self._validate_context(context, limits.comment_video_enabled)
        except UploadValidationError as exc:
            logger.info("video_validation_failed", extra={"code": exc.code})
            emit_event(self._telemetry, "video_validation_failed", {"code": exc.code})
            raise

        request = UploadRequest(
            file_path=file_path,
            filename=filename,
            size_bytes=size_bytes,
            title=metadata.get("title") or "",
            context=context,
        )

        provider = self._config_provider.get_active_provider()
        config = self._config_provider.get_credentials(provider)
        if config is None or not config.has_credentials:
            emit_event(
                self._telemetry,
                "video_upload_failed",
                {"provider": provider.value, "code": "missing_credentials"},
            )
            raise MissingCredentialsError(
                f"Credenciais de {provider.slug} não configuradas"
            )

        started = time.perf_counter()
        try:
            client = self._client_factory(config)
            info = await client.upload_file(
                request.file_path,
                request.filename,
                {"title": request.title or request.filename},
            )
        except StreamError as exc:
            self._upload_failed(provider.value, exc.code)
            raise
        except Exception as exc:
            logger.exception(
                "video_upload_unexpected_error",
                extra={"provider": provider.value, "error_type": type(exc).__name__},
            )
            self._upload_failed(provider.value, "upload_failed")
            raise UploadFailedError("Falha inesperada no upload do vídeo") from exc

        upload_ms = (time.perf_counter() - started) * 1000
        decision = evaluate_readiness(info)
        if decision.is_failed:
            status = VideoStatus.FAILED
        elif decision.is_ready:
            status = VideoStatus.READY
        else:
            status = VideoStatus.PENDING

        uploaded_at = int(self._clock())
        result = UploadResult(
            video_id=info.video_id,
            provider=provider,
            status=status,
            thumbnail_url=info.thumbnail_url or thumbnail_url_for(config, info.video_id),
            player_url=info.player_url or player_url_for(config, info.video_id, info.manifest_url),
            html=(
                render_player_html(config, info.video_id, info.manifest_url)
                if decision.is_ready
                else ""
            ),
            uploaded_at=uploaded_at,
        )

        await self._record_upload_start(info.video_id, uploaded_at)

        logger.info(
            "video_uploaded",
            extra={
                "video_id": info.video_id,
                "provider": provider.value,
                "status": status.value,
                "context": request.context,
                "upload_ms": round(upload_ms, 2),
            },
        )
        emit_event(
            self._telemetry,
            "video_uploaded",
            {
                "provider": provider.value,
                "file_size_mb": request.size_mb,
                "format": request.extension,
                "upload_ms": round(upload_ms, 2),
            },
        )
        return result

    @staticmethod
    def _validate_context(context: str, comment_video_enabled: bool) -> None:
        if context not in VALID_CONTEXTS:
            raise UploadValidationError("Contexto de upload inválido", code="invalid_context")
        if context == "comment" and not comment_video_enabled:
            raise UploadValidationError(
                "Vídeo em comentários está desabilitado",
                code="comment_video_disabled",
                status_code=403,
            )

    def _upload_failed(self, provider: str, code: str) -> None:
        logger.warning("video_upload_failed", extra={"provider": provider, "code": code})
        emit_event(self._telemetry, "video_upload_failed", {"provider": provider, "code": code})

    async def _record_upload_start(self, video_id: str, started_at: int) -> None:
        if self._upload_time_store is None:
            return
        try:
            await self._upload_time_store.record_upload_start(
                video_id, started_at, self._upload_time_ttl_seconds
            )
        except InfrastructureError as exc:
            logger.warning(
                "upload_time_record_failed",
                extra={"video_id": video_id, "error_type": type(exc).__name__},
            )
