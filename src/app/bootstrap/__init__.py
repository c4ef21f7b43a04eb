"""Bootstrap da aplicação: inicialização e wiring.

Composition root: configura logging e monta o contexto VideoServices
conectando implementações concretas aos protocolos. O contexto é criado
no lifespan do FastAPI e guardado em app.state; não há estado global de
inicialização.

Uso:
    from app.bootstrap import create_video_services, initialize_logging

    initialize_logging()
    services = create_video_services()
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from app.infra.config import EnvConfigProvider
from app.infra.telemetry import LogTelemetry
from app.observability import get_correlation_id
from app.services import (
    ContentRecordLocator,
    ReadinessReconciler,
    UploadOrchestrator,
    VideoDeletionHandler,
    VideoStatusService,
)
from config.logging import configure_logging
from config.settings import get_base_settings, get_stream_settings, validate_all_settings

if TYPE_CHECKING:
    from app.protocols import (
        ConfigProviderProtocol,
        ContentRecordStoreProtocol,
        ProviderClientFactory,
        TelemetryProtocol,
        UploadTimeStoreProtocol,
    )

DEFAULT_LOG_LEVEL = "INFO"

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class VideoServices:
    """Contexto explícito com todos os colaboradores do serviço."""

    config_provider: ConfigProviderProtocol
    content_store: ContentRecordStoreProtocol
    upload_time_store: UploadTimeStoreProtocol
    telemetry: TelemetryProtocol
    client_factory: ProviderClientFactory
    locator: ContentRecordLocator
    reconciler: ReadinessReconciler
    orchestrator: UploadOrchestrator
    status_service: VideoStatusService
    deletion_handler: VideoDeletionHandler
    redis_client: Any | None = None


def initialize_logging() -> None:
    """Configura logging estruturado a partir do ambiente.

    LOG_LEVEL (default INFO) e LOG_FORMAT (json|text).
    """
    base = get_base_settings()
    configure_logging(
        level=os.getenv("LOG_LEVEL", DEFAULT_LOG_LEVEL).upper(),
        service_name=base.service_name,
        correlation_id_getter=get_correlation_id,
        environment=base.environment,
        log_format="text" if os.getenv("LOG_FORMAT", "json").lower() == "text" else "json",
    )


def validate_runtime_settings() -> list[str]:
    """Valida as settings no startup; erros são logados, nunca abortam."""
    errors = validate_all_settings()
    if not errors:
        logger.info("settings_validated", extra={"component": "bootstrap", "result": "ok"})
        return errors

    logger.warning(
        "settings_validation_failed",
        extra={
            "component": "bootstrap",
            "result": "failed",
            "error_count": len(errors),
            "errors": errors,
        },
    )
    return errors


def build_video_services(
    *,
    config_provider: ConfigProviderProtocol,
    content_store: ContentRecordStoreProtocol,
    upload_time_store: UploadTimeStoreProtocol,
    client_factory: ProviderClientFactory,
    telemetry: TelemetryProtocol | None = None,
    upload_time_ttl_seconds: int | None = None,
    stale_after_seconds: int | None = None,
    redis_client: Any | None = None,
) -> VideoServices:
    """Conecta os serviços sobre colaboradores já construídos."""
    stream = get_stream_settings()
    telemetry = telemetry or LogTelemetry()
    locator = ContentRecordLocator(store=content_store)
    reconciler = ReadinessReconciler(
        locator=locator,
        config_provider=config_provider,
        telemetry=telemetry,
        upload_time_store=upload_time_store,
    )
    return VideoServices(
        config_provider=config_provider,
        content_store=content_store,
        upload_time_store=upload_time_store,
        telemetry=telemetry,
        client_factory=client_factory,
        locator=locator,
        reconciler=reconciler,
        orchestrator=UploadOrchestrator(
            config_provider=config_provider,
            client_factory=client_factory,
            upload_time_store=upload_time_store,
            telemetry=telemetry,
            upload_time_ttl_seconds=(
                upload_time_ttl_seconds
                if upload_time_ttl_seconds is not None
                else stream.upload_time_ttl_seconds
            ),
        ),
        status_service=VideoStatusService(
            locator=locator,
            reconciler=reconciler,
            config_provider=config_provider,
            client_factory=client_factory,
            upload_time_store=upload_time_store,
            telemetry=telemetry,
            stale_after_seconds=(
                stale_after_seconds
                if stale_after_seconds is not None
                else stream.stale_pending_seconds
            ),
        ),
        deletion_handler=VideoDeletionHandler(
            config_provider=config_provider,
            client_factory=client_factory,
        ),
        redis_client=redis_client,
    )


def create_video_services() -> VideoServices:
    """Monta o contexto a partir das settings de ambiente."""
    from api.connectors import create_provider_client
    from app.bootstrap.dependencies import create_content_store, create_upload_time_store
    from app.infra.stores import RedisUploadTimeStore

    upload_time_store = create_upload_time_store()
    redis_client = (
        upload_time_store.client if isinstance(upload_time_store, RedisUploadTimeStore) else None
    )
    return build_video_services(
        config_provider=EnvConfigProvider(),
        content_store=create_content_store(),
        upload_time_store=upload_time_store,
        client_factory=create_provider_client,
        redis_client=redis_client,
    )


__all__ = [
    "VideoServices",
    "build_video_services",
    "create_video_services",
    "initialize_logging",
    "validate_runtime_settings",
]
