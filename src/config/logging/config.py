"""Configuração centralizada de logging.

Logging JSON estruturado (python-json-logger) com contexto injetado por
filter. Em desenvolvimento local é possível trocar para texto simples com
LOG_FORMAT=text.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Literal

from config.logging.filters import CorrelationIdFilter
from config.logging.formatters import create_json_formatter, create_text_formatter

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable

LogFormat = Literal["json", "text"]

VALID_LOG_LEVELS = frozenset({"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"})

DEFAULT_SERVICE_NAME = "stream-bridge"

# Bibliotecas que logam cada requisição HTTP em INFO
NOISY_LOGGERS: tuple[str, ...] = ("httpx", "httpcore", "multipart")


def configure_logging(
    level: str = "INFO",
    service_name: str = DEFAULT_SERVICE_NAME,
    correlation_id_getter: Callable[[], str] | None = None,
    *,
    environment: str = "development",
    log_format: LogFormat = "json",
    quiet_loggers: Iterable[str] = NOISY_LOGGERS,
) -> None:
    """Configura logging estruturado para o serviço.

    Deve ser chamada uma vez na inicialização (create_app).

    Args:
        level: Nível de log (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        service_name: Nome do serviço para identificação nos logs.
        correlation_id_getter: Função que retorna o correlation_id do
            contexto atual (ex: ContextVar de app/observability).
        environment: Ambiente injetado em cada record.
        log_format: "json" (padrão) ou "text".
        quiet_loggers: Loggers elevados para WARNING.

    Raises:
        ValueError: Se o nível ou formato forem inválidos.
    """
    level_upper = level.upper()
    if level_upper not in VALID_LOG_LEVELS:
        raise ValueError(
            f"Nível de log inválido: {level}. "
            f"Válidos: {', '.join(sorted(VALID_LOG_LEVELS))}"
        )
    if log_format not in ("json", "text"):
        raise ValueError(f"Formato de log inválido: {log_format}")

    formatter = create_json_formatter() if log_format == "json" else create_text_formatter()

    handler = logging.StreamHandler()
    handler.setLevel(level_upper)
    handler.setFormatter(formatter)
    handler.addFilter(
        CorrelationIdFilter(
            service_name,
            correlation_id_getter,
            environment=environment,
        )
    )

    root = logging.getLogger()
    root.setLevel(level_upper)
    # Substituir handlers existentes para evitar duplicação
    root.handlers = [handler]

    for name in quiet_loggers:
        logging.getLogger(name).setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    """Retorna logger para o módulo especificado."""
    return logging.getLogger(name)


def log_fallback(
    logger: logging.Logger,
    component: str,
    reason: str | None = None,
    *,
    video_id: str | None = None,
    provider: str | None = None,
) -> None:
    """Registra que um caminho degradado foi usado (sem PII).

    Usado quando uma falha transitória do provedor é convertida em
    resposta "pending" em vez de erro.

    Args:
        logger: Logger instance.
        component: Nome do componente (ex: "status_query").
        reason: Razão curta (ex: "provider_not_found").
        video_id: ID do vídeo no provedor.
        provider: Provedor consultado.
    """
    extra: dict[str, object] = {
        "fallback_used": True,
        "component": component,
    }
    if reason:
        extra["reason"] = reason
    if video_id:
        extra["video_id"] = video_id
    if provider:
        extra["provider"] = provider

    logger.info("fallback_applied", extra=extra)
