"""Configuração de logging estruturado.

Uso:
    from config.logging import configure_logging, get_logger

    # Na inicialização (app/app.py)
    configure_logging(level="INFO", service_name="stream-bridge")

    # Em qualquer módulo
    logger = get_logger(__name__)
    logger.info("video_uploaded", extra={"provider": "cloudflare_stream"})

Campos presentes em todo log: correlation_id, service, environment,
level, logger, message, asctime. Nunca logar payloads brutos de provedor
nem tokens.
"""

from config.logging.config import configure_logging, get_logger, log_fallback
from config.logging.filters import CorrelationIdFilter
from config.logging.formatters import (
    FIELD_RENAME_MAP,
    REQUIRED_LOG_FIELDS,
    create_json_formatter,
    create_text_formatter,
)

__all__ = [
    "FIELD_RENAME_MAP",
    "REQUIRED_LOG_FIELDS",
    "CorrelationIdFilter",
    "configure_logging",
    "create_json_formatter",
    "create_text_formatter",
    "get_logger",
    "log_fallback",
]
