"""Formatters de logging.

JSON (produção) e texto simples (desenvolvimento local).
"""

from __future__ import annotations

import logging

from pythonjsonlogger.json import JsonFormatter

# Campos obrigatórios em todo log estruturado (ordem estável)
REQUIRED_LOG_FIELDS: tuple[str, ...] = (
    "asctime",
    "levelname",
    "name",
    "message",
    "correlation_id",
    "service",
    "environment",
)

FIELD_RENAME_MAP = {
    "levelname": "level",
    "name": "logger",
}

TEXT_FORMAT = "%(asctime)s %(levelname)s [%(correlation_id)s] %(name)s: %(message)s"


def create_json_formatter() -> JsonFormatter:
    """Cria formatter JSON com campos padronizados.

    Exemplo de output:
        {"asctime": "...", "level": "INFO", "logger": "app.services.status_query",
         "message": "video_status_served", "correlation_id": "abc-123",
         "service": "stream-bridge", "environment": "production", "video_id": "..."}
    """
    format_string = " ".join(f"%({field})s" for field in REQUIRED_LOG_FIELDS)

    return JsonFormatter(
        format_string,
        rename_fields=FIELD_RENAME_MAP,
    )


def create_text_formatter() -> logging.Formatter:
    """Cria formatter de texto para execução local."""
    return logging.Formatter(TEXT_FORMAT)
