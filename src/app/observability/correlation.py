"""Correlation id por requisição/webhook.

ContextVar é async-safe: cada task do event loop enxerga o próprio valor.

Uso:
    token = set_correlation_id(request.headers.get(CORRELATION_HEADER))
    try:
        ...
    finally:
        reset_correlation_id(token)
"""

from __future__ import annotations

import uuid
from contextvars import ContextVar, Token

CORRELATION_HEADER = "x-correlation-id"

# Limite para ids vindos de cabeçalho externo
_MAX_EXTERNAL_ID_LENGTH = 128

_correlation_id: ContextVar[str] = ContextVar("correlation_id", default="")


def get_correlation_id() -> str:
    """Retorna o correlation_id do contexto atual ("" se não definido)."""
    return _correlation_id.get()


def set_correlation_id(correlation_id: str | None = None) -> Token[str]:
    """Define o correlation_id no contexto atual.

    Valores externos longos demais ou vazios são substituídos por um UUID novo.

    Returns:
        Token para reset posterior via reset_correlation_id().
    """
    value = (correlation_id or "").strip()
    if not value or len(value) > _MAX_EXTERNAL_ID_LENGTH:
        value = generate_correlation_id()
    return _correlation_id.set(value)


def reset_correlation_id(token: Token[str]) -> None:
    """Restaura o correlation_id ao valor anterior."""
    _correlation_id.reset(token)


def generate_correlation_id() -> str:
    """Gera um novo correlation_id (UUID v4)."""
    return str(uuid.uuid4())
