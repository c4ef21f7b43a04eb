"""Parsing de erros das APIs de provedores.

Converte respostas de erro e falhas de transporte em ProviderApiError com
o prefixo do provedor, sem carregar o payload bruto.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from utils.errors import ProviderApiError

if TYPE_CHECKING:
    import httpx

    from api.connectors.http_base import HttpError
    from app.domain import Provider

# Sucesso em DELETE: remoção idempotente
DELETE_OK_STATUSES: frozenset[int] = frozenset({200, 204, 404})


def extract_error_message(data: Any, status_code: int | None = None) -> str:
    """Extrai a mensagem de erro de um corpo de resposta.

    Ordem: errors[0].message (Cloudflare), Message, ErrorKey (Bunny), message.
    """
    if isinstance(data, dict):
        errors = data.get("errors")
        if isinstance(errors, list) and errors:
            first = errors[0]
            if isinstance(first, dict) and first.get("message"):
                return str(first["message"])
        for key in ("Message", "ErrorKey", "message"):
            value = data.get(key)
            if value:
                return str(value)
    return f"HTTP {status_code}" if status_code else "Erro desconhecido"


def safe_json(response: httpx.Response) -> Any:
    """JSON do corpo, ou None se não for JSON."""
    try:
        return response.json()
    except ValueError:
        return None


def error_from_response(provider: Provider, response: httpx.Response) -> ProviderApiError:
    """Converte resposta não-2xx em ProviderApiError."""
    message = extract_error_message(safe_json(response), response.status_code)
    return ProviderApiError(
        message,
        code=provider.error_prefix,
        provider=provider.value,
        http_status=response.status_code,
        retryable=response.status_code == 429 or response.status_code >= 500,
    )


def error_from_http(provider: Provider, exc: HttpError) -> ProviderApiError:
    """Converte HttpError (5xx/timeout/conexão após retries) em ProviderApiError."""
    return ProviderApiError(
        str(exc),
        code=provider.error_prefix,
        provider=provider.value,
        http_status=exc.status_code,
        retryable=exc.is_retryable,
    )


class InvalidProviderPayloadError(ValueError):
    """Payload do provedor sem os campos mínimos (ex: id do vídeo)."""
