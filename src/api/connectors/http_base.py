"""Cliente HTTP base para conectores de provedores de streaming."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Any

import httpx

logger = logging.getLogger(__name__)


@dataclass
class HttpClientConfig:
    """Configuração do cliente HTTP.

    `transport` permite injetar httpx.MockTransport em testes.
    """

    timeout_seconds: float = 30.0
    max_retries: int = 2
    backoff_base_seconds: float = 1.0
    backoff_max_seconds: float = 10.0
    default_headers: dict[str, str] = field(default_factory=dict)
    verify_ssl: bool = True
    transport: httpx.AsyncBaseTransport | None = None


class HttpError(Exception):
    """Erro de requisição HTTP sem dados sensíveis."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        is_retryable: bool = False,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.is_retryable = is_retryable


class HttpClient:
    """Cliente HTTP com retry/backoff para chamadas idempotentes.

    Respostas 4xx (exceto 429) são devolvidas ao chamador; 429/5xx e falhas
    de transporte viram HttpError retentável após esgotar as tentativas.
    """

    def __init__(self, config: HttpClientConfig | None = None) -> None:
        self._config = config or HttpClientConfig()

    async def request(
        self,
        method: str,
        url: str,
        *,
        json: Any = None,
        content: Any = None,
        files: Any = None,
        data: dict[str, str] | None = None,
        headers: dict[str, str] | None = None,
        timeout: float | None = None,
        retry: bool = True,
    ) -> httpx.Response:
        """Executa a requisição.

        Args:
            retry: False para corpos não reenviáveis (upload de arquivo).
        """
        merged_headers = {**self._config.default_headers, **(headers or {})}
        max_retries = self._config.max_retries if retry else 0
        effective_timeout = timeout or self._config.timeout_seconds

        for attempt in range(max_retries + 1):
            try:
                async with httpx.AsyncClient(
                    verify=self._config.verify_ssl,
                    transport=self._config.transport,
                ) as client:
                    response = await client.request(
                        method,
                        url,
                        json=json,
                        content=content,
                        files=files,
                        data=data,
                        headers=merged_headers,
                        timeout=effective_timeout,
                    )
                if response.status_code == 429 or response.status_code >= 500:
                    raise HttpError(
                        "http_retryable_status",
                        status_code=response.status_code,
                        is_retryable=True,
                    )
                return response
            except HttpError as exc:
                if not exc.is_retryable or attempt >= max_retries:
                    raise
                await _backoff_sleep(
                    attempt,
                    self._config.backoff_base_seconds,
                    self._config.backoff_max_seconds,
                )
            except httpx.TimeoutException as exc:
                if attempt >= max_retries:
                    raise HttpError("http_timeout", is_retryable=True) from exc
                await _backoff_sleep(
                    attempt,
                    self._config.backoff_base_seconds,
                    self._config.backoff_max_seconds,
                )
            except httpx.TransportError as exc:
                if attempt >= max_retries:
                    raise HttpError("http_connection_error", is_retryable=True) from exc
                await _backoff_sleep(
                    attempt,
                    self._config.backoff_base_seconds,
                    self._config.backoff_max_seconds,
                )
        raise HttpError("http_retry_exhausted", is_retryable=True)


async def _backoff_sleep(attempt: int, base: float, max_seconds: float) -> None:
    backoff = min((2**attempt) * base, max_seconds)
    logger.info("http_backoff", extra={"backoff_seconds": backoff})
    await asyncio.sleep(backoff)
