"""Cliente da API Cloudflare Stream.

Autenticação Bearer; respostas no envelope {success, result, errors}.
"""

from __future__ import annotations

import logging
import time
from typing import TYPE_CHECKING, Any

from api.connectors.cloudflare.normalizer import normalize_cloudflare_video
from api.connectors.http_base import HttpClient, HttpClientConfig, HttpError
from api.connectors.provider_errors import (
    DELETE_OK_STATUSES,
    error_from_http,
    error_from_response,
    extract_error_message,
    safe_json,
)
from app.domain import Provider, ProviderVideoInfo, WebhookRegistration
from app.observability import record_latency
from app.protocols.provider_client import VideoProviderClientProtocol
from config.settings.cloudflare import CLOUDFLARE_API_BASE_URL
from utils.errors import MissingCredentialsError, ProviderApiError

if TYPE_CHECKING:
    from collections.abc import Mapping

    import httpx

    from app.domain import ProviderConfig

logger = logging.getLogger(__name__)


class CloudflareStreamClient(VideoProviderClientProtocol):
    """Upload, consulta, remoção e webhook no Cloudflare Stream."""

    provider = Provider.CLOUDFLARE_STREAM

    def __init__(
        self,
        config: ProviderConfig,
        *,
        api_base_url: str = CLOUDFLARE_API_BASE_URL,
        status_timeout_seconds: float = 15.0,
        upload_timeout_seconds: float = 300.0,
        max_retries: int = 2,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        if not config.has_credentials:
            raise MissingCredentialsError("Credenciais do Cloudflare Stream ausentes")
        self._config = config
        self._base_url = api_base_url.rstrip("/")
        self._upload_timeout = upload_timeout_seconds
        self._http = HttpClient(
            HttpClientConfig(
                timeout_seconds=status_timeout_seconds,
                max_retries=max_retries,
                default_headers={
                    "Authorization": f"Bearer {config.api_key}",
                    "Accept": "application/json",
                },
                transport=transport,
            )
        )

    @property
    def _stream_url(self) -> str:
        return f"{self._base_url}/accounts/{self._config.account_id}/stream"

    async def _send(self, operation: str, method: str, url: str, **kwargs: Any) -> httpx.Response:
        start = time.perf_counter()
        try:
            return await self._http.request(method, url, **kwargs)
        except HttpError as exc:
            logger.warning(
                "cloudflare_request_failed",
                extra={
                    "operation": operation,
                    "status_code": exc.status_code,
                    "error": str(exc),
                },
            )
            raise error_from_http(self.provider, exc) from exc
        finally:
            record_latency("cloudflare_client", operation, (time.perf_counter() - start) * 1000)

    async def _call(self, operation: str, method: str, url: str, **kwargs: Any) -> Any:
        """Executa e devolve `result`; erros viram ProviderApiError."""
        response = await self._send(operation, method, url, **kwargs)
        if response.is_error:
            raise error_from_response(self.provider, response)
        data = safe_json(response)
        if not isinstance(data, dict) or not data.get("success"):
            raise ProviderApiError(
                extract_error_message(data, response.status_code),
                code=self.provider.error_prefix,
                provider=self.provider.value,
                http_status=response.status_code,
            )
        return data.get("result")

    async def validate_credentials(self) -> bool:
        try:
            await self._call("validate_credentials", "GET", self._stream_url)
        except ProviderApiError as exc:
            if exc.http_status in (401, 403):
                return False
            raise
        return True

    async def upload_file(
        self,
        file_path: str,
        filename: str,
        metadata: Mapping[str, str] | None = None,
    ) -> ProviderVideoInfo:
        with open(file_path, "rb") as fh:
            result = await self._call(
                "upload_file",
                "POST",
                self._stream_url,
                files={"file": (filename, fh, "application/octet-stream")},
                timeout=self._upload_timeout,
                retry=False,
            )
        if not isinstance(result, dict):
            raise ProviderApiError(
                "Resposta de upload sem resultado",
                code=self.provider.error_prefix,
                provider=self.provider.value,
            )

        info = normalize_cloudflare_video(result, self._config)
        await self._apply_video_settings(info.video_id, metadata or {})
        return info

    async def _apply_video_settings(self, video_id: str, metadata: Mapping[str, str]) -> None:
        """Define nome e allowedOrigins após o upload (falha apenas logada)."""
        body: dict[str, Any] = {}
        if self._config.allowed_origins:
            body["allowedOrigins"] = list(self._config.allowed_origins)
        if metadata.get("title"):
            body["meta"] = {"name": metadata["title"]}
        if not body:
            return
        try:
            await self._call("update_video", "POST", f"{self._stream_url}/{video_id}", json=body)
        except ProviderApiError as exc:
            logger.warning(
                "cloudflare_video_settings_failed",
                extra={"video_id": video_id, "error_code": exc.code, "http_status": exc.http_status},
            )

    async def get_video_info(self, video_id: str) -> ProviderVideoInfo:
        result = await self._call("get_video_info", "GET", f"{self._stream_url}/{video_id}")
        if not isinstance(result, dict):
            raise ProviderApiError(
                "Resposta de vídeo sem resultado",
                code=self.provider.error_prefix,
                provider=self.provider.value,
            )
        return normalize_cloudflare_video(result, self._config)

    async def delete_video(self, video_id: str) -> bool:
        response = await self._send("delete_video", "DELETE", f"{self._stream_url}/{video_id}")
        if response.status_code in DELETE_OK_STATUSES:
            logger.info(
                "cloudflare_video_deleted",
                extra={"video_id": video_id, "status_code": response.status_code},
            )
            return True
        raise error_from_response(self.provider, response)

    async def create_webhook(self, notification_url: str) -> WebhookRegistration:
        if not notification_url.startswith("https://"):
            raise ValueError("notification_url deve usar https")
        result = await self._call(
            "create_webhook",
            "PUT",
            f"{self._stream_url}/webhook",
            json={"notificationUrl": notification_url},
        )
        result = result if isinstance(result, dict) else {}
        return WebhookRegistration(
            provider=self.provider,
            notification_url=str(result.get("notificationUrl") or notification_url),
            secret=str(result.get("secret") or ""),
        )
