"""Cliente da API Bunny Stream.

Autenticação via cabeçalho AccessKey. O upload tem duas etapas: criar o
vídeo (POST, devolve guid) e enviar o binário (PUT).
"""

from __future__ import annotations

import logging
import time
from typing import TYPE_CHECKING, Any

from api.connectors.bunny.normalizer import normalize_bunny_video
from api.connectors.http_base import HttpClient, HttpClientConfig, HttpError
from api.connectors.provider_errors import (
    DELETE_OK_STATUSES,
    error_from_http,
    error_from_response,
    safe_json,
)
from app.domain import Provider, ProviderVideoInfo, WebhookRegistration
from app.observability import record_latency
from app.protocols.provider_client import VideoProviderClientProtocol
from config.settings.bunny import BUNNY_ACCOUNT_BASE_URL, BUNNY_STREAM_BASE_URL
from utils.errors import MissingCredentialsError, ProviderApiError

if TYPE_CHECKING:
    from collections.abc import AsyncIterator, Mapping

    import httpx

    from app.domain import ProviderConfig

logger = logging.getLogger(__name__)

UPLOAD_CHUNK_SIZE = 1024 * 1024

_CONTENT_TYPES = {
    "mp4": "video/mp4",
    "mov": "video/quicktime",
    "webm": "video/webm",
    "avi": "video/x-msvideo",
}


def content_type_for(filename: str) -> str:
    _, _, ext = filename.rpartition(".")
    return _CONTENT_TYPES.get(ext.lower(), "application/octet-stream")


async def iter_file(file_path: str, chunk_size: int = UPLOAD_CHUNK_SIZE) -> AsyncIterator[bytes]:
    """Lê o arquivo em blocos para não carregar o vídeo inteiro em memória."""
    with open(file_path, "rb") as fh:
        while chunk := fh.read(chunk_size):
            yield chunk


class BunnyStreamClient(VideoProviderClientProtocol):
    """Upload, consulta, remoção e webhook no Bunny Stream."""

    provider = Provider.BUNNY_STREAM

    def __init__(
        self,
        config: ProviderConfig,
        *,
        api_base_url: str = BUNNY_STREAM_BASE_URL,
        account_api_base_url: str = BUNNY_ACCOUNT_BASE_URL,
        status_timeout_seconds: float = 15.0,
        upload_timeout_seconds: float = 300.0,
        max_retries: int = 2,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        if not config.has_credentials:
            raise MissingCredentialsError("Credenciais do Bunny Stream ausentes")
        self._config = config
        self._base_url = api_base_url.rstrip("/")
        self._account_base_url = account_api_base_url.rstrip("/")
        self._upload_timeout = upload_timeout_seconds
        self._http = HttpClient(
            HttpClientConfig(
                timeout_seconds=status_timeout_seconds,
                max_retries=max_retries,
                default_headers={
                    "AccessKey": config.api_key,
                    "Accept": "application/json",
                },
                transport=transport,
            )
        )

    @property
    def _videos_url(self) -> str:
        return f"{self._base_url}/library/{self._config.account_id}/videos"

    async def _send(self, operation: str, method: str, url: str, **kwargs: Any) -> httpx.Response:
        start = time.perf_counter()
        try:
            return await self._http.request(method, url, **kwargs)
        except HttpError as exc:
            logger.warning(
                "bunny_request_failed",
                extra={
                    "operation": operation,
                    "status_code": exc.status_code,
                    "error": str(exc),
                },
            )
            raise error_from_http(self.provider, exc) from exc
        finally:
            record_latency("bunny_client", operation, (time.perf_counter() - start) * 1000)

    async def _call(self, operation: str, method: str, url: str, **kwargs: Any) -> dict[str, Any]:
        response = await self._send(operation, method, url, **kwargs)
        if response.is_error:
            raise error_from_response(self.provider, response)
        data = safe_json(response)
        return data if isinstance(data, dict) else {}

    async def validate_credentials(self) -> bool:
        try:
            await self._call(
                "validate_credentials", "GET", f"{self._videos_url}?page=1&itemsPerPage=1"
            )
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
        title = (metadata or {}).get("title") or filename
        created = await self._call("create_video", "POST", self._videos_url, json={"title": title})
        guid = str(created.get("guid") or "")
        if not guid:
            raise ProviderApiError(
                "Criação de vídeo sem guid",
                code=self.provider.error_prefix,
                provider=self.provider.value,
            )

        try:
            await self._call(
                "upload_file",
                "PUT",
                f"{self._videos_url}/{guid}",
                content=iter_file(file_path),
                headers={"Content-Type": content_type_for(filename)},
                timeout=self._upload_timeout,
                retry=False,
            )
        except ProviderApiError:
            await self._discard_created_video(guid)
            raise

        return normalize_bunny_video(created, self._config)

    async def _discard_created_video(self, guid: str) -> None:
        """Remove o vídeo vazio criado quando o envio do binário falha."""
        try:
            await self.delete_video(guid)
        except ProviderApiError as exc:
            logger.warning(
                "bunny_orphan_cleanup_failed",
                extra={"video_id": guid, "http_status": exc.http_status},
            )

    async def get_video_info(self, video_id: str) -> ProviderVideoInfo:
        data = await self._call("get_video_info", "GET", f"{self._videos_url}/{video_id}")
        return normalize_bunny_video(data, self._config)

    async def delete_video(self, video_id: str) -> bool:
        response = await self._send("delete_video", "DELETE", f"{self._videos_url}/{video_id}")
        if response.status_code in DELETE_OK_STATUSES:
            logger.info(
                "bunny_video_deleted",
                extra={"video_id": video_id, "status_code": response.status_code},
            )
            return True
        raise error_from_response(self.provider, response)

    async def create_webhook(self, notification_url: str) -> WebhookRegistration:
        if not notification_url.startswith("https://"):
            raise ValueError("notification_url deve usar https")
        await self._call(
            "create_webhook",
            "POST",
            f"{self._account_base_url}/videolibrary/{self._config.account_id}",
            json={"WebhookUrl": notification_url},
        )
        # Bunny não assina webhooks: não há secret a guardar
        return WebhookRegistration(provider=self.provider, notification_url=notification_url)
