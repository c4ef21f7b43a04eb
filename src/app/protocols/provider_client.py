"""Protocolo dos clientes HTTP de provedores de streaming.

Duas implementações com o mesmo contrato (Cloudflare Stream, Bunny Stream).
Erros da API sobem como utils.errors.ProviderApiError com o prefixo do
provedor no código.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable, Mapping
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from app.domain import Provider, ProviderConfig, ProviderVideoInfo, WebhookRegistration


class VideoProviderClientProtocol(ABC):
    """Contrato mínimo de um cliente de provedor."""

    provider: Provider

    @abstractmethod
    async def validate_credentials(self) -> bool:
        """Verifica se as credenciais são aceitas pelo provedor."""

    @abstractmethod
    async def upload_file(
        self,
        file_path: str,
        filename: str,
        metadata: Mapping[str, str] | None = None,
    ) -> ProviderVideoInfo:
        """Envia o arquivo e retorna a leitura normalizada da resposta."""

    @abstractmethod
    async def get_video_info(self, video_id: str) -> ProviderVideoInfo:
        """Consulta o estado atual do vídeo."""

    @abstractmethod
    async def delete_video(self, video_id: str) -> bool:
        """Remove o vídeo (404 conta como sucesso)."""

    @abstractmethod
    async def create_webhook(self, notification_url: str) -> WebhookRegistration:
        """Registra a URL de notificação no provedor."""


ProviderClientFactory = Callable[["ProviderConfig"], VideoProviderClientProtocol]
