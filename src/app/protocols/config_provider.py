"""Protocolo do provedor de configuração (read-only para o core)."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from app.domain import Provider, ProviderConfig, UploadLimits


class ConfigProviderProtocol(ABC):
    """Fornece provedor ativo, credenciais e limites de upload."""

    @abstractmethod
    def get_active_provider(self) -> Provider:
        """Provedor usado em novos uploads."""

    @abstractmethod
    def get_credentials(self, provider: Provider) -> ProviderConfig | None:
        """Snapshot do provedor, ou None se as credenciais estiverem incompletas."""

    @abstractmethod
    def get_provider_config(self, provider: Provider) -> ProviderConfig:
        """Snapshot do provedor mesmo sem credenciais (has_credentials=False)."""

    @abstractmethod
    def get_upload_limits(self) -> UploadLimits:
        """Limites de tamanho/formato vigentes."""
