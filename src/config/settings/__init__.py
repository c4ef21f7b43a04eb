"""Agregador de settings do stream-bridge.

Re-exporta todas as settings e funções de cada módulo.
Organização por domínio para isolamento de mudanças.
"""

from __future__ import annotations

# Auth settings
from config.settings.auth import ApiAuthSettings, get_api_auth_settings

# Base settings
from config.settings.base import (
    BaseSettings,
    ContentStoreBackend,
    Environment,
    StoreSettings,
    UploadTimeStoreBackend,
    get_base_settings,
    get_store_settings,
)

# Provider settings
from config.settings.bunny import BunnySettings, get_bunny_settings
from config.settings.cloudflare import CloudflareSettings, get_cloudflare_settings

# Infrastructure settings
from config.settings.infra import DatabaseSettings, get_database_settings
from config.settings.stream import StreamSettings, get_stream_settings
from config.settings.upload import UploadSettings, get_upload_settings


def validate_all_settings() -> list[str]:
    """Agrega erros de validação de todas as settings.

    Returns:
        Lista de erros (vazia = configuração consistente).
    """
    base = get_base_settings()
    errors: list[str] = []
    errors.extend(base.validate())
    errors.extend(get_store_settings().validate(base))
    errors.extend(get_stream_settings().validate())
    errors.extend(get_cloudflare_settings().validate())
    errors.extend(get_bunny_settings().validate())
    errors.extend(get_upload_settings().validate())
    errors.extend(get_api_auth_settings().validate())
    if get_store_settings().content_backend == "sql":
        errors.extend(get_database_settings().validate())
    return errors


__all__ = [
    # Auth
    "ApiAuthSettings",
    # Base
    "BaseSettings",
    # Providers
    "BunnySettings",
    "CloudflareSettings",
    "ContentStoreBackend",
    # Infrastructure
    "DatabaseSettings",
    "Environment",
    "StoreSettings",
    "StreamSettings",
    "UploadSettings",
    "UploadTimeStoreBackend",
    "get_api_auth_settings",
    "get_base_settings",
    "get_bunny_settings",
    "get_cloudflare_settings",
    "get_database_settings",
    "get_store_settings",
    "get_stream_settings",
    "get_upload_settings",
    "validate_all_settings",
]
