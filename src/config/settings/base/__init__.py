"""Agregador de settings base.

Re-exporta todas as settings base para uso externo.
"""

from __future__ import annotations

from config.settings.base.core import (
    BaseSettings,
    Environment,
    get_base_settings,
)
from config.settings.base.stores import (
    ContentStoreBackend,
    StoreSettings,
    UploadTimeStoreBackend,
    get_store_settings,
)

__all__ = [
    # Core
    "BaseSettings",
    # Types
    "ContentStoreBackend",
    "Environment",
    # Stores
    "StoreSettings",
    "UploadTimeStoreBackend",
    "get_base_settings",
    "get_store_settings",
]
