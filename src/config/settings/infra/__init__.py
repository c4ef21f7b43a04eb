"""Agregador de settings de infraestrutura.

Re-exporta as settings de infraestrutura para uso externo.
"""

from __future__ import annotations

from config.settings.infra.database import (
    DatabaseSettings,
    get_database_settings,
)

__all__ = [
    "DatabaseSettings",
    "get_database_settings",
]
