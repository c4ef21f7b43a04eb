"""Settings de backends de armazenamento.

Define onde ficam os registros de conteúdo (posts/comentários) e os
timestamps de upload.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from typing import TYPE_CHECKING, Literal

if TYPE_CHECKING:
    from config.settings.base.core import BaseSettings

ContentStoreBackend = Literal["sql", "memory"]
UploadTimeStoreBackend = Literal["redis", "memory"]


@dataclass(frozen=True)
class StoreSettings:
    """Configurações de backends de store.

    Attributes:
        content_backend: Backend dos registros de conteúdo (sql|memory)
        upload_time_backend: Backend dos timestamps de upload (redis|memory)
    """

    content_backend: ContentStoreBackend = "sql"
    upload_time_backend: UploadTimeStoreBackend = "memory"

    def validate(self, base: BaseSettings) -> list[str]:
        """Valida configurações de stores.

        Args:
            base: BaseSettings para verificar ambiente.

        Returns:
            Lista de erros de validação.
        """
        errors: list[str] = []

        if self.content_backend not in ("sql", "memory"):
            errors.append(f"CONTENT_STORE_BACKEND inválido: {self.content_backend}")

        if self.content_backend == "memory" and not base.is_development:
            errors.append(
                "CONTENT_STORE_BACKEND=memory proibido em staging/production. Use sql."
            )

        if self.upload_time_backend not in ("redis", "memory"):
            errors.append(
                f"UPLOAD_TIME_STORE_BACKEND inválido: {self.upload_time_backend}"
            )

        if self.upload_time_backend == "redis" and not base.redis_url:
            errors.append("UPLOAD_TIME_STORE_BACKEND=redis requer REDIS_URL configurado")

        return errors


def _load_stores_from_env() -> StoreSettings:
    """Carrega StoreSettings de variáveis de ambiente."""
    content_str = os.getenv("CONTENT_STORE_BACKEND", "sql").lower()
    content: ContentStoreBackend = content_str if content_str in ("sql", "memory") else "sql"
    upload_str = os.getenv("UPLOAD_TIME_STORE_BACKEND", "memory").lower()
    upload: UploadTimeStoreBackend = (
        upload_str if upload_str in ("redis", "memory") else "memory"
    )
    return StoreSettings(content_backend=content, upload_time_backend=upload)


@lru_cache(maxsize=1)
def get_store_settings() -> StoreSettings:
    """Retorna instância cacheada de StoreSettings."""
    return _load_stores_from_env()
