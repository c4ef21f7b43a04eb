"""Settings de limites de upload."""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache

DEFAULT_ALLOWED_FORMATS: tuple[str, ...] = ("mp4", "mov", "webm", "avi")


@dataclass(frozen=True)
class UploadSettings:
    """Limites aplicados a cada upload.

    Attributes:
        max_file_size_mb: Tamanho máximo do arquivo em MB
        allowed_formats: Extensões permitidas (sem ponto, minúsculas)
        comment_video_enabled: Permite vídeos em comentários
    """

    max_file_size_mb: int = 500
    allowed_formats: tuple[str, ...] = DEFAULT_ALLOWED_FORMATS
    comment_video_enabled: bool = True

    def validate(self) -> list[str]:
        """Valida limites de upload.

        Returns:
            Lista de erros de validação (vazia = tudo OK).
        """
        errors: list[str] = []

        if self.max_file_size_mb <= 0:
            errors.append("UPLOAD_MAX_FILE_SIZE_MB deve ser > 0")

        if not self.allowed_formats:
            errors.append("UPLOAD_ALLOWED_FORMATS não pode ser vazio")

        return errors


def _parse_formats(raw: str) -> tuple[str, ...]:
    formats = tuple(item.strip().lower().lstrip(".") for item in raw.split(",") if item.strip())
    return formats or DEFAULT_ALLOWED_FORMATS


def _load_from_env() -> UploadSettings:
    """Carrega UploadSettings a partir de variáveis de ambiente."""
    return UploadSettings(
        max_file_size_mb=int(os.getenv("UPLOAD_MAX_FILE_SIZE_MB", "500")),
        allowed_formats=_parse_formats(os.getenv("UPLOAD_ALLOWED_FORMATS", "")),
        comment_video_enabled=os.getenv("UPLOAD_COMMENT_VIDEO_ENABLED", "true").lower()
        in ("true", "1", "yes"),
    )


@lru_cache(maxsize=1)
def get_upload_settings() -> UploadSettings:
    """Retorna instância cacheada de UploadSettings."""
    return _load_from_env()
