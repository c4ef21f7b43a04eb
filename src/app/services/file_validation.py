"""Validação de arquivos de vídeo recebidos.

Ordem fixa: existência, tamanho, extensão, MIME (detectado pelos bytes
iniciais, não pelo cabeçalho enviado pelo cliente).
"""

from __future__ import annotations

import os

from app.domain import UploadLimits
from utils.errors import UploadValidationError

SAFE_MIME_TYPES: frozenset[str] = frozenset(
    {"video/mp4", "video/quicktime", "video/webm", "video/x-msvideo"}
)

_SNIFF_BYTES = 64

# Brands ISO-BMFF tratadas como QuickTime; o restante de ftyp vira mp4
_QUICKTIME_BRANDS = frozenset({b"qt  "})


def sniff_video_mime(head: bytes) -> str:
    """Detecta o MIME pelos magic bytes ("" se desconhecido)."""
    if len(head) >= 12 and head[4:8] == b"ftyp":
        return "video/quicktime" if head[8:12] in _QUICKTIME_BRANDS else "video/mp4"
    if len(head) >= 8 and head[4:8] in (b"moov", b"mdat", b"wide", b"free"):
        return "video/quicktime"
    if head.startswith(b"\x1a\x45\xdf\xa3"):
        return "video/webm"
    if len(head) >= 12 and head[:4] == b"RIFF" and head[8:12] == b"AVI ":
        return "video/x-msvideo"
    return ""


def file_extension(filename: str) -> str:
    _, dot, ext = filename.rpartition(".")
    return ext.lower() if dot else ""


def validate_upload_file(file_path: str, filename: str, limits: UploadLimits) -> int:
    """Valida o arquivo e devolve o tamanho em bytes.

    Raises:
        UploadValidationError: file_not_found | empty_file | file_too_large |
            invalid_format | invalid_mime_type
    """
    if not file_path or not os.path.isfile(file_path):
        raise UploadValidationError("Arquivo não encontrado", code="file_not_found")

    size = os.path.getsize(file_path)
    if size <= 0:
        raise UploadValidationError("Arquivo vazio", code="empty_file")

    if size > limits.max_file_size_bytes:
        raise UploadValidationError(
            f"Arquivo excede o limite de {limits.max_file_size_mb} MB",
            code="file_too_large",
            status_code=413,
        )

    extension = file_extension(filename)
    if extension not in limits.allowed_formats:
        raise UploadValidationError(
            f"Formato não permitido. Permitidos: {', '.join(limits.allowed_formats)}",
            code="invalid_format",
        )

    with open(file_path, "rb") as fh:
        head = fh.read(_SNIFF_BYTES)
    if sniff_video_mime(head) not in SAFE_MIME_TYPES:
        raise UploadValidationError("Tipo de arquivo inválido", code="invalid_mime_type")

    return size
