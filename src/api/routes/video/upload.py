"""Upload de vídeo via multipart.

Endpoint:
- POST /video-upload: campos file, context (post|comment) e title

O arquivo é copiado para um temporário local, enviado ao provedor ativo
e removido ao final, com sucesso ou erro.
"""

from __future__ import annotations

import asyncio
import logging
import os
import shutil
import tempfile
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager, suppress
from typing import Any

from fastapi import APIRouter, Depends, File, Form, Request, UploadFile

from api.routes.video.dependencies import get_services, require_session
from app.services.file_validation import file_extension
from utils.errors import UploadValidationError

logger = logging.getLogger(__name__)

router = APIRouter()


def _copy_to_temp(upload: UploadFile, suffix: str) -> str:
    with tempfile.NamedTemporaryFile(delete=False, suffix=suffix) as tmp:
        upload.file.seek(0)
        shutil.copyfileobj(upload.file, tmp)
        return tmp.name


@asynccontextmanager
async def temporary_upload(upload: UploadFile) -> AsyncIterator[str]:
    """Materializa o UploadFile em disco e remove o arquivo na saída."""
    extension = file_extension(upload.filename or "")
    path = await asyncio.to_thread(_copy_to_temp, upload, f".{extension}" if extension else "")
    try:
        yield path
    finally:
        with suppress(FileNotFoundError):
            os.unlink(path)


@router.post("/video-upload")
async def upload_video(
    request: Request,
    file: UploadFile | None = File(default=None),
    context: str = Form(default="post"),
    title: str = Form(default=""),
    _session: str = Depends(require_session),
) -> dict[str, Any]:
    """Envia o vídeo ao provedor ativo e devolve o UploadResult."""
    if file is None or not file.filename:
        raise UploadValidationError("Nenhum arquivo enviado", code="file_not_found")

    services = get_services(request)
    async with temporary_upload(file) as path:
        result = await services.orchestrator.upload(
            path,
            file.filename,
            {"context": context, "title": title},
        )
    return {"success": True, "data": result.to_dict()}
