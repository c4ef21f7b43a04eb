"""Consulta de status e confirmação explícita de prontidão.

Endpoints:
- GET /video-status/{video_id}?provider=: status atual (banco primeiro)
- POST /video-update-status: cliente confirma que o vídeo está pronto
"""

from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, Depends, Request
from pydantic import BaseModel, Field

from api.routes.video.dependencies import get_services, require_session

logger = logging.getLogger(__name__)

router = APIRouter()


class UpdateStatusRequest(BaseModel):
    """Corpo de POST /video-update-status."""

    video_id: str = Field(..., min_length=1)
    status: str


@router.get("/video-status/{video_id}")
async def get_video_status(
    video_id: str,
    request: Request,
    provider: str | None = None,
    _session: str = Depends(require_session),
) -> dict[str, Any]:
    """Retorna o status do vídeo; erros sobem como StreamError."""
    services = get_services(request)
    view = await services.status_service.get_status(video_id, provider)
    logger.info(
        "video_status_served",
        extra={"video_id": video_id, "provider": view.provider.value, "status": view.status.value},
    )
    return {"success": True, "data": view.to_dict()}


@router.post("/video-update-status")
async def update_video_status(
    body: UpdateStatusRequest,
    request: Request,
    _session: str = Depends(require_session),
) -> dict[str, Any]:
    """Confirma prontidão (apenas status "ready")."""
    services = get_services(request)
    updated = await services.status_service.confirm_ready(body.video_id, body.status)
    return {
        "success": True,
        "data": {"video_id": body.video_id, "status": body.status, "updated": updated},
    }
