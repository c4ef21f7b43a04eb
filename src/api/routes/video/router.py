"""Router de vídeo: agrega webhook, status e upload."""

from __future__ import annotations

from fastapi import APIRouter

from api.routes.video.status import router as status_router
from api.routes.video.upload import router as upload_router
from api.routes.video.webhook import router as webhook_router

router = APIRouter()

router.include_router(webhook_router)
router.include_router(status_router)
router.include_router(upload_router)
