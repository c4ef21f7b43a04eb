"""Agregador de rotas.

Uso:
    from api.routes import create_api_router

    app = FastAPI()
    app.include_router(create_api_router())
"""

from __future__ import annotations

from fastapi import APIRouter

from api.routes.health.router import router as health_router
from api.routes.video.router import router as video_router


def create_api_router() -> APIRouter:
    """Cria router principal com todos os sub-routers registrados."""
    api_router = APIRouter()

    # Health checks (/health, /health/ready)
    api_router.include_router(health_router, tags=["health"])

    # Webhooks, status e upload (sem prefixo)
    api_router.include_router(video_router, tags=["video"])

    return api_router
