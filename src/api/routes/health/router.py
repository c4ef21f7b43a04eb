"""Endpoints de health check (liveness e readiness)."""

from __future__ import annotations

import asyncio
import logging
import time
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import TYPE_CHECKING, Any, Literal

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from config.settings import get_base_settings

if TYPE_CHECKING:
    from app.protocols import ContentRecordStoreProtocol

logger = logging.getLogger(__name__)

router = APIRouter()


class HealthResponse(BaseModel):
    """Resposta do health check."""

    status: str
    service: str
    timestamp: str
    version: str = "1.0.0"


@dataclass(frozen=True, slots=True)
class DependencyCheck:
    """Resultado de checagem de dependência."""

    status: Literal["ok", "degraded", "failed"]
    latency_ms: float | None = None
    error: str | None = None

    def as_dict(self) -> dict[str, Any]:
        return {
            "status": self.status,
            "latency_ms": self.latency_ms,
            "error": self.error,
        }


@router.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Liveness probe."""
    return HealthResponse(
        status="healthy",
        service=get_base_settings().service_name,
        timestamp=datetime.now(UTC).isoformat(),
    )


@router.get("/health/ready")
async def readiness_check(request: Request) -> JSONResponse:
    """Readiness probe: banco de conteúdo obrigatório, Redis se configurado."""
    services = getattr(request.app.state, "services", None)
    if services is None:
        database_check = DependencyCheck(status="failed", error="not_initialized")
        redis_check = DependencyCheck(status="degraded", error="not_configured")
    else:
        database_check, redis_check = await asyncio.gather(
            _check_database(services.content_store),
            _check_redis(services.redis_client),
        )

    ready = database_check.status == "ok" and redis_check.status in {"ok", "degraded"}
    payload = {
        "status": "ready" if ready else "not_ready",
        "checks": {
            "database": database_check.as_dict(),
            "redis": redis_check.as_dict(),
        },
        "timestamp": datetime.now(UTC).isoformat(),
    }
    if not ready:
        logger.warning(
            "readiness_check_failed",
            extra={
                "database": database_check.status,
                "redis": redis_check.status,
            },
        )
    return JSONResponse(content=payload, status_code=200 if ready else 503)


async def _check_database(store: ContentRecordStoreProtocol) -> DependencyCheck:
    started_at = time.perf_counter()
    try:
        ok = await asyncio.wait_for(store.ping(), timeout=3.0)
    except TimeoutError:
        return DependencyCheck(status="failed", error="timeout")
    except Exception as exc:
        return DependencyCheck(status="failed", error=type(exc).__name__)
    latency_ms = (time.perf_counter() - started_at) * 1000
    return DependencyCheck(status="ok" if ok else "failed", latency_ms=round(latency_ms, 2))


async def _check_redis(redis_client: Any | None) -> DependencyCheck:
    if redis_client is None:
        return DependencyCheck(status="degraded", error="not_configured")
    started_at = time.perf_counter()
    try:
        await asyncio.wait_for(redis_client.ping(), timeout=2.0)
    except TimeoutError:
        return DependencyCheck(status="failed", error="timeout")
    except Exception as exc:
        return DependencyCheck(status="failed", error=type(exc).__name__)
    latency_ms = (time.perf_counter() - started_at) * 1000
    return DependencyCheck(status="ok", latency_ms=round(latency_ms, 2))
