"""Entrypoint da aplicação stream-bridge.

Expõe a aplicação ASGI (FastAPI). O contexto VideoServices é montado no
lifespan e guardado em app.state.services.

Uso (produção):
    uvicorn app.app:app --host 0.0.0.0 --port 8080

Uso (desenvolvimento):
    uvicorn app.app:app --reload --host 0.0.0.0 --port 8080
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from api.routes import create_api_router
from api.routes.video.responses import error_json, error_response, internal_error_response
from app.bootstrap import (
    VideoServices,
    create_video_services,
    initialize_logging,
    validate_runtime_settings,
)
from config.settings import get_base_settings
from utils.errors import InfrastructureError, StreamError

if TYPE_CHECKING:
    from collections.abc import AsyncGenerator

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Ciclo de vida: valida settings e monta/fecha os serviços."""
    service_name = get_base_settings().service_name
    logger.info("app_starting", extra={"service": service_name})
    validate_runtime_settings()

    if getattr(app.state, "services", None) is None:
        app.state.services = create_video_services()

    yield

    logger.info("app_shutting_down", extra={"service": service_name})
    redis_client = getattr(app.state.services, "redis_client", None)
    if redis_client is not None:
        close_async = getattr(redis_client, "aclose", None)
        if callable(close_async):
            await close_async()


async def _stream_error_handler(request: Request, exc: StreamError) -> JSONResponse:
    logger.info(
        "request_failed",
        extra={"path": request.url.path, "code": exc.code, "status_code": exc.status_code},
    )
    return error_response(exc)


async def _infrastructure_error_handler(
    request: Request, exc: InfrastructureError
) -> JSONResponse:
    logger.error(
        "request_infrastructure_error",
        extra={"path": request.url.path, "error_type": type(exc).__name__},
        exc_info=exc,
    )
    return internal_error_response()


async def _validation_error_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    logger.info("request_invalid", extra={"path": request.url.path, "errors": len(exc.errors())})
    return error_json(400, "invalid_request", "Requisição inválida")


def create_app(services: VideoServices | None = None) -> FastAPI:
    """Cria e configura a aplicação FastAPI.

    Args:
        services: Contexto pronto (testes); se None, é criado no lifespan.
    """
    fastapi_app = FastAPI(
        title="stream-bridge",
        description="Orquestração de upload e reconciliação de prontidão de vídeos",
        version="1.0.0",
        lifespan=lifespan,
    )
    fastapi_app.state.services = services

    fastapi_app.add_exception_handler(StreamError, _stream_error_handler)
    fastapi_app.add_exception_handler(InfrastructureError, _infrastructure_error_handler)
    fastapi_app.add_exception_handler(RequestValidationError, _validation_error_handler)

    fastapi_app.include_router(create_api_router())

    logger.info("app_configured", extra={"service": get_base_settings().service_name})
    return fastapi_app


def main() -> None:
    """Entrypoint para execução direta (desenvolvimento)."""
    import uvicorn

    initialize_logging()
    logger.info("starting_development_server")
    uvicorn.run(
        "app.app:app",
        host="0.0.0.0",
        port=8080,
        reload=True,
    )


initialize_logging()

# Aplicação ASGI exposta para uvicorn
app = create_app()


if __name__ == "__main__":
    main()
