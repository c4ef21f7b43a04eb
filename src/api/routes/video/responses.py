"""Respostas de erro no formato uniforme {"success": false, "code", "message"}."""

from __future__ import annotations

from fastapi.responses import JSONResponse

from utils.errors import StreamError

GENERIC_ERROR_MESSAGE = "Erro interno ao processar a requisição"


def error_json(status_code: int, code: str, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"success": False, "code": code, "message": message},
    )


def error_response(exc: StreamError) -> JSONResponse:
    """Converte um StreamError na resposta uniforme com o status do erro."""
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


def internal_error_response() -> JSONResponse:
    return error_json(500, "internal_error", GENERIC_ERROR_MESSAGE)
