"""Dependências FastAPI das rotas de vídeo."""

from __future__ import annotations

import hmac
import logging
from typing import TYPE_CHECKING

from fastapi import Header, Request

from config.settings import get_api_auth_settings
from utils.errors import AuthenticationError

if TYPE_CHECKING:
    from app.bootstrap import VideoServices

logger = logging.getLogger(__name__)

_BEARER_PREFIX = "bearer "


def get_services(request: Request) -> VideoServices:
    """Contexto VideoServices montado no lifespan."""
    return request.app.state.services


def _bearer_token(authorization: str | None) -> str:
    if not authorization or not authorization.lower().startswith(_BEARER_PREFIX):
        return ""
    return authorization[len(_BEARER_PREFIX):].strip()


async def require_session(authorization: str | None = Header(default=None)) -> str:
    """Exige `Authorization: Bearer <token>` entre os tokens configurados.

    Raises:
        AuthenticationError: Token ausente ou desconhecido.
    """
    token = _bearer_token(authorization)
    valid_tokens = get_api_auth_settings().session_tokens
    candidate = token.encode()
    if token and any(hmac.compare_digest(candidate, known.encode()) for known in valid_tokens):
        return token

    logger.warning("api_session_rejected", extra={"has_token": bool(token)})
    raise AuthenticationError("Sessão inválida ou ausente")
