"""Settings de autenticação das rotas de cliente."""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache


@dataclass(frozen=True)
class ApiAuthSettings:
    """Tokens de sessão aceitos pelas rotas autenticadas.

    Attributes:
        session_tokens: Tokens Bearer válidos (API_SESSION_TOKENS, separados por vírgula)
    """

    session_tokens: tuple[str, ...] = ()

    def validate(self) -> list[str]:
        """Valida configurações de autenticação."""
        errors: list[str] = []
        if not self.session_tokens:
            errors.append("API_SESSION_TOKENS não configurado (rotas autenticadas retornam 401)")
        return errors


def _load_from_env() -> ApiAuthSettings:
    """Carrega ApiAuthSettings a partir de variáveis de ambiente."""
    raw = os.getenv("API_SESSION_TOKENS", "")
    return ApiAuthSettings(
        session_tokens=tuple(token.strip() for token in raw.split(",") if token.strip())
    )


@lru_cache(maxsize=1)
def get_api_auth_settings() -> ApiAuthSettings:
    """Retorna instância cacheada de ApiAuthSettings."""
    return _load_from_env()
