"""Settings do banco de dados de conteúdo.

Tabelas de posts e comentários que carregam o registro de vídeo dentro da
coluna de metadados serializada.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache


@dataclass(frozen=True)
class DatabaseSettings:
    """Configurações do banco (SQLAlchemy).

    Attributes:
        url: URL SQLAlchemy (ex: postgresql+psycopg://..., sqlite:///...)
        posts_table: Tabela de posts
        comments_table: Tabela de comentários
        meta_column: Coluna com metadados JSON
        echo: Loga SQL emitido (apenas debug)
    """

    url: str = "sqlite:///./stream_bridge.db"
    posts_table: str = "posts"
    comments_table: str = "post_comments"
    meta_column: str = "meta"
    echo: bool = False

    def validate(self) -> list[str]:
        """Valida configurações do banco.

        Returns:
            Lista de erros de validação.
        """
        errors: list[str] = []

        if not self.url:
            errors.append("DATABASE_URL não configurado")

        if not self.posts_table or not self.comments_table:
            errors.append("DATABASE_POSTS_TABLE e DATABASE_COMMENTS_TABLE são obrigatórios")

        if self.posts_table == self.comments_table:
            errors.append("Tabelas de posts e comentários devem ser distintas")

        return errors


def _load_database_from_env() -> DatabaseSettings:
    """Carrega DatabaseSettings de variáveis de ambiente."""
    return DatabaseSettings(
        url=os.getenv("DATABASE_URL", "sqlite:///./stream_bridge.db"),
        posts_table=os.getenv("DATABASE_POSTS_TABLE", "posts"),
        comments_table=os.getenv("DATABASE_COMMENTS_TABLE", "post_comments"),
        meta_column=os.getenv("DATABASE_META_COLUMN", "meta"),
        echo=os.getenv("DATABASE_ECHO", "").lower() in ("true", "1", "yes"),
    )


@lru_cache(maxsize=1)
def get_database_settings() -> DatabaseSettings:
    """Retorna instância cacheada de DatabaseSettings."""
    return _load_database_from_env()
