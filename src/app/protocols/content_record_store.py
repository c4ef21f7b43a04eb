"""Protocolo do armazenamento de registros de conteúdo (posts/comentários).

O store só conhece linhas opacas (tipo, id, blob de metadados). A
interpretação do blob fica no localizador.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from app.domain import ContentKind


@dataclass(frozen=True, slots=True)
class ContentRecordRow:
    """Uma linha candidata retornada pela busca por substring."""

    kind: ContentKind
    record_id: int
    meta: str


class ContentRecordStoreProtocol(ABC):
    """Contrato assíncrono de busca e escrita condicional do metadado."""

    @abstractmethod
    async def search_meta(self, fragment: str) -> list[ContentRecordRow]:
        """Retorna linhas cujo metadado contém `fragment` (posts e comentários)."""

    @abstractmethod
    async def get_meta(self, kind: ContentKind, record_id: int) -> str | None:
        """Lê o metadado atual de uma linha (None se a linha não existe)."""

    @abstractmethod
    async def compare_and_swap_meta(
        self,
        kind: ContentKind,
        record_id: int,
        expected: str,
        new_meta: str,
    ) -> bool:
        """Grava `new_meta` apenas se o valor atual ainda for `expected`.

        Returns:
            True se gravou; False se outro escritor alterou a linha antes.
        """

    @abstractmethod
    async def ping(self) -> bool:
        """Verifica conectividade (health check)."""
