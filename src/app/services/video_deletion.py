"""Remoção de vídeos do provedor acompanhando o ciclo de vida do conteúdo.

Eventos tratados:
- Conteúdo (post/comentário) excluído: o vídeo embutido é removido.
- Conteúdo editado sem o vídeo: o vídeo antigo é removido.
- Conteúdo editado com outro vídeo: comentários removem o antigo sempre;
  posts só quando o novo metadado traz `replaces_video_id` explícito.

Falhas de remoção são logadas e nunca interrompem o fluxo do conteúdo.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from app.domain import META_VIDEO_KEY, ContentKind, Provider, decode_meta
from utils.errors import StreamError

if TYPE_CHECKING:
    from app.protocols import ConfigProviderProtocol, ProviderClientFactory

logger = logging.getLogger(__name__)

MetaInput = Mapping[str, Any] | str | None


def _video_block(meta: MetaInput) -> Mapping[str, Any]:
    data = decode_meta(meta) if isinstance(meta, str) or meta is None else meta
    block = data.get(META_VIDEO_KEY)
    return block if isinstance(block, Mapping) else {}


class VideoDeletionHandler:
    """Remove vídeos órfãos no provedor."""

    def __init__(
        self,
        *,
        config_provider: ConfigProviderProtocol,
        client_factory: ProviderClientFactory,
    ) -> None:
        self._config_provider = config_provider
        self._client_factory = client_factory

    async def handle_content_deleted(self, meta: MetaInput) -> bool:
        """Conteúdo excluído: remove o vídeo embutido, se houver."""
        block = _video_block(meta)
        video_id = str(block.get("video_id") or "")
        if not video_id:
            return False
        return await self.delete_video(video_id, block.get("provider"))

    async def handle_content_updated(
        self,
        kind: ContentKind,
        old_meta: MetaInput,
        new_meta: MetaInput,
    ) -> bool:
        """Conteúdo editado: remove o vídeo retirado ou substituído."""
        old_block = _video_block(old_meta)
        new_block = _video_block(new_meta)
        old_video_id = str(old_block.get("video_id") or "")
        new_video_id = str(new_block.get("video_id") or "")

        if not old_video_id or old_video_id == new_video_id:
            return False

        if not new_video_id:
            logger.info(
                "video_removed_from_content",
                extra={"video_id": old_video_id, "content_kind": kind.value},
            )
            return await self.delete_video(old_video_id, old_block.get("provider"))

        if kind is ContentKind.COMMENT:
            return await self.delete_video(old_video_id, old_block.get("provider"))

        replaces_video_id = str(new_block.get("replaces_video_id") or "")
        if not replaces_video_id:
            logger.warning(
                "video_replacement_without_marker",
                extra={
                    "video_id": old_video_id,
                    "new_video_id": new_video_id,
                    "content_kind": kind.value,
                },
            )
            return False

        provider = new_block.get("replaces_provider") or old_block.get("provider")
        return await self.delete_video(replaces_video_id, provider)

    async def delete_video(self, video_id: str, provider: Any) -> bool:
        """Remove o vídeo no provedor; erros viram False."""
        try:
            resolved = Provider.parse(provider) if provider else None
        except ValueError:
            resolved = None
        if resolved is None:
            logger.warning(
                "video_delete_skipped",
                extra={"video_id": video_id, "reason": "unknown_provider"},
            )
            return False

        config = self._config_provider.get_credentials(resolved)
        if config is None or not config.has_credentials:
            logger.warning(
                "video_delete_skipped",
                extra={
                    "video_id": video_id,
                    "provider": resolved.value,
                    "reason": "missing_credentials",
                },
            )
            return False

        try:
            deleted = await self._client_factory(config).delete_video(video_id)
        except StreamError as exc:
            logger.warning(
                "video_delete_failed",
                extra={"video_id": video_id, "provider": resolved.value, "code": exc.code},
            )
            return False

        logger.info(
            "video_deleted",
            extra={"video_id": video_id, "provider": resolved.value, "deleted": deleted},
        )
        return deleted
