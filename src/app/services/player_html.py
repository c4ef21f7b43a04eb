"""Snippets HTML do player embutido.

Pronto: wrapper responsivo 16:9 com iframe do provedor.
Pendente: miniatura com aviso de codificação; os atributos data-* permitem
ao cliente continuar consultando o status.
"""

from __future__ import annotations

from html import escape

from app.domain.playback import player_url_for, thumbnail_url_for
from app.domain.video import ProviderConfig

WRAPPER_CLASS = "stream-bridge-video"

_IFRAME_ALLOW = "accelerometer; gyroscope; autoplay; encrypted-media; picture-in-picture;"


def render_player_html(config: ProviderConfig, video_id: str, manifest_url: str = "") -> str:
    """HTML do player para um vídeo pronto."""
    src = escape(player_url_for(config, video_id, manifest_url), quote=True)
    return (
        f'<div class="{WRAPPER_CLASS}" data-video-id="{escape(video_id, quote=True)}" '
        'style="position: relative; padding-top: 56.25%;">'
        f'<iframe src="{src}" loading="lazy" '
        'style="border: none; position: absolute; top: 0; left: 0; height: 100%; width: 100%;" '
        f'allow="{_IFRAME_ALLOW}" allowfullscreen="true"></iframe>'
        "</div>"
    )


def render_pending_html(
    config: ProviderConfig,
    video_id: str,
    thumbnail_url: str = "",
) -> str:
    """HTML exibido enquanto o provedor codifica o vídeo."""
    thumb = thumbnail_url or thumbnail_url_for(config, video_id)
    vid = escape(video_id, quote=True)
    image = (
        f'<img src="{escape(thumb, quote=True)}" alt="" loading="lazy" '
        'style="position: absolute; top: 0; left: 0; width: 100%; height: 100%; object-fit: cover;">'
        if thumb
        else ""
    )
    return (
        f'<div class="{WRAPPER_CLASS} {WRAPPER_CLASS}--pending" data-video-id="{vid}" '
        f'data-provider="{escape(config.provider.value, quote=True)}" data-status="pending" '
        'style="position: relative; padding-top: 56.25%;">'
        f"{image}"
        f'<div class="{WRAPPER_CLASS}__overlay">Processando vídeo…</div>'
        "</div>"
    )
