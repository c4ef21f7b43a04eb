"""URLs de playback por provedor (player embutível, manifest, miniatura)."""

from __future__ import annotations

import re

from app.domain.video import Provider, ProviderConfig

CLOUDFLARE_PLAYBACK_DOMAIN = "cloudflarestream.com"
BUNNY_PLAYER_BASE_URL = "https://iframe.mediadelivery.net/embed"

_CUSTOMER_SUBDOMAIN_RE = re.compile(
    r"https?://(customer-[a-z0-9]+)\.cloudflarestream\.com", re.IGNORECASE
)


def resolve_customer_subdomain(manifest_url: str, configured: str, account_id: str) -> str:
    """Subdomínio Cloudflare: o do manifest, o configurado, ou customer-<conta>."""
    match = _CUSTOMER_SUBDOMAIN_RE.match(manifest_url or "")
    if match:
        return match.group(1).lower()
    if configured:
        return configured
    return f"customer-{account_id}"


def cloudflare_player_url(subdomain: str, video_id: str) -> str:
    return f"https://{subdomain}.{CLOUDFLARE_PLAYBACK_DOMAIN}/{video_id}/iframe"


def cloudflare_thumbnail_url(subdomain: str, video_id: str) -> str:
    return f"https://{subdomain}.{CLOUDFLARE_PLAYBACK_DOMAIN}/{video_id}/thumbnails/thumbnail.jpg"


def bunny_player_url(library_id: str, guid: str) -> str:
    return f"{BUNNY_PLAYER_BASE_URL}/{library_id}/{guid}?autoplay=false"


def bunny_manifest_url(cdn_hostname: str, guid: str) -> str:
    """Playlist HLS na pull zone; vazio sem hostname configurado."""
    if not cdn_hostname:
        return ""
    return f"https://{cdn_hostname}/{guid}/playlist.m3u8"


def bunny_thumbnail_url(cdn_hostname: str, guid: str, filename: str = "") -> str:
    if not cdn_hostname:
        return ""
    return f"https://{cdn_hostname}/{guid}/{filename or 'thumbnail.jpg'}"


def player_url_for(config: ProviderConfig, video_id: str, manifest_url: str = "") -> str:
    """URL do player embutível para qualquer provedor."""
    if config.provider is Provider.CLOUDFLARE_STREAM:
        subdomain = resolve_customer_subdomain(
            manifest_url, config.playback_host, config.account_id
        )
        return cloudflare_player_url(subdomain, video_id)
    return bunny_player_url(config.account_id, video_id)


def thumbnail_url_for(config: ProviderConfig, video_id: str, manifest_url: str = "") -> str:
    """URL da miniatura padrão para qualquer provedor."""
    if config.provider is Provider.CLOUDFLARE_STREAM:
        subdomain = resolve_customer_subdomain(
            manifest_url, config.playback_host, config.account_id
        )
        return cloudflare_thumbnail_url(subdomain, video_id)
    return bunny_thumbnail_url(config.playback_host, video_id)
