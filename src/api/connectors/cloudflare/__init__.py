"""Conector do Cloudflare Stream."""

from api.connectors.cloudflare.client import CloudflareStreamClient
from api.connectors.cloudflare.normalizer import normalize_cloudflare_video, parse_pct

__all__ = [
    "CloudflareStreamClient",
    "normalize_cloudflare_video",
    "parse_pct",
]
