"""Conector do Bunny Stream."""

from api.connectors.bunny.client import BunnyStreamClient
from api.connectors.bunny.normalizer import (
    BunnyApiStatus,
    BunnyWebhookStatus,
    normalize_bunny_video,
    normalize_bunny_webhook,
)

__all__ = [
    "BunnyApiStatus",
    "BunnyStreamClient",
    "BunnyWebhookStatus",
    "normalize_bunny_video",
    "normalize_bunny_webhook",
]
