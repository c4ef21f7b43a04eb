#!/usr/bin/env python3
"""Registra a URL de webhook no provedor de streaming.

Uso:
    python scripts/register_webhook.py --provider cloudflare --url https://exemplo.com/webhook/cloudflare

Sem --url, usa PUBLIC_BASE_URL + /webhook/<provider>. O secret retornado
(Cloudflare) deve ser guardado em CLOUDFLARE_WEBHOOK_SECRET.
"""

from __future__ import annotations

import argparse
import asyncio
import sys

from api.connectors import create_provider_client
from app.domain import Provider, WebhookRegistration
from app.infra.config import EnvConfigProvider
from config.settings import get_base_settings
from utils.errors import MissingCredentialsError, StreamError


async def register_webhook(provider: Provider, url: str) -> WebhookRegistration:
    config = EnvConfigProvider().get_credentials(provider)
    if config is None:
        raise MissingCredentialsError(f"Credenciais de {provider.slug} não configuradas")
    client = create_provider_client(config)
    return await client.create_webhook(url)


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument(
        "--provider",
        required=True,
        choices=[p.slug for p in Provider],
        help="Provedor onde o webhook será registrado.",
    )
    parser.add_argument(
        "--url",
        default=None,
        help="URL pública do webhook. Se omitida, deriva de PUBLIC_BASE_URL.",
    )
    return parser.parse_args()


def main() -> int:
    args = parse_args()
    provider = Provider.parse(args.provider)
    try:
        url = args.url or get_base_settings().webhook_url(provider.slug)
    except ValueError as exc:
        print(str(exc), file=sys.stderr)
        return 2

    try:
        registration = asyncio.run(register_webhook(provider, url))
    except StreamError as exc:
        print(f"[{exc.code}] {exc.message}", file=sys.stderr)
        return 1

    print(f"provider={registration.provider.value} url={registration.notification_url}")
    if registration.secret:
        print(f"secret={registration.secret}")
    else:
        print("secret=<nenhum: provedor não assina webhooks>")
    return 0


if __name__ == "__main__":
    sys.exit(main())
