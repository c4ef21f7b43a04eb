"""Configuração do pytest para o projeto stream-bridge."""

import logging
import sys
from pathlib import Path

import pytest

# Adiciona src/ ao PYTHONPATH para permitir imports absolutos
src_path = Path(__file__).parent.parent / "src"
if str(src_path) not in sys.path:
    sys.path.insert(0, str(src_path))

from config import settings as _settings  # noqa: E402
from config.logging import CorrelationIdFilter  # noqa: E402

_SETTINGS_GETTERS = (
    _settings.get_api_auth_settings,
    _settings.get_base_settings,
    _settings.get_bunny_settings,
    _settings.get_cloudflare_settings,
    _settings.get_database_settings,
    _settings.get_store_settings,
    _settings.get_stream_settings,
    _settings.get_upload_settings,
)


@pytest.fixture(autouse=True)
def _clear_settings_cache():
    """Settings são lidas do ambiente com lru_cache; cada teste parte do zero."""
    for getter in _SETTINGS_GETTERS:
        getter.cache_clear()
    yield
    for getter in _SETTINGS_GETTERS:
        getter.cache_clear()


@pytest.fixture(autouse=True)
def _restore_root_logger():
    """configure_logging substitui handlers do root; remove os instalados no teste."""
    root = logging.getLogger()
    level = root.level
    yield
    root.handlers = [
        handler
        for handler in root.handlers
        if not any(isinstance(f, CorrelationIdFilter) for f in handler.filters)
    ]
    root.setLevel(level)
