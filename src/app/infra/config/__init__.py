"""Provedores de configuração."""

from app.infra.config.env_config_provider import EnvConfigProvider

__all__ = ["EnvConfigProvider"]
