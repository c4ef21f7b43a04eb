"""Protocolos e contratos do core da aplicação."""

from .config_provider import ConfigProviderProtocol
from .content_record_store import ContentRecordRow, ContentRecordStoreProtocol
from .provider_client import ProviderClientFactory, VideoProviderClientProtocol
from .telemetry import TelemetryProtocol, TelemetryValue
from .upload_time_store import UploadTimeStoreProtocol

__all__ = [
    "ConfigProviderProtocol",
    "ContentRecordRow",
    "ContentRecordStoreProtocol",
    "ProviderClientFactory",
    "TelemetryProtocol",
    "TelemetryValue",
    "UploadTimeStoreProtocol",
    "VideoProviderClientProtocol",
]
