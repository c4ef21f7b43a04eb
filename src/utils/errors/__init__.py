"""Exceções utilitárias compartilhadas."""

from .exceptions import (
    AuthenticationError,
    ContentRecordConflictError,
    DatabaseError,
    InfrastructureError,
    InvalidStatusError,
    MissingCredentialsError,
    ProviderApiError,
    RedisConnectionError,
    StreamError,
    UnsupportedProviderError,
    UploadFailedError,
    UploadValidationError,
)

__all__ = [
    "AuthenticationError",
    "ContentRecordConflictError",
    "DatabaseError",
    "InfrastructureError",
    "InvalidStatusError",
    "MissingCredentialsError",
    "ProviderApiError",
    "RedisConnectionError",
    "StreamError",
    "UnsupportedProviderError",
    "UploadFailedError",
    "UploadValidationError",
]
