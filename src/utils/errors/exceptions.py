"""Exceções do stream-bridge.

Duas famílias:
- StreamError: erros de domínio com código estável e status HTTP, sempre
  convertidos no formato uniforme {"success": false, "code", "message"}.
- InfrastructureError: falhas transitórias de Redis/banco.
"""

from __future__ import annotations


class StreamError(Exception):
    """Base para erros de domínio expostos ao cliente.

    Attributes:
        code: Código estável (ex: file_too_large)
        message: Mensagem legível, sem payload bruto de provedor
        status_code: Status HTTP correspondente
    """

    default_code = "stream_error"
    default_status = 500

    def __init__(
        self,
        message: str,
        *,
        code: str | None = None,
        status_code: int | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code or self.default_code
        self.message = message
        self.status_code = status_code or self.default_status

    def to_dict(self) -> dict[str, object]:
        return {"success": False, "code": self.code, "message": self.message}


class UploadValidationError(StreamError):
    """Arquivo rejeitado antes de qualquer chamada ao provedor."""

    default_code = "invalid_upload"
    default_status = 400


class MissingCredentialsError(StreamError):
    """Provedor sem credenciais completas."""

    default_code = "missing_credentials"
    default_status = 400


class AuthenticationError(StreamError):
    """Token de sessão ausente ou inválido."""

    default_code = "unauthorized"
    default_status = 401


class UnsupportedProviderError(StreamError):
    """Identificador de provedor desconhecido."""

    default_code = "unsupported_provider"
    default_status = 400


class InvalidStatusError(StreamError):
    """Confirmação explícita pediu um status diferente de ready."""

    default_code = "invalid_status"
    default_status = 400


class UploadFailedError(StreamError):
    """Falha inesperada durante a orquestração do upload."""

    default_code = "upload_failed"
    default_status = 500


class ProviderApiError(StreamError):
    """Erro retornado (ou causado) pela API do provedor.

    Attributes:
        provider: Provedor de origem
        http_status: Status HTTP do provedor (None em erro de transporte)
        retryable: True para falhas de transporte/5xx/timeout
    """

    default_code = "provider_api_error"
    default_status = 502

    def __init__(
        self,
        message: str,
        *,
        code: str | None = None,
        provider: str = "",
        http_status: int | None = None,
        retryable: bool = False,
    ) -> None:
        super().__init__(message, code=code)
        self.provider = provider
        self.http_status = http_status
        self.retryable = retryable

    @property
    def is_not_found(self) -> bool:
        return self.http_status == 404

    @property
    def is_transient(self) -> bool:
        """404, 5xx e falhas de transporte: tratados como pending no polling."""
        if self.retryable or self.http_status is None:
            return True
        return self.http_status == 404 or self.http_status >= 500


class InfrastructureError(RuntimeError):
    """Base para falhas de infraestrutura transitórias."""


class RedisConnectionError(InfrastructureError):
    """Falha de conexão/timeout ao acessar Redis."""


class DatabaseError(InfrastructureError):
    """Falha ao acessar o banco de registros de conteúdo."""


class ContentRecordConflictError(InfrastructureError):
    """Compare-and-set do metadado esgotou as tentativas."""
