"""Evento de webhook recebido de um provedor (transiente)."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from app.domain.video import Provider


@dataclass(frozen=True, slots=True)
class WebhookEvent:
    """Uma notificação push já autenticada e parseada.

    Attributes:
        provider: Provedor que enviou
        raw_body: Corpo bruto recebido
        signature: Valor do cabeçalho de assinatura ("" se o provedor não assina)
        payload: JSON parseado
        signature_verified: False quando o provedor não tem esquema de assinatura
    """

    provider: Provider
    raw_body: bytes
    signature: str = ""
    payload: dict[str, Any] = field(default_factory=dict)
    signature_verified: bool = True
