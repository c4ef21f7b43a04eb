"""
Registros imutáveis de transições de estado de vídeo.
"""

from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any

from fsm.states.video import VideoStatus


@dataclass(frozen=True, slots=True)
class StateTransition:
    """
    Uma mudança de estado aplicada a um VideoRecord.

    Attributes:
        video_id: ID do vídeo no provedor
        from_state: Estado de origem
        to_state: Estado de destino
        trigger: Origem da mudança (webhook, status_poll, client_confirm, ...)
        metadata: Dados de auditoria (códigos de erro, percentuais; sem PII)
        timestamp: Momento da transição (UTC)
    """

    video_id: str
    from_state: VideoStatus
    to_state: VideoStatus
    trigger: str
    metadata: dict[str, Any] = field(default_factory=dict)
    timestamp: datetime = field(default_factory=lambda: datetime.now(UTC))

    def __post_init__(self) -> None:
        if not self.trigger or not self.trigger.strip():
            raise ValueError("trigger não pode ser vazio")

    def to_log_dict(self) -> dict[str, Any]:
        """Representação para logging estruturado."""
        return {
            "video_id": self.video_id,
            "from_state": self.from_state.value,
            "to_state": self.to_state.value,
            "trigger": self.trigger,
            "timestamp": self.timestamp.isoformat(),
            **self.metadata,
        }


@dataclass(frozen=True, slots=True)
class TransitionResult:
    """
    Resultado de uma tentativa de transição.

    Attributes:
        success: Se a transição foi aplicada
        transition: Dados da transição (se success=True)
        error_reason: Motivo da recusa (se success=False)
    """

    success: bool
    transition: StateTransition | None = None
    error_reason: str | None = None

    def __post_init__(self) -> None:
        if self.success and self.transition is None:
            raise ValueError("Transição bem-sucedida deve incluir transition")
        if not self.success and self.error_reason is None:
            raise ValueError("Transição falha deve incluir error_reason")
