"""
Estados de prontidão de um vídeo hospedado no provedor.

O ciclo é curto: todo vídeo nasce PENDING e termina em READY ou FAILED.
Os dois finais são terminais; um novo upload gera um novo registro.
"""

from enum import StrEnum


class VideoStatus(StrEnum):
    """
    Estados de um VideoRecord.

    Estado não-terminal:
        - PENDING: Enviado ao provedor, codificação em andamento

    Estados terminais:
        - READY: Manifest de playback garantidamente disponível
        - FAILED: Provedor reportou erro de codificação (ou upload expirou)
    """

    PENDING = "pending"
    READY = "ready"
    FAILED = "failed"

    def __str__(self) -> str:
        return self.value


TERMINAL_STATES: frozenset[VideoStatus] = frozenset({
    VideoStatus.READY,
    VideoStatus.FAILED,
})

DEFAULT_INITIAL_STATE: VideoStatus = VideoStatus.PENDING


def is_terminal(state: VideoStatus) -> bool:
    """True se o vídeo não aceita mais transições."""
    return state in TERMINAL_STATES


def parse_status(value: object) -> VideoStatus:
    """
    Converte valor armazenado em VideoStatus.

    Valores desconhecidos ou ausentes são tratados como PENDING, que é o
    único estado a partir do qual o registro ainda pode evoluir.
    """
    if isinstance(value, VideoStatus):
        return value
    try:
        return VideoStatus(str(value).lower())
    except ValueError:
        return VideoStatus.PENDING
