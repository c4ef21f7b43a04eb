"""
Exports públicos do módulo fsm/states.

Estados de prontidão de vídeo.
"""

from fsm.states.video import (
    DEFAULT_INITIAL_STATE,
    TERMINAL_STATES,
    VideoStatus,
    is_terminal,
    parse_status,
)

__all__ = [
    "DEFAULT_INITIAL_STATE",
    "TERMINAL_STATES",
    "VideoStatus",
    "is_terminal",
    "parse_status",
]
