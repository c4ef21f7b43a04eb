"""
Módulo FSM: máquina de estados de prontidão de vídeo.

Governa as transições monotônicas de um VideoRecord
(pending → ready, pending → failed).

Estrutura:
    - states/: VideoStatus e estados terminais
    - transitions/: Grafo de transições (VALID_TRANSITIONS)
    - rules/: Guards
    - manager/: VideoStatusMachine
    - types/: StateTransition, TransitionResult
"""

from fsm.manager import VideoStatusMachine, create_video_fsm
from fsm.rules import GuardResult, evaluate_guards
from fsm.states import (
    DEFAULT_INITIAL_STATE,
    TERMINAL_STATES,
    VideoStatus,
    is_terminal,
    parse_status,
)
from fsm.transitions import (
    VALID_TRANSITIONS,
    get_valid_targets,
    is_transition_valid,
    validate_transition_map,
)
from fsm.types import StateTransition, TransitionResult

__all__ = [
    "DEFAULT_INITIAL_STATE",
    "TERMINAL_STATES",
    "VALID_TRANSITIONS",
    "GuardResult",
    "StateTransition",
    "TransitionResult",
    "VideoStatus",
    "VideoStatusMachine",
    "create_video_fsm",
    "evaluate_guards",
    "get_valid_targets",
    "is_terminal",
    "is_transition_valid",
    "parse_status",
    "validate_transition_map",
]
