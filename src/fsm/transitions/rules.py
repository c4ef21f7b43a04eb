"""
Grafo de transições permitidas entre estados de vídeo.

Transições são monotônicas: apenas PENDING → READY e PENDING → FAILED.
"""

from fsm.states.video import TERMINAL_STATES, VideoStatus

TransitionMap = dict[VideoStatus, frozenset[VideoStatus]]

VALID_TRANSITIONS: TransitionMap = {
    VideoStatus.PENDING: frozenset({
        VideoStatus.READY,
        VideoStatus.FAILED,
    }),
    # Terminais
    VideoStatus.READY: frozenset(),
    VideoStatus.FAILED: frozenset(),
}


def get_valid_targets(state: VideoStatus) -> frozenset[VideoStatus]:
    """Retorna os destinos permitidos a partir de `state` (vazio se terminal)."""
    return VALID_TRANSITIONS.get(state, frozenset())


def is_transition_valid(from_state: VideoStatus, to_state: VideoStatus) -> bool:
    """Verifica se a transição consta no grafo."""
    if from_state in TERMINAL_STATES:
        return False
    return to_state in get_valid_targets(from_state)


def validate_transition_map() -> list[str]:
    """
    Valida a integridade do mapa de transições.

    Returns:
        Lista de erros encontrados (vazia se válido)
    """
    errors: list[str] = []

    for state in VideoStatus:
        if state not in VALID_TRANSITIONS:
            errors.append(f"Estado {state.name} ausente em VALID_TRANSITIONS")

    for state in TERMINAL_STATES:
        targets = VALID_TRANSITIONS.get(state, frozenset())
        if targets:
            errors.append(
                f"Estado terminal {state.name} não deveria ter transições: {targets}"
            )

    for from_state, targets in VALID_TRANSITIONS.items():
        if from_state in targets:
            errors.append(f"Transição reflexiva em {from_state.name}")

    return errors
