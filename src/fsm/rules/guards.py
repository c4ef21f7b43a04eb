"""
Guards aplicados antes de qualquer transição de estado de vídeo.

Cada guard recebe (origem, destino) e devolve GuardResult. O primeiro
que negar interrompe a avaliação.
"""

from collections.abc import Callable

from fsm.states.video import TERMINAL_STATES, VideoStatus


class GuardResult:
    """
    Resultado da avaliação de um guard.

    Attributes:
        allowed: Se a transição é permitida
        reason: Motivo do bloqueio (se allowed=False)
    """

    __slots__ = ("allowed", "reason")

    def __init__(self, allowed: bool, reason: str | None = None) -> None:
        self.allowed = allowed
        self.reason = reason

    @classmethod
    def allow(cls) -> "GuardResult":
        """Cria resultado permitindo a transição."""
        return cls(allowed=True)

    @classmethod
    def deny(cls, reason: str) -> "GuardResult":
        """Cria resultado negando a transição."""
        return cls(allowed=False, reason=reason)


Guard = Callable[[VideoStatus, VideoStatus], GuardResult]


def guard_valid_state(from_state: VideoStatus, to_state: VideoStatus) -> GuardResult:
    """Guard: ambos os estados devem ser VideoStatus."""
    if not isinstance(from_state, VideoStatus):
        return GuardResult.deny(f"Estado de origem inválido: {from_state}")
    if not isinstance(to_state, VideoStatus):
        return GuardResult.deny(f"Estado de destino inválido: {to_state}")
    return GuardResult.allow()


def guard_terminal_state(from_state: VideoStatus, to_state: VideoStatus) -> GuardResult:
    """Guard: READY e FAILED nunca regridem nem mudam de lado."""
    if from_state in TERMINAL_STATES:
        return GuardResult.deny(
            f"Estado {from_state.name} é terminal, não permite transição"
        )
    return GuardResult.allow()


def guard_same_state(from_state: VideoStatus, to_state: VideoStatus) -> GuardResult:
    """Guard: reaplicar o mesmo estado é no-op, não transição."""
    if from_state == to_state:
        return GuardResult.deny(
            f"Transição reflexiva não permitida: {from_state.name} → {to_state.name}"
        )
    return GuardResult.allow()


DEFAULT_GUARDS: list[Guard] = [
    guard_valid_state,
    guard_terminal_state,
    guard_same_state,
]


def evaluate_guards(
    from_state: VideoStatus,
    to_state: VideoStatus,
    guards: list[Guard] | None = None,
) -> GuardResult:
    """
    Avalia os guards em ordem.

    Returns:
        GuardResult do primeiro guard que negar, ou allow() se todos passarem
    """
    guards_to_apply = guards if guards is not None else DEFAULT_GUARDS

    for guard in guards_to_apply:
        result = guard(from_state, to_state)
        if not result.allowed:
            return result

    return GuardResult.allow()
