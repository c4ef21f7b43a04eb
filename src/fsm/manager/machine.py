"""
Máquina de estados de prontidão de um vídeo.

Cada instância envolve o status atual de um VideoRecord e decide se uma
mudança proposta (vinda de webhook, polling ou confirmação do cliente)
pode ser aplicada.
"""

from typing import Any

from fsm.rules.guards import GuardResult, evaluate_guards
from fsm.states.video import DEFAULT_INITIAL_STATE, VideoStatus, is_terminal
from fsm.transitions.rules import get_valid_targets, is_transition_valid
from fsm.types.transition import StateTransition, TransitionResult


class VideoStatusMachine:
    """
    FSM de um único vídeo.

    Attributes:
        current_state: Estado atual
        history: Transições aplicadas nesta instância
    """

    __slots__ = ("_current_state", "_history", "_video_id")

    def __init__(
        self,
        initial_state: VideoStatus | None = None,
        video_id: str = "",
    ) -> None:
        self._current_state = initial_state or DEFAULT_INITIAL_STATE
        self._history: list[StateTransition] = []
        self._video_id = video_id

    @property
    def current_state(self) -> VideoStatus:
        return self._current_state

    @property
    def history(self) -> list[StateTransition]:
        """Histórico de transições (cópia para evitar mutação externa)."""
        return list(self._history)

    @property
    def video_id(self) -> str:
        return self._video_id

    @property
    def is_terminal(self) -> bool:
        return is_terminal(self._current_state)

    def can_transition_to(self, target: VideoStatus) -> bool:
        """Verifica se pode transitar para o estado alvo."""
        if not is_transition_valid(self._current_state, target):
            return False
        return evaluate_guards(self._current_state, target).allowed

    def get_valid_targets(self) -> frozenset[VideoStatus]:
        return get_valid_targets(self._current_state)

    def transition(
        self,
        target: VideoStatus,
        trigger: str,
        metadata: dict[str, Any] | None = None,
    ) -> TransitionResult:
        """
        Tenta aplicar uma transição de estado.

        Args:
            target: Estado de destino
            trigger: Origem da mudança (ex: 'webhook', 'status_poll')
            metadata: Dados adicionais para auditoria (nunca PII)

        Returns:
            TransitionResult com sucesso/falha e dados da transição
        """
        guard_result: GuardResult = evaluate_guards(self._current_state, target)
        if not guard_result.allowed:
            return TransitionResult(success=False, error_reason=guard_result.reason)

        if not is_transition_valid(self._current_state, target):
            return TransitionResult(
                success=False,
                error_reason=(
                    f"Transição inválida: {self._current_state.name} → {target.name}"
                ),
            )

        transition = StateTransition(
            video_id=self._video_id,
            from_state=self._current_state,
            to_state=target,
            trigger=trigger,
            metadata=metadata or {},
        )

        self._current_state = target
        self._history.append(transition)

        return TransitionResult(success=True, transition=transition)


def create_video_fsm(
    video_id: str,
    initial_state: VideoStatus | None = None,
) -> VideoStatusMachine:
    """Factory function para criar a FSM de um vídeo."""
    return VideoStatusMachine(initial_state=initial_state, video_id=video_id)
