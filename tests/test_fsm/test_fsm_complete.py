"""
Testes do módulo FSM de prontidão de vídeo.

Cobre estados, grafo de transições, guards e VideoStatusMachine.
"""

from datetime import datetime

import pytest

from fsm import (
    DEFAULT_INITIAL_STATE,
    TERMINAL_STATES,
    VALID_TRANSITIONS,
    GuardResult,
    StateTransition,
    TransitionResult,
    VideoStatus,
    VideoStatusMachine,
    create_video_fsm,
    evaluate_guards,
    get_valid_targets,
    is_terminal,
    is_transition_valid,
    parse_status,
    validate_transition_map,
)
from fsm.rules.guards import guard_same_state, guard_terminal_state, guard_valid_state


class TestVideoStatus:
    def test_three_states_and_terminals(self) -> None:
        assert {s.value for s in VideoStatus} == {"pending", "ready", "failed"}
        assert frozenset({VideoStatus.READY, VideoStatus.FAILED}) == TERMINAL_STATES
        assert DEFAULT_INITIAL_STATE is VideoStatus.PENDING
        assert is_terminal(VideoStatus.READY)
        assert is_terminal(VideoStatus.FAILED)
        assert not is_terminal(VideoStatus.PENDING)
        assert str(VideoStatus.READY) == "ready"

    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ("ready", VideoStatus.READY),
            ("FAILED", VideoStatus.FAILED),
            (VideoStatus.PENDING, VideoStatus.PENDING),
            ("queued", VideoStatus.PENDING),
            (None, VideoStatus.PENDING),
        ],
    )
    def test_parse_status(self, raw: object, expected: VideoStatus) -> None:
        assert parse_status(raw) is expected


class TestTransitionGraph:
    def test_only_pending_has_targets(self) -> None:
        assert get_valid_targets(VideoStatus.PENDING) == frozenset(
            {VideoStatus.READY, VideoStatus.FAILED}
        )
        assert VALID_TRANSITIONS[VideoStatus.READY] == frozenset()
        assert VALID_TRANSITIONS[VideoStatus.FAILED] == frozenset()
        assert validate_transition_map() == []

    @pytest.mark.parametrize(
        ("source", "target", "valid"),
        [
            (VideoStatus.PENDING, VideoStatus.READY, True),
            (VideoStatus.PENDING, VideoStatus.FAILED, True),
            (VideoStatus.READY, VideoStatus.PENDING, False),
            (VideoStatus.READY, VideoStatus.FAILED, False),
            (VideoStatus.FAILED, VideoStatus.READY, False),
            (VideoStatus.PENDING, VideoStatus.PENDING, False),
        ],
    )
    def test_is_transition_valid(
        self, source: VideoStatus, target: VideoStatus, valid: bool
    ) -> None:
        assert is_transition_valid(source, target) is valid


class TestGuards:
    def test_individual_guards(self) -> None:
        assert guard_valid_state(VideoStatus.PENDING, VideoStatus.READY).allowed
        assert not guard_valid_state("pending", VideoStatus.READY).allowed  # type: ignore[arg-type]
        assert not guard_terminal_state(VideoStatus.READY, VideoStatus.FAILED).allowed
        assert not guard_same_state(VideoStatus.PENDING, VideoStatus.PENDING).allowed

    def test_evaluate_guards_first_denial_wins(self) -> None:
        result = evaluate_guards(VideoStatus.FAILED, VideoStatus.FAILED)
        assert not result.allowed
        assert "terminal" in (result.reason or "")

    def test_custom_guard_list(self) -> None:
        result = evaluate_guards(
            VideoStatus.PENDING,
            VideoStatus.READY,
            guards=[lambda a, b: GuardResult.deny("blocked")],
        )
        assert result.reason == "blocked"


class TestVideoStatusMachine:
    def test_pending_to_ready_records_history(self) -> None:
        machine = create_video_fsm("vid-1")
        result = machine.transition(VideoStatus.READY, trigger="webhook", metadata={"pct": 100})

        assert result.success
        assert machine.current_state is VideoStatus.READY
        assert machine.is_terminal
        assert len(machine.history) == 1
        transition = machine.history[0]
        assert transition.video_id == "vid-1"
        assert isinstance(transition.timestamp, datetime)
        assert transition.to_log_dict()["pct"] == 100

    def test_ready_never_regresses(self) -> None:
        machine = VideoStatusMachine(initial_state=VideoStatus.READY, video_id="vid-2")

        for target in VideoStatus:
            result = machine.transition(target, trigger="status_poll")
            assert not result.success
            assert result.error_reason

        assert machine.current_state is VideoStatus.READY
        assert machine.history == []

    def test_failed_cannot_become_ready(self) -> None:
        machine = VideoStatusMachine(initial_state=VideoStatus.FAILED)
        assert not machine.can_transition_to(VideoStatus.READY)
        assert machine.get_valid_targets() == frozenset()

    def test_history_is_a_copy(self) -> None:
        machine = create_video_fsm("vid-3")
        machine.transition(VideoStatus.FAILED, trigger="webhook")
        machine.history.clear()
        assert len(machine.history) == 1

    def test_factory_keeps_stored_state(self) -> None:
        machine = create_video_fsm("vid-4", VideoStatus.READY)
        assert machine.video_id == "vid-4"
        assert machine.is_terminal
        result = machine.transition(VideoStatus.PENDING, trigger="status_poll")
        assert not result.success
        assert machine.current_state is VideoStatus.READY


class TestTypes:
    def test_transition_requires_trigger(self) -> None:
        with pytest.raises(ValueError, match="trigger"):
            StateTransition(
                video_id="v",
                from_state=VideoStatus.PENDING,
                to_state=VideoStatus.READY,
                trigger="  ",
            )

    def test_result_invariants(self) -> None:
        with pytest.raises(ValueError):
            TransitionResult(success=True)
        with pytest.raises(ValueError):
            TransitionResult(success=False)
