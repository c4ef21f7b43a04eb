"""Cobertura adicional para guard denial na VideoStatusMachine."""

from __future__ import annotations

import fsm.manager.machine as machine_module
from fsm.manager.machine import VideoStatusMachine
from fsm.rules.guards import GuardResult
from fsm.states import VideoStatus


def test_transition_returns_failure_when_guard_blocks_valid_transition(
    monkeypatch,
) -> None:
    def _deny_guard(from_state: VideoStatus, to_state: VideoStatus) -> GuardResult:
        del from_state, to_state
        return GuardResult.deny("blocked_by_guard")

    monkeypatch.setattr(machine_module, "evaluate_guards", _deny_guard)

    machine = VideoStatusMachine(initial_state=VideoStatus.PENDING, video_id="vid-guard")
    result = machine.transition(target=VideoStatus.READY, trigger="test")

    assert result.success is False
    assert result.error_reason == "blocked_by_guard"
    assert machine.current_state == VideoStatus.PENDING
