"""Tests for the pure timer state transitions."""

import pytest

from sessiontimeout.core import state
from sessiontimeout.core.state import TimerSnapshot, TimerState


class TestTransitions:
    """Each transition maps one snapshot to the next without side effects."""

    def test_idle_snapshot(self) -> None:
        assert state.IDLE.state == TimerState.IDLE
        assert state.remaining_at(state.IDLE, 123.0) == 0.0

    def test_started(self) -> None:
        snap = state.started(state.IDLE, 1000.0, 50.0)
        assert snap == TimerSnapshot(
            original_duration=1000.0,
            configured_duration=1000.0,
            remaining=1000.0,
            last_arm_time=50.0,
            active=True,
            paused=False,
        )
        assert snap.state == TimerState.RUNNING

    def test_started_does_not_mutate_input(self) -> None:
        before = state.started(state.IDLE, 1000.0, 0.0)
        state.started(before, 10.0, 5.0)
        assert before.original_duration == 1000.0

    def test_remaining_at_running(self) -> None:
        snap = state.started(state.IDLE, 1000.0, 0.0)
        assert state.remaining_at(snap, 250.0) == 750.0
        assert state.remaining_at(snap, 2000.0) == 0.0

    def test_paused_then_resumed(self) -> None:
        snap = state.started(state.IDLE, 1000.0, 0.0)
        snap = state.paused(snap, 300.0)
        assert snap.state == TimerState.PAUSED
        assert snap.paused_at == 300.0
        assert state.remaining_at(snap, 9000.0) == 700.0

        snap = state.resumed(snap, 9000.0)
        assert snap.configured_duration == 700.0
        assert snap.original_duration == 1000.0
        assert snap.paused_at is None
        assert state.remaining_at(snap, 9100.0) == 600.0

    def test_reset_uses_original_duration(self) -> None:
        snap = state.started(state.IDLE, 1000.0, 0.0)
        snap = state.resumed(state.paused(snap, 400.0), 500.0)
        snap = state.reset(snap, 600.0)
        assert snap.configured_duration == 1000.0
        assert state.remaining_at(snap, 600.0) == 1000.0

    def test_reset_inactive_is_identity(self) -> None:
        snap = state.stopped(state.started(state.IDLE, 1000.0, 0.0))
        assert state.reset(snap, 10.0) is snap

    def test_pause_and_resume_noops(self) -> None:
        running = state.started(state.IDLE, 1000.0, 0.0)
        assert state.resumed(running, 10.0) is running
        assert state.paused(state.IDLE, 10.0) is state.IDLE

    def test_stopped(self) -> None:
        snap = state.stopped(state.paused(state.started(state.IDLE, 1000.0, 0.0), 1.0))
        assert (snap.active, snap.paused, snap.remaining) == (False, False, 0.0)
        assert snap.state == TimerState.IDLE

    def test_expired(self) -> None:
        snap = state.expired(state.started(state.IDLE, 1000.0, 0.0))
        assert snap.active is False
        assert snap.remaining == 0.0
        assert snap.ticking is False

    def test_snapshot_is_frozen(self) -> None:
        with pytest.raises(AttributeError):
            state.IDLE.active = True  # type: ignore[misc]
