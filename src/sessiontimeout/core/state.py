"""Timer state -- an immutable countdown value and its transitions.

Every function here is pure: it takes the current :class:`TimerSnapshot`
(and, where time matters, the current clock reading in milliseconds) and
returns the next snapshot.  Scheduling is left to the engine.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum


class TimerState(Enum):
    """Possible states of the timer."""

    IDLE = "idle"
    RUNNING = "running"
    PAUSED = "paused"


@dataclass(frozen=True)
class TimerSnapshot:
    """The countdown at one instant.

    While running, ``remaining`` is stale and the live value is derived from
    ``configured_duration`` and ``last_arm_time``.  While paused it is the
    frozen source of truth.
    """

    original_duration: float = 0.0
    configured_duration: float = 0.0
    remaining: float = 0.0
    last_arm_time: float = 0.0
    active: bool = False
    paused: bool = False
    paused_at: float | None = None

    @property
    def state(self) -> TimerState:
        if not self.active:
            return TimerState.IDLE
        if self.paused:
            return TimerState.PAUSED
        return TimerState.RUNNING

    @property
    def ticking(self) -> bool:
        return self.active and not self.paused


IDLE = TimerSnapshot()


def started(snapshot: TimerSnapshot, duration: float, now: float) -> TimerSnapshot:
    """Begin a fresh run of *duration*, discarding whatever was running."""
    return TimerSnapshot(
        original_duration=duration,
        configured_duration=duration,
        remaining=duration,
        last_arm_time=now,
        active=True,
        paused=False,
    )


def stopped(snapshot: TimerSnapshot) -> TimerSnapshot:
    # original_duration survives so diagnostics can still report it
    return replace(
        snapshot,
        configured_duration=0.0,
        remaining=0.0,
        active=False,
        paused=False,
        paused_at=None,
    )


def reset(snapshot: TimerSnapshot, now: float) -> TimerSnapshot:
    """Re-arm to the duration given to the most recent start.

    A resume narrows ``configured_duration`` to what was left at the pause;
    reset ignores that and goes back to ``original_duration``.  Inactive
    timers are returned unchanged.
    """
    if not snapshot.active:
        return snapshot
    return replace(
        snapshot,
        configured_duration=snapshot.original_duration,
        remaining=snapshot.original_duration,
        last_arm_time=now,
        paused=False,
        paused_at=None,
    )


def paused(snapshot: TimerSnapshot, now: float) -> TimerSnapshot:
    if not snapshot.ticking:
        return snapshot
    return replace(
        snapshot,
        remaining=remaining_at(snapshot, now),
        paused=True,
        paused_at=now,
    )


def resumed(snapshot: TimerSnapshot, now: float) -> TimerSnapshot:
    """Continue from the frozen remaining time."""
    if not (snapshot.active and snapshot.paused):
        return snapshot
    return replace(
        snapshot,
        configured_duration=snapshot.remaining,
        last_arm_time=now,
        paused=False,
        paused_at=None,
    )


def expired(snapshot: TimerSnapshot) -> TimerSnapshot:
    # paused is left alone: a paused timer has no armed callback to expire it
    return replace(snapshot, active=False, remaining=0.0)


def remaining_at(snapshot: TimerSnapshot, now: float) -> float:
    """Return the milliseconds left at clock reading *now*."""
    if not snapshot.active:
        return 0.0
    if snapshot.paused:
        return snapshot.remaining
    elapsed = now - snapshot.last_arm_time
    return max(snapshot.configured_duration - elapsed, 0.0)
