"""Shared fixtures: a hand-driven scheduler and clock."""

from __future__ import annotations

from collections.abc import Callable

import pytest

from sessiontimeout.core.scheduler import Scheduler
from sessiontimeout.core.timer import Timer


class ManualHandle:
    """A scheduled callback that only runs when a test fires it."""

    def __init__(self, delay_ms: float, callback: Callable[[], None]) -> None:
        self.delay_ms = delay_ms
        self.callback = callback
        self.cancelled = False
        self.fired = False

    def cancel(self) -> None:
        self.cancelled = True


class ManualScheduler(Scheduler):
    """Records every scheduled callback; tests decide when they fire."""

    def __init__(self) -> None:
        self.handles: list[ManualHandle] = []

    def schedule(self, delay_ms: float, callback: Callable[[], None]) -> ManualHandle:
        handle = ManualHandle(delay_ms, callback)
        self.handles.append(handle)
        return handle

    @property
    def pending(self) -> list[ManualHandle]:
        return [h for h in self.handles if not (h.cancelled or h.fired)]

    def fire_pending(self) -> None:
        """Run every callback that has not been cancelled."""
        for handle in self.pending:
            handle.fired = True
            handle.callback()


class FakeClock:
    """A millisecond clock that moves only when told to."""

    def __init__(self, now: float = 0.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, milliseconds: float) -> None:
        self.now += milliseconds


@pytest.fixture()
def scheduler() -> ManualScheduler:
    return ManualScheduler()


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock(1_000.0)


@pytest.fixture()
def timer(scheduler: ManualScheduler, clock: FakeClock) -> Timer:
    return Timer(scheduler=scheduler, clock=clock)
