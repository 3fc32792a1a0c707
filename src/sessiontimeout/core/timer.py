"""Timer engine -- a pausable countdown with one-shot expiry scheduling."""

from __future__ import annotations

import logging
import math
import threading
import time
from collections.abc import Callable
from types import TracebackType

from sessiontimeout.core import state
from sessiontimeout.core.scheduler import Handle, Scheduler, ThreadingScheduler
from sessiontimeout.core.state import TimerSnapshot, TimerState

logger = logging.getLogger(__name__)


class InvalidArgumentError(ValueError):
    """Raised when a duration is negative, non-finite or not a number."""


def _monotonic_ms() -> float:
    return time.monotonic() * 1000.0


def validate_duration(value: object, name: str = "duration_ms") -> float:
    """Return *value* as a float, or raise ``InvalidArgumentError``."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise InvalidArgumentError(f"{name} must be a number, got {type(value).__name__}")
    if not math.isfinite(value) or value < 0:
        raise InvalidArgumentError(f"{name} must be a finite non-negative number, got {value}")
    return float(value)


class Timer:
    """A pausable countdown timer that expires on its own.

    Remaining time is always computed from the clock on demand, so queries
    never drift from the scheduled expiry.  At most one expiry callback is
    pending at any time: every operation that re-arms or ends the countdown
    cancels the previous one first.

    Calls are expected to come from one owner thread or event loop.  The
    expiry callback may fire on another thread (``ThreadingScheduler``), so
    it and the public operations share a re-entrant lock, and a callback
    that was superseded before it acquired the lock does nothing.
    """

    def __init__(
        self,
        scheduler: Scheduler | None = None,
        clock: Callable[[], float] | None = None,
    ) -> None:
        self._scheduler: Scheduler = scheduler if scheduler is not None else ThreadingScheduler()
        self._clock: Callable[[], float] = clock if clock is not None else _monotonic_ms
        self._snapshot: TimerSnapshot = state.IDLE
        self._pending: Handle | None = None
        self._generation: int = 0
        self._lock = threading.RLock()

    # -- public interface ----------------------------------------------------

    def start(self, duration_ms: float) -> None:
        """Start a countdown of *duration_ms* milliseconds.

        Replaces any run in progress, paused or not.
        """
        duration = validate_duration(duration_ms)
        with self._lock:
            self._cancel_pending()
            self._snapshot = state.started(self._snapshot, duration, self._clock())
            self._arm(duration)

    def stop(self) -> None:
        """Cancel the countdown.  Safe to call at any time."""
        with self._lock:
            self._cancel_pending()
            self._snapshot = state.stopped(self._snapshot)

    def reset(self) -> None:
        """Restart the countdown from the duration given to the last :meth:`start`.

        Does nothing when the timer is idle (never started, stopped or
        expired).  A paused timer is re-armed and starts ticking again.
        """
        with self._lock:
            if not self._snapshot.active:
                return
            self._cancel_pending()
            self._snapshot = state.reset(self._snapshot, self._clock())
            self._arm(self._snapshot.configured_duration)

    def pause(self) -> None:
        """Freeze the remaining time.  Does nothing unless running."""
        with self._lock:
            if not self._snapshot.ticking:
                return
            self._cancel_pending()
            self._snapshot = state.paused(self._snapshot, self._clock())
            logger.debug("Timer paused with %.0f ms remaining", self._snapshot.remaining)

    def resume(self) -> None:
        """Continue a paused countdown.  Does nothing unless paused."""
        with self._lock:
            if self._snapshot.state is not TimerState.PAUSED:
                return
            self._snapshot = state.resumed(self._snapshot, self._clock())
            self._arm(self._snapshot.configured_duration)

    def get_remaining(self) -> float:
        """Return the remaining time in milliseconds (0.0 when idle)."""
        with self._lock:
            return state.remaining_at(self._snapshot, self._clock())

    def is_active(self) -> bool:
        """Return True only while the countdown is ticking.

        A paused timer is not active.
        """
        with self._lock:
            return self._snapshot.ticking

    def get_state(self) -> TimerState:
        """Return the current timer state."""
        with self._lock:
            return self._snapshot.state

    def get_original_duration(self) -> float:
        """Return the duration in milliseconds given to the last :meth:`start`."""
        with self._lock:
            return self._snapshot.original_duration

    def snapshot(self) -> TimerSnapshot:
        """Return the current immutable state value."""
        with self._lock:
            return self._snapshot

    def close(self) -> None:
        """Stop the countdown so no callback fires after teardown."""
        self.stop()

    def __enter__(self) -> Timer:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    # -- private helpers -----------------------------------------------------

    def _arm(self, duration: float) -> None:
        """Schedule the expiry callback.  The caller holds the lock."""
        if self._pending is not None:
            raise RuntimeError("expiry callback already pending")
        self._generation += 1
        generation = self._generation
        self._pending = self._scheduler.schedule(duration, lambda: self._expire(generation))
        logger.debug("Timer armed for %.0f ms (generation %d)", duration, generation)

    def _cancel_pending(self) -> None:
        """Cancel the pending expiry callback, if any.  The caller holds the lock."""
        if self._pending is None:
            return
        self._pending.cancel()
        self._pending = None
        # a callback already running but blocked on the lock sees a stale generation
        self._generation += 1
        logger.debug("Timer expiry cancelled")

    def _expire(self, generation: int) -> None:
        with self._lock:
            if generation != self._generation or self._pending is None:
                logger.debug("Ignoring stale expiry (generation %d)", generation)
                return
            self._pending = None
            self._snapshot = state.expired(self._snapshot)
            logger.debug("Timer expired")
