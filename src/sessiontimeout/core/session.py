"""Session timeout -- inactivity deadline built on the timer engine.

The engine never notifies anyone when it expires.  ``SessionTimeout`` is
the embedding layer that polls it, turns expiry into ``on_timeout`` and
near-expiry into ``on_warning``, resets it on user activity, and pauses or
resumes it when the host tells it about foreground/background changes.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum

from sessiontimeout.core.config import SessionConfig
from sessiontimeout.core.state import TimerState
from sessiontimeout.core.timer import Timer

logger = logging.getLogger(__name__)


class AppState(Enum):
    """Host application lifecycle states."""

    ACTIVE = "active"
    INACTIVE = "inactive"
    BACKGROUND = "background"


_BACKGROUND_STATES = frozenset({AppState.INACTIVE, AppState.BACKGROUND})


@dataclass(frozen=True)
class SessionStatus:
    """Result of one :meth:`SessionTimeout.poll`."""

    remaining_ms: float
    is_active: bool
    is_warning: bool
    timed_out: bool


def format_remaining(milliseconds: float) -> str:
    """Format *milliseconds* as ``M:SS``."""
    total = int(milliseconds // 1000)
    return f"{total // 60}:{total % 60:02d}"


class SessionTimeout:
    """Drives a :class:`Timer` as a session inactivity deadline.

    Nothing here runs on its own: the host calls :meth:`poll` periodically
    (every ``config.poll_interval_ms``), :meth:`record_activity` on user
    input and :meth:`handle_app_state` on lifecycle transitions.
    """

    def __init__(
        self,
        config: SessionConfig,
        on_timeout: Callable[[], None],
        on_warning: Callable[[float], None] | None = None,
        timer: Timer | None = None,
    ) -> None:
        self._config = config
        self._on_timeout = on_timeout
        self._on_warning = on_warning
        self._timer: Timer = timer if timer is not None else Timer()
        self._app_state: AppState = AppState.ACTIVE
        self._watching: bool = False
        self._warned: bool = False
        self._timed_out: bool = False

    @property
    def config(self) -> SessionConfig:
        return self._config

    @property
    def timer(self) -> Timer:
        return self._timer

    @property
    def is_warning(self) -> bool:
        return self._warned and self._watching

    @property
    def timed_out(self) -> bool:
        return self._timed_out

    # -- controls ------------------------------------------------------------

    def start(self) -> None:
        """Start a new session countdown.  Skipped when the session is disabled."""
        if not self._config.enabled:
            logger.info("Session timeout disabled; not starting")
            return
        self._timer.start(self._config.timeout_ms)
        self._watching = True
        self._warned = False
        self._timed_out = False
        logger.debug("Session started: %.0f ms", self._config.timeout_ms)

    def stop(self) -> None:
        self._timer.stop()
        self._watching = False
        self._warned = False
        self._timed_out = False

    def pause(self) -> None:
        self._timer.pause()
        # an expired timer does not pause; keep watching so poll() reports it
        if self._timer.get_state() is TimerState.PAUSED:
            self._watching = False

    def resume(self) -> None:
        self._timer.resume()
        if self._timer.is_active():
            self._watching = True

    def reset(self) -> None:
        """Restart the countdown from the full timeout, if a session is running."""
        self._timer.reset()
        self._warned = False
        if self._timer.is_active():
            self._watching = True

    def record_activity(self) -> None:
        """Note user activity; pushes the deadline back to the full timeout."""
        self.reset()

    def handle_app_state(self, next_state: AppState) -> None:
        """React to a host lifecycle transition.

        Only has an effect when ``config.pause_on_background`` is set.
        """
        previous = self._app_state
        self._app_state = next_state
        if not self._config.pause_on_background:
            return
        if previous in _BACKGROUND_STATES and next_state is AppState.ACTIVE:
            logger.debug("Host returned to foreground; resuming session")
            self.resume()
        elif previous is AppState.ACTIVE and next_state in _BACKGROUND_STATES:
            logger.debug("Host went to %s; pausing session", next_state.value)
            self.pause()

    def close(self) -> None:
        self.stop()
        self._timer.close()

    # -- polling -------------------------------------------------------------

    def poll(self) -> SessionStatus:
        """Check the countdown and fire the warning or timeout callback.

        Each callback fires at most once per arm; a reset re-enables the
        warning.
        """
        remaining = self._timer.get_remaining()
        if self._watching:
            if 0.0 < remaining <= self._config.warning_duration_ms and not self._warned:
                self._warned = True
                logger.info("Session expires in %s", format_remaining(remaining))
                if self._on_warning is not None:
                    self._on_warning(remaining)
            if remaining <= 0.0:
                # the expiry callback may not have run yet
                self._timer.stop()
                self._watching = False
                self._warned = False
                self._timed_out = True
                logger.info("Session timed out")
                self._on_timeout()
        return SessionStatus(
            remaining_ms=remaining,
            is_active=self._timer.is_active(),
            is_warning=self.is_warning,
            timed_out=self._timed_out,
        )

    def status(self) -> tuple[str, int]:
        """Return ``(message, exit_code)``."""
        timer_state = self._timer.get_state()
        if timer_state is TimerState.RUNNING:
            return f"{format_remaining(self._timer.get_remaining())} remaining", 0
        if timer_state is TimerState.PAUSED:
            return f"{format_remaining(self._timer.get_remaining())} remaining (paused)", 0
        # watching an idle timer means it expired before the next poll
        if self._timed_out or self._watching:
            return "Session expired", 1
        return "No active session", 1
