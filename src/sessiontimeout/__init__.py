"""sessiontimeout: a pausable countdown timer with session-timeout semantics."""

from sessiontimeout.core.config import SessionConfig
from sessiontimeout.core.scheduler import AsyncioScheduler, Scheduler, ThreadingScheduler
from sessiontimeout.core.session import AppState, SessionStatus, SessionTimeout
from sessiontimeout.core.state import TimerSnapshot, TimerState
from sessiontimeout.core.timer import InvalidArgumentError, Timer

__version__ = "0.1.0"

__all__ = [
    "AppState",
    "AsyncioScheduler",
    "InvalidArgumentError",
    "Scheduler",
    "SessionConfig",
    "SessionStatus",
    "SessionTimeout",
    "ThreadingScheduler",
    "Timer",
    "TimerSnapshot",
    "TimerState",
]
