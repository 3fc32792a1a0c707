"""Session configuration."""

from __future__ import annotations

from dataclasses import dataclass

from sessiontimeout.core.timer import InvalidArgumentError, validate_duration

DEFAULT_WARNING_DURATION_MS = 60_000.0
DEFAULT_POLL_INTERVAL_MS = 1_000.0


@dataclass(frozen=True)
class SessionConfig:
    """Settings for a :class:`~sessiontimeout.core.session.SessionTimeout`.

    All durations are milliseconds.  ``warning_duration_ms`` is how long
    before expiry the warning callback fires.  ``pause_on_background`` makes
    host background transitions pause the countdown.
    """

    timeout_ms: float
    warning_duration_ms: float = DEFAULT_WARNING_DURATION_MS
    enabled: bool = True
    pause_on_background: bool = False
    poll_interval_ms: float = DEFAULT_POLL_INTERVAL_MS

    def __post_init__(self) -> None:
        validate_duration(self.timeout_ms, "timeout_ms")
        validate_duration(self.warning_duration_ms, "warning_duration_ms")
        if validate_duration(self.poll_interval_ms, "poll_interval_ms") == 0:
            raise InvalidArgumentError("poll_interval_ms must be greater than zero")
