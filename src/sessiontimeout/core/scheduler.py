"""One-shot delayed callbacks behind a small interface.

The timer engine only needs "run this once after N milliseconds, unless
cancelled first".  Hosts pick the implementation matching their threading
model.
"""

from __future__ import annotations

import asyncio
import threading
from abc import ABC, abstractmethod
from collections.abc import Callable
from typing import Protocol


class Handle(Protocol):
    """A scheduled callback that can still be cancelled."""

    def cancel(self) -> None: ...


class Scheduler(ABC):
    """Schedules one-shot callbacks."""

    @abstractmethod
    def schedule(self, delay_ms: float, callback: Callable[[], None]) -> Handle:
        """Run *callback* once after *delay_ms* milliseconds."""


class ThreadingScheduler(Scheduler):
    """Runs each callback on its own daemon ``threading.Timer`` thread."""

    def schedule(self, delay_ms: float, callback: Callable[[], None]) -> Handle:
        timer = threading.Timer(delay_ms / 1000.0, callback)
        timer.daemon = True
        timer.start()
        return timer


class AsyncioScheduler(Scheduler):
    """Runs callbacks on an asyncio event loop via ``call_later``.

    Must be used from the loop's own thread; the returned
    ``asyncio.TimerHandle`` is cancelled the same way.
    """

    def __init__(self, loop: asyncio.AbstractEventLoop | None = None) -> None:
        self._loop = loop

    def schedule(self, delay_ms: float, callback: Callable[[], None]) -> Handle:
        loop = self._loop if self._loop is not None else asyncio.get_running_loop()
        return loop.call_later(delay_ms / 1000.0, callback)
