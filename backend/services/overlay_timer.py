"""
Cancellable deferred callbacks for the terminal overlay reveal.
"""

import logging
import threading
from typing import Callable, List, Optional, Tuple

logger = logging.getLogger(__name__)


class TimerHandle:
    """A scheduled callback that can be cancelled until it fires."""

    def __init__(self, callback: Callable[[], None]):
        self._callback = callback
        self._lock = threading.Lock()
        self.cancelled = False
        self.fired = False
        self._timer: Optional[threading.Timer] = None

    @property
    def pending(self) -> bool:
        return not (self.cancelled or self.fired)

    def cancel(self) -> None:
        with self._lock:
            if self.fired:
                return
            self.cancelled = True
        if self._timer is not None:
            self._timer.cancel()

    def fire(self) -> None:
        with self._lock:
            if self.cancelled or self.fired:
                return
            self.fired = True
        self._callback()


class ThreadingScheduler:
    """Runs callbacks on daemon threading.Timer threads."""

    def call_later(self, delay_ms: int, callback: Callable[[], None]) -> TimerHandle:
        handle = TimerHandle(callback)
        timer = threading.Timer(max(0, delay_ms) / 1000.0, handle.fire)
        timer.daemon = True
        handle._timer = timer
        timer.start()
        return handle


class ManualScheduler:
    """
    Scheduler driven by an explicit clock, for tests and the autoplay CLI.

    Callbacks fire in due-time order when ``advance`` moves the clock past
    them.
    """

    def __init__(self):
        self.now_ms = 0
        self._scheduled: List[Tuple[int, int, TimerHandle]] = []
        self._seq = 0

    def call_later(self, delay_ms: int, callback: Callable[[], None]) -> TimerHandle:
        handle = TimerHandle(callback)
        self._seq += 1
        self._scheduled.append((self.now_ms + max(0, delay_ms), self._seq, handle))
        return handle

    @property
    def pending_count(self) -> int:
        return sum(1 for _, _, handle in self._scheduled if handle.pending)

    def advance(self, ms: int) -> int:
        """Move the clock forward and fire everything now due. Returns how many fired."""
        self.now_ms += ms
        due = sorted(item for item in self._scheduled if item[0] <= self.now_ms)
        self._scheduled = [item for item in self._scheduled if item[0] > self.now_ms]
        fired = 0
        for _, _, handle in due:
            if handle.pending:
                handle.fire()
                fired += 1
        return fired
