"""
Cancellable timers.

Every timer is created through `schedule(delay_ms, callback)` and returns a
handle whose `cancel()` guarantees the callback will not run afterwards.
VirtualScheduler runs on a simulated clock advanced by the caller;
AsyncioScheduler delegates to an event loop.
"""

import asyncio
import heapq
import itertools
from typing import Callable, List, Optional, Protocol, Tuple


class TimerHandle(Protocol):
    @property
    def cancelled(self) -> bool: ...

    def cancel(self) -> None: ...


class Scheduler(Protocol):
    def now(self) -> float:
        """Current time in milliseconds."""
        ...

    def schedule(self, delay_ms: float, callback: Callable[[], None]) -> TimerHandle: ...


class VirtualTimer:
    """Handle for a timer on a VirtualScheduler."""

    def __init__(self, deadline: float, callback: Callable[[], None]):
        self.deadline = deadline
        self.callback = callback
        self._cancelled = False
        self.fired = False

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    def cancel(self) -> None:
        self._cancelled = True


class VirtualScheduler:
    """
    Simulated clock for deterministic timing.

    Timers only fire inside `advance`, in deadline order (ties in scheduling
    order). Timers scheduled by a firing callback run in the same advance if
    their deadline falls inside the window.
    """

    def __init__(self, start_ms: float = 0.0):
        self._now = start_ms
        self._queue: List[Tuple[float, int, VirtualTimer]] = []
        self._counter = itertools.count()

    def now(self) -> float:
        return self._now

    def schedule(self, delay_ms: float, callback: Callable[[], None]) -> VirtualTimer:
        timer = VirtualTimer(self._now + max(0.0, delay_ms), callback)
        heapq.heappush(self._queue, (timer.deadline, next(self._counter), timer))
        return timer

    def advance(self, ms: float) -> int:
        """
        Move the clock forward, firing every due timer.

        Returns:
            Number of callbacks run
        """
        target = self._now + ms
        fired = 0
        while self._queue and self._queue[0][0] <= target:
            deadline, _, timer = heapq.heappop(self._queue)
            self._now = max(self._now, deadline)
            if timer.cancelled:
                continue
            timer.fired = True
            timer.callback()
            fired += 1
        self._now = target
        return fired

    def run_all(self, limit: int = 10_000) -> int:
        """Advance until no live timer remains."""
        fired = 0
        while fired < limit:
            live = [entry for entry in self._queue if not entry[2].cancelled]
            if not live:
                break
            next_deadline = min(entry[0] for entry in live)
            fired += self.advance(max(0.0, next_deadline - self._now))
        return fired

    @property
    def pending_count(self) -> int:
        return sum(1 for _, _, timer in self._queue if not timer.cancelled)


class AsyncioTimer:
    """Handle wrapping an asyncio.TimerHandle."""

    def __init__(self, handle: asyncio.TimerHandle):
        self._handle = handle

    @property
    def cancelled(self) -> bool:
        return self._handle.cancelled()

    def cancel(self) -> None:
        self._handle.cancel()


class AsyncioScheduler:
    """Scheduler backed by an asyncio event loop."""

    def __init__(self, loop: Optional[asyncio.AbstractEventLoop] = None):
        self._loop = loop

    @property
    def loop(self) -> asyncio.AbstractEventLoop:
        if self._loop is None:
            self._loop = asyncio.get_running_loop()
        return self._loop

    def now(self) -> float:
        return self.loop.time() * 1000

    def schedule(self, delay_ms: float, callback: Callable[[], None]) -> AsyncioTimer:
        handle = self.loop.call_later(max(0.0, delay_ms) / 1000, callback)
        return AsyncioTimer(handle)
