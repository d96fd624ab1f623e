"""
Tick scheduling

The animator and the watch face never sleep or loop on their own. Every tick
re-arms the next one through a Scheduler, so the "loop" only exists while
something keeps scheduling. Two implementations:

- AsyncioScheduler: real timers on the running event loop (loop.call_later)
- ManualScheduler: virtual clock driven explicitly (tests, offline preview)
"""

from __future__ import annotations

import asyncio
import heapq
import itertools
from typing import Callable, List, Optional, Protocol, Tuple

from utils.logger import get_logger, LogCategory

log = get_logger().for_category(LogCategory.SCHEDULER)


class Cancellable(Protocol):
    """Handle returned by Scheduler.schedule()"""

    def cancel(self) -> None:
        ...

    def cancelled(self) -> bool:
        ...


class Scheduler(Protocol):
    """
    Delayed one-shot callback capability injected into time-driven components.

    Example:
        handle = scheduler.schedule(33, animator.advance)
        handle.cancel()  # callback will never run
    """

    def schedule(self, delay_ms: float, callback: Callable[[], None]) -> Cancellable:
        ...


class AsyncioScheduler:
    """
    Scheduler backed by asyncio timers.

    The returned asyncio.TimerHandle already satisfies Cancellable.
    Must be used from inside a running loop unless a loop is passed explicitly.
    """

    def __init__(self, loop: Optional[asyncio.AbstractEventLoop] = None):
        self._loop = loop

    def schedule(self, delay_ms: float, callback: Callable[[], None]) -> asyncio.TimerHandle:
        loop = self._loop or asyncio.get_running_loop()
        return loop.call_later(max(0.0, delay_ms) / 1000.0, callback)


class ManualTimer:
    """Pending callback in a ManualScheduler"""

    def __init__(self, due_ms: float, callback: Callable[[], None]):
        self.due_ms = due_ms
        self.callback = callback
        self._cancelled = False

    def cancel(self) -> None:
        self._cancelled = True

    def cancelled(self) -> bool:
        return self._cancelled

    def __repr__(self) -> str:
        state = "cancelled" if self._cancelled else "pending"
        return f"ManualTimer(due_ms={self.due_ms}, {state})"


class ManualScheduler:
    """
    Virtual-time scheduler.

    Time only moves when advance_time() or run_next() is called. Timers fire in
    due-time order; timers due at the same instant fire in scheduling order.
    Callbacks may schedule further timers, which fire within the same
    advance_time() window if they become due inside it.

    Example:
        scheduler = ManualScheduler()
        animator = GlitchAnimator(scheduler, frames_per_cell=2)
        animator.start("12:00", tick_delay_ms=30)
        scheduler.advance_time(60)   # two ticks
    """

    def __init__(self, start_ms: float = 0.0):
        self._now_ms = start_ms
        self._queue: List[Tuple[float, int, ManualTimer]] = []
        self._seq = itertools.count()
        self.fired_count = 0

    @property
    def now_ms(self) -> float:
        return self._now_ms

    def schedule(self, delay_ms: float, callback: Callable[[], None]) -> ManualTimer:
        timer = ManualTimer(self._now_ms + max(0.0, delay_ms), callback)
        heapq.heappush(self._queue, (timer.due_ms, next(self._seq), timer))
        return timer

    def pending_count(self) -> int:
        return sum(1 for _, _, timer in self._queue if not timer.cancelled())

    def next_due_ms(self) -> Optional[float]:
        self._drop_cancelled()
        return self._queue[0][0] if self._queue else None

    def advance_time(self, delta_ms: float) -> int:
        """
        Move the clock forward, firing every timer due within the window.

        Returns:
            Number of callbacks fired
        """
        if delta_ms < 0:
            raise ValueError(f"Cannot move virtual time backwards ({delta_ms} ms)")

        deadline = self._now_ms + delta_ms
        fired = 0
        while True:
            due = self.next_due_ms()
            if due is None or due > deadline:
                break
            self._fire_next()
            fired += 1

        self._now_ms = deadline
        if fired:
            log.debug(f"Advanced virtual time by {delta_ms} ms", fired=fired, now_ms=deadline)
        return fired

    def run_next(self) -> bool:
        """Jump to the next live timer and fire it. Returns False when idle."""
        if self.next_due_ms() is None:
            return False
        self._fire_next()
        return True

    def run_until_idle(self, max_callbacks: int = 10_000) -> int:
        """Fire timers until none remain (bounded to catch self-rearming loops)."""
        fired = 0
        while self.run_next():
            fired += 1
            if fired >= max_callbacks:
                log.error("Virtual scheduler never went idle", fired=fired,
                          now_ms=self._now_ms, pending=self.pending_count())
                raise RuntimeError(f"Scheduler still busy after {max_callbacks} callbacks")
        return fired

    def _drop_cancelled(self) -> None:
        while self._queue and self._queue[0][2].cancelled():
            heapq.heappop(self._queue)

    def _fire_next(self) -> None:
        due_ms, _, timer = heapq.heappop(self._queue)
        self._now_ms = max(self._now_ms, due_ms)
        self.fired_count += 1
        timer.callback()
