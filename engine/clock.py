"""Schedulers for the engine's paced actions.

The engine never sleeps. Anything that should happen "a moment later"
(dealing, the next opponent card, clearing a finished trick) is handed to a
scheduler as a callback with a delay in milliseconds. Which scheduler is used
decides how that delay is honoured:

* ``ManualScheduler`` keeps a virtual clock that only moves when told to,
  which makes mid-delay states observable in tests.
* ``WallClockScheduler`` follows real elapsed time and is driven by polling.
* ``ImmediateScheduler`` ignores delays entirely for headless play.
"""

from __future__ import annotations

import heapq
import itertools
import time
from collections import deque
from dataclasses import dataclass, field
from typing import Callable, Deque, List

Callback = Callable[[], None]


@dataclass(order=True)
class Timer:
    due: float
    seq: int
    callback: Callback = field(compare=False, repr=False)
    cancelled: bool = field(default=False, compare=False)
    fired: bool = field(default=False, compare=False)

    @property
    def active(self) -> bool:
        return not (self.cancelled or self.fired)

    def cancel(self) -> None:
        self.cancelled = True

    def fire(self) -> None:
        self.fired = True
        self.callback()


class Scheduler:
    """Base class for callback schedulers."""

    def call_later(self, delay_ms: float, callback: Callback) -> Timer:
        raise NotImplementedError

    def pending(self) -> int:
        raise NotImplementedError


class ManualScheduler(Scheduler):
    def __init__(self) -> None:
        self.now: float = 0.0
        self._queue: List[Timer] = []
        self._seq = itertools.count()

    def call_later(self, delay_ms: float, callback: Callback) -> Timer:
        if delay_ms < 0:
            raise ValueError("Delay must be non-negative.")
        timer = Timer(self.now + delay_ms, next(self._seq), callback)
        heapq.heappush(self._queue, timer)
        return timer

    def pending(self) -> int:
        return sum(1 for timer in self._queue if timer.active)

    def advance(self, delay_ms: float) -> int:
        """Move the clock forward, firing every timer that falls due on the way."""
        target = self.now + delay_ms
        fired = 0
        while self._queue and self._queue[0].due <= target:
            timer = heapq.heappop(self._queue)
            if not timer.active:
                continue
            self.now = max(self.now, timer.due)
            timer.fire()
            fired += 1
        self.now = max(self.now, target)
        return fired

    def run_until_idle(self, max_callbacks: int = 10_000) -> int:
        """Fire everything queued, including timers scheduled along the way."""
        fired = 0
        while self._queue:
            timer = heapq.heappop(self._queue)
            if not timer.active:
                continue
            self.now = max(self.now, timer.due)
            timer.fire()
            fired += 1
            if fired >= max_callbacks:
                raise RuntimeError(f"Scheduler still busy after {max_callbacks} callbacks.")
        return fired


class WallClockScheduler(ManualScheduler):
    def __init__(self, clock: Callable[[], float] = time.monotonic) -> None:
        super().__init__()
        self._clock = clock
        self._origin = clock()

    def _elapsed_ms(self) -> float:
        return (self._clock() - self._origin) * 1000.0

    def call_later(self, delay_ms: float, callback: Callback) -> Timer:
        self.now = max(self.now, self._elapsed_ms())
        return super().call_later(delay_ms, callback)

    def poll(self) -> int:
        return self.advance(max(0.0, self._elapsed_ms() - self.now))


class ImmediateScheduler(Scheduler):
    def __init__(self) -> None:
        self._queue: Deque[Timer] = deque()
        self._seq = itertools.count()
        self._draining = False

    def call_later(self, delay_ms: float, callback: Callback) -> Timer:
        timer = Timer(0.0, next(self._seq), callback)
        self._queue.append(timer)
        if not self._draining:
            self._drain()
        return timer

    def pending(self) -> int:
        return sum(1 for timer in self._queue if timer.active)

    def _drain(self) -> None:
        self._draining = True
        try:
            while self._queue:
                timer = self._queue.popleft()
                if timer.active:
                    timer.fire()
        finally:
            self._draining = False
