from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, List


@dataclass(eq=False)
class TimerHandle:
    interval_ms: int
    callback: Callable[[], None] = field(repr=False)
    due_ms: int
    cancelled: bool = False

    def cancel(self) -> None:
        self.cancelled = True

    @property
    def active(self) -> bool:
        return not self.cancelled


class Scheduler:
    """Cooperative interval timers driven by an explicit millisecond clock.

    Nothing runs in the background: time only moves when :meth:`advance` is
    called, and every callback runs to completion before the next one fires.
    A front end advances the clock once per frame; tests advance it by hand.
    """

    def __init__(self, now_ms: int = 0) -> None:
        self.now_ms = int(now_ms)
        self._timers: List[TimerHandle] = []

    def call_every(self, interval_ms: int, callback: Callable[[], None]) -> TimerHandle:
        interval_ms = int(interval_ms)
        if interval_ms <= 0:
            raise ValueError(f"interval must be positive, got {interval_ms}")
        self._timers = [t for t in self._timers if t.active]
        handle = TimerHandle(interval_ms=interval_ms, callback=callback, due_ms=self.now_ms + interval_ms)
        self._timers.append(handle)
        return handle

    def pending(self) -> int:
        return sum(1 for t in self._timers if t.active)

    def advance(self, elapsed_ms: int) -> int:
        """Move the clock forward, firing due timers in order. Returns the number fired."""
        elapsed_ms = int(elapsed_ms)
        if elapsed_ms < 0:
            raise ValueError(f"elapsed time must be non-negative, got {elapsed_ms}")
        target = self.now_ms + elapsed_ms
        fired = 0
        while True:
            # Callbacks may cancel or arm timers, so re-scan after each one
            self._timers = [t for t in self._timers if t.active]
            due = [t for t in self._timers if t.due_ms <= target]
            if not due:
                break
            handle = min(due, key=lambda t: t.due_ms)
            self.now_ms = handle.due_ms
            handle.due_ms += handle.interval_ms
            handle.callback()
            fired += 1
        self.now_ms = target
        return fired
