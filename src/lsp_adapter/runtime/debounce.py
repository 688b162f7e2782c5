"""Trailing-edge debouncing driven by a host-pumped clock.

Nothing here owns a thread or an event loop. Hosts call ``TimerGroup.poll``
(usually from a UI interval timer) and due callbacks run on that call.
"""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Tuple

Clock = Callable[[], float]


@dataclass
class PendingCall:
    deadline: float
    args: Tuple[Any, ...]
    generation: int


class Debouncer:
    """Delay ``callback`` until ``delay_ms`` passes without another call."""

    def __init__(
        self,
        delay_ms: int,
        callback: Callable[..., None],
        *,
        clock: Clock = time.monotonic,
    ) -> None:
        if delay_ms < 0:
            raise ValueError("delay_ms cannot be negative")
        self.delay_ms = delay_ms
        self._callback = callback
        self._clock = clock
        self._pending: Optional[PendingCall] = None
        self._generation = 0

    @property
    def pending(self) -> bool:
        return self._pending is not None

    def __call__(self, *args: Any) -> None:
        self._generation += 1
        self._pending = PendingCall(
            deadline=self._clock() + self.delay_ms / 1000.0,
            args=args,
            generation=self._generation,
        )

    def cancel(self) -> None:
        self._pending = None

    def poll(self, now: Optional[float] = None) -> bool:
        pending = self._pending
        if pending is None:
            return False
        current = self._clock() if now is None else now
        if pending.deadline > current:
            return False
        return self._fire(pending.generation)

    def flush(self) -> bool:
        if self._pending is None:
            return False
        return self._fire(self._pending.generation)

    def _fire(self, generation: int) -> bool:
        pending = self._pending
        if pending is None or pending.generation != generation:
            return False
        self._pending = None
        self._callback(*pending.args)
        return True


class TimerGroup:
    """Named debouncers sharing one clock, polled together."""

    def __init__(self, *, clock: Clock = time.monotonic) -> None:
        self.clock = clock
        self._timers: Dict[str, Debouncer] = {}

    def debounce(
        self, name: str, delay_ms: int, callback: Callable[..., None]
    ) -> Debouncer:
        if name in self._timers:
            raise ValueError(f"Timer '{name}' already registered")
        debouncer = Debouncer(delay_ms, callback, clock=self.clock)
        self._timers[name] = debouncer
        return debouncer

    def get(self, name: str) -> Debouncer:
        return self._timers[name]

    def poll(self) -> List[str]:
        now = self.clock()
        fired: List[str] = []
        for name, debouncer in list(self._timers.items()):
            if debouncer.poll(now):
                fired.append(name)
        return fired

    def cancel_all(self) -> None:
        for debouncer in self._timers.values():
            debouncer.cancel()


__all__ = ["Clock", "Debouncer", "PendingCall", "TimerGroup"]
