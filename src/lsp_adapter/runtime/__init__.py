"""Event plumbing, timers, and telemetry shared by every component."""

from .debounce import Debouncer, TimerGroup
from .events import Disposer, DisposerStack, EventBus

__all__ = [
    "Debouncer",
    "TimerGroup",
    "Disposer",
    "DisposerStack",
    "EventBus",
]
