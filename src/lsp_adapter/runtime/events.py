"""Subscription primitives with explicit ownership of every listener."""

from __future__ import annotations

from typing import Any, Callable, Dict, List

Disposer = Callable[[], None]


class EventBus:
    """Minimal named-event bus; ``subscribe`` hands back its own disposer."""

    def __init__(self) -> None:
        self._subscribers: Dict[str, List[Callable[..., None]]] = {}

    def subscribe(self, event: str, callback: Callable[..., None]) -> Disposer:
        self._subscribers.setdefault(event, []).append(callback)

        def dispose() -> None:
            listeners = self._subscribers.get(event)
            if listeners and callback in listeners:
                listeners.remove(callback)
                if not listeners:
                    self._subscribers.pop(event, None)

        return dispose

    def emit(self, event: str, *payload: Any) -> None:
        for callback in list(self._subscribers.get(event, ())):
            callback(*payload)

    def listener_count(self, event: str | None = None) -> int:
        if event is not None:
            return len(self._subscribers.get(event, ()))
        return sum(len(listeners) for listeners in self._subscribers.values())


class DisposerStack:
    """Owns disposers and runs them once, in registration order."""

    def __init__(self) -> None:
        self._disposers: List[Disposer] = []
        self._disposed = False

    @property
    def disposed(self) -> bool:
        return self._disposed

    def add(self, disposer: Disposer) -> Disposer:
        if self._disposed:
            # Late registration after teardown: release immediately.
            disposer()
            return disposer
        self._disposers.append(disposer)
        return disposer

    def dispose(self) -> None:
        if self._disposed:
            return
        self._disposed = True
        disposers, self._disposers = self._disposers, []
        for disposer in disposers:
            disposer()

    def __len__(self) -> int:
        return len(self._disposers)


__all__ = ["Disposer", "DisposerStack", "EventBus"]
