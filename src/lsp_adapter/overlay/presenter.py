"""Mounts at most one overlay at a time and keeps it on screen."""

from __future__ import annotations

from typing import Callable, Optional, Protocol

from lsp_adapter.buffer import ScreenPoint, Size
from lsp_adapter.completion import HintList
from lsp_adapter.runtime import telemetry

from .content import OverlayContent
from .placement import final_overlay_point, initial_overlay_point


class OverlayHandle(Protocol):
    """A mounted overlay element owned by the host."""

    def move_to(self, point: ScreenPoint) -> None:
        ...

    def measure(self) -> Size:
        ...

    def contains(self, target: object) -> bool:
        ...

    def remove(self) -> None:
        ...


class OverlayHost(Protocol):
    def mount_overlay(
        self, content: OverlayContent, point: ScreenPoint
    ) -> OverlayHandle:
        ...

    def after_layout(self, callback: Callable[[], None]) -> None:
        ...

    def line_height(self) -> float:
        ...

    def show_hints(self, hints: HintList) -> None:
        ...

    def close_hints(self) -> None:
        ...


class OverlayPresenter:
    """Singleton overlay slot plus the completion hint popup."""

    def __init__(self, host: OverlayHost) -> None:
        self._host = host
        self._handle: Optional[OverlayHandle] = None
        self._content: Optional[OverlayContent] = None
        self._generation = 0
        self._hints_open = False

    @property
    def is_open(self) -> bool:
        return self._handle is not None

    @property
    def content(self) -> Optional[OverlayContent]:
        return self._content

    @property
    def hints_open(self) -> bool:
        return self._hints_open

    def show(self, content: OverlayContent, target: ScreenPoint) -> None:
        self.remove()
        line_height = self._host.line_height()
        handle = self._host.mount_overlay(
            content, initial_overlay_point(target, line_height)
        )
        self._generation += 1
        generation = self._generation
        self._handle = handle
        self._content = content
        telemetry.record_event(
            "overlay.show",
            data={"kind": type(content).__name__, "x": target.x, "y": target.y},
        )
        self._host.after_layout(lambda: self._reposition(generation, target))

    def _reposition(self, generation: int, target: ScreenPoint) -> None:
        # The overlay may have been replaced or removed before layout ran.
        if generation != self._generation or self._handle is None:
            return
        measured = self._handle.measure()
        self._handle.move_to(
            final_overlay_point(target, measured, self._host.line_height())
        )

    def remove(self) -> None:
        handle = self._handle
        if handle is None:
            return
        self._handle = None
        self._content = None
        self._generation += 1
        handle.remove()

    def contains(self, target: object) -> bool:
        return self._handle is not None and self._handle.contains(target)

    def handle_outside_click(self, target: object) -> bool:
        """Close the overlay unless ``target`` is inside it."""

        if self._handle is None or self._handle.contains(target):
            return False
        self.remove()
        return True

    def show_hints(self, hints: HintList) -> None:
        self._host.show_hints(hints)
        self._hints_open = True

    def close_hints(self) -> None:
        if self._hints_open:
            self._host.close_hints()
            self._hints_open = False

    def dispose(self) -> None:
        self.remove()
        self._host.close_hints()
        self._hints_open = False


__all__ = ["OverlayHandle", "OverlayHost", "OverlayPresenter"]
