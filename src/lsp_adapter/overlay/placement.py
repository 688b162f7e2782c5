"""Pure placement math for overlays anchored to a text line."""

from __future__ import annotations

from lsp_adapter.buffer import ScreenPoint, Size


def initial_overlay_point(target: ScreenPoint, line_height: float) -> ScreenPoint:
    """First guess before the overlay is measured: one line above the target."""

    return ScreenPoint(target.x, target.y - line_height)


def final_overlay_point(
    target: ScreenPoint, measured: Size, line_height: float
) -> ScreenPoint:
    """Sit the overlay's bottom edge on the target line.

    When that would push the top above the viewport, drop it one line below
    the target instead.
    """

    top = target.y - measured.height
    if top < 0:
        top = target.y + line_height
    return ScreenPoint(target.x, top)


__all__ = ["final_overlay_point", "initial_overlay_point"]
