"""Transient UI surfaces: tooltips, context menus, and the hint popup."""

from .content import (
    ContextMenu,
    HoverText,
    MenuEntry,
    OverlayContent,
    Tooltip,
    TooltipSection,
    normalize_hover_contents,
)
from .placement import final_overlay_point, initial_overlay_point
from .presenter import OverlayHandle, OverlayHost, OverlayPresenter

__all__ = [
    "ContextMenu",
    "HoverText",
    "MenuEntry",
    "OverlayContent",
    "Tooltip",
    "TooltipSection",
    "normalize_hover_contents",
    "final_overlay_point",
    "initial_overlay_point",
    "OverlayHandle",
    "OverlayHost",
    "OverlayPresenter",
]
