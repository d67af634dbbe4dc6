# nicecrop/src/nicecrop/crop_widget/position.py

from __future__ import annotations

from typing import Tuple

from nicecrop.utils.logging import get_logger

from .geometry import Offset, Point, Rect, Size, ensure_finite, round_half_up

logger = get_logger(__name__)


def _clamp_axis(requested: float, viewport: int, displayed: int) -> int:
    # The image is never inset: leading edge at or before the viewport origin.
    value = round_half_up(requested) if requested < 0 else 0
    # Trailing edge must reach the far side of the viewport.
    if value + displayed < viewport:
        value = -(displayed - viewport)
    return value


def position_image(requested: Tuple[float, float], viewport: Size, displayed: Size) -> Offset:
    """Clamp a requested image offset so the image covers the viewport.

    The result satisfies ``-(displayed.width - viewport.width) <= x <= 0`` and
    the same for ``y`` whenever the displayed image is at least as large as
    the viewport.
    """
    x, y = requested
    ensure_finite(x, y)
    offset = Point(
        _clamp_axis(x, viewport.width, displayed.width),
        _clamp_axis(y, viewport.height, displayed.height),
    )
    if (offset.x, offset.y) != (x, y):
        logger.debug(f"position: requested ({x:.1f}, {y:.1f}) clamped to ({offset.x}, {offset.y})")
    return offset


def visible_rect(offset: Offset, viewport: Size) -> Rect:
    """Viewport window in displayed-image pixels."""
    x1 = -offset.x
    y1 = -offset.y
    return Rect(Point(x1, y1), Point(x1 + viewport.width, y1 + viewport.height))
