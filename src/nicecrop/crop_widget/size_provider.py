# nicecrop/src/nicecrop/crop_widget/size_provider.py

"""Viewport measurement collaborators.

The session never measures anything itself. It asks a SizeProvider once,
caches the answer, and only re-measures when told to.
"""

from __future__ import annotations

from typing import Callable, Optional, Protocol

from nicecrop.utils.logging import get_logger

from .geometry import Size

logger = get_logger(__name__)


class SizeProvider(Protocol):
    """Anything that can report the viewport's inner size."""

    def measure_viewport(self) -> Size: ...


def content_size(
    outer: Size,
    border_left: int = 0,
    border_right: int = 0,
    border_top: int = 0,
    border_bottom: int = 0,
) -> Size:
    """Inner size of a box: the outer size minus its borders, floored at zero."""
    return Size(
        max(0, outer.width - border_left - border_right),
        max(0, outer.height - border_top - border_bottom),
    )


class StaticSizeProvider:
    """Reports a fixed viewport size."""

    def __init__(self, size: Size) -> None:
        self._size = size

    def measure_viewport(self) -> Size:
        return self._size


class CachedSizeProvider:
    """Memoizes the first measurement until ``invalidate()`` is called."""

    def __init__(self, measure: Callable[[], Size]) -> None:
        self._measure = measure
        self._cached: Optional[Size] = None

    def measure_viewport(self) -> Size:
        if self._cached is None:
            self._cached = self._measure()
            logger.debug(f"measured viewport: {self._cached}")
        return self._cached

    def invalidate(self) -> None:
        self._cached = None
