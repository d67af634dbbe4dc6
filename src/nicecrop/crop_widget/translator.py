# nicecrop/src/nicecrop/crop_widget/translator.py

"""Crop rectangle translation between the display frame and an external frame.

The external frame is a caller-defined coordinate space, typically the
original file on a server: possibly a different resolution, possibly stored
rotated by a right angle relative to what the viewport shows.

``to_external`` maps display -> external:

1. scale per axis by ``frame extent / display size``; when the frame is
   rotated and its landscape/portrait orientation disagrees with the
   display's, the frame extent used for scaling is swapped first;
2. rotate by ``frame.rotation`` around the origin;
3. translate back into the frame's positive quadrant
   (90: +width on x, 180: +width on x and +height on y, 270: +height on y);
4. normalize point order and round.

``to_display`` is the exact inverse. Points are handled as a 2x2 numpy
array, one row per point.
"""

from __future__ import annotations

from typing import Dict, Tuple

import numpy as np

from .errors import PreconditionViolation
from .geometry import Frame, Point, Rect, Size

_ROTATIONS: Dict[int, np.ndarray] = {
    0: np.array([[1, 0], [0, 1]], dtype=float),
    90: np.array([[0, -1], [1, 0]], dtype=float),
    180: np.array([[-1, 0], [0, -1]], dtype=float),
    270: np.array([[0, 1], [-1, 0]], dtype=float),
}


def _translation(frame: Frame) -> np.ndarray:
    w, h = frame.size.width, frame.size.height
    return {
        0: np.array([0.0, 0.0]),
        90: np.array([w, 0.0]),
        180: np.array([w, h], dtype=float),
        270: np.array([0.0, h]),
    }[frame.rotation]


def _scale_size(display_size: Size, frame: Frame) -> Size:
    """Frame extent used for scaling, with orientation unified to the display."""
    if frame.rotation != 0 and display_size.is_landscape != frame.size.is_landscape:
        return frame.size.swapped()
    return frame.size


def _scale_factors(display_size: Size, frame: Frame) -> np.ndarray:
    if display_size.width <= 0 or display_size.height <= 0:
        raise PreconditionViolation(f"display size must be non-zero, got {display_size}")
    if frame.size.area == 0:
        raise PreconditionViolation(f"frame size must be non-zero, got {frame.size}")
    target = _scale_size(display_size, frame)
    return np.array([target.width / display_size.width, target.height / display_size.height])


def _to_points(rect: Rect) -> np.ndarray:
    return np.array(
        [[rect.point1.x, rect.point1.y], [rect.point2.x, rect.point2.y]],
        dtype=float,
    )


def _to_rect(points: np.ndarray) -> Rect:
    lo = np.floor(points.min(axis=0) + 0.5).astype(int)
    hi = np.floor(points.max(axis=0) + 0.5).astype(int)
    return Rect(Point(int(lo[0]), int(lo[1])), Point(int(hi[0]), int(hi[1])))


def to_external(rect: Rect, display_size: Size, frame: Frame) -> Rect:
    """Map a rectangle in display pixels into ``frame``."""
    points = _to_points(rect) * _scale_factors(display_size, frame)
    if frame.rotation:
        points = points @ _ROTATIONS[frame.rotation].T + _translation(frame)
    return _to_rect(points)


def to_display(rect: Rect, frame: Frame, display_size: Size) -> Rect:
    """Map a rectangle in ``frame`` back into display pixels."""
    points = _to_points(rect)
    if frame.rotation:
        inverse = _ROTATIONS[(360 - frame.rotation) % 360]
        points = (points - _translation(frame)) @ inverse.T
    points = points / _scale_factors(display_size, frame)
    return _to_rect(points)


def default_square(size: Size) -> Rect:
    """Largest square centered in ``size``."""
    side = min(size.width, size.height)
    x1 = (size.width - side) // 2
    y1 = (size.height - side) // 2
    return Rect(Point(x1, y1), Point(x1 + side, y1 + side))


def rect_extent(rect: Rect) -> Tuple[float, float]:
    """(width, height) of a rectangle as floats, rejecting empty rectangles."""
    if rect.width <= 0 or rect.height <= 0:
        raise PreconditionViolation(f"crop rectangle must have a non-zero area, got {rect.to_list()}")
    return float(rect.width), float(rect.height)
