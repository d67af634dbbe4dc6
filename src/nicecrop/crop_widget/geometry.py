# nicecrop/src/nicecrop/crop_widget/geometry.py

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Literal, Sequence, Union

from .errors import PreconditionViolation

RIGHT_ANGLES = (0, 90, 180, 270)


class Unchanged(Enum):
    """Sentinel type for resize/zoom requests that would not change anything."""

    UNCHANGED = "unchanged"

    def __repr__(self) -> str:
        return "UNCHANGED"


UNCHANGED = Unchanged.UNCHANGED
UnchangedType = Literal[Unchanged.UNCHANGED]


def ensure_finite(*values: float) -> None:
    """Raise PreconditionViolation if any value is NaN or infinite."""
    for v in values:
        if isinstance(v, bool) or not isinstance(v, (int, float)):
            raise PreconditionViolation(f"expected a number, got {v!r}")
        if not math.isfinite(v):
            raise PreconditionViolation(f"expected a finite number, got {v!r}")


def round_half_up(value: float) -> int:
    """Round halves towards +inf, as the translator does (2.5 -> 3, -2.5 -> -2)."""
    return int(math.floor(value + 0.5))


@dataclass(frozen=True)
class Size:
    """Pixel extent as (width, height)."""

    width: int
    height: int

    def __post_init__(self) -> None:
        ensure_finite(self.width, self.height)
        if self.width < 0 or self.height < 0:
            raise PreconditionViolation(f"size must be non-negative, got {self.width}x{self.height}")

    @property
    def area(self) -> int:
        return self.width * self.height

    @property
    def is_landscape(self) -> bool:
        return self.width >= self.height

    def swapped(self) -> Size:
        return Size(self.height, self.width)

    def to_list(self) -> list[int]:
        return [self.width, self.height]

    @classmethod
    def from_list(cls, data: Sequence[int]) -> Size:
        w, h = data
        return cls(int(w), int(h))

    def __str__(self) -> str:
        return f"{self.width}x{self.height}"


@dataclass(frozen=True)
class Point:
    """Integer pixel position."""

    x: int
    y: int

    def to_list(self) -> list[int]:
        return [self.x, self.y]


# The displayed image's top-left relative to the viewport's top-left.
Offset = Point


@dataclass(frozen=True)
class Rect:
    """Two-point rectangle: point1 is top-left, point2 is bottom-right."""

    point1: Point
    point2: Point

    @property
    def width(self) -> int:
        return self.point2.x - self.point1.x

    @property
    def height(self) -> int:
        return self.point2.y - self.point1.y

    def normalized(self) -> Rect:
        x1, x2 = sorted((self.point1.x, self.point2.x))
        y1, y2 = sorted((self.point1.y, self.point2.y))
        return Rect(Point(x1, y1), Point(x2, y2))

    def to_list(self) -> list[list[int]]:
        """Persisted form: [[x1, y1], [x2, y2]]."""
        return [self.point1.to_list(), self.point2.to_list()]

    @classmethod
    def from_list(cls, data: Sequence[Sequence[float]]) -> Rect:
        (x1, y1), (x2, y2) = data
        ensure_finite(x1, y1, x2, y2)
        return cls(Point(round_half_up(x1), round_half_up(y1)), Point(round_half_up(x2), round_half_up(y2)))

    @classmethod
    def from_coords(cls, x1: float, y1: float, x2: float, y2: float) -> Rect:
        return cls.from_list([[x1, y1], [x2, y2]])


@dataclass(frozen=True)
class Frame:
    """A coordinate space: its extent plus an optional rotation in degrees.

    Rotation is normalized into [0, 360). Only right angles are supported.
    """

    size: Size
    rotation: int = field(default=0)

    def __post_init__(self) -> None:
        ensure_finite(self.rotation)
        rotation = self.rotation % 360
        if rotation not in RIGHT_ANGLES:
            raise PreconditionViolation(f"rotation must be a multiple of 90 degrees, got {self.rotation}")
        object.__setattr__(self, "rotation", int(rotation))

    def to_dict(self) -> dict[str, Any]:
        return {"size": self.size.to_list(), "rotation": self.rotation}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Frame:
        return cls(Size.from_list(data["size"]), int(data.get("rotation", 0)))


SizeOrUnchanged = Union[Size, UnchangedType]
