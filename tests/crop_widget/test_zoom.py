# nicecrop/tests/crop_widget/test_zoom.py

from __future__ import annotations

import math

import pytest

from nicecrop.crop_widget.errors import PreconditionViolation
from nicecrop.crop_widget.geometry import UNCHANGED, Point, Size
from nicecrop.crop_widget.resize import ResizeOptions
from nicecrop.crop_widget.zoom import zoom_image

ORIGINAL = Size(1000, 1000)
VIEWPORT = Size(200, 200)


def _center_fraction(size: Size, offset: Point) -> tuple[float, float]:
    """Image point under the viewport center, as a fraction of the image."""
    return (
        (-offset.x + VIEWPORT.width / 2) / size.width,
        (-offset.y + VIEWPORT.height / 2) / size.height,
    )


def test_zoom_keeps_center() -> None:
    size, offset = zoom_image(2.0, VIEWPORT, ORIGINAL, Size(200, 200), Point(0, 0), ResizeOptions())
    assert size == Size(400, 400)
    assert offset == Point(-100, -100)
    assert _center_fraction(size, offset) == pytest.approx((0.5, 0.5))


def test_zoom_keeps_center_when_panned() -> None:
    before_size, before_offset = Size(400, 400), Point(-150, -130)
    size, offset = zoom_image(1.5, VIEWPORT, ORIGINAL, before_size, before_offset, ResizeOptions())
    assert size == Size(600, 600)
    assert offset == Point(-275, -245)
    assert _center_fraction(size, offset) == pytest.approx(_center_fraction(before_size, before_offset))


def test_zoom_roundtrip() -> None:
    """zoom(r) then zoom(1 / achieved r) restores size and offset."""
    start_size, start_offset = Size(400, 400), Point(-150, -130)
    size, offset = zoom_image(1.5, VIEWPORT, ORIGINAL, start_size, start_offset, ResizeOptions())
    achieved = size.width / start_size.width

    back_size, back_offset = zoom_image(1 / achieved, VIEWPORT, ORIGINAL, size, offset, ResizeOptions())
    assert back_size == start_size
    assert abs(back_offset.x - start_offset.x) <= 1
    assert abs(back_offset.y - start_offset.y) <= 1


def test_zoom_at_limit_is_noop() -> None:
    """Without upscale, zooming in on an image at its original size does nothing."""
    result = zoom_image(2.0, VIEWPORT, ORIGINAL, Size(1000, 1000), Point(-400, -400), ResizeOptions())
    assert result is UNCHANGED


def test_zoom_out_at_fit_is_noop() -> None:
    result = zoom_image(0.5, VIEWPORT, ORIGINAL, Size(200, 200), Point(0, 0), ResizeOptions())
    assert result is UNCHANGED


def test_zoom_uses_achieved_ratio() -> None:
    """A clamped zoom still keeps the center: offsets follow the achieved ratio."""
    viewport = Size(500, 500)
    opts = ResizeOptions(min_crop_size=Size(100, 100), upscale=True)

    size, offset = zoom_image(12.0, viewport, ORIGINAL, Size(500, 500), Point(0, 0), opts)
    assert size == Size(5000, 5000)
    # center stays at the image center: 2500 - 250
    assert offset == Point(-2250, -2250)


def test_min_crop_boundary_through_zoom() -> None:
    viewport = Size(500, 500)
    opts = ResizeOptions(min_crop_size=Size(100, 100), upscale=True)

    size, _ = zoom_image(9.0, viewport, ORIGINAL, Size(500, 500), Point(0, 0), opts)
    assert size == Size(4500, 4500)

    size, _ = zoom_image(10.0, viewport, ORIGINAL, Size(500, 500), Point(0, 0), opts)
    assert size == Size(5000, 5000)

    assert zoom_image(1.1, viewport, ORIGINAL, Size(5000, 5000), Point(0, 0), opts) is UNCHANGED


def test_zoom_rounds_half_up() -> None:
    """306 * 1.25 = 382.5 is displayed at 383, not 382."""
    size, _ = zoom_image(1.25, VIEWPORT, ORIGINAL, Size(306, 306), Point(0, 0), ResizeOptions())
    assert size == Size(383, 383)


@pytest.mark.parametrize("ratio",[0.0, -1.0, math.nan, math.inf])
def test_invalid_ratio_rejected(ratio: float) -> None:
    with pytest.raises(PreconditionViolation):
        zoom_image(ratio, VIEWPORT, ORIGINAL, Size(200, 200), Point(0, 0), ResizeOptions())
