# nicecrop/tests/crop_widget/test_translator.py

from __future__ import annotations

import itertools

import pytest

from nicecrop.crop_widget.errors import PreconditionViolation
from nicecrop.crop_widget.geometry import Frame, Rect, Size
from nicecrop.crop_widget.translator import default_square, rect_extent, to_display, to_external


def test_scale_without_rotation() -> None:
    rect = Rect.from_list([[50, 0], [350, 300]])
    out = to_external(rect, Size(400, 300), Frame(Size(800, 600)))
    assert out.to_list() == [[100, 0], [700, 600]]


def test_non_uniform_scale() -> None:
    """Axes scale independently; aspect ratios need not match."""
    rect = Rect.from_list([[0, 0], [400, 300]])
    out = to_external(rect, Size(400, 300), Frame(Size(400, 600)))
    assert out.to_list() == [[0, 0], [400, 600]]


def test_rotation_90_swaps_axes(portrait_frame: Frame) -> None:
    """Landscape display into a portrait frame rotated by 90 degrees.

    Scaling uses the frame's extent swapped to 800x600 (factor 2 on both
    axes), then the rectangle is rotated into the 600x800 stored frame.
    """
    display = Size(400, 300)

    left_square = Rect.from_list([[0, 0], [300, 300]])
    assert to_external(left_square, display, portrait_frame).to_list() == [[0, 0], [600, 600]]

    right_square = Rect.from_list([[100, 0], [400, 300]])
    assert to_external(right_square, display, portrait_frame).to_list() == [[0, 200], [600, 800]]


def test_rotation_90_inverse(portrait_frame: Frame) -> None:
    rect = Rect.from_list([[0, 200], [600, 800]])
    assert to_display(rect, portrait_frame, Size(400, 300)).to_list() == [[100, 0], [400, 300]]


def test_rotation_180() -> None:
    rect = Rect.from_list([[0, 0], [100, 50]])
    out = to_external(rect, Size(400, 300), Frame(Size(400, 300), 180))
    assert out.to_list() == [[300, 250], [400, 300]]


def test_rotation_270() -> None:
    rect = Rect.from_list([[0, 0], [100, 300]])
    out = to_external(rect, Size(400, 300), Frame(Size(600, 800), 270))
    assert out.to_list() == [[0, 600], [600, 800]]


def test_results_are_normalized() -> None:
    for rotation in (0, 90, 180, 270):
        out = to_external(Rect.from_list([[10, 20], [110, 70]]), Size(400, 300), Frame(Size(600, 800), rotation))
        assert out.point1.x <= out.point2.x
        assert out.point1.y <= out.point2.y


def test_roundtrip_all_rotations() -> None:
    """to_display(to_external(r)) recovers r within one pixel."""
    rects = [
        Rect.from_list([[0, 0], [300, 300]]),
        Rect.from_list([[13, 7], [211, 199]]),
        Rect.from_list([[100, 50], [400, 300]]),
    ]
    displays = [Size(400, 300), Size(300, 400), Size(333, 333)]
    frames = [Size(600, 800), Size(800, 600), Size(1021, 767), Size(400, 300)]

    for rect, display, frame_size, rotation in itertools.product(rects, displays, frames, (0, 90, 180, 270)):
        frame = Frame(frame_size, rotation)
        back = to_display(to_external(rect, display, frame), frame, display)
        for got, want in zip(sum(back.to_list(), []), sum(rect.to_list(), [])):
            assert abs(got - want) <= 1, (rect, display, frame, back)


def test_zero_display_size_rejected() -> None:
    with pytest.raises(PreconditionViolation):
        to_external(Rect.from_list([[0, 0], [1, 1]]), Size(0, 10), Frame(Size(10, 10)))


def test_zero_frame_size_rejected() -> None:
    rect = Rect.from_list([[0, 0], [100, 100]])
    with pytest.raises(PreconditionViolation):
        to_display(rect, Frame(Size(0, 800)), Size(400, 300))
    with pytest.raises(PreconditionViolation):
        to_external(rect, Size(400, 300), Frame(Size(600, 0), 90))


def test_default_square() -> None:
    assert default_square(Size(400, 300)).to_list() == [[50, 0], [350, 300]]
    assert default_square(Size(300, 500)).to_list() == [[0, 100], [300, 400]]
    assert default_square(Size(200, 200)).to_list() == [[0, 0], [200, 200]]


def test_rect_extent() -> None:
    assert rect_extent(Rect.from_list([[10, 10], [40, 30]])) == (30.0, 20.0)
    with pytest.raises(PreconditionViolation):
        rect_extent(Rect.from_list([[10, 10], [10, 30]]))
