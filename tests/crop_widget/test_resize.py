# nicecrop/tests/crop_widget/test_resize.py

from __future__ import annotations

import logging

import pytest

from nicecrop.crop_widget.errors import PreconditionViolation
from nicecrop.crop_widget.geometry import UNCHANGED, Size
from nicecrop.crop_widget.resize import ResizeOptions, clamp_min_crop_size, resize_image

ORIGINAL = Size(800, 600)
VIEWPORT = Size(200, 150)


def test_no_upscale_never_exceeds_original() -> None:
    """With upscale disabled no request yields a size above the original."""
    requests = [
        (5000, 100),
        (100, 5000),
        (5000, 5000),
        (801, 601),
        (799, 1200),
        (0, 0),
        (250, 160),
    ]
    for w, h in requests:
        size = resize_image((w, h), VIEWPORT, ORIGINAL, None, ResizeOptions())
        assert size.width <= ORIGINAL.width
        assert size.height <= ORIGINAL.height
        assert size.width >= VIEWPORT.width
        assert size.height >= VIEWPORT.height


def test_upscale_allows_larger_sizes() -> None:
    size = resize_image((1600, 1200), VIEWPORT, ORIGINAL, None, ResizeOptions(upscale=True))
    assert size == Size(1600, 1200)


def test_covering_both_axes_is_accepted_as_is() -> None:
    """A request covering the viewport on both axes may change aspect."""
    size = resize_image((400, 400), VIEWPORT, ORIGINAL, None, ResizeOptions())
    assert size == Size(400, 400)


def test_covering_width_only_pins_height() -> None:
    # Height falls short: height becomes 150, width follows the 4:3 aspect.
    size = resize_image((5000, 100), VIEWPORT, ORIGINAL, None, ResizeOptions())
    assert size == Size(200, 150)


def test_covering_height_only_pins_width() -> None:
    size = resize_image((100, 300), VIEWPORT, ORIGINAL, None, ResizeOptions())
    assert size == Size(200, 150)


def test_covering_neither_axis_fills_viewport() -> None:
    size = resize_image((100, 50), VIEWPORT, ORIGINAL, None, ResizeOptions())
    assert size == Size(200, 150)


def test_portrait_image_in_landscape_viewport_covers() -> None:
    """One-axis fit must still cover the viewport when aspects disagree."""
    original = Size(300, 600)
    viewport = Size(400, 300)
    size = resize_image((450, 100), viewport, original, None, ResizeOptions(upscale=True))
    assert size.width >= viewport.width
    assert size.height >= viewport.height
    assert size == Size(400, 800)


def test_rounds_to_integers() -> None:
    size = resize_image((250.4, 180.6), VIEWPORT, ORIGINAL, None, ResizeOptions())
    assert size == Size(250, 181)


def test_unchanged_when_equal_to_current() -> None:
    size = resize_image((200, 150), VIEWPORT, ORIGINAL, Size(200, 150), ResizeOptions())
    assert size is UNCHANGED


def test_zero_area_original_fails_fast() -> None:
    with pytest.raises(PreconditionViolation):
        resize_image((100, 100), VIEWPORT, Size(0, 10), None, ResizeOptions())


def test_non_finite_request_rejected() -> None:
    with pytest.raises(PreconditionViolation):
        resize_image((float("nan"), 100), VIEWPORT, ORIGINAL, None, ResizeOptions())


def test_min_crop_boundary() -> None:
    """Zoom resizes stop where the viewport would select less than min_crop."""
    original = Size(1000, 1000)
    viewport = Size(500, 500)
    opts = ResizeOptions(min_crop_size=Size(100, 100), upscale=True)
    current = Size(500, 500)

    # exactly at the boundary: 500 * 1000 / 100
    assert resize_image((5000, 5000), viewport, original, current, opts, zoom=True) == Size(5000, 5000)
    # above it: clamped
    assert resize_image((6000, 6000), viewport, original, current, opts, zoom=True) == Size(5000, 5000)
    # below it: untouched
    assert resize_image((4999, 4999), viewport, original, current, opts, zoom=True) == Size(4999, 4999)


def test_min_crop_only_applies_to_zoom() -> None:
    original = Size(1000, 1000)
    viewport = Size(500, 500)
    opts = ResizeOptions(min_crop_size=Size(100, 100), upscale=True)
    assert resize_image((6000, 6000), viewport, original, None, opts) == Size(6000, 6000)


def test_min_crop_clamp_preserves_aspect() -> None:
    """Only one axis over the limit still scales both axes together."""
    original = Size(1000, 500)
    viewport = Size(500, 250)
    opts = ResizeOptions(min_crop_size=Size(100, 100), upscale=True)
    # limits: width 500*1000/100 = 5000, height 250*500/100 = 1250
    size = resize_image((4000, 2000), viewport, original, None, opts, zoom=True)
    assert size == Size(2500, 1250)


def test_min_crop_larger_than_original_is_clamped(caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.WARNING):
        clamped = clamp_min_crop_size(Size(2000, 50), Size(1000, 1000))
    assert clamped == Size(1000, 50)
    assert "clamped" in caplog.text

    original = Size(1000, 1000)
    viewport = Size(500, 500)
    opts = ResizeOptions(min_crop_size=Size(2000, 2000), upscale=True)
    # min crop becomes the whole image: no zooming in past the fit size.
    size = resize_image((800, 800), viewport, original, None, opts, zoom=True)
    assert size == Size(500, 500)
