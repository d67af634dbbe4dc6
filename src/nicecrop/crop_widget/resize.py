# nicecrop/src/nicecrop/crop_widget/resize.py

"""Displayed-size computation for the crop viewport.

Sizes are in pixels. ``requested`` is the displayed size a caller asks for
(from zooming or fitting an initial crop rectangle); the result is the size
the image is actually displayed at, or ``UNCHANGED`` when that equals the
current displayed size.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

from nicecrop.utils.logging import get_logger

from .errors import PreconditionViolation
from .geometry import UNCHANGED, Size, SizeOrUnchanged, ensure_finite, round_half_up

logger = get_logger(__name__)


@dataclass(frozen=True)
class ResizeOptions:
    """Resize policy for a session."""

    min_crop_size: Optional[Size] = None
    upscale: bool = False


def clamp_min_crop_size(min_crop: Size, original: Size) -> Size:
    """Clamp a minimum crop size into [1, original] on each axis.

    A minimum crop wider or taller than the image is a configuration mistake;
    it is corrected rather than rejected.
    """
    width = max(1, min(min_crop.width, original.width))
    height = max(1, min(min_crop.height, original.height))
    clamped = Size(width, height)
    if clamped != min_crop:
        logger.warning(f"min_crop_size {min_crop} does not fit original {original}, clamped to {clamped}")
    return clamped


def _clamp_to_min_crop(
    width: float,
    height: float,
    viewport: Size,
    original: Size,
    min_crop: Size,
) -> Tuple[float, float]:
    """Shrink (width, height) so the viewport never selects less than min_crop."""
    max_width = viewport.width * original.width / min_crop.width
    max_height = viewport.height * original.height / min_crop.height

    if width <= max_width and height <= max_height:
        return width, height

    # Scale uniformly onto the boundary of the tighter axis.
    factor = min(max_width / width, max_height / height)
    logger.debug(
        f"min crop clamp: {width:.1f}x{height:.1f} -> "
        f"{width * factor:.1f}x{height * factor:.1f} (limit {max_width:.1f}x{max_height:.1f})"
    )
    return width * factor, height * factor


def _fit_to_viewport(width: float, height: float, viewport: Size, original: Size) -> Tuple[float, float]:
    """Make (width, height) cover the viewport without distorting the image."""
    vw, vh = viewport.width, viewport.height
    aspect = original.width / original.height

    if width >= vw and height >= vh:
        return width, height

    if width >= vw:
        # Height falls short: pin it to the viewport, derive width.
        new_height = float(vh)
        new_width = new_height * aspect
        if new_width < vw:
            new_width = float(vw)
            new_height = new_width / aspect
        return new_width, new_height

    if height >= vh:
        new_width = float(vw)
        new_height = new_width / aspect
        if new_height < vh:
            new_height = float(vh)
            new_width = new_height * aspect
        return new_width, new_height

    # Neither axis covered: smallest aspect-preserving cover.
    scale = max(vw / original.width, vh / original.height)
    return original.width * scale, original.height * scale


def resize_image(
    requested: Tuple[float, float],
    viewport: Size,
    original: Size,
    current: Optional[Size],
    options: ResizeOptions,
    *,
    zoom: bool = False,
) -> SizeOrUnchanged:
    """Compute the displayed size for a requested size.

    Args:
        requested: Requested (width, height), may be fractional.
        viewport: Current viewport size.
        original: Native size of the image, never zero-area.
        current: Currently displayed size, or None before the first fit.
        options: No-upscale and minimum-crop policy.
        zoom: True for zoom-driven requests; only those honor min_crop_size.

    Returns:
        The new displayed Size, or UNCHANGED if it equals ``current``.
    """
    width, height = requested
    ensure_finite(width, height)
    if original.width <= 0 or original.height <= 0:
        raise PreconditionViolation(f"original size must be known before resizing, got {original}")
    if width < 0 or height < 0:
        raise PreconditionViolation(f"requested size must be non-negative, got {width}x{height}")

    if not options.upscale:
        width = min(width, original.width)
        height = min(height, original.height)

    if zoom and options.min_crop_size is not None and width > 0 and height > 0:
        min_crop = clamp_min_crop_size(options.min_crop_size, original)
        width, height = _clamp_to_min_crop(width, height, viewport, original, min_crop)

    width, height = _fit_to_viewport(width, height, viewport, original)

    new_size = Size(round_half_up(width), round_half_up(height))
    if current is not None and new_size == current:
        return UNCHANGED

    logger.debug(f"resize: requested {requested[0]:.1f}x{requested[1]:.1f} -> {new_size}")
    return new_size
