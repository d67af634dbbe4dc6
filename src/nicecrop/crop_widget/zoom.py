# nicecrop/src/nicecrop/crop_widget/zoom.py

from __future__ import annotations

from typing import Tuple, Union

from nicecrop.utils.logging import get_logger

from .errors import PreconditionViolation
from .geometry import UNCHANGED, Offset, Size, UnchangedType, ensure_finite
from .position import position_image
from .resize import ResizeOptions, resize_image

logger = get_logger(__name__)


def zoom_image(
    ratio: float,
    viewport: Size,
    original: Size,
    displayed: Size,
    offset: Offset,
    options: ResizeOptions,
) -> Union[Tuple[Size, Offset], UnchangedType]:
    """Scale the displayed image by ``ratio`` around the viewport center.

    ratio > 1 zooms in, ratio < 1 zooms out. The achieved ratio may differ
    from the requested one when a resize limit applies; the new offset is
    computed from the achieved ratio so the image point under the viewport
    center stays put.

    Returns:
        (new displayed size, new offset), or UNCHANGED when the resize
        engine reports no change.
    """
    ensure_finite(ratio)
    if ratio <= 0:
        raise PreconditionViolation(f"zoom ratio must be positive, got {ratio}")

    new_size = resize_image(
        (displayed.width * ratio, displayed.height * ratio),
        viewport,
        original,
        displayed,
        options,
        zoom=True,
    )
    if new_size is UNCHANGED:
        logger.debug(f"zoom: ratio {ratio:.3f} leaves {displayed} unchanged")
        return UNCHANGED

    ratio_x = new_size.width / displayed.width - 1
    ratio_y = new_size.height / displayed.height - 1

    # abs(offset) accounts for the image being pinned to an edge.
    x = offset.x - (abs(offset.x) + viewport.width / 2) * ratio_x
    y = offset.y - (abs(offset.y) + viewport.height / 2) * ratio_y

    new_offset = position_image((x, y), viewport, new_size)
    logger.debug(f"zoom: {displayed} -> {new_size}, offset {offset} -> {new_offset}")
    return new_size, new_offset
