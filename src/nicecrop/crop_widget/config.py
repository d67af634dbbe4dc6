# nicecrop/src/nicecrop/crop_widget/config.py

from __future__ import annotations

import math
from dataclasses import dataclass, fields
from typing import Any, Dict, Optional

from nicecrop.utils.logging import get_logger

from .errors import PreconditionViolation
from .geometry import Size

logger = get_logger(__name__)

DEFAULT_DISPLAY_WIDTH = 400
DEFAULT_DISPLAY_HEIGHT = 300


@dataclass
class CropConfig:
    """Declarative configuration for a crop session and its widget.

    Attributes:
        min_crop_size: Smallest region of the original image the crop window
            may select when zooming in. ``None`` disables the limit. Values
            larger than the original image are clamped to it when the image
            loads.
        upscale: Whether the image may be displayed larger than its original
            size.
        zoom_in_factor: Ratio applied per wheel step towards the viewer.
        zoom_out_factor: Ratio applied per wheel step away from the viewer.
        enable_panning: Whether pointer drags pan the image.
        display_width_px: Viewport width of the widget.
        display_height_px: Viewport height of the widget.
        image_border_width: Border drawn around the viewport, in pixels per
            side. Subtracted when measuring the viewport.
    """

    min_crop_size: Optional[Size] = None
    upscale: bool = False

    # Wheel / zoom behavior
    zoom_in_factor: float = 1.25
    zoom_out_factor: float = 0.8

    # Panning behavior
    enable_panning: bool = True

    # Viewport (outer box, border included)
    display_width_px: Optional[int] = None
    display_height_px: Optional[int] = None
    image_border_width: int = 0

    @property
    def display_size(self) -> Size:
        """Outer size of the viewport element, border included."""
        w = self.display_width_px if self.display_width_px is not None else DEFAULT_DISPLAY_WIDTH
        h = self.display_height_px if self.display_height_px is not None else DEFAULT_DISPLAY_HEIGHT
        return Size(int(w), int(h))

    def validate(self) -> None:
        """Raise PreconditionViolation for values no session can work with."""
        for name in ("zoom_in_factor", "zoom_out_factor"):
            value = getattr(self, name)
            if not isinstance(value, (int, float)) or not math.isfinite(value) or value <= 0:
                raise PreconditionViolation(f"{name} must be a positive finite number, got {value!r}")
        for name in ("display_width_px", "display_height_px"):
            value = getattr(self, name)
            if value is not None and value <= 0:
                raise PreconditionViolation(f"{name} must be positive, got {value!r}")
        if self.image_border_width < 0:
            raise PreconditionViolation(f"image_border_width must be >= 0, got {self.image_border_width!r}")
        if self.min_crop_size is not None and self.min_crop_size.area == 0:
            raise PreconditionViolation(f"min_crop_size must have a non-zero area, got {self.min_crop_size}")

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a JSON-friendly dict."""
        return {
            "min_crop_size": self.min_crop_size.to_list() if self.min_crop_size is not None else None,
            "upscale": self.upscale,
            "zoom_in_factor": self.zoom_in_factor,
            "zoom_out_factor": self.zoom_out_factor,
            "enable_panning": self.enable_panning,
            "display_width_px": self.display_width_px,
            "display_height_px": self.display_height_px,
            "image_border_width": self.image_border_width,
        }

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "CropConfig":
        """
        Tolerant loader:
        - ignores unknown keys (with a warning)
        - accepts ``min_crop_size`` as a [width, height] list
        """
        known = {f.name for f in fields(cls)}
        kwargs: Dict[str, Any] = {}
        for key, value in d.items():
            if key not in known:
                logger.warning(f"Unknown key '{key}' in crop config, ignoring")
                continue
            kwargs[key] = value

        min_crop = kwargs.get("min_crop_size")
        if min_crop is not None and not isinstance(min_crop, Size):
            kwargs["min_crop_size"] = Size.from_list(min_crop)

        return cls(**kwargs)
