"""Crop widget: viewport crop geometry plus a NiceGUI front end.

The geometry modules (resize, position, zoom, translator, session) do not
import NiceGUI. Import the widget from
``nicecrop.crop_widget.crop_image_widget`` when you need the UI.
"""

from .config import CropConfig
from .drag import DragInput, DragTracker
from .errors import CropError, PreconditionViolation
from .geometry import UNCHANGED, Frame, Offset, Point, Rect, Size
from .position import position_image, visible_rect
from .resize import ResizeOptions, resize_image
from .session import CropSession, OnCropChange, SessionState, create_session, initialize
from .size_provider import CachedSizeProvider, SizeProvider, StaticSizeProvider, content_size
from .translator import default_square, to_display, to_external
from .zoom import zoom_image

__all__ = [
    "UNCHANGED",
    "CachedSizeProvider",
    "CropConfig",
    "CropError",
    "CropSession",
    "DragInput",
    "DragTracker",
    "Frame",
    "Offset",
    "OnCropChange",
    "Point",
    "PreconditionViolation",
    "Rect",
    "ResizeOptions",
    "SessionState",
    "Size",
    "SizeProvider",
    "StaticSizeProvider",
    "content_size",
    "create_session",
    "default_square",
    "initialize",
    "position_image",
    "resize_image",
    "to_display",
    "to_external",
    "visible_rect",
    "zoom_image",
]
