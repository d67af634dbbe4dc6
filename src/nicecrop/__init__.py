"""
nicecrop: pan-and-zoom image cropping for NiceGUI.

This package provides:
- CropSession: GUI-agnostic crop geometry (fit, pan, zoom, and translation of
  the crop rectangle into a rotated or rescaled external frame)
- CropImageWidget: NiceGUI front end over a CropSession
- Logging utilities for library and application use

For logging configuration in standalone scripts/demos:
    ```python
    from nicecrop.utils.logging import configure_logging
    configure_logging(level="DEBUG")
    ```
"""

import logging

from nicecrop.utils.logging import configure_logging, get_logger

from nicecrop.crop_widget import (
    CropConfig,
    CropSession,
    Frame,
    PreconditionViolation,
    Rect,
    Size,
    create_session,
    initialize,
)

# NullHandler so logs don't reach root when no application configured logging.
_logger = logging.getLogger("nicecrop")
if not _logger.handlers:
    _logger.addHandler(logging.NullHandler())

__all__ = [
    "CropConfig",
    "CropSession",
    "Frame",
    "PreconditionViolation",
    "Rect",
    "Size",
    "configure_logging",
    "create_session",
    "get_logger",
    "initialize",
]

__version__ = "0.1.0"
