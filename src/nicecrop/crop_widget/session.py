# nicecrop/src/nicecrop/crop_widget/session.py

"""Stateful crop session.

A CropSession owns the live crop state (viewport size, original size,
displayed size, offset) and drives the pure geometry functions with it.
It is GUI-agnostic: a front end feeds it the original image size once the
image has decoded, then forwards pan/zoom gestures and reads the crop back.

Typical usage:

    session = create_session(StaticSizeProvider(Size(300, 300)))
    session.on_change(lambda rect: print(rect.to_list()))
    session.image_loaded(Size(400, 300))
    session.pan(-20, 0)
    session.zoom(1.5)
    session.get_crop().to_list()

The session is single-threaded. Callers running it from several threads must
serialize all calls on one session.
"""

from __future__ import annotations

from enum import Enum
from typing import Callable, List, Optional, Union

from nicecrop.utils.logging import get_logger

from .config import CropConfig
from .errors import PreconditionViolation
from .geometry import UNCHANGED, Frame, Offset, Rect, Size, SizeOrUnchanged, UnchangedType, ensure_finite
from .position import position_image, visible_rect
from .resize import ResizeOptions, clamp_min_crop_size, resize_image
from .size_provider import SizeProvider, StaticSizeProvider
from .translator import default_square, rect_extent, to_display, to_external
from .zoom import zoom_image

logger = get_logger(__name__)


class SessionState(Enum):
    UNINITIALIZED = "uninitialized"
    LOADING = "loading"
    READY = "ready"
    DESTROYED = "destroyed"


OnCropChange = Callable[[Rect], None]


class CropSession:
    """Crop state machine: LOADING -> READY -> DESTROYED.

    Use ``create_session()`` rather than constructing directly; it validates
    the configuration first.

    Attributes:
        external_frame: Frame that crop rectangles are read and seeded in.
            When None, rectangles are in the original image's pixels.
        config: Session configuration, immutable for the session.
    """

    def __init__(
        self,
        size_provider: SizeProvider,
        *,
        config: CropConfig,
        initial_rect: Optional[Rect] = None,
        external_frame: Optional[Frame] = None,
    ) -> None:
        self._state = SessionState.UNINITIALIZED

        self._size_provider = size_provider
        self.config = config
        self.external_frame = external_frame
        self._initial_rect = initial_rect

        self._options = ResizeOptions(min_crop_size=config.min_crop_size, upscale=config.upscale)
        self._viewport_size: Optional[Size] = None
        self._original_size: Optional[Size] = None
        self._displayed_size: Optional[Size] = None
        self._offset: Optional[Offset] = None

        self._change_handlers: List[OnCropChange] = []

        self._state = SessionState.LOADING

    # ------------- state -------------

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def viewport_size(self) -> Size:
        self._require_ready()
        assert self._viewport_size is not None
        return self._viewport_size

    @property
    def original_size(self) -> Size:
        self._require_ready()
        assert self._original_size is not None
        return self._original_size

    @property
    def displayed_size(self) -> Size:
        self._require_ready()
        assert self._displayed_size is not None
        return self._displayed_size

    @property
    def offset(self) -> Offset:
        self._require_ready()
        assert self._offset is not None
        return self._offset

    @property
    def resize_options(self) -> ResizeOptions:
        return self._options

    # ------------- observers -------------

    def on_change(self, handler: OnCropChange) -> None:
        """Register a callback for crop changes.

        Handler is called with the current crop Rect (same frame as
        ``get_crop()``) after any call that moved or resized the image.
        """
        self._change_handlers.append(handler)

    def remove_change_handler(self, handler: OnCropChange) -> None:
        if handler in self._change_handlers:
            self._change_handlers.remove(handler)

    # ------------- lifecycle -------------

    def image_loaded(self, original_size: Size) -> None:
        """Finish loading: capture the original size and place the image.

        Can be called exactly once, while the session is LOADING.
        """
        if self._state is not SessionState.LOADING:
            raise PreconditionViolation(f"image_loaded() called in state {self._state.value}")
        if original_size.area == 0:
            raise PreconditionViolation(f"original size must have a non-zero area, got {original_size}")

        viewport = self._viewport_size or self._size_provider.measure_viewport()
        if viewport.area == 0:
            raise PreconditionViolation(f"viewport size must have a non-zero area, got {viewport}")

        self._original_size = original_size
        self._viewport_size = viewport
        if self._options.min_crop_size is not None:
            self._options = ResizeOptions(
                min_crop_size=clamp_min_crop_size(self._options.min_crop_size, original_size),
                upscale=self._options.upscale,
            )

        self._fit(self._initial_crop_rect())
        self._state = SessionState.READY

        logger.info(
            f"crop session ready: original={original_size}, viewport={viewport}, "
            f"displayed={self._displayed_size}, offset=({self._offset.x}, {self._offset.y})"
        )
        self._notify()

    def destroy(self) -> None:
        """Release cached sizes and observers. No calls are valid afterwards."""
        if self._state is SessionState.DESTROYED:
            raise PreconditionViolation("session already destroyed")

        invalidate = getattr(self._size_provider, "invalidate", None)
        if callable(invalidate):
            invalidate()

        self._change_handlers.clear()
        self._viewport_size = None
        self._original_size = None
        self._displayed_size = None
        self._offset = None
        self._state = SessionState.DESTROYED
        logger.info("crop session destroyed")

    # ------------- interactive API -------------

    def position(self, x: float, y: float) -> Offset:
        """Move the image to offset (x, y), clamped so the viewport stays covered."""
        self._require_ready()
        offset = position_image((x, y), self.viewport_size, self.displayed_size)
        self._commit(self.displayed_size, offset)
        return offset

    def pan(self, dx: float, dy: float) -> Offset:
        """Move the image by (dx, dy) viewport pixels."""
        self._require_ready()
        ensure_finite(dx, dy)
        return self.position(self.offset.x + dx, self.offset.y + dy)

    def zoom(self, ratio: float) -> Union[Offset, UnchangedType]:
        """Scale the image by ``ratio`` around the viewport center."""
        self._require_ready()
        result = zoom_image(
            ratio,
            self.viewport_size,
            self.original_size,
            self.displayed_size,
            self.offset,
            self._options,
        )
        if result is UNCHANGED:
            return UNCHANGED
        size, offset = result
        self._commit(size, offset)
        return offset

    def resize(self, width: float, height: float) -> SizeOrUnchanged:
        """Request a displayed size directly; the offset is re-clamped."""
        self._require_ready()
        size = resize_image(
            (width, height),
            self.viewport_size,
            self.original_size,
            self.displayed_size,
            self._options,
        )
        if size is UNCHANGED:
            return UNCHANGED
        offset = position_image((self.offset.x, self.offset.y), self.viewport_size, size)
        self._commit(size, offset)
        return size

    def get_crop(self) -> Rect:
        """Current crop in the external frame, or in original-image pixels."""
        self._require_ready()
        rect = to_external(
            visible_rect(self.offset, self.viewport_size),
            self.displayed_size,
            Frame(self.original_size),
        )
        if self.external_frame is None:
            return rect
        # Seeded with original_size as the display size; read back the same way.
        return to_external(rect, self.original_size, self.external_frame)

    def set_viewport_size(self, size: Optional[Size] = None) -> None:
        """Accept a fresh viewport size, or re-measure it when ``size`` is None.

        In READY the current crop is kept and re-fitted to the new viewport.
        """
        if self._state is SessionState.DESTROYED:
            raise PreconditionViolation("session has been destroyed")

        if size is None:
            invalidate = getattr(self._size_provider, "invalidate", None)
            if callable(invalidate):
                invalidate()
            size = self._size_provider.measure_viewport()
        if size.area == 0:
            raise PreconditionViolation(f"viewport size must have a non-zero area, got {size}")

        if self._state is not SessionState.READY:
            self._viewport_size = size
            return

        crop = to_external(
            visible_rect(self.offset, self.viewport_size),
            self.displayed_size,
            Frame(self.original_size),
        )
        old_size, old_offset = self._displayed_size, self._offset
        self._viewport_size = size
        self._fit(crop)
        logger.debug(f"viewport changed to {size}")
        if (old_size, old_offset) != (self._displayed_size, self._offset):
            self._notify()

    # ------------- internals -------------

    def _require_ready(self) -> None:
        if self._state is not SessionState.READY:
            raise PreconditionViolation(f"crop session is not ready (state: {self._state.value})")

    def _initial_crop_rect(self) -> Rect:
        """Initial crop in original-image pixels."""
        assert self._original_size is not None
        frame = self.external_frame

        if self._initial_rect is not None:
            rect = self._initial_rect.normalized()
            if frame is not None:
                rect = to_display(rect, frame, self._original_size)
        elif frame is not None:
            rect = to_display(default_square(frame.size), frame, self._original_size)
        else:
            rect = default_square(self._original_size)

        rect_extent(rect)
        logger.debug(f"initial crop (original frame): {rect.to_list()}")
        return rect

    def _fit(self, rect: Rect) -> None:
        """Size and place the image so the viewport shows ``rect`` (original pixels)."""
        assert self._original_size is not None and self._viewport_size is not None
        original, viewport = self._original_size, self._viewport_size

        width, height = rect_extent(rect)
        size = resize_image(
            (original.width * viewport.width / width, original.height * viewport.height / height),
            viewport,
            original,
            self._displayed_size,
            self._options,
        )
        if size is not UNCHANGED:
            self._displayed_size = size
        assert self._displayed_size is not None

        # Place with the achieved scale, which limits may have changed.
        ratio_x = self._displayed_size.width / original.width
        ratio_y = self._displayed_size.height / original.height
        self._offset = position_image(
            (-rect.point1.x * ratio_x, -rect.point1.y * ratio_y),
            viewport,
            self._displayed_size,
        )

    def _commit(self, size: Size, offset: Offset) -> None:
        if size == self._displayed_size and offset == self._offset:
            return
        self._displayed_size = size
        self._offset = offset
        self._notify()

    def _notify(self) -> None:
        if not self._change_handlers:
            return
        rect = self.get_crop()
        for handler in list(self._change_handlers):
            try:
                handler(rect)
            except Exception:
                logger.exception("Error in crop change handler")


def create_session(
    size_provider: SizeProvider,
    *,
    config: Optional[CropConfig] = None,
    initial_rect: Optional[Rect] = None,
    external_frame: Optional[Frame] = None,
) -> CropSession:
    """Validate inputs and return a CropSession waiting for its image.

    Raises:
        PreconditionViolation: invalid configuration, empty initial rect or
            empty external frame.
    """
    if config is None:
        config = CropConfig()
    config.validate()
    if external_frame is not None and external_frame.size.area == 0:
        raise PreconditionViolation(f"external frame must have a non-zero area, got {external_frame.size}")
    if initial_rect is not None:
        rect_extent(initial_rect.normalized())
    return CropSession(
        size_provider,
        config=config,
        initial_rect=initial_rect,
        external_frame=external_frame,
    )


def initialize(
    original_size: Size,
    viewport_size: Size,
    initial_rect: Optional[Rect] = None,
    external_frame: Optional[Frame] = None,
    config: Optional[CropConfig] = None,
) -> CropSession:
    """Create a session for an already-decoded image and bring it to READY."""
    session = create_session(
        StaticSizeProvider(viewport_size),
        config=config,
        initial_rect=initial_rect,
        external_frame=external_frame,
    )
    session.image_loaded(original_size)
    return session
