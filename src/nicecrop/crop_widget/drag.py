# nicecrop/src/nicecrop/crop_widget/drag.py

from __future__ import annotations

from typing import TYPE_CHECKING, Optional, Protocol

from nicecrop.utils.logging import get_logger

from .geometry import Offset

if TYPE_CHECKING:
    from .session import CropSession

logger = get_logger(__name__)


class DragInput(Protocol):
    """Pointer-drag callbacks, in viewport pixel coordinates.

    Front ends translate their own events (mouse, touch, pen) into these.
    """

    def on_drag_start(self, x: float, y: float) -> None: ...

    def on_drag_move(self, x: float, y: float, touches: int = 1) -> None: ...

    def on_drag_end(self) -> None: ...


class DragTracker:
    """Pans a CropSession from pointer drags.

    On drag start the pointer position and the image offset are snapshotted.
    Every move positions the image at ``snapshot offset + pointer delta``,
    so dropped or coalesced move events do not accumulate error. A new drag
    start while a drag is active restarts the snapshot.
    """

    def __init__(self, session: CropSession) -> None:
        self._session = session
        self._start_x: Optional[float] = None
        self._start_y: Optional[float] = None
        self._start_offset: Optional[Offset] = None

    @property
    def active(self) -> bool:
        return self._start_offset is not None

    def on_drag_start(self, x: float, y: float) -> None:
        if self.active:
            logger.debug("drag start while dragging, restarting snapshot")
        self._start_x = x
        self._start_y = y
        self._start_offset = self._session.offset

    def on_drag_move(self, x: float, y: float, touches: int = 1) -> None:
        if self._start_offset is None or self._start_x is None or self._start_y is None:
            return
        # Multi-touch gestures are not panned.
        if touches > 1:
            return
        self._session.position(
            self._start_offset.x + (x - self._start_x),
            self._start_offset.y + (y - self._start_y),
        )

    def on_drag_end(self) -> None:
        self._start_x = None
        self._start_y = None
        self._start_offset = None
