# nicecrop/src/nicecrop/crop_widget/crop_image_widget.py

from __future__ import annotations

from pathlib import Path
from typing import Optional, Sequence, Tuple, Union

import matplotlib
import numpy as np
from nicegui import events, run, ui
from PIL import Image

from nicecrop.utils.logging import get_logger

from .config import CropConfig
from .drag import DragTracker
from .geometry import UNCHANGED, Frame, Rect, Size
from .session import CropSession, OnCropChange, SessionState, create_session
from .size_provider import CachedSizeProvider, content_size

logger = get_logger(__name__)

ImageSource = Union[Image.Image, np.ndarray]


def array_to_pil(
    arr: np.ndarray,
    vmin: float | None = None,
    vmax: float | None = None,
    cmap: str = "gray",
) -> Image.Image:
    """Map a 2D NumPy array to an 8-bit RGB PIL image with a colormap."""
    arr = np.asarray(arr, dtype=float)

    if vmin is None:
        vmin = float(np.nanmin(arr))
    if vmax is None:
        vmax = float(np.nanmax(arr))

    if vmax <= vmin:
        vmax = vmin + 1e-6

    norm = np.clip((arr - vmin) / (vmax - vmin), 0.0, 1.0)

    rgba = matplotlib.colormaps[cmap](norm)
    rgb = (rgba[..., :3] * 255).astype(np.uint8)
    return Image.fromarray(rgb)


def _to_pil(image: ImageSource, cmap: str) -> Image.Image:
    if isinstance(image, np.ndarray):
        if image.ndim != 2:
            raise ValueError("CropImageWidget expects a 2D numpy array or a PIL image")
        return array_to_pil(image, cmap=cmap)
    if image.mode != "RGB":
        return image.convert("RGB")
    return image


def _open_image(path: Path) -> Image.Image:
    """Blocking decode (run via run.io_bound)."""
    with Image.open(path) as img:
        img.load()
        return img.convert("RGB")


class CropImageWidget:
    """NiceGUI widget for picking a crop rectangle by panning and zooming.

    The image is shown inside a fixed-size viewport; the viewport window is
    the crop. Drag to pan, scroll to zoom.

    - Input: PIL image or 2D numpy array (grayscale, rendered with ``cmap``),
      either at construction, through ``set_image()`` or ``load_file()``.
    - Optional: initial crop ``coords`` as ``[[x1, y1], [x2, y2]]``, in
      ``external_frame`` if given, else in image pixels.

    Events (via callback registration):
        on_change(handler): Handler called as handler(rect) after every pan
            or zoom that changed the crop.
    """

    def __init__(
        self,
        image: Optional[ImageSource] = None,
        *,
        config: Optional[CropConfig] = None,
        coords: Optional[Sequence[Sequence[float]]] = None,
        external_frame: Optional[Frame] = None,
        cmap: str = "gray",
    ) -> None:
        self.config = config if config is not None else CropConfig()
        self._cmap = cmap

        self._size_provider = CachedSizeProvider(self._measure_viewport)
        self.session: CropSession = create_session(
            self._size_provider,
            config=self.config,
            initial_rect=Rect.from_list(coords) if coords is not None else None,
            external_frame=external_frame,
        )
        self.session.on_change(self._on_session_change)
        self._drag = DragTracker(self.session)

        self._image: Optional[Image.Image] = None
        # (displayed size, image resized to it); panning reuses it.
        self._scaled: Optional[Tuple[Size, Image.Image]] = None
        self.interactive: Optional[ui.interactive_image] = None

        if image is not None:
            self.set_image(image)

    # ------------- public API -------------

    @property
    def ready(self) -> bool:
        return self.session.state is SessionState.READY

    def set_image(self, image: ImageSource) -> None:
        """Hand the decoded image to the session; can be called once."""
        pil_img = _to_pil(image, self._cmap)
        self._image = pil_img
        self.session.image_loaded(Size(*pil_img.size))
        self._update_image()

    async def load_file(self, path: Union[str, Path]) -> None:
        """Decode an image file off the event loop, then show it."""
        logger.debug(f"decoding {path}")
        pil_img = await run.io_bound(_open_image, Path(path))
        self.set_image(pil_img)

    def get_coords(self) -> Rect:
        """Current crop rectangle."""
        return self.session.get_crop()

    def on_change(self, handler: OnCropChange) -> None:
        """Register callback for crop changes.

        Handler is called with: rect (Rect)
        """
        self.session.on_change(handler)

    def zoom_in(self) -> None:
        self._zoom(self.config.zoom_in_factor)

    def zoom_out(self) -> None:
        self._zoom(self.config.zoom_out_factor)

    def render(self) -> None:
        """Create the viewport UI inside the current container."""
        outer = self.config.display_size
        border = self.config.image_border_width
        self.interactive = (
            ui.interactive_image(
                self._render_view_pil(),
                events=["mousedown", "mousemove", "mouseup"],
            )
            .style(
                f"width: {outer.width}px; height: {outer.height}px; "
                f"box-sizing: border-box; border: {border}px solid #666; cursor: move;"
            )
        )
        self.interactive.on_mouse(self._on_mouse)
        self.interactive.on("wheel", self._on_wheel)
        logger.info(f"CropImageWidget rendered: viewport={self._measure_viewport()}")

    def destroy(self) -> None:
        """Tear down the session and remove the viewport element."""
        self.session.destroy()
        if self.interactive is not None:
            self.interactive.delete()
            self.interactive = None
        self._image = None
        self._scaled = None

    # ------------- internals: rendering -------------

    def _measure_viewport(self) -> Size:
        b = self.config.image_border_width
        return content_size(self.config.display_size, b, b, b, b)

    def _scaled_image(self, size: Size) -> Image.Image:
        assert self._image is not None
        if self._scaled is None or self._scaled[0] != size:
            self._scaled = (size, self._image.resize((size.width, size.height), Image.BILINEAR))
        return self._scaled[1]

    def _render_view_pil(self) -> Image.Image:
        """Render the part of the displayed image that falls in the viewport."""
        viewport = self._measure_viewport()
        if not self.ready or self._image is None:
            return Image.new("RGB", (viewport.width, viewport.height), "#333333")

        scaled = self._scaled_image(self.session.displayed_size)
        offset = self.session.offset
        box = (-offset.x, -offset.y, -offset.x + viewport.width, -offset.y + viewport.height)
        return scaled.crop(box)

    def _update_image(self) -> None:
        if self.interactive is None:
            return
        self.interactive.set_source(self._render_view_pil())

    def _on_session_change(self, rect: Rect) -> None:
        self._update_image()
        logger.debug(f"crop changed: {rect.to_list()}")

    # ------------- internals: events -------------

    def _on_mouse(self, e: events.MouseEventArguments) -> None:
        """Translate NiceGUI mouse events into drag callbacks."""
        if not self.ready or not self.config.enable_panning:
            return

        if e.type == "mousedown" and e.button == 0:
            self._drag.on_drag_start(e.image_x, e.image_y)
            return

        if e.type == "mousemove" and (e.buttons & 1):
            self._drag.on_drag_move(e.image_x, e.image_y)
            return

        if e.type == "mouseup" and e.button == 0:
            self._drag.on_drag_end()

    def _on_wheel(self, e: events.GenericEventArguments) -> None:
        """Zoom in on wheel up, out on wheel down."""
        args = e.args or {}
        dy = args.get("deltaY", 0)
        dx = args.get("deltaX", 0)

        if not isinstance(dy, (int, float)):
            dy = 0
        # Shift+wheel scrolls horizontally on most platforms.
        if dy == 0 and isinstance(dx, (int, float)):
            dy = dx
        if dy == 0:
            return

        self._zoom(self.config.zoom_in_factor if dy < 0 else self.config.zoom_out_factor)

    def _zoom(self, ratio: float) -> None:
        if not self.ready:
            return
        if self.session.zoom(ratio) is UNCHANGED:
            logger.debug(f"zoom {ratio:.2f}: no change")
