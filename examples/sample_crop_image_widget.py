from __future__ import annotations

import numpy as np
from nicegui import ui

from nicecrop.crop_widget.config import CropConfig
from nicecrop.crop_widget.crop_image_widget import CropImageWidget
from nicecrop.crop_widget.geometry import Frame, Rect, Size
from nicecrop.utils.logging import configure_logging


def create_demo_image(height: int = 600, width: int = 800) -> np.ndarray:
    """Simple demo image: concentric rings + noise."""
    y, x = np.mgrid[0:height, 0:width]
    r = np.hypot(x - width / 2, y - height / 2)
    img = 0.5 + 0.5 * np.sin(r / 12.0)
    img += 0.05 * np.random.randn(height, width)
    return np.clip(img, 0.0, 1.0)


if __name__ in {"__main__", "__mp_main__"}:
    configure_logging(level="INFO")

    img = create_demo_image()

    # Crop coordinates are reported in a 1200x1600 original stored rotated by 90 degrees.
    frame = Frame(Size(1200, 1600), 90)

    with ui.row().classes("w-full gap-6"):
        with ui.column().classes("items-start gap-2"):
            ui.label("CropImageWidget demo").classes("text-lg font-bold")

            widget = CropImageWidget(
                img,
                config=CropConfig(
                    min_crop_size=Size(200, 200),
                    display_width_px=360,
                    display_height_px=360,
                    image_border_width=2,
                ),
                external_frame=frame,
                cmap="viridis",
            )
            widget.render()

            with ui.row():
                ui.button("Zoom in", on_click=widget.zoom_in)
                ui.button("Zoom out", on_click=widget.zoom_out)

        with ui.column().classes("items-start gap-2"):
            ui.label(f"Crop in {frame.size} frame, rotated {frame.rotation} degrees")
            coords_label = ui.label(str(widget.get_coords().to_list()))

            def on_crop(rect: Rect) -> None:
                coords_label.set_text(str(rect.to_list()))

            widget.on_change(on_crop)

    ui.run()
