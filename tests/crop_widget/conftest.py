"""Fixtures for crop widget tests."""

from __future__ import annotations

import pytest

from nicecrop.crop_widget.geometry import Frame, Size
from nicecrop.crop_widget.session import CropSession, initialize


@pytest.fixture
def landscape_session() -> CropSession:
    """400x300 image in a 300x300 viewport, default centered square crop."""
    return initialize(Size(400, 300), Size(300, 300))


@pytest.fixture
def portrait_frame() -> Frame:
    """A 600x800 stored original that the viewport shows rotated by 90 degrees."""
    return Frame(Size(600, 800), 90)
