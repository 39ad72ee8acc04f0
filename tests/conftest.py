"""
Shared test fixtures.

Widget tests run against Qt's offscreen platform, so no display is needed.
"""

import os
import sys
from pathlib import Path

import numpy as np
import pytest

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

# Project root on sys.path so tests run without installing the package
project_root = Path(__file__).parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

from segment_app_qt.state import ImageContext, Mask  # noqa: E402


@pytest.fixture
def sample_rgb_image() -> np.ndarray:
    """Black 40x40 RGB image."""
    return np.zeros((40, 40, 3), dtype=np.uint8)


@pytest.fixture
def white_rgb_image() -> np.ndarray:
    """White 40x40 RGB image."""
    return np.full((40, 40, 3), 255, dtype=np.uint8)


@pytest.fixture
def image_context(sample_rgb_image: np.ndarray) -> ImageContext:
    """Context for the black 40x40 image."""
    return ImageContext.from_image(sample_rgb_image)


@pytest.fixture
def small_mask() -> Mask:
    """3x2 block mask at columns 10-12, rows 10-11 (area 6 of 1600)."""
    rows = [()] * 10 + [(10, 11, 12), (10, 11, 12)] + [()] * 28
    return Mask(bbox=(10.0, 10.0, 3.0, 2.0), segmentation=tuple(rows), area=6.0)


@pytest.fixture
def mask_records() -> list:
    """Mask records as found in a masks JSON file."""
    return [
        {"bbox": [1, 0, 3, 2], "segmentation": [[1, 2, 3], [2]], "area": 4},
        {"bbox": [0, 0, 2, 1], "segmentation": [[0, 1]]},
    ]


@pytest.fixture(scope="session")
def qapp():
    """Session-wide QApplication for widget tests."""
    from PyQt6.QtWidgets import QApplication

    app = QApplication.instance() or QApplication([])
    yield app
