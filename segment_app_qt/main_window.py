"""
Segment Overlay Application - Main Window.

Hosts a SegmentView for one image: owns the point list and the box-ready
flag, and reports them in the status bar.
"""

from typing import List, Optional, Sequence

import numpy as np
from PyQt6.QtCore import pyqtSlot
from PyQt6.QtGui import QKeySequence, QShortcut
from PyQt6.QtWidgets import QHBoxLayout, QLabel, QMainWindow, QVBoxLayout, QWidget

from segment_app_qt.config import SegmentAppConfig
from segment_app_qt.state import ImageContext, InteractionMode, Mask, Point
from segment_app_qt.utils.logger import get_logger
from segment_app_qt.widgets import SegmentView

logger = get_logger(__name__)


class SegmentAnnotationWindow(QMainWindow):
    """
    Main window for point and box annotation over precomputed masks.
    """

    def __init__(
        self,
        image: np.ndarray,
        masks: Sequence[Mask] = (),
        config: Optional[SegmentAppConfig] = None,
        title: str = "Segment Overlay",
    ):
        """
        Initialize the main window.

        Args:
            image: RGB image array
            masks: Precomputed masks for the image
            config: Session configuration
            title: Window title
        """
        super().__init__()

        self.config = config or SegmentAppConfig()

        # Host-owned annotation state
        self.points: List[Point] = []
        self.box_ready: bool = False

        self.setWindowTitle(title)
        self.setMinimumSize(800, 600)
        self.resize(1200, 800)

        self._build_ui()
        self._setup_shortcuts()

        self.view.set_data(ImageContext.from_image(image))
        self.view.set_masks(masks)
        self._update_status()

        logger.info(
            f"Session started: mode={self.config.mode}, "
            f"image={image.shape[1]}x{image.shape[0]}, masks={len(masks)}"
        )

    def _build_ui(self) -> None:
        """Build the main UI layout."""
        central = QWidget()
        self.setCentralWidget(central)
        main_layout = QVBoxLayout(central)

        self.view = SegmentView(
            mode=self.config.interaction_mode,
            set_points=self._on_points_changed,
            set_box_ready=self._on_box_ready_changed,
            settings=self.config.overlay_settings(),
        )
        main_layout.addWidget(self.view, stretch=1)

        status_frame = QWidget()
        status_layout = QHBoxLayout(status_frame)
        status_layout.setContentsMargins(5, 2, 5, 2)
        self.status_label = QLabel()
        status_layout.addWidget(self.status_label, stretch=1)
        main_layout.addWidget(status_frame)

        self.view.setFocus()

    def _setup_shortcuts(self) -> None:
        """Setup keyboard shortcuts."""
        shortcuts = [
            ("Escape", self._on_reset),
            ("Q", self.close),
        ]

        for key, callback in shortcuts:
            shortcut = QShortcut(QKeySequence(key), self)
            shortcut.activated.connect(callback)

    def _on_points_changed(self, points: List[Point]) -> None:
        """Receive the new point list from the view."""
        self.points = points
        self._update_status()

    def _on_box_ready_changed(self, ready: bool) -> None:
        """Receive box-ready changes from the view."""
        self.box_ready = ready
        if ready:
            box = self.view.state.get_box()
            logger.info(f"Box ready: {_format_box(box)}")
        self._update_status()

    @pyqtSlot()
    def _on_reset(self) -> None:
        """Clear points and the box-ready flag."""
        if not self.view.state.has_points() and not self.box_ready:
            return
        self.points = []
        self.box_ready = False
        self.view.set_points([])
        self.view.set_box_ready(False)
        self._update_status()
        logger.info("Points cleared")

    def _update_status(self) -> None:
        """Update status bar."""
        fg = sum(1 for p in self.points if p.is_foreground)
        bg = len(self.points) - fg
        status = f"Mode: {self.config.mode} | Points: FG={fg}, BG={bg}"

        if self.view.state.mode == InteractionMode.BOX:
            if self.box_ready:
                status += f" | Box: {_format_box(self.view.state.get_box())}"
            else:
                status += " | Box: --"

        self.status_label.setText(status)


def _format_box(box) -> str:
    if box is None:
        return "--"
    x1, y1, x2, y2 = box
    return f"({x1:.1f}, {y1:.1f}) - ({x2:.1f}, {y2:.1f})"
