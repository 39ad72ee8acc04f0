"""
Image canvas widget for interactive annotation.

Provides a QLabel-based canvas that shows a rendered frame scaled to fit
and reports pointer input as display-space PointerEvents together with
the viewport they were captured in.
"""

from typing import Optional

import cv2
import numpy as np
from PyQt6.QtCore import Qt, pyqtSignal
from PyQt6.QtGui import QContextMenuEvent, QImage, QMouseEvent, QPixmap
from PyQt6.QtWidgets import QLabel, QSizePolicy

from segment_app_qt.constants import (
    CANVAS_BACKGROUND,
    CANVAS_MIN_SIZE,
    MIDDLE_BUTTON,
    PRIMARY_BUTTON,
    SECONDARY_BUTTON,
)
from segment_app_qt.state import PointerEvent, PointerEventKind, Viewport
from segment_app_qt.utils.coordinate import compute_display_scale
from segment_app_qt.utils.logger import get_logger

logger = get_logger(__name__)

_BUTTON_BITS = (
    (Qt.MouseButton.LeftButton, PRIMARY_BUTTON),
    (Qt.MouseButton.RightButton, SECONDARY_BUTTON),
    (Qt.MouseButton.MiddleButton, MIDDLE_BUTTON),
)


class ImageCanvas(QLabel):
    """
    Display surface for rendered frames.

    Signals:
        pointer_event: Emitted with a PointerEvent for clicks, context menu
            requests, moves and releases
        resized: Emitted when canvas is resized
    """

    pointer_event = pyqtSignal(object)
    resized = pyqtSignal()

    def __init__(self, parent: Optional[object] = None):
        """Initialize image canvas."""
        super().__init__(parent)

        # Display state
        self.scale_factor: float = 1.0
        self.offset_x: int = 0
        self.offset_y: int = 0

        self.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self.setStyleSheet(f"background-color: {CANVAS_BACKGROUND};")
        self.setMinimumSize(*CANVAS_MIN_SIZE)
        self.setSizePolicy(
            QSizePolicy.Policy.Expanding,
            QSizePolicy.Policy.Expanding,
        )
        self.setCursor(Qt.CursorShape.CrossCursor)
        self.setFocusPolicy(Qt.FocusPolicy.ClickFocus)
        # Hover moves drive the box-mode anchor preview
        self.setMouseTracking(True)
        self.setText("No Image")

    def update_display(self, display_image: np.ndarray) -> bool:
        """
        Show a rendered frame scaled to fit the canvas.

        The display scale and offsets are recomputed for every drawn frame,
        so pointer events always map through the latest render.

        Args:
            display_image: RGB image array at native resolution

        Returns:
            False if the canvas has no usable size and nothing was drawn
        """
        if display_image is None:
            return False

        canvas_w = self.width()
        canvas_h = self.height()
        img_h, img_w = display_image.shape[:2]

        if canvas_w <= 1 or canvas_h <= 1 or img_w == 0 or img_h == 0:
            logger.debug(f"Canvas size {canvas_w}x{canvas_h} unusable, frame skipped")
            return False

        self.scale_factor = compute_display_scale(canvas_w, canvas_h, img_w, img_h)

        new_w = max(1, int(img_w * self.scale_factor))
        new_h = max(1, int(img_h * self.scale_factor))

        # Offset for centering
        self.offset_x = (canvas_w - new_w) // 2
        self.offset_y = (canvas_h - new_h) // 2

        resized = cv2.resize(
            display_image, (new_w, new_h),
            interpolation=cv2.INTER_LINEAR
        )
        self.setPixmap(self._numpy_to_pixmap(resized))
        return True

    def current_viewport(self) -> Viewport:
        """Get the placement of the displayed image from the latest render."""
        return Viewport(
            origin_x=float(self.offset_x),
            origin_y=float(self.offset_y),
            scale=self.scale_factor,
        )

    def mouseMoveEvent(self, event: QMouseEvent) -> None:
        """Handle pointer movement (with or without buttons held)."""
        self._emit(
            PointerEventKind.MOVE,
            event.position().x(),
            event.position().y(),
            button=0,
            buttons=_button_mask(event.buttons()),
        )

    def mouseReleaseEvent(self, event: QMouseEvent) -> None:
        """Handle button release; a primary release also completes a click."""
        x = event.position().x()
        y = event.position().y()
        button = _button_mask(event.button())
        buttons = _button_mask(event.buttons())

        self._emit(PointerEventKind.RELEASE, x, y, button=button, buttons=buttons)
        if button == PRIMARY_BUTTON:
            self._emit(PointerEventKind.CLICK, x, y, button=button, buttons=buttons)

    def contextMenuEvent(self, event: QContextMenuEvent) -> None:
        """Turn context menu requests into events; no menu is shown."""
        event.accept()
        self._emit(
            PointerEventKind.CONTEXT_MENU,
            float(event.pos().x()),
            float(event.pos().y()),
            button=SECONDARY_BUTTON,
        )

    def resizeEvent(self, event) -> None:
        """Handle resize events."""
        super().resizeEvent(event)
        self.resized.emit()

    def _emit(
        self,
        kind: PointerEventKind,
        x: float,
        y: float,
        button: int = 0,
        buttons: int = 0,
    ) -> None:
        self.pointer_event.emit(
            PointerEvent(
                kind=kind,
                x=x,
                y=y,
                viewport=self.current_viewport(),
                button=button,
                buttons=buttons,
            )
        )

    def _numpy_to_pixmap(self, image: np.ndarray) -> QPixmap:
        """Convert numpy array to QPixmap."""
        image = np.ascontiguousarray(image)
        h, w, ch = image.shape
        bytes_per_line = ch * w
        qimg = QImage(
            image.data, w, h, bytes_per_line,
            QImage.Format.Format_RGB888
        )
        return QPixmap.fromImage(qimg.copy())


def _button_mask(qt_buttons) -> int:
    """Convert Qt mouse buttons into a primary/secondary/middle bitmask."""
    mask = 0
    for qt_button, bit in _BUTTON_BITS:
        if qt_buttons & qt_button:
            mask |= bit
    return mask
