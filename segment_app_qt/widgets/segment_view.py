"""
Interactive segment view.

Combines the control panel and the image canvas. The host supplies the
image, the mask list and the point list, and receives point-list and
box-ready updates through callbacks. Every change to the image, masks,
points or overlay settings triggers a full redraw.
"""

from dataclasses import replace
from typing import Callable, List, Optional, Sequence, Tuple, Union

from PyQt6.QtCore import Qt, pyqtSlot
from PyQt6.QtGui import QKeyEvent
from PyQt6.QtWidgets import QVBoxLayout, QWidget

from segment_app_qt.constants import MAX_VIEW_WIDTH
from segment_app_qt.state import (
    AnnotationState,
    ImageContext,
    InteractionMode,
    Mask,
    OverlaySettings,
    Point,
    PointerEvent,
    reduce_pointer_event,
)
from segment_app_qt.utils.logger import get_logger
from segment_app_qt.utils.mask_overlay import render_overlay
from segment_app_qt.widgets.control_panel import ControlPanel
from segment_app_qt.widgets.image_canvas import ImageCanvas

logger = get_logger(__name__)


class SegmentView(QWidget):
    """
    Interactive overlay for point and box annotation.

    Holding Ctrl hides the mask overlay until the key is released.
    """

    def __init__(
        self,
        mode: Union[InteractionMode, str],
        set_points: Callable[[List[Point]], None],
        set_box_ready: Callable[[bool], None],
        settings: Optional[OverlaySettings] = None,
        parent: Optional[QWidget] = None,
    ):
        """
        Initialize the view.

        Args:
            mode: Interaction mode for the session
            set_points: Called with the full new point list on every change
            set_box_ready: Called when the box-ready flag changes
            settings: Initial overlay settings
            parent: Parent widget
        """
        super().__init__(parent)

        self._set_points = set_points
        self._set_box_ready = set_box_ready
        self._state = AnnotationState(mode=InteractionMode(mode))
        self._settings = settings or OverlaySettings()
        self._context: Optional[ImageContext] = None
        self._masks: Tuple[Mask, ...] = ()

        self.setMaximumWidth(MAX_VIEW_WIDTH)
        self.setFocusPolicy(Qt.FocusPolicy.StrongFocus)
        self._build_ui()

    def _build_ui(self) -> None:
        """Build the UI layout."""
        layout = QVBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)

        self.control_panel = ControlPanel()
        self.control_panel.set_threshold(self._settings.mask_area_threshold)
        self.control_panel.set_mask_visible(self._settings.show_overlay)
        self.control_panel.threshold_changed.connect(self._on_threshold_changed)
        self.control_panel.mask_toggle_changed.connect(self._on_mask_toggled)
        layout.addWidget(self.control_panel)

        self.canvas = ImageCanvas()
        self.canvas.pointer_event.connect(self.handle_pointer_event)
        self.canvas.resized.connect(self.redraw)
        layout.addWidget(self.canvas, stretch=1)

    # Host inputs

    @property
    def state(self) -> AnnotationState:
        return self._state

    @property
    def settings(self) -> OverlaySettings:
        return self._settings

    @property
    def masks(self) -> Tuple[Mask, ...]:
        return self._masks

    def set_data(self, context: Optional[ImageContext]) -> None:
        """Set the image being annotated."""
        self._context = context
        self.redraw()

    def set_masks(self, masks: Sequence[Mask]) -> None:
        """Replace the mask list; list order determines mask colors."""
        self._masks = tuple(masks)
        self.redraw()

    def set_points(self, points: Sequence[Point]) -> None:
        """Replace the point list, e.g. when the host clears a session."""
        points = tuple(points)
        if points == self._state.points:
            return
        self._state = self._state.with_points(points)
        self.redraw()

    def set_box_ready(self, ready: bool) -> None:
        """Overwrite the box-ready flag held by the view."""
        self._state = replace(self._state, box_ready=bool(ready))

    def set_settings(self, settings: OverlaySettings) -> None:
        """Replace the overlay settings and sync the controls."""
        self._settings = settings
        self.control_panel.set_threshold(settings.mask_area_threshold)
        self.control_panel.set_mask_visible(settings.show_overlay)
        self.redraw()

    # Interaction

    @pyqtSlot(object)
    def handle_pointer_event(self, event: PointerEvent) -> None:
        """Run a pointer event through the reducer and notify the host."""
        if self._context is None:
            return

        previous = self._state
        self._state = reduce_pointer_event(previous, event)
        if self._state is previous:
            return

        self.redraw()
        if self._state.box_ready != previous.box_ready:
            logger.debug(f"Box ready: {self._state.box_ready}")
            self._set_box_ready(self._state.box_ready)
        if self._state.points != previous.points:
            self._set_points(list(self._state.points))

    def keyPressEvent(self, event: QKeyEvent) -> None:
        """Hide the overlay while Ctrl is held."""
        if (
            event.key() == Qt.Key.Key_Control
            or event.modifiers() & Qt.KeyboardModifier.ControlModifier
        ):
            self._set_suppressed(True)
        super().keyPressEvent(event)

    def keyReleaseEvent(self, event: QKeyEvent) -> None:
        """Show the overlay again when Ctrl is released."""
        if event.key() == Qt.Key.Key_Control and not event.isAutoRepeat():
            self._set_suppressed(False)
        super().keyReleaseEvent(event)

    def _set_suppressed(self, held: bool) -> None:
        settings = self._settings.with_suppress_key(held)
        if settings == self._settings:
            return
        self._settings = settings
        self.control_panel.set_mask_visible(settings.show_overlay)
        self.redraw()

    @pyqtSlot(float)
    def _on_threshold_changed(self, threshold: float) -> None:
        self._settings = self._settings.with_threshold(threshold)
        self.redraw()

    @pyqtSlot(bool)
    def _on_mask_toggled(self, visible: bool) -> None:
        self._settings = self._settings.with_show_overlay(visible)
        self.redraw()

    # Rendering

    @pyqtSlot()
    def redraw(self) -> None:
        """Redraw the full frame from the current state."""
        if self._context is None:
            logger.debug("No image set, render skipped")
            return

        display = render_overlay(
            self._context,
            self._state.mode,
            self._masks,
            self._state.points,
            self._settings,
        )
        fg, bg = self._state.get_point_counts()
        self.control_panel.update_point_info(fg, bg)
        self.canvas.update_display(display)
