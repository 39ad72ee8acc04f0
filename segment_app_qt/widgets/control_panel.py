"""
Control panel widget for overlay visibility.

Provides the mask area threshold slider and the show-mask checkbox.
"""

from typing import Optional

from PyQt6.QtCore import Qt, pyqtSignal
from PyQt6.QtWidgets import (
    QCheckBox,
    QHBoxLayout,
    QLabel,
    QSlider,
    QWidget,
)

from segment_app_qt.constants import (
    DEFAULT_MASK_AREA_THRESHOLD,
    THRESHOLD_SLIDER_STEPS,
)


class ControlPanel(QWidget):
    """
    Control panel widget with overlay controls.

    Signals:
        threshold_changed: Emitted with the new mask area threshold in [0, 1]
        mask_toggle_changed: Emitted when mask visibility is toggled
    """

    threshold_changed = pyqtSignal(float)
    mask_toggle_changed = pyqtSignal(bool)

    def __init__(self, parent: Optional[QWidget] = None):
        """Initialize control panel."""
        super().__init__(parent)
        self._build_ui()

    def _build_ui(self) -> None:
        """Build the UI layout."""
        layout = QHBoxLayout(self)
        layout.setContentsMargins(5, 5, 5, 5)

        layout.addWidget(QLabel("Mask Area Threshold:"))

        self.threshold_slider = QSlider(Qt.Orientation.Horizontal)
        self.threshold_slider.setRange(0, THRESHOLD_SLIDER_STEPS)
        self.threshold_slider.setSingleStep(1)
        self.threshold_slider.setValue(
            round(DEFAULT_MASK_AREA_THRESHOLD * THRESHOLD_SLIDER_STEPS)
        )
        self.threshold_slider.valueChanged.connect(self._on_slider_changed)
        layout.addWidget(self.threshold_slider)

        self.threshold_label = QLabel()
        self.threshold_label.setMinimumWidth(40)
        self._update_threshold_label()
        layout.addWidget(self.threshold_label)

        layout.addStretch()

        self.point_label = QLabel("Points: FG=0, BG=0")
        layout.addWidget(self.point_label)

        layout.addSpacing(20)

        self.mask_checkbox = QCheckBox("Show Mask (Ctrl to change)")
        self.mask_checkbox.setChecked(True)
        self.mask_checkbox.toggled.connect(self.mask_toggle_changed.emit)
        layout.addWidget(self.mask_checkbox)

    def _on_slider_changed(self, value: int) -> None:
        self._update_threshold_label()
        self.threshold_changed.emit(value / THRESHOLD_SLIDER_STEPS)

    def _update_threshold_label(self) -> None:
        self.threshold_label.setText(f"{round(self.threshold() * 100)} %")

    def threshold(self) -> float:
        """Get the current mask area threshold."""
        return self.threshold_slider.value() / THRESHOLD_SLIDER_STEPS

    def set_threshold(self, threshold: float) -> None:
        """Set the threshold without emitting threshold_changed."""
        self.threshold_slider.blockSignals(True)
        self.threshold_slider.setValue(round(threshold * THRESHOLD_SLIDER_STEPS))
        self.threshold_slider.blockSignals(False)
        self._update_threshold_label()

    def update_point_info(self, fg_count: int, bg_count: int) -> None:
        """Update point count display."""
        self.point_label.setText(f"Points: FG={fg_count}, BG={bg_count}")

    def is_mask_visible(self) -> bool:
        """Check if mask visibility is enabled."""
        return self.mask_checkbox.isChecked()

    def set_mask_visible(self, visible: bool) -> None:
        """Set mask visibility without emitting mask_toggle_changed."""
        self.mask_checkbox.blockSignals(True)
        self.mask_checkbox.setChecked(visible)
        self.mask_checkbox.blockSignals(False)
