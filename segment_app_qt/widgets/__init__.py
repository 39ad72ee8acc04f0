"""
PyQt6 widgets for the segment overlay application.
"""

from segment_app_qt.widgets.control_panel import ControlPanel
from segment_app_qt.widgets.image_canvas import ImageCanvas
from segment_app_qt.widgets.segment_view import SegmentView

__all__ = [
    "ControlPanel",
    "ImageCanvas",
    "SegmentView",
]
