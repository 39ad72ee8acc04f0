"""
Utility functions for the segment overlay application.

The renderer lives in segment_app_qt.utils.mask_overlay and is imported
from there directly.
"""

from segment_app_qt.utils.color import color_for
from segment_app_qt.utils.coordinate import compute_display_scale, to_image_space
from segment_app_qt.utils.logger import get_logger, set_log_level
from segment_app_qt.utils.segments import extract_runs

__all__ = [
    "color_for",
    "compute_display_scale",
    "to_image_space",
    "extract_runs",
    "get_logger",
    "set_log_level",
]
