"""
Overlay visibility settings.

Session-scoped UI state that gates mask rendering without touching
points or masks.
"""

from dataclasses import dataclass, replace

from segment_app_qt.constants import (
    DEFAULT_MASK_AREA_THRESHOLD,
    DEFAULT_SHOW_OVERLAY,
)
from segment_app_qt.state.annotation_state import Mask
from segment_app_qt.utils.exceptions import ConfigurationError


@dataclass(frozen=True)
class OverlaySettings:
    """
    Mask overlay visibility controls.

    Attributes:
        show_overlay: Whether mask boxes and outlines are drawn
        mask_area_threshold: Largest drawn mask, as a fraction of image area
    """

    show_overlay: bool = DEFAULT_SHOW_OVERLAY
    mask_area_threshold: float = DEFAULT_MASK_AREA_THRESHOLD

    def __post_init__(self):
        """Validate settings."""
        if not 0.0 <= self.mask_area_threshold <= 1.0:
            raise ConfigurationError(
                "mask_area_threshold must be within [0, 1]",
                key="mask_area_threshold",
                value=self.mask_area_threshold,
            )

    def with_threshold(self, threshold: float) -> "OverlaySettings":
        """Return a copy with a new mask area threshold."""
        return replace(self, mask_area_threshold=float(threshold))

    def with_show_overlay(self, show: bool) -> "OverlaySettings":
        """Return a copy with the overlay shown or hidden."""
        return replace(self, show_overlay=bool(show))

    def with_suppress_key(self, held: bool) -> "OverlaySettings":
        """Hide the overlay while the suppress key is held, show it on release."""
        return replace(self, show_overlay=not held)

    def is_mask_visible(self, mask: Mask, width: int, height: int) -> bool:
        """Check whether a mask passes the area threshold."""
        return mask.area_ratio(width, height) <= self.mask_area_threshold
