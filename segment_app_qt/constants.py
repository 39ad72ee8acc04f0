"""
Segment Overlay - Constants

Shared drawing style values and session defaults used by the renderer,
the widgets and the configuration layer.
"""

from typing import Tuple

# =============================================================================
# Interaction Defaults
# =============================================================================
INTERACTION_MODES: Tuple[str, ...] = ("click", "box", "everything")
DEFAULT_MODE: str = "click"

# Fraction of the image area above which a mask is hidden
DEFAULT_MASK_AREA_THRESHOLD: float = 0.5
DEFAULT_SHOW_OVERLAY: bool = True

# Slider resolution for the threshold control (0.01 steps)
THRESHOLD_SLIDER_STEPS: int = 100

# Pointer button bitmask (same values as DOM MouseEvent.buttons)
PRIMARY_BUTTON: int = 1
SECONDARY_BUTTON: int = 2
MIDDLE_BUTTON: int = 4

# Point labels
LABEL_BACKGROUND: int = 0
LABEL_FOREGROUND: int = 1


# =============================================================================
# Rendering Style
# =============================================================================
# Colors are RGB; the rasterizer works on RGB arrays
BOX_PREVIEW_COLOR: Tuple[int, int, int] = (0, 0, 0)
BOX_PREVIEW_COLOR_ALPHA: float = 0.9
BOX_PREVIEW_ALPHA: float = 0.9
BOX_PREVIEW_LINE_WIDTH: int = 2

MASK_COLOR_ALPHA: float = 0.95
MASK_BBOX_ALPHA: float = 0.9
MASK_BBOX_LINE_WIDTH: int = 2
MASK_BBOX_DASH: Tuple[int, int] = (5, 5)

SEGMENT_LINE_ALPHA: float = 0.8
SEGMENT_LINE_WIDTH: int = 1

POINT_RADIUS: int = 5
POINT_ALPHA: float = 0.9
POINT_COLOR_ALPHA: float = 0.9
POINT_FG_COLOR: Tuple[int, int, int] = (0, 255, 0)  # Green - foreground
POINT_BG_COLOR: Tuple[int, int, int] = (255, 0, 0)  # Red - background


# =============================================================================
# Widget Defaults
# =============================================================================
CANVAS_MIN_SIZE: Tuple[int, int] = (400, 300)
CANVAS_BACKGROUND: str = "#2c3e50"
MAX_VIEW_WIDTH: int = 1080
