"""
Coordinate transformation utilities.

Provides functions for converting between display (widget) coordinates
and image pixel coordinates.
"""

from typing import Tuple


def compute_display_scale(
    container_width: float,
    container_height: float,
    image_width: float,
    image_height: float,
) -> float:
    """
    Compute the scale at which an image fits inside its container.

    Zero-sized containers give a scale of 0 and zero-sized images give
    inf; neither raises.

    Args:
        container_width: Width of the display area
        container_height: Height of the display area
        image_width: Native image width in pixels
        image_height: Native image height in pixels

    Returns:
        min(container_width / image_width, container_height / image_height)
    """
    return min(
        _safe_divide(container_width, image_width),
        _safe_divide(container_height, image_height),
    )


def to_image_space(
    display_x: float,
    display_y: float,
    origin_x: float,
    origin_y: float,
    scale: float,
) -> Tuple[float, float]:
    """
    Convert display coordinates to image coordinates.

    No bounds clamping is done; the result may lie outside the image.

    Args:
        display_x: X coordinate in the display area
        display_y: Y coordinate in the display area
        origin_x: X position of the image's top-left corner in the display area
        origin_y: Y position of the image's top-left corner in the display area
        scale: Display scale computed for the current render

    Returns:
        Image coordinates (x, y) as floats
    """
    return (
        _safe_divide(display_x - origin_x, scale),
        _safe_divide(display_y - origin_y, scale),
    )


def _safe_divide(numerator: float, denominator: float) -> float:
    """Divide like IEEE floats do: x/0 is +-inf and 0/0 is nan."""
    if denominator == 0:
        if numerator == 0:
            return float("nan")
        return float("inf") if numerator > 0 else float("-inf")
    return numerator / denominator
