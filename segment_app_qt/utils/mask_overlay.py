"""
Mask overlay drawing utilities.

A frame is built as an ordered list of draw operations from the current
annotation state, then rasterized onto a copy of the image with OpenCV.
Every render is a full redraw; nothing is cached between frames.
"""

import math
from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple, Union

import cv2
import numpy as np

from segment_app_qt.constants import (
    BOX_PREVIEW_ALPHA,
    BOX_PREVIEW_COLOR,
    BOX_PREVIEW_COLOR_ALPHA,
    BOX_PREVIEW_LINE_WIDTH,
    MASK_BBOX_ALPHA,
    MASK_BBOX_DASH,
    MASK_BBOX_LINE_WIDTH,
    MASK_COLOR_ALPHA,
    POINT_ALPHA,
    POINT_BG_COLOR,
    POINT_COLOR_ALPHA,
    POINT_FG_COLOR,
    POINT_RADIUS,
    SEGMENT_LINE_ALPHA,
    SEGMENT_LINE_WIDTH,
)
from segment_app_qt.state.annotation_state import (
    ImageContext,
    InteractionMode,
    Mask,
    Point,
)
from segment_app_qt.state.overlay_settings import OverlaySettings
from segment_app_qt.utils.color import color_for
from segment_app_qt.utils.logger import get_logger
from segment_app_qt.utils.segments import extract_runs

logger = get_logger(__name__)

Color = Tuple[int, int, int]

# Coordinates are clamped to this magnitude before reaching OpenCV
_COORD_LIMIT = 1 << 20


@dataclass(frozen=True)
class ImageOp:
    """Base image drawn at full opacity at the origin."""

    image: np.ndarray = field(repr=False, compare=False)


@dataclass(frozen=True)
class RectOp:
    """Stroked rectangle; dashed when dash is set."""

    x: float
    y: float
    width: float
    height: float
    color: Color
    color_alpha: float
    alpha: float
    line_width: int
    dash: Optional[Tuple[int, int]] = None

    @property
    def style(self) -> Tuple[Color, float]:
        return self.color, self.alpha * self.color_alpha


@dataclass(frozen=True)
class LineOp:
    """Solid line segment."""

    x1: float
    y1: float
    x2: float
    y2: float
    color: Color
    color_alpha: float
    alpha: float
    line_width: int

    @property
    def style(self) -> Tuple[Color, float]:
        return self.color, self.alpha * self.color_alpha


@dataclass(frozen=True)
class CircleOp:
    """Filled circle."""

    cx: float
    cy: float
    radius: int
    color: Color
    color_alpha: float
    alpha: float

    @property
    def style(self) -> Tuple[Color, float]:
        return self.color, self.alpha * self.color_alpha


DrawOp = Union[ImageOp, RectOp, LineOp, CircleOp]


@dataclass
class Frame:
    """
    Ordered draw operations for one render.

    Attributes:
        width: Surface width (image width)
        height: Surface height (image height)
        ops: Draw operations, later ones drawn on top
    """

    width: int
    height: int
    ops: List[DrawOp] = field(default_factory=list)

    def rects(self, dashed: Optional[bool] = None) -> List[RectOp]:
        """Get rectangle ops, optionally only dashed or only solid ones."""
        return [
            op for op in self.ops
            if isinstance(op, RectOp)
            and (dashed is None or (op.dash is not None) == dashed)
        ]

    def lines(self) -> List[LineOp]:
        """Get line ops."""
        return [op for op in self.ops if isinstance(op, LineOp)]

    def circles(self) -> List[CircleOp]:
        """Get circle ops."""
        return [op for op in self.ops if isinstance(op, CircleOp)]


def build_frame(
    context: ImageContext,
    mode: Union[InteractionMode, str],
    masks: Sequence[Mask],
    points: Sequence[Point],
    settings: OverlaySettings,
) -> Frame:
    """
    Build the draw operations for the current state.

    Order: base image, box preview (box mode with two points), mask
    bounding boxes and outlines (when the overlay is shown and the mask
    passes the area threshold), then points.

    Args:
        context: Image being annotated
        mode: Interaction mode
        masks: Mask list; a mask's index selects its color
        points: Current annotation points
        settings: Overlay visibility settings

    Returns:
        Frame with the ordered draw operations
    """
    mode = InteractionMode(mode)
    frame = Frame(width=context.width, height=context.height)
    frame.ops.append(ImageOp(context.image))

    if mode == InteractionMode.BOX and len(points) == 2:
        first, second = points
        frame.ops.append(
            RectOp(
                x=min(first.x, second.x),
                y=min(first.y, second.y),
                width=abs(first.x - second.x),
                height=abs(first.y - second.y),
                color=BOX_PREVIEW_COLOR,
                color_alpha=BOX_PREVIEW_COLOR_ALPHA,
                alpha=BOX_PREVIEW_ALPHA,
                line_width=BOX_PREVIEW_LINE_WIDTH,
            )
        )

    hidden = 0
    if settings.show_overlay:
        for index, mask in enumerate(masks):
            if not settings.is_mask_visible(mask, context.width, context.height):
                hidden += 1
                continue
            frame.ops.extend(_mask_ops(mask, color_for(index)))

    for point in points:
        frame.ops.append(
            CircleOp(
                cx=point.x,
                cy=point.y,
                radius=POINT_RADIUS,
                color=POINT_FG_COLOR if point.is_foreground else POINT_BG_COLOR,
                color_alpha=POINT_COLOR_ALPHA,
                alpha=POINT_ALPHA,
            )
        )

    logger.debug(
        f"Frame built: {len(frame.rects(dashed=True))} masks drawn, "
        f"{hidden} hidden, {len(frame.lines())} segments, "
        f"{len(frame.circles())} points"
    )
    return frame


def _mask_ops(mask: Mask, color: Color) -> List[DrawOp]:
    """Dashed bounding box followed by one line per row run."""
    x, y, w, h = mask.bbox
    ops: List[DrawOp] = [
        RectOp(
            x=x,
            y=y,
            width=w,
            height=h,
            color=color,
            color_alpha=MASK_COLOR_ALPHA,
            alpha=MASK_BBOX_ALPHA,
            line_width=MASK_BBOX_LINE_WIDTH,
            dash=MASK_BBOX_DASH,
        )
    ]
    for row, columns in enumerate(mask.segmentation):
        for start, end in extract_runs(columns):
            ops.append(
                LineOp(
                    x1=start,
                    y1=row,
                    x2=end,
                    y2=row,
                    color=color,
                    color_alpha=MASK_COLOR_ALPHA,
                    alpha=SEGMENT_LINE_ALPHA,
                    line_width=SEGMENT_LINE_WIDTH,
                )
            )
    return ops


def rasterize(frame: Frame) -> np.ndarray:
    """
    Paint a frame into an RGB image.

    Consecutive ops sharing a color and alpha are drawn into one coverage
    layer and blended once, so overlapping strokes of the same mask do not
    darken each other.

    Args:
        frame: Frame from build_frame

    Returns:
        RGB uint8 image of shape (height, width, 3)
    """
    canvas = np.zeros((frame.height, frame.width, 3), dtype=np.uint8)
    layer = np.zeros((frame.height, frame.width), dtype=np.uint8)
    pending_style = None

    for op in frame.ops:
        if isinstance(op, ImageOp):
            _blend(canvas, layer, pending_style)
            pending_style = None
            canvas[:] = _to_rgb(op.image)
            continue

        if op.style != pending_style:
            _blend(canvas, layer, pending_style)
            pending_style = op.style
        _draw_op(layer, op)

    _blend(canvas, layer, pending_style)
    return canvas


def render_overlay(
    context: ImageContext,
    mode: Union[InteractionMode, str],
    masks: Sequence[Mask],
    points: Sequence[Point],
    settings: OverlaySettings,
) -> np.ndarray:
    """Build and rasterize the frame for the current state."""
    return rasterize(build_frame(context, mode, masks, points, settings))


def _draw_op(layer: np.ndarray, op: DrawOp) -> None:
    """Draw one op's coverage into the layer."""
    if isinstance(op, RectOp):
        if not _all_finite(op.x, op.y, op.width, op.height):
            return
        corners = [
            (op.x, op.y),
            (op.x + op.width, op.y),
            (op.x + op.width, op.y + op.height),
            (op.x, op.y + op.height),
            (op.x, op.y),
        ]
        if op.dash is None:
            cv2.rectangle(
                layer, _pixel(corners[0]), _pixel(corners[2]), 255, op.line_width
            )
        else:
            _draw_dashed_polyline(layer, corners, op.dash, op.line_width)
    elif isinstance(op, LineOp):
        if not _all_finite(op.x1, op.y1, op.x2, op.y2):
            return
        cv2.line(
            layer, _pixel((op.x1, op.y1)), _pixel((op.x2, op.y2)), 255, op.line_width
        )
    elif isinstance(op, CircleOp):
        if not _all_finite(op.cx, op.cy):
            return
        cv2.circle(layer, _pixel((op.cx, op.cy)), op.radius, 255, -1)


def _draw_dashed_polyline(
    layer: np.ndarray,
    vertices: Sequence[Tuple[float, float]],
    dash: Tuple[int, int],
    thickness: int,
) -> None:
    """Stroke a polyline with an on/off dash pattern continuing across corners."""
    on, off = dash
    period = on + off
    if on <= 0 or period <= 0:
        for start, end in zip(vertices[:-1], vertices[1:]):
            cv2.line(layer, _pixel(start), _pixel(end), 255, thickness)
        return

    phase = 0.0
    for (x1, y1), (x2, y2) in zip(vertices[:-1], vertices[1:]):
        length = math.hypot(x2 - x1, y2 - y1)
        if length == 0:
            continue
        dx = (x2 - x1) / length
        dy = (y2 - y1) / length

        pos = 0.0
        while pos < length:
            offset = phase % period
            if offset < on:
                step = min(on - offset, length - pos)
                cv2.line(
                    layer,
                    _pixel((x1 + dx * pos, y1 + dy * pos)),
                    _pixel((x1 + dx * (pos + step), y1 + dy * (pos + step))),
                    255,
                    thickness,
                )
            else:
                step = min(period - offset, length - pos)
            pos += step
            phase += step


def _blend(
    canvas: np.ndarray,
    layer: np.ndarray,
    style: Optional[Tuple[Color, float]],
) -> None:
    """Blend the covered layer pixels into the canvas and clear the layer."""
    if style is None:
        return
    color, alpha = style
    covered = layer > 0
    if np.any(covered):
        blended = (
            canvas[covered].astype(np.float32) * (1.0 - alpha)
            + np.array(color, dtype=np.float32) * alpha
        )
        canvas[covered] = np.clip(np.rint(blended), 0, 255).astype(np.uint8)
    layer[:] = 0


def _to_rgb(image: np.ndarray) -> np.ndarray:
    """Convert grayscale or RGBA images to 3-channel RGB."""
    if image.ndim == 2:
        return cv2.cvtColor(image, cv2.COLOR_GRAY2RGB)
    if image.shape[2] == 4:
        return cv2.cvtColor(image, cv2.COLOR_RGBA2RGB)
    return image


def _pixel(point: Tuple[float, float]) -> Tuple[int, int]:
    x, y = point
    return (
        int(round(min(max(x, -_COORD_LIMIT), _COORD_LIMIT))),
        int(round(min(max(y, -_COORD_LIMIT), _COORD_LIMIT))),
    )


def _all_finite(*values: float) -> bool:
    return all(math.isfinite(v) for v in values)
