"""
Annotation state and pointer interaction.

Holds the immutable records shared between the interaction handler,
the renderer and the host (points, masks, image context), and the
reducer that turns pointer events into the next annotation state.
"""

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Optional, Sequence, Tuple

import numpy as np

from segment_app_qt.constants import (
    LABEL_BACKGROUND,
    LABEL_FOREGROUND,
    PRIMARY_BUTTON,
)
from segment_app_qt.utils.coordinate import to_image_space


class InteractionMode(str, Enum):
    """Pointer interpretation selected by the host for a session."""

    CLICK = "click"
    BOX = "box"
    EVERYTHING = "everything"


class PointerEventKind(str, Enum):
    """Kinds of pointer input understood by the reducer."""

    CLICK = "click"
    CONTEXT_MENU = "context_menu"
    MOVE = "move"
    RELEASE = "release"


@dataclass(frozen=True)
class Point:
    """
    Annotation point in image pixel space.

    Attributes:
        x: X coordinate (may lie outside the image while dragging)
        y: Y coordinate
        label: 1 for foreground, 0 for background
    """

    x: float
    y: float
    label: int = LABEL_FOREGROUND

    @property
    def is_foreground(self) -> bool:
        return self.label == LABEL_FOREGROUND


@dataclass(frozen=True)
class Mask:
    """
    Externally computed segmentation candidate.

    Attributes:
        bbox: Bounding box as (x, y, w, h)
        segmentation: Occupied column indices, one sequence per image row
        area: Mask area in pixels
    """

    bbox: Tuple[float, float, float, float]
    segmentation: Tuple[Tuple[int, ...], ...]
    area: float

    def area_ratio(self, width: int, height: int) -> float:
        """Fraction of the image area covered by this mask."""
        image_area = width * height
        if image_area <= 0:
            return float("inf")
        return self.area / image_area


@dataclass(frozen=True, eq=False)
class ImageContext:
    """
    Image being annotated.

    Attributes:
        width: Image width in pixels
        height: Image height in pixels
        image: RGB image array of shape (height, width, 3)
    """

    width: int
    height: int
    image: np.ndarray = field(repr=False)

    @classmethod
    def from_image(cls, image: np.ndarray) -> "ImageContext":
        """Create a context whose dimensions are taken from the array."""
        height, width = image.shape[:2]
        return cls(width=int(width), height=int(height), image=image)


@dataclass(frozen=True)
class Viewport:
    """
    Placement of the displayed image inside the canvas widget.

    Attributes:
        origin_x: X offset of the image's top-left corner
        origin_y: Y offset of the image's top-left corner
        scale: Display scale at the time the viewport was captured
    """

    origin_x: float = 0.0
    origin_y: float = 0.0
    scale: float = 1.0


@dataclass(frozen=True)
class PointerEvent:
    """
    Pointer input in display coordinates.

    Attributes:
        kind: What happened (click, context menu, move, release)
        x: X position in display coordinates
        y: Y position in display coordinates
        viewport: Viewport the position was captured in
        button: Button that triggered the event (0 for moves)
        buttons: Bitmask of buttons held during the event
    """

    kind: PointerEventKind
    x: float
    y: float
    viewport: Viewport = field(default_factory=Viewport)
    button: int = 0
    buttons: int = 0

    def image_position(self) -> Tuple[float, float]:
        """Map the event position into image pixel space."""
        return to_image_space(
            self.x,
            self.y,
            self.viewport.origin_x,
            self.viewport.origin_y,
            self.viewport.scale,
        )


@dataclass(frozen=True)
class AnnotationState:
    """
    Point list and box-ready flag for one annotation session.

    Every update returns a new instance; points are never edited in place.

    Attributes:
        mode: Interaction mode of the session
        points: Current points in image pixel space
        box_ready: True once a two-point box has been committed
    """

    mode: InteractionMode = InteractionMode.CLICK
    points: Tuple[Point, ...] = ()
    box_ready: bool = False

    def with_points(self, points: Sequence[Point]) -> "AnnotationState":
        """Return a copy holding the given point list."""
        return replace(self, points=tuple(points))

    def has_points(self) -> bool:
        """Check if any points exist."""
        return len(self.points) > 0

    def get_point_counts(self) -> Tuple[int, int]:
        """Get counts of foreground and background points."""
        fg = sum(1 for p in self.points if p.label == LABEL_FOREGROUND)
        return fg, len(self.points) - fg

    def get_box(self) -> Optional[Tuple[float, float, float, float]]:
        """
        Get the box spanned by the two box-mode points.

        Returns:
            (x_min, y_min, x_max, y_max) or None unless there are exactly
            two points
        """
        if len(self.points) != 2:
            return None
        first, second = self.points
        return (
            min(first.x, second.x),
            min(first.y, second.y),
            max(first.x, second.x),
            max(first.y, second.y),
        )


def reduce_pointer_event(
    state: AnnotationState, event: PointerEvent
) -> AnnotationState:
    """
    Compute the annotation state that follows a pointer event.

    click mode:
        primary click appends a foreground point, context menu appends a
        background point.
    box mode:
        an unbuttoned move with at most one point moves the anchor; a move
        with the primary button held keeps the anchor and replaces the
        second point, clearing box_ready; releasing the primary button with
        two points sets box_ready.
    everything mode:
        no changes.

    Args:
        state: Current annotation state
        event: Pointer event in display coordinates

    Returns:
        Next state (the same instance when nothing changes)
    """
    if state.mode == InteractionMode.CLICK:
        return _reduce_click_mode(state, event)
    if state.mode == InteractionMode.BOX:
        return _reduce_box_mode(state, event)
    return state


def _reduce_click_mode(
    state: AnnotationState, event: PointerEvent
) -> AnnotationState:
    if event.kind == PointerEventKind.CLICK and event.button == PRIMARY_BUTTON:
        label = LABEL_FOREGROUND
    elif event.kind == PointerEventKind.CONTEXT_MENU:
        label = LABEL_BACKGROUND
    else:
        return state

    x, y = event.image_position()
    return state.with_points(state.points + (Point(x, y, label),))


def _reduce_box_mode(
    state: AnnotationState, event: PointerEvent
) -> AnnotationState:
    if event.kind == PointerEventKind.MOVE:
        x, y = event.image_position()
        if event.buttons == 0 and len(state.points) <= 1:
            # Hover preview: anchor follows the pointer until a drag starts
            return state.with_points((Point(x, y, LABEL_FOREGROUND),))
        if event.buttons == PRIMARY_BUTTON and len(state.points) >= 1:
            return replace(
                state,
                points=(state.points[0], Point(x, y, LABEL_FOREGROUND)),
                box_ready=False,
            )
        return state

    if (
        event.kind == PointerEventKind.RELEASE
        and event.button == PRIMARY_BUTTON
        and len(state.points) == 2
    ):
        return replace(state, box_ready=True)

    return state
