"""
State management for the segment overlay application.

Immutable records and reducers for annotation and overlay state.
"""

from segment_app_qt.state.annotation_state import (
    AnnotationState,
    ImageContext,
    InteractionMode,
    Mask,
    Point,
    PointerEvent,
    PointerEventKind,
    Viewport,
    reduce_pointer_event,
)
from segment_app_qt.state.overlay_settings import OverlaySettings

__all__ = [
    "AnnotationState",
    "ImageContext",
    "InteractionMode",
    "Mask",
    "OverlaySettings",
    "Point",
    "PointerEvent",
    "PointerEventKind",
    "Viewport",
    "reduce_pointer_event",
]
