"""
Tests for annotation state and the pointer event reducer.
"""

from functools import reduce

import numpy as np
import pytest

from segment_app_qt.constants import PRIMARY_BUTTON, SECONDARY_BUTTON
from segment_app_qt.state import (
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


def click(x, y, viewport=Viewport()):
    return PointerEvent(PointerEventKind.CLICK, x, y, viewport, button=PRIMARY_BUTTON)


def context_menu(x, y, viewport=Viewport()):
    return PointerEvent(
        PointerEventKind.CONTEXT_MENU, x, y, viewport, button=SECONDARY_BUTTON
    )


def hover(x, y, viewport=Viewport()):
    return PointerEvent(PointerEventKind.MOVE, x, y, viewport, buttons=0)


def drag(x, y, viewport=Viewport()):
    return PointerEvent(PointerEventKind.MOVE, x, y, viewport, buttons=PRIMARY_BUTTON)


def release(x, y, viewport=Viewport()):
    return PointerEvent(PointerEventKind.RELEASE, x, y, viewport, button=PRIMARY_BUTTON)


class TestRecords:
    """Test Point, Mask and ImageContext records."""

    def test_point_is_immutable(self):
        """Test points cannot be edited in place."""
        point = Point(1.0, 2.0, 1)

        with pytest.raises(AttributeError):
            point.x = 5.0

    def test_point_default_label(self):
        """Test points default to foreground."""
        assert Point(0, 0).label == 1
        assert Point(0, 0).is_foreground
        assert not Point(0, 0, 0).is_foreground

    def test_mask_area_ratio(self):
        """Test area ratio against image area."""
        mask = Mask(bbox=(0, 0, 1, 1), segmentation=(), area=50)

        assert mask.area_ratio(10, 10) == 0.5

    def test_mask_area_ratio_empty_image(self):
        """Test a zero-area image does not raise."""
        mask = Mask(bbox=(0, 0, 1, 1), segmentation=(), area=5)

        assert mask.area_ratio(0, 10) == float("inf")

    def test_image_context_from_image(self):
        """Test dimensions are read from the array shape."""
        context = ImageContext.from_image(np.zeros((30, 50, 3), dtype=np.uint8))

        assert context.width == 50
        assert context.height == 30


class TestAnnotationState:
    """Test AnnotationState helpers."""

    def test_defaults(self):
        """Test default initialization."""
        state = AnnotationState()

        assert state.mode == InteractionMode.CLICK
        assert state.points == ()
        assert state.box_ready is False
        assert not state.has_points()

    def test_with_points_returns_copy(self):
        """Test with_points leaves the original untouched."""
        state = AnnotationState()
        updated = state.with_points([Point(1, 1)])

        assert state.points == ()
        assert updated.points == (Point(1, 1),)

    def test_point_counts(self):
        """Test foreground/background counts."""
        state = AnnotationState(points=(Point(0, 0, 1), Point(1, 1, 0), Point(2, 2, 1)))

        assert state.get_point_counts() == (2, 1)

    def test_get_box(self):
        """Test box corners are ordered min/max."""
        state = AnnotationState(
            mode=InteractionMode.BOX, points=(Point(30, 5), Point(10, 25))
        )

        assert state.get_box() == (10, 5, 30, 25)

    def test_get_box_requires_two_points(self):
        """Test no box with fewer than two points."""
        assert AnnotationState(points=(Point(1, 1),)).get_box() is None


class TestPointerEvent:
    """Test PointerEvent coordinate mapping."""

    def test_image_position_uses_viewport(self):
        """Test mapping through the captured viewport."""
        event = hover(300, 100, Viewport(origin_x=200, origin_y=0, scale=2.0))

        assert event.image_position() == (50.0, 50.0)


class TestClickMode:
    """Test reducer in click mode."""

    def test_left_click_appends_foreground(self):
        """Test primary click adds a foreground point."""
        state = reduce_pointer_event(AnnotationState(), click(10, 20))

        assert state.points == (Point(10.0, 20.0, 1),)

    def test_context_menu_appends_background(self):
        """Test context menu adds a background point."""
        state = reduce_pointer_event(AnnotationState(), context_menu(3, 4))

        assert state.points == (Point(3.0, 4.0, 0),)

    def test_click_accumulation(self):
        """Test left then right click appends in order."""
        state = reduce(
            reduce_pointer_event,
            [click(1, 1), context_menu(2, 2)],
            AnnotationState(),
        )

        assert [p.label for p in state.points] == [1, 0]
        assert state.points[0] == Point(1.0, 1.0, 1)
        assert state.points[1] == Point(2.0, 2.0, 0)

    def test_never_replaces_existing_points(self):
        """Test earlier points survive later clicks unchanged."""
        first = reduce_pointer_event(AnnotationState(), click(5, 5))
        second = reduce_pointer_event(first, click(6, 6))

        assert second.points[0] is first.points[0]
        assert len(second.points) == 2

    def test_moves_and_releases_ignored(self):
        """Test moves and releases do not change click-mode state."""
        state = AnnotationState()

        assert reduce_pointer_event(state, hover(1, 1)) is state
        assert reduce_pointer_event(state, drag(1, 1)) is state
        assert reduce_pointer_event(state, release(1, 1)) is state

    def test_non_primary_click_ignored(self):
        """Test middle-button clicks do nothing."""
        state = AnnotationState()
        event = PointerEvent(PointerEventKind.CLICK, 1, 1, button=4)

        assert reduce_pointer_event(state, event) is state

    def test_scaled_click(self):
        """Test clicks are stored in image space."""
        viewport = Viewport(origin_x=10, origin_y=20, scale=0.5)
        state = reduce_pointer_event(AnnotationState(), click(60, 70, viewport))

        assert state.points == (Point(100.0, 100.0, 1),)


class TestBoxMode:
    """Test reducer in box mode."""

    def test_hover_sets_anchor(self):
        """Test unbuttoned move from empty creates the anchor."""
        state = reduce_pointer_event(AnnotationState(mode=InteractionMode.BOX), hover(5, 6))

        assert state.points == (Point(5.0, 6.0, 1),)
        assert state.box_ready is False

    def test_hover_moves_single_anchor(self):
        """Test the anchor follows the pointer before a drag."""
        state = AnnotationState(mode=InteractionMode.BOX, points=(Point(1, 1),))
        state = reduce_pointer_event(state, hover(9, 9))

        assert state.points == (Point(9.0, 9.0, 1),)

    def test_hover_keeps_finished_box(self):
        """Test unbuttoned moves leave a two-point box alone."""
        state = AnnotationState(
            mode=InteractionMode.BOX, points=(Point(1, 1), Point(5, 5)), box_ready=True
        )

        assert reduce_pointer_event(state, hover(9, 9)) is state

    def test_box_drag_invariant(self):
        """Test hover, drag and release produce a committed two-point box."""
        state = AnnotationState(mode=InteractionMode.BOX)

        state = reduce_pointer_event(state, hover(10, 10))
        anchor = state.points[0]
        assert state.points == (Point(10.0, 10.0, 1),)

        state = reduce_pointer_event(state, drag(20, 25))
        assert len(state.points) == 2
        assert state.points[0] is anchor
        assert state.points[1] == Point(20.0, 25.0, 1)
        assert state.box_ready is False

        state = reduce_pointer_event(state, drag(30, 35))
        assert state.points[0] is anchor
        assert state.points[1] == Point(30.0, 35.0, 1)
        assert state.box_ready is False

        state = reduce_pointer_event(state, release(30, 35))
        assert state.box_ready is True
        assert state.points == (anchor, Point(30.0, 35.0, 1))

    def test_drag_clears_box_ready(self):
        """Test a new drag un-commits the box."""
        state = AnnotationState(
            mode=InteractionMode.BOX, points=(Point(1, 1), Point(5, 5)), box_ready=True
        )
        state = reduce_pointer_event(state, drag(7, 7))

        assert state.box_ready is False
        assert state.points == (Point(1, 1), Point(7.0, 7.0, 1))

    def test_drag_without_anchor_ignored(self):
        """Test dragging with no points does nothing."""
        state = AnnotationState(mode=InteractionMode.BOX)

        assert reduce_pointer_event(state, drag(3, 3)) is state

    def test_release_without_box_ignored(self):
        """Test releasing with a single anchor leaves box_ready unset."""
        state = AnnotationState(mode=InteractionMode.BOX, points=(Point(1, 1),))

        assert reduce_pointer_event(state, release(1, 1)).box_ready is False

    def test_release_keeps_points(self):
        """Test release never changes the point list."""
        points = (Point(1, 1), Point(4, 4))
        state = AnnotationState(mode=InteractionMode.BOX, points=points)

        assert reduce_pointer_event(state, release(100, 100)).points == points

    def test_point_count_bounded(self):
        """Test box mode never holds more than two points."""
        state = AnnotationState(mode=InteractionMode.BOX)
        events = [hover(1, 1), drag(2, 2), drag(3, 3), release(3, 3), drag(4, 4), hover(5, 5)]

        for event in events:
            state = reduce_pointer_event(state, event)
            assert len(state.points) <= 2

    def test_clicks_ignored(self):
        """Test clicks and context menus do not add points in box mode."""
        state = AnnotationState(mode=InteractionMode.BOX)

        assert reduce_pointer_event(state, click(1, 1)) is state
        assert reduce_pointer_event(state, context_menu(1, 1)) is state

    def test_drag_outside_image(self):
        """Test drag positions are not clamped."""
        state = AnnotationState(mode=InteractionMode.BOX, points=(Point(1, 1),))
        state = reduce_pointer_event(state, drag(-20, 5000))

        assert state.points[1] == Point(-20.0, 5000.0, 1)


class TestEverythingMode:
    """Test reducer in everything mode."""

    @pytest.mark.parametrize(
        "event",
        [click(1, 1), context_menu(1, 1), hover(1, 1), drag(1, 1), release(1, 1)],
    )
    def test_no_transitions(self, event):
        """Test no pointer event changes the state."""
        state = AnnotationState(mode=InteractionMode.EVERYTHING)

        assert reduce_pointer_event(state, event) is state
