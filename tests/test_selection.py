"""Tests for selection state and modes."""

from __future__ import annotations

import pytest

from sketch_canvas.core.models import BoundingBox, Point
from sketch_canvas.core.modes import MOVE, NORMAL, AddMode, parse_mode
from sketch_canvas.core.selection import SENTINEL, Corners, SelectionState, corners_from_box, overlay_edges
from sketch_canvas.core.types import Corner, ShapeKind
from sketch_canvas.exceptions import InvalidModeError


class TestCorners:
    """Tests for overlay corner derivation."""

    def test_corners_from_box(self) -> None:
        corners = corners_from_box(BoundingBox(10, 20, 30, 40))
        assert corners.tl == Point(10, 20)
        assert corners.tr == Point(40, 20)
        assert corners.bl == Point(10, 60)
        assert corners.br == Point(40, 60)

    def test_lookup_by_corner(self) -> None:
        corners = corners_from_box(BoundingBox(0, 0, 1, 1))
        assert corners[Corner.BOTTOM_RIGHT] == Point(1, 1)
        assert corners["tr"] == Point(1, 0)

    def test_four_edges(self) -> None:
        corners = corners_from_box(BoundingBox(0, 0, 2, 1))
        edges = corners.edges()
        assert len(edges) == 4
        assert (corners.tl, corners.tr) in edges
        assert (corners.bl, corners.tl) in edges

    def test_overlay_edges_order(self) -> None:
        corners = corners_from_box(BoundingBox(0, 0, 2, 1))
        assert overlay_edges(corners) == [
            (Point(0, 0), Point(2, 0)),
            (Point(2, 0), Point(2, 1)),
            (Point(2, 1), Point(0, 1)),
            (Point(0, 1), Point(0, 0)),
        ]

    def test_opposite_corners(self) -> None:
        assert Corner.TOP_LEFT.opposite == Corner.BOTTOM_RIGHT
        assert Corner.TOP_RIGHT.opposite == Corner.BOTTOM_LEFT
        assert Corner.BOTTOM_LEFT.opposite == Corner.TOP_RIGHT
        assert Corner.BOTTOM_RIGHT.opposite == Corner.TOP_LEFT


class TestSelectionState:
    """Tests for SelectionState."""

    def test_starts_at_sentinel(self) -> None:
        selection = SelectionState()
        assert not selection.has_selection
        assert all(point == SENTINEL for _, point in selection.displayed().items())

    def test_select_sets_corners(self) -> None:
        selection = SelectionState()
        selection.select(3, BoundingBox(0, 0, 10, 10))
        assert selection.selected_index == 3
        assert selection.corners.br == Point(10, 10)

    def test_preview_overrides_until_committed(self) -> None:
        selection = SelectionState()
        selection.select(0, BoundingBox(0, 0, 10, 10))
        selection.show_preview(BoundingBox(5, 5, 10, 10))

        assert selection.displayed().tl == Point(5, 5)
        assert selection.corners.tl == Point(0, 0)

        selection.commit_preview()
        assert selection.preview is None
        assert selection.corners.tl == Point(5, 5)

    def test_select_drops_preview(self) -> None:
        selection = SelectionState()
        selection.show_preview(BoundingBox(5, 5, 1, 1))
        selection.select(0, BoundingBox(0, 0, 1, 1))
        assert selection.preview is None
        assert selection.displayed().tl == Point(0, 0)

    def test_reset(self) -> None:
        selection = SelectionState()
        selection.select(0, BoundingBox(0, 0, 10, 10))
        selection.reset()
        assert selection.selected_index is None
        assert selection.corners == Corners()

    def test_handle_hit(self) -> None:
        selection = SelectionState()
        selection.select(0, BoundingBox(0, 0, 100, 50))
        assert selection.handle_at(Point(102, 53), radius=5) == Corner.BOTTOM_RIGHT
        assert selection.handle_at(Point(50, 25), radius=5) is None

    def test_no_handle_without_selection(self) -> None:
        """Parked handles are never interactable."""
        assert SelectionState().handle_at(SENTINEL, radius=5) is None


class TestModes:
    """Tests for mode parsing."""

    def test_parse_labels(self) -> None:
        assert parse_mode("normal") is NORMAL
        assert parse_mode("move") is MOVE
        assert parse_mode("add-circle") == AddMode(ShapeKind.CIRCLE)

    def test_labels_round_trip(self) -> None:
        for kind in ShapeKind:
            mode = AddMode(kind)
            assert parse_mode(mode.label) == mode
        assert NORMAL.label == "normal"
        assert MOVE.label == "move"

    @pytest.mark.parametrize("label", ["", "clear-shapes", "add-", "add-hexagon", "Normal"])
    def test_invalid_labels(self, label: str) -> None:
        with pytest.raises(InvalidModeError) as exc_info:
            parse_mode(label)
        assert exc_info.value.label == label
