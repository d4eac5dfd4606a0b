"""Tests for the shape store."""

from __future__ import annotations

import pytest

from sketch_canvas.core.geometry import compute_primitive
from sketch_canvas.core.models import PlacedShape, Point
from sketch_canvas.core.store import ShapeStore
from sketch_canvas.core.types import ShapeKind
from sketch_canvas.exceptions import IndexOutOfRangeError


def _shape(x: float) -> PlacedShape:
    start, end = Point(x, 0), Point(x + 10, 10)
    primitive = compute_primitive(ShapeKind.LINE, start, end)
    return PlacedShape(kind=ShapeKind.LINE, anchor_start=start, anchor_end=end, primitive=primitive, drawable=x)


class TestShapeStore:
    """Tests for ShapeStore."""

    def test_append_returns_new_index(self) -> None:
        store = ShapeStore()
        assert store.append(_shape(0)) == 0
        assert store.append(_shape(1)) == 1
        assert len(store) == 2

    def test_iterates_in_paint_order(self) -> None:
        store = ShapeStore()
        for x in (3, 1, 2):
            store.append(_shape(x))
        assert [shape.drawable for shape in store] == [3, 1, 2]

    def test_replace_keeps_index(self) -> None:
        store = ShapeStore()
        store.append(_shape(0))
        store.append(_shape(1))
        store.replace_at(0, _shape(9))
        assert store[0].drawable == 9
        assert store[1].drawable == 1
        assert len(store) == 2

    @pytest.mark.parametrize("index", [-1, 1, 5])
    def test_replace_out_of_range(self, index: int) -> None:
        store = ShapeStore()
        store.append(_shape(0))
        with pytest.raises(IndexOutOfRangeError) as exc_info:
            store.replace_at(index, _shape(1))
        assert exc_info.value.index == index
        assert exc_info.value.length == 1

    def test_get_out_of_range(self) -> None:
        with pytest.raises(IndexOutOfRangeError):
            ShapeStore().get(0)

    def test_clear(self) -> None:
        store = ShapeStore()
        store.append(_shape(0))
        store.clear()
        assert len(store) == 0
        assert list(store) == []
