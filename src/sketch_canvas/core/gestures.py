"""Transient pointer gesture state.

At most one gesture is active per session; ``None`` means idle.
"""

from __future__ import annotations

from dataclasses import dataclass

from sketch_canvas.core.models import Point
from sketch_canvas.core.types import Corner


@dataclass(frozen=True)
class Drawing:
    """A new shape is being dragged out from ``anchor`` (canvas space)."""

    anchor: Point


@dataclass(frozen=True)
class Panning:
    """The view follows the pointer.

    Attributes:
        pointer_start: Screen position where the pan began.
        offset_start: Pan offset when the pan began.
    """

    pointer_start: Point
    offset_start: Point


@dataclass(frozen=True)
class MovingSelection:
    """The selected shape is being dragged.

    Attributes:
        index: Store index of the shape.
        pointer_start: Screen position where the drag began.
        anchors_start: Stored anchors before the drag.
    """

    index: int
    pointer_start: Point
    anchors_start: tuple[Point, Point]


@dataclass(frozen=True)
class ResizingSelection:
    """A corner handle of the selected shape is being dragged.

    Attributes:
        index: Store index of the shape.
        corner: Handle being dragged.
        opposite_anchor: Committed position of the opposite handle, held fixed.
    """

    index: int
    corner: Corner
    opposite_anchor: Point


Gesture = Drawing | Panning | MovingSelection | ResizingSelection
