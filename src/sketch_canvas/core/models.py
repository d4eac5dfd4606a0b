"""Core domain models for the sketch canvas."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from sketch_canvas.core.geometry import Primitive
    from sketch_canvas.core.types import ShapeKind


@dataclass(frozen=True)
class Point:
    """A point in 2D space.

    Depending on context this is a screen-space pointer position or a
    canvas-space position.

    Attributes:
        x: X-coordinate position.
        y: Y-coordinate position.
    """

    x: float
    y: float

    def __add__(self, other: Point) -> Point:
        return Point(self.x + other.x, self.y + other.y)

    def __sub__(self, other: Point) -> Point:
        return Point(self.x - other.x, self.y - other.y)

    def scaled(self, factor: float) -> Point:
        """Return this point multiplied by ``factor`` on both axes."""
        return Point(self.x * factor, self.y * factor)


@dataclass(frozen=True)
class BoundingBox:
    """Axis-aligned box in canvas space.

    Attributes:
        x: Left edge.
        y: Top edge.
        width: Horizontal extent.
        height: Vertical extent.
    """

    x: float
    y: float
    width: float
    height: float

    @property
    def origin(self) -> Point:
        return Point(self.x, self.y)

    def contains(self, point: Point, tolerance: float = 0.0) -> bool:
        """Check whether ``point`` lies inside the box grown by ``tolerance``."""
        return (
            self.x - tolerance <= point.x <= self.x + self.width + tolerance
            and self.y - tolerance <= point.y <= self.y + self.height + tolerance
        )


@dataclass(frozen=True)
class PlacedShape:
    """A shape committed to the shape store.

    The drawable is never edited in place: any geometry change builds a new
    ``PlacedShape`` which replaces the old one at the same store index.

    Attributes:
        kind: Canonical shape kind (never ``square`` or ``circle``).
        anchor_start: First anchor in canvas space.
        anchor_end: Second anchor in canvas space.
        primitive: Geometry descriptor computed from kind and anchors.
        drawable: Opaque sketch-renderer output for ``primitive``.
    """

    kind: ShapeKind
    anchor_start: Point
    anchor_end: Point
    primitive: Primitive
    drawable: Any
