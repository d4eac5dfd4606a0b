"""Shape geometry: draw primitives, bounding boxes and kind rules.

Every function here is pure. A primitive is a small immutable descriptor
that the sketch renderer turns into a drawable; the state machine only ever
looks at a primitive's bounding box.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from sketch_canvas.core.models import BoundingBox, Point
from sketch_canvas.core.types import ShapeKind
from sketch_canvas.exceptions import UnsupportedShapeKindError

CORNER_RADIUS = 20.0
ARROW_HEAD_LENGTH = 15.0
ARROW_HEAD_ANGLE = math.pi / 6
TEXT_FONT_SIZE = 24
TEXT_PLACEHOLDER = "Text"
# Average glyph advance as a fraction of the font size, used to size text boxes.
TEXT_CHAR_WIDTH = 0.6

_CANONICAL = {
    ShapeKind.SQUARE: ShapeKind.RECTANGLE,
    ShapeKind.CIRCLE: ShapeKind.ELLIPSE,
}

_SYMMETRIC = {
    ShapeKind.RECTANGLE: ShapeKind.SQUARE,
    ShapeKind.SQUARE: ShapeKind.RECTANGLE,
    ShapeKind.ELLIPSE: ShapeKind.CIRCLE,
    ShapeKind.CIRCLE: ShapeKind.ELLIPSE,
}


@dataclass(frozen=True)
class RoundedRectPath:
    """Rounded rectangle outline. The box excludes the corner rounding."""

    x: float
    y: float
    width: float
    height: float
    radius: float


@dataclass(frozen=True)
class EllipsePrimitive:
    """Ellipse given by its centre and full width/height."""

    cx: float
    cy: float
    width: float
    height: float


@dataclass(frozen=True)
class CirclePrimitive:
    """Circle given by its centre and diameter."""

    cx: float
    cy: float
    diameter: float


@dataclass(frozen=True)
class LinePrimitive:
    """Straight segment."""

    start: Point
    end: Point


@dataclass(frozen=True)
class ArrowPath:
    """Shaft from ``start`` to ``tip`` plus a V-shaped head at ``tip``."""

    start: Point
    tip: Point
    left_barb: Point
    right_barb: Point


@dataclass(frozen=True)
class TextPrimitive:
    """Single-line text anchored at its top-left corner."""

    position: Point
    content: str
    font_size: int


Primitive = RoundedRectPath | EllipsePrimitive | CirclePrimitive | LinePrimitive | ArrowPath | TextPrimitive


def as_shape_kind(kind: ShapeKind | str) -> ShapeKind:
    """Coerce ``kind`` into the closed ``ShapeKind`` set.

    Raises:
        UnsupportedShapeKindError: If ``kind`` is not a known shape kind.
    """
    try:
        return ShapeKind(kind)
    except ValueError:
        raise UnsupportedShapeKindError(kind) from None


def canonical_kind(kind: ShapeKind | str) -> ShapeKind:
    """Collapse symmetric variants: square -> rectangle, circle -> ellipse."""
    kind = as_shape_kind(kind)
    return _CANONICAL.get(kind, kind)


def toggle_symmetric(kind: ShapeKind | str) -> ShapeKind:
    """Swap rectangle <-> square and ellipse <-> circle, identity otherwise."""
    kind = as_shape_kind(kind)
    return _SYMMETRIC.get(kind, kind)


def compute_primitive(kind: ShapeKind | str, start: Point, end: Point) -> Primitive:
    """Build the draw primitive for a shape dragged from ``start`` to ``end``.

    Args:
        kind: Shape kind, symmetric variants included.
        start: Anchor where the drag began, in canvas space.
        end: Anchor where the drag currently is, in canvas space.

    Returns:
        The geometry descriptor for the shape.

    Raises:
        UnsupportedShapeKindError: If ``kind`` is not a known shape kind.
    """
    kind = as_shape_kind(kind)
    dx = end.x - start.x
    dy = end.y - start.y

    if kind == ShapeKind.RECTANGLE:
        return RoundedRectPath(
            x=min(start.x, end.x),
            y=min(start.y, end.y),
            width=abs(dx),
            height=abs(dy),
            radius=CORNER_RADIUS,
        )
    if kind == ShapeKind.SQUARE:
        size = min(abs(dx), abs(dy))
        return RoundedRectPath(
            x=start.x - size if dx < 0 else start.x,
            y=start.y - size if dy < 0 else start.y,
            width=size,
            height=size,
            radius=CORNER_RADIUS,
        )
    if kind == ShapeKind.ELLIPSE:
        return EllipsePrimitive(
            cx=(start.x + end.x) / 2,
            cy=(start.y + end.y) / 2,
            width=abs(dx),
            height=abs(dy),
        )
    if kind == ShapeKind.CIRCLE:
        return CirclePrimitive(
            cx=(start.x + end.x) / 2,
            cy=(start.y + end.y) / 2,
            diameter=math.hypot(dx, dy),
        )
    if kind == ShapeKind.LINE:
        return LinePrimitive(start=start, end=end)
    if kind == ShapeKind.ARROW:
        return _arrow(start, end)
    # ShapeKind.TEXT
    return TextPrimitive(position=start, content=TEXT_PLACEHOLDER, font_size=TEXT_FONT_SIZE)


def _arrow(start: Point, end: Point) -> ArrowPath:
    dx = end.x - start.x
    dy = end.y - start.y
    length = math.hypot(dx, dy)
    if length == 0:
        return ArrowPath(start=start, tip=start, left_barb=start, right_barb=start)

    angle = math.atan2(dy, dx)
    cos_a = math.cos(angle)
    sin_a = math.sin(angle)

    def rotate(x: float, y: float) -> Point:
        return Point(start.x + x * cos_a - y * sin_a, start.y + x * sin_a + y * cos_a)

    back = length - ARROW_HEAD_LENGTH * math.cos(ARROW_HEAD_ANGLE)
    spread = ARROW_HEAD_LENGTH * math.sin(ARROW_HEAD_ANGLE)
    return ArrowPath(
        start=start,
        tip=rotate(length, 0),
        left_barb=rotate(back, spread),
        right_barb=rotate(back, -spread),
    )


def bounding_box(primitive: Primitive) -> BoundingBox:
    """Return the minimal axis-aligned box containing ``primitive``.

    Rounded rectangles report their unrounded extent and arrows include
    their barbs.
    """
    if isinstance(primitive, RoundedRectPath):
        return BoundingBox(primitive.x, primitive.y, primitive.width, primitive.height)
    if isinstance(primitive, EllipsePrimitive):
        return BoundingBox(
            primitive.cx - primitive.width / 2,
            primitive.cy - primitive.height / 2,
            primitive.width,
            primitive.height,
        )
    if isinstance(primitive, CirclePrimitive):
        radius = primitive.diameter / 2
        return BoundingBox(primitive.cx - radius, primitive.cy - radius, primitive.diameter, primitive.diameter)
    if isinstance(primitive, LinePrimitive):
        return _enclose([primitive.start, primitive.end])
    if isinstance(primitive, ArrowPath):
        return _enclose([primitive.start, primitive.tip, primitive.left_barb, primitive.right_barb])
    if isinstance(primitive, TextPrimitive):
        return BoundingBox(
            primitive.position.x,
            primitive.position.y,
            len(primitive.content) * primitive.font_size * TEXT_CHAR_WIDTH,
            primitive.font_size,
        )
    raise UnsupportedShapeKindError(type(primitive).__name__)


def _enclose(points: list[Point]) -> BoundingBox:
    xs = [p.x for p in points]
    ys = [p.y for p in points]
    return BoundingBox(min(xs), min(ys), max(xs) - min(xs), max(ys) - min(ys))


def canonical_anchors(kind: ShapeKind | str, start: Point, end: Point) -> tuple[Point, Point]:
    """Anchors to store so the canonical kind redraws the same silhouette.

    Box-shaped kinds store the corners of the box actually drawn, so a square
    or circle survives being regenerated as a rectangle or ellipse. Lines,
    arrows and text keep their raw anchors because direction matters.
    """
    kind = as_shape_kind(kind)
    if kind in (ShapeKind.LINE, ShapeKind.ARROW, ShapeKind.TEXT):
        return start, end
    box = bounding_box(compute_primitive(kind, start, end))
    return Point(box.x, box.y), Point(box.x + box.width, box.y + box.height)
