"""Input events consumed by the interaction state machine."""

from __future__ import annotations

from dataclasses import dataclass

from sketch_canvas.core.models import Point
from sketch_canvas.core.types import Corner, PointerButton


@dataclass(frozen=True)
class CanvasTarget:
    """Empty canvas under the pointer."""


@dataclass(frozen=True)
class ShapeTarget:
    """The body of the shape at ``index``."""

    index: int


@dataclass(frozen=True)
class HandleTarget:
    """One of the selection overlay's corner handles."""

    corner: Corner


PointerTarget = CanvasTarget | ShapeTarget | HandleTarget


@dataclass(frozen=True)
class PointerEvent:
    """A pointer down/move/up event.

    Attributes:
        x: Screen-space X position.
        y: Screen-space Y position.
        button: Pressed button, DOM numbering.
        shift: Whether the symmetry modifier is held.
        target: What the host UI says is under the pointer. ``None`` lets the
            session hit-test on its own.
    """

    x: float
    y: float
    button: int = PointerButton.PRIMARY
    shift: bool = False
    target: PointerTarget | None = None

    @property
    def position(self) -> Point:
        return Point(self.x, self.y)
