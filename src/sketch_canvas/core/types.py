"""Core type definitions for sketch-canvas."""

from __future__ import annotations

from enum import IntEnum, StrEnum


class ShapeKind(StrEnum):
    """Enumeration of shape kinds available for drawing."""

    RECTANGLE = "rectangle"
    SQUARE = "square"
    ELLIPSE = "ellipse"
    CIRCLE = "circle"
    LINE = "line"
    ARROW = "arrow"
    TEXT = "text"


class Corner(StrEnum):
    """Selection handle positions."""

    TOP_LEFT = "tl"
    TOP_RIGHT = "tr"
    BOTTOM_LEFT = "bl"
    BOTTOM_RIGHT = "br"

    @property
    def opposite(self) -> Corner:
        """The diagonally opposite corner (tl <-> br, tr <-> bl)."""
        return _OPPOSITE[self]


_OPPOSITE = {
    Corner.TOP_LEFT: Corner.BOTTOM_RIGHT,
    Corner.TOP_RIGHT: Corner.BOTTOM_LEFT,
    Corner.BOTTOM_LEFT: Corner.TOP_RIGHT,
    Corner.BOTTOM_RIGHT: Corner.TOP_LEFT,
}


class PointerButton(IntEnum):
    """Pointer buttons, numbered like DOM ``PointerEvent.button``."""

    PRIMARY = 0
    MIDDLE = 1
    SECONDARY = 2


class Cursor(StrEnum):
    """Cursor hints emitted with the render surface."""

    DEFAULT = "default"
    POINTER = "pointer"
    CROSSHAIR = "crosshair"
