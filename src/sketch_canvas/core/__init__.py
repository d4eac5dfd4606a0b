"""Core domain types for sketch-canvas: geometry, view transform, store and selection."""

from sketch_canvas.core.events import CanvasTarget, HandleTarget, PointerEvent, ShapeTarget
from sketch_canvas.core.gestures import Drawing, MovingSelection, Panning, ResizingSelection
from sketch_canvas.core.geometry import canonical_kind, compute_primitive, toggle_symmetric
from sketch_canvas.core.models import BoundingBox, PlacedShape, Point
from sketch_canvas.core.modes import MOVE, NORMAL, AddMode, MoveMode, NormalMode, parse_mode
from sketch_canvas.core.selection import SENTINEL, SelectionState
from sketch_canvas.core.settings import SessionSettings
from sketch_canvas.core.store import ShapeStore
from sketch_canvas.core.style import BOLD, FINE, SketchStyle
from sketch_canvas.core.transform import ViewTransform, to_canvas_space, to_screen_space
from sketch_canvas.core.types import Corner, Cursor, PointerButton, ShapeKind

__all__ = [
    "BOLD",
    "FINE",
    "MOVE",
    "NORMAL",
    "SENTINEL",
    "AddMode",
    "BoundingBox",
    "CanvasTarget",
    "Corner",
    "Cursor",
    "Drawing",
    "HandleTarget",
    "MoveMode",
    "MovingSelection",
    "NormalMode",
    "Panning",
    "PlacedShape",
    "Point",
    "PointerButton",
    "PointerEvent",
    "ResizingSelection",
    "SelectionState",
    "SessionSettings",
    "ShapeKind",
    "ShapeStore",
    "ShapeTarget",
    "SketchStyle",
    "ViewTransform",
    "canonical_kind",
    "compute_primitive",
    "parse_mode",
    "to_canvas_space",
    "to_screen_space",
    "toggle_symmetric",
]
