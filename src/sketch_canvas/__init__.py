"""sketch-canvas: an infinite-canvas sketch editor core served over Litestar.

Pointer and wheel events drive a per-session interaction state machine that
creates, previews, selects, moves and resizes hand-drawn-style shapes on a
pannable, zoomable plane. Sessions are exposed over a REST API and a
WebSocket input stream through a Litestar plugin.

Quick Start:
    >>> from litestar import Litestar
    >>> from sketch_canvas import SketchConfig, SketchPlugin
    >>>
    >>> app = Litestar(plugins=[SketchPlugin(SketchConfig())])

Driving a session directly:
    >>> from sketch_canvas import PointerEvent, SketchSession
    >>>
    >>> session = SketchSession()
    >>> session.set_mode("add-rectangle")
    >>> session.pointer_down(PointerEvent(x=10, y=10))
    >>> session.pointer_up(PointerEvent(x=110, y=60))
    >>> len(session.store)
    1
"""

from __future__ import annotations

from sketch_canvas.core import (
    BoundingBox,
    PlacedShape,
    Point,
    PointerEvent,
    SessionSettings,
    ShapeKind,
    SketchStyle,
)
from sketch_canvas.exceptions import (
    IndexOutOfRangeError,
    InvalidEventError,
    InvalidModeError,
    MissingGeometryTagError,
    SessionNotFoundError,
    SketchError,
    UnsupportedShapeKindError,
)
from sketch_canvas.plugin import SketchConfig, SketchPlugin
from sketch_canvas.services import ExportService, SessionService, SketchSession, SvgSketchRenderer
from sketch_canvas.storage import InMemorySessionStorage, SessionStorageProtocol

__all__ = [
    "BoundingBox",
    "ExportService",
    "InMemorySessionStorage",
    "IndexOutOfRangeError",
    "InvalidEventError",
    "InvalidModeError",
    "MissingGeometryTagError",
    "PlacedShape",
    "Point",
    "PointerEvent",
    "SessionNotFoundError",
    "SessionService",
    "SessionSettings",
    "SessionStorageProtocol",
    "ShapeKind",
    "SketchConfig",
    "SketchError",
    "SketchPlugin",
    "SketchSession",
    "SketchStyle",
    "SvgSketchRenderer",
]
