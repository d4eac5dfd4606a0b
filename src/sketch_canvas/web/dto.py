"""Data Transfer Objects (DTOs) for the sketch-canvas API."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from datetime import datetime
from typing import TYPE_CHECKING, Any
from uuid import UUID

from sketch_canvas.core.geometry import bounding_box

if TYPE_CHECKING:
    from sketch_canvas.core.models import BoundingBox, PlacedShape, Point
    from sketch_canvas.services.interaction import SketchSession
    from sketch_canvas.services.render import RenderSurface


# Request DTOs


@dataclass
class SetModeDTO:
    """DTO for switching the editor mode.

    Attributes:
        mode: Mode label: ``normal``, ``move`` or ``add-<kind>``.
    """

    mode: str


@dataclass
class SelectDTO:
    """DTO for selecting a shape by store index."""

    index: int


@dataclass
class InputEventDTO:
    """DTO for one input event posted over HTTP.

    Attributes:
        type: Message type such as ``pointer_down`` or ``wheel``.
        x: Screen-space X for pointer events.
        y: Screen-space Y for pointer events.
        button: Pointer button, DOM numbering.
        shift: Whether the symmetry modifier is held.
        target: Optional explicit pointer target.
        delta_y: Wheel delta for ``wheel`` events.
    """

    type: str
    x: float | None = None
    y: float | None = None
    button: int = 0
    shift: bool = False
    target: dict[str, Any] | None = None
    delta_y: float | None = None

    def to_message(self) -> dict[str, Any]:
        """Convert to the message form shared with the WebSocket handler."""
        return {key: value for key, value in asdict(self).items() if value is not None}


# Response DTOs


@dataclass
class PointDTO:
    """DTO for a 2D point."""

    x: float
    y: float


@dataclass
class BoundsDTO:
    """DTO for an axis-aligned bounding box."""

    x: float
    y: float
    width: float
    height: float


@dataclass
class ShapeResponseDTO:
    """DTO for a placed shape.

    Attributes:
        index: Store index (the shape's identity within the session).
        kind: Canonical shape kind.
        anchor_start: First stored anchor.
        anchor_end: Second stored anchor.
        bounds: Bounding box in canvas space.
        drawable: Renderer output as text.
    """

    index: int
    kind: str
    anchor_start: PointDTO
    anchor_end: PointDTO
    bounds: BoundsDTO
    drawable: str


@dataclass
class OverlayDTO:
    """DTO for the selection overlay."""

    handles: dict[str, PointDTO]
    edges: list[list[PointDTO]]


@dataclass
class ViewDTO:
    """DTO for the pan/zoom transform."""

    zoom_factor: float
    pan_offset_x: float
    pan_offset_y: float


@dataclass
class SurfaceDTO:
    """DTO for a render surface."""

    drawables: list[str]
    preview: str | None
    overlay: OverlayDTO
    view: ViewDTO
    mode: str
    cursor: str
    selected_index: int | None


@dataclass
class SessionResponseDTO:
    """DTO for session list/summary responses."""

    id: UUID
    mode: str
    shape_count: int
    zoom_factor: float
    created_at: datetime


@dataclass
class SessionDetailDTO:
    """DTO for a session with its shapes and current surface."""

    id: UUID
    shapes: list[ShapeResponseDTO]
    surface: SurfaceDTO
    created_at: datetime


# Conversion helpers


def point_to_dto(point: Point) -> PointDTO:
    return PointDTO(x=point.x, y=point.y)


def bounds_to_dto(box: BoundingBox) -> BoundsDTO:
    return BoundsDTO(x=box.x, y=box.y, width=box.width, height=box.height)


def shape_to_response(index: int, shape: PlacedShape) -> ShapeResponseDTO:
    """Convert a placed shape to its response DTO."""
    return ShapeResponseDTO(
        index=index,
        kind=shape.kind.value,
        anchor_start=point_to_dto(shape.anchor_start),
        anchor_end=point_to_dto(shape.anchor_end),
        bounds=bounds_to_dto(bounding_box(shape.primitive)),
        drawable=str(shape.drawable),
    )


def surface_to_response(surface: RenderSurface) -> SurfaceDTO:
    """Convert a render surface to its response DTO.

    Drawables are opaque; they are sent as their string form.
    """
    overlay = surface.overlay
    return SurfaceDTO(
        drawables=[str(drawable) for drawable in surface.drawables],
        preview=str(surface.preview) if surface.preview is not None else None,
        overlay=OverlayDTO(
            handles={corner.value: point_to_dto(point) for corner, point in overlay.handles.items()},
            edges=[[point_to_dto(a), point_to_dto(b)] for a, b in overlay.edges],
        ),
        view=ViewDTO(
            zoom_factor=surface.zoom_factor,
            pan_offset_x=surface.pan_offset_x,
            pan_offset_y=surface.pan_offset_y,
        ),
        mode=surface.mode,
        cursor=surface.cursor.value,
        selected_index=surface.selected_index,
    )


def session_to_response(session: SketchSession) -> SessionResponseDTO:
    """Convert a session to its summary DTO."""
    return SessionResponseDTO(
        id=session.id,
        mode=session.mode.label,
        shape_count=len(session.store),
        zoom_factor=session.view.zoom_factor,
        created_at=session.created_at,
    )


def session_to_detail(session: SketchSession) -> SessionDetailDTO:
    """Convert a session to its detailed DTO."""
    return SessionDetailDTO(
        id=session.id,
        shapes=[shape_to_response(index, shape) for index, shape in enumerate(session.store)],
        surface=surface_to_response(session.surface()),
        created_at=session.created_at,
    )
