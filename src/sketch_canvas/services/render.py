"""Render boundary: sketch renderer protocol, render surface and SVG export."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

from sketch_canvas.core.geometry import (
    ArrowPath,
    CirclePrimitive,
    EllipsePrimitive,
    LinePrimitive,
    RoundedRectPath,
    TextPrimitive,
)
from sketch_canvas.exceptions import UnsupportedShapeKindError

if TYPE_CHECKING:
    from sketch_canvas.core.geometry import Primitive
    from sketch_canvas.core.models import Point
    from sketch_canvas.core.selection import Corners
    from sketch_canvas.core.settings import SessionSettings
    from sketch_canvas.core.style import SketchStyle
    from sketch_canvas.core.transform import ViewTransform
    from sketch_canvas.core.types import Cursor

HANDLE_RADIUS_PX = 5
OVERLAY_STROKE_WIDTH = 2


@runtime_checkable
class SketchRenderer(Protocol):
    """Turns a geometry primitive plus style into an opaque drawable.

    Implementations must be pure: the same primitive and style always give an
    equivalent drawable.
    """

    def render(self, primitive: Primitive, style: SketchStyle) -> Any:
        """Render ``primitive`` with ``style``.

        Args:
            primitive: Geometry descriptor from ``compute_primitive``.
            style: Session style.

        Returns:
            A drawable understood by the render surface consumer.
        """
        ...


@dataclass(frozen=True)
class Overlay:
    """Selection overlay geometry: four handles and four connecting edges."""

    handles: Corners
    edges: list[tuple[Point, Point]]


@dataclass(frozen=True)
class RenderSurface:
    """Everything the external renderer needs to paint one frame.

    Attributes:
        drawables: One drawable per placed shape, in store order.
        preview: Drawable of the shape being drawn, if any.
        overlay: Selection handles and edges, always present.
        zoom_factor: View zoom.
        pan_offset_x: View horizontal pan.
        pan_offset_y: View vertical pan.
        mode: Current mode label.
        cursor: Cursor hint for the host UI.
        selected_index: Store index of the selected shape, if any.
    """

    drawables: list[Any]
    preview: Any | None
    overlay: Overlay
    zoom_factor: float
    pan_offset_x: float
    pan_offset_y: float
    mode: str
    cursor: Cursor
    selected_index: int | None = None

    @classmethod
    def build(
        cls,
        *,
        drawables: list[Any],
        preview: Any | None,
        handles: Corners,
        view: ViewTransform,
        mode: str,
        cursor: Cursor,
        selected_index: int | None,
    ) -> RenderSurface:
        """Assemble a surface, copying the view so later pans do not leak in."""
        return cls(
            drawables=drawables,
            preview=preview,
            overlay=Overlay(handles=handles, edges=handles.edges()),
            zoom_factor=view.zoom_factor,
            pan_offset_x=view.pan_offset_x,
            pan_offset_y=view.pan_offset_y,
            mode=mode,
            cursor=cursor,
            selected_index=selected_index,
        )


def rounded_rect_path(x: float, y: float, width: float, height: float, radius: float) -> str:
    """SVG path data for a rounded rectangle.

    The radius shrinks to fit boxes smaller than two radii.
    """
    r = max(0.0, min(radius, width / 2, height / 2))
    return (
        f"M{x + r},{y} "
        f"H{x + width - r} "
        f"A{r},{r} 0 0 1 {x + width},{y + r} "
        f"V{y + height - r} "
        f"A{r},{r} 0 0 1 {x + width - r},{y + height} "
        f"H{x + r} "
        f"A{r},{r} 0 0 1 {x},{y + height - r} "
        f"V{y + r} "
        f"A{r},{r} 0 0 1 {x + r},{y} "
        "Z"
    )


def escape_xml(text: str) -> str:
    """Escape special XML characters."""
    return (
        text.replace("&", "&amp;")
        .replace("<", "&lt;")
        .replace(">", "&gt;")
        .replace('"', "&quot;")
        .replace("'", "&apos;")
    )


class SvgSketchRenderer:
    """Default renderer producing plain SVG fragments.

    The hand-drawn look belongs to an external sketch library; this renderer
    draws the exact geometry and records the sketch parameters as ``data-``
    attributes so a client-side sketch pass can pick them up.
    """

    def render(self, primitive: Primitive, style: SketchStyle) -> str:
        """Render ``primitive`` as an SVG element string."""
        attrs = self._stroke_attrs(style)

        if isinstance(primitive, RoundedRectPath):
            path = rounded_rect_path(primitive.x, primitive.y, primitive.width, primitive.height, primitive.radius)
            return f'<path d="{path}" {attrs}/>'
        if isinstance(primitive, EllipsePrimitive):
            return (
                f'<ellipse cx="{primitive.cx}" cy="{primitive.cy}" '
                f'rx="{primitive.width / 2}" ry="{primitive.height / 2}" {attrs}/>'
            )
        if isinstance(primitive, CirclePrimitive):
            return f'<circle cx="{primitive.cx}" cy="{primitive.cy}" r="{primitive.diameter / 2}" {attrs}/>'
        if isinstance(primitive, LinePrimitive):
            start, end = primitive.start, primitive.end
            return f'<line x1="{start.x}" y1="{start.y}" x2="{end.x}" y2="{end.y}" {attrs}/>'
        if isinstance(primitive, ArrowPath):
            tip = primitive.tip
            path = (
                f"M {primitive.start.x} {primitive.start.y} L {tip.x} {tip.y} "
                f"M {tip.x} {tip.y} L {primitive.left_barb.x} {primitive.left_barb.y} "
                f"M {tip.x} {tip.y} L {primitive.right_barb.x} {primitive.right_barb.y}"
            )
            return f'<path d="{path}" {attrs}/>'
        if isinstance(primitive, TextPrimitive):
            return (
                f'<text x="{primitive.position.x}" y="{primitive.position.y}" '
                f'font-size="{primitive.font_size}" dominant-baseline="hanging" '
                f'fill="{style.stroke_color}">{escape_xml(primitive.content)}</text>'
            )
        raise UnsupportedShapeKindError(type(primitive).__name__)

    def _stroke_attrs(self, style: SketchStyle) -> str:
        attrs = (
            f'fill="none" stroke="{style.stroke_color}" stroke-width="{style.stroke_width}" '
            f'stroke-linecap="round" stroke-linejoin="round" '
            f'data-roughness="{style.roughness}" data-bowing="{style.bowing}"'
        )
        if style.seed is not None:
            attrs += f' data-seed="{style.seed}"'
        return attrs


class ExportService:
    """Paints a render surface into a standalone SVG document."""

    def __init__(self, settings: SessionSettings) -> None:
        """Initialize the export service.

        Args:
            settings: Session settings supplying canvas size and colors.
        """
        self._settings = settings

    def to_svg(self, surface: RenderSurface) -> str:
        """Export the surface as SVG.

        Pan and zoom are applied once, to the group holding every drawable
        and the overlay.

        Args:
            surface: The surface to export.

        Returns:
            SVG string representation of the surface.
        """
        settings = self._settings
        body = [f"    {drawable}" for drawable in surface.drawables]
        if surface.preview is not None:
            body.append(f'    <g class="preview">{surface.preview}</g>')
        body.extend(self._overlay_to_svg(surface.overlay))

        transform = f"translate({surface.pan_offset_x} {surface.pan_offset_y}) scale({surface.zoom_factor})"
        return f"""<?xml version="1.0" encoding="UTF-8"?>
<svg xmlns="http://www.w3.org/2000/svg"
     width="{settings.canvas_width}"
     height="{settings.canvas_height}">
  <rect width="100%" height="100%" fill="{settings.background_color}"/>
  <g transform="{transform}">
{chr(10).join(body)}
  </g>
</svg>"""

    def _overlay_to_svg(self, overlay: Overlay) -> list[str]:
        color = self._settings.handle_color
        parts = [
            f'    <circle class="handle handle-{corner.value}" cx="{point.x}" cy="{point.y}" '
            f'r="{HANDLE_RADIUS_PX}" fill="{color}"/>'
            for corner, point in overlay.handles.items()
        ]
        parts.extend(
            f'    <line class="edge" x1="{a.x}" y1="{a.y}" x2="{b.x}" y2="{b.y}" '
            f'stroke="{color}" stroke-width="{OVERLAY_STROKE_WIDTH}"/>'
            for a, b in overlay.edges
        )
        return parts
