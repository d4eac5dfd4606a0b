"""Screen <-> canvas coordinate transform."""

from __future__ import annotations

from dataclasses import dataclass

from sketch_canvas.core.models import Point

ZOOM_IN_FACTOR = 1.1
ZOOM_OUT_FACTOR = 0.9


@dataclass
class ViewTransform:
    """Pan offset and zoom factor of one canvas session.

    The render transform is ``translate(pan) scale(zoom)``: pan is a
    screen-space translation applied before scaling.

    Attributes:
        zoom_factor: Scale from canvas to screen units, always positive.
        pan_offset_x: Horizontal screen-space translation.
        pan_offset_y: Vertical screen-space translation.
    """

    zoom_factor: float = 1.0
    pan_offset_x: float = 0.0
    pan_offset_y: float = 0.0

    @property
    def pan_offset(self) -> Point:
        return Point(self.pan_offset_x, self.pan_offset_y)

    def to_canvas_space(self, screen: Point) -> Point:
        """Map a screen/pointer position into canvas space."""
        return (screen - self.pan_offset).scaled(1 / self.zoom_factor)

    def to_screen_space(self, canvas: Point) -> Point:
        """Map a canvas position back onto the screen."""
        return canvas.scaled(self.zoom_factor) + self.pan_offset

    def pan_to(self, offset: Point) -> None:
        self.pan_offset_x = offset.x
        self.pan_offset_y = offset.y

    def zoom_by(self, factor: float, *, min_zoom: float | None = None, max_zoom: float | None = None) -> float:
        """Multiply the zoom factor by ``factor``, clamped to the given bounds.

        Returns:
            The new zoom factor.
        """
        zoom = self.zoom_factor * factor
        if min_zoom is not None:
            zoom = max(zoom, min_zoom)
        if max_zoom is not None:
            zoom = min(zoom, max_zoom)
        self.zoom_factor = zoom
        return zoom


def to_canvas_space(screen: Point, view: ViewTransform) -> Point:
    """Convert ``screen`` into canvas space: ``(screen - pan) / zoom``."""
    return view.to_canvas_space(screen)


def to_screen_space(canvas: Point, view: ViewTransform) -> Point:
    """Convert ``canvas`` into screen space: ``canvas * zoom + pan``."""
    return view.to_screen_space(canvas)
