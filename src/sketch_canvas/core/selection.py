"""Selection overlay: corner handles and edges around the selected shape."""

from __future__ import annotations

from dataclasses import dataclass, field

from sketch_canvas.core.models import BoundingBox, Point
from sketch_canvas.core.types import Corner

# Handles are parked off-canvas while nothing is selected.
SENTINEL = Point(-10.0, -10.0)


@dataclass(frozen=True)
class Corners:
    """The four handle positions of the overlay.

    Attributes:
        tl: Top-left handle.
        tr: Top-right handle.
        bl: Bottom-left handle.
        br: Bottom-right handle.
    """

    tl: Point = SENTINEL
    tr: Point = SENTINEL
    bl: Point = SENTINEL
    br: Point = SENTINEL

    def __getitem__(self, corner: Corner | str) -> Point:
        return getattr(self, Corner(corner).value)

    def items(self) -> list[tuple[Corner, Point]]:
        return [(corner, self[corner]) for corner in Corner]

    def edges(self) -> list[tuple[Point, Point]]:
        """Connecting edges, clockwise from the top edge."""
        return overlay_edges(self)


def overlay_edges(corners: Corners) -> list[tuple[Point, Point]]:
    """Edges tl-tr, tr-br, br-bl, bl-tl joining the handles."""
    return [(corners.tl, corners.tr), (corners.tr, corners.br), (corners.br, corners.bl), (corners.bl, corners.tl)]


def corners_from_box(box: BoundingBox) -> Corners:
    """Derive handle positions from a bounding box."""
    right = box.x + box.width
    bottom = box.y + box.height
    return Corners(
        tl=Point(box.x, box.y),
        tr=Point(right, box.y),
        bl=Point(box.x, bottom),
        br=Point(right, bottom),
    )


@dataclass
class SelectionState:
    """Which shape is selected and where its handles sit.

    ``corners`` holds the committed handle positions. While a move or resize
    gesture runs, ``preview`` overrides them; ``displayed()`` picks whichever
    applies so the overlay never has to know about gestures.

    Attributes:
        selected_index: Store index of the selected shape, if any.
        corners: Committed handle positions.
        preview: Live handle positions during a move/resize gesture.
    """

    selected_index: int | None = None
    corners: Corners = field(default_factory=Corners)
    preview: Corners | None = None

    @property
    def has_selection(self) -> bool:
        return self.selected_index is not None

    def select(self, index: int, box: BoundingBox) -> None:
        self.selected_index = index
        self.corners = corners_from_box(box)
        self.preview = None

    def show_preview(self, box: BoundingBox) -> None:
        self.preview = corners_from_box(box)

    def commit_preview(self) -> None:
        if self.preview is not None:
            self.corners = self.preview
            self.preview = None

    def reset(self) -> None:
        self.selected_index = None
        self.corners = Corners()
        self.preview = None

    def displayed(self) -> Corners:
        return self.preview if self.preview is not None else self.corners

    def handle_at(self, point: Point, radius: float) -> Corner | None:
        """Return the handle under ``point`` (canvas space), if any.

        Handles are never hit while nothing is selected.
        """
        if not self.has_selection:
            return None
        for corner, handle in self.displayed().items():
            if (point.x - handle.x) ** 2 + (point.y - handle.y) ** 2 <= radius**2:
                return corner
        return None
