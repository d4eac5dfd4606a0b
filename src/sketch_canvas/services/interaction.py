"""Interaction state machine turning pointer input into shape mutations."""

from __future__ import annotations

from datetime import UTC, datetime
from typing import TYPE_CHECKING, Any
from uuid import UUID, uuid4

import structlog

from sketch_canvas.core.events import CanvasTarget, HandleTarget, PointerEvent, ShapeTarget
from sketch_canvas.core.geometry import (
    bounding_box,
    canonical_anchors,
    canonical_kind,
    compute_primitive,
    toggle_symmetric,
)
from sketch_canvas.core.gestures import Drawing, MovingSelection, Panning, ResizingSelection
from sketch_canvas.core.models import PlacedShape, Point
from sketch_canvas.core.modes import NORMAL, AddMode, MoveMode, parse_mode
from sketch_canvas.core.selection import SelectionState, corners_from_box
from sketch_canvas.core.settings import SessionSettings
from sketch_canvas.core.store import ShapeStore
from sketch_canvas.core.transform import ZOOM_IN_FACTOR, ZOOM_OUT_FACTOR, ViewTransform
from sketch_canvas.core.types import Corner, Cursor, PointerButton, ShapeKind
from sketch_canvas.exceptions import MissingGeometryTagError
from sketch_canvas.services.render import RenderSurface, SvgSketchRenderer

if TYPE_CHECKING:
    from collections.abc import Callable

    from sketch_canvas.core.events import PointerTarget
    from sketch_canvas.core.gestures import Gesture
    from sketch_canvas.core.models import BoundingBox
    from sketch_canvas.core.modes import Mode
    from sketch_canvas.core.style import SketchStyle
    from sketch_canvas.services.render import SketchRenderer

    SurfaceListener = Callable[[RenderSurface], None]

logger = structlog.get_logger(__name__)


class SketchSession:
    """One canvas session: shapes, view, selection, mode and the active gesture.

    Every public method runs synchronously in response to a single input
    event. Methods that change what is on screen notify subscribers with a
    fresh ``RenderSurface``.

    Attributes:
        id: Session identifier.
        settings: Session settings (style, zoom bounds, hit radius).
        renderer: Sketch renderer producing drawables.
        store: Placed shapes in paint order.
        view: Pan/zoom transform.
        selection: Selected shape and handle positions.
        mode: Current editor mode.
        gesture: Active pointer gesture, ``None`` when idle.
        created_at: When the session was created.
    """

    def __init__(
        self,
        settings: SessionSettings | None = None,
        renderer: SketchRenderer | None = None,
        session_id: UUID | None = None,
    ) -> None:
        """Create a new empty session.

        Args:
            settings: Session settings. Defaults are read from the environment.
            renderer: Sketch renderer. Defaults to ``SvgSketchRenderer``.
            session_id: Identifier to use instead of a fresh UUID.
        """
        self.id = session_id or uuid4()
        self.settings = settings or SessionSettings()
        self.renderer: SketchRenderer = renderer or SvgSketchRenderer()
        self.store = ShapeStore()
        self.view = ViewTransform()
        self.selection = SelectionState()
        self.mode: Mode = NORMAL
        self.gesture: Gesture | None = None
        self.created_at = datetime.now(UTC)
        self._preview: Any | None = None
        self._last_pointer: PointerEvent | None = None
        self._listeners: list[SurfaceListener] = []
        self._log = logger.bind(session_id=str(self.id))

    @property
    def style(self) -> SketchStyle:
        return self.settings.style

    @property
    def preview(self) -> Any | None:
        """Drawable of the shape currently being drawn, never stored."""
        return self._preview

    @property
    def cursor(self) -> Cursor:
        if isinstance(self.gesture, Panning) or isinstance(self.mode, MoveMode):
            return Cursor.POINTER
        if isinstance(self.mode, AddMode):
            return Cursor.CROSSHAIR
        return Cursor.DEFAULT

    # Shape building

    def build_shape(self, kind: ShapeKind | str, start: Point, end: Point) -> PlacedShape:
        """Build a placed shape from a drag, tagged with its canonical kind.

        Args:
            kind: Kind as drawn, symmetric variants included.
            start: First anchor in canvas space.
            end: Second anchor in canvas space.

        Returns:
            A shape whose drawable comes from its canonical kind and anchors.
        """
        anchor_start, anchor_end = canonical_anchors(kind, start, end)
        return self._regenerate(canonical_kind(kind), anchor_start, anchor_end)

    def place(self, kind: ShapeKind | str, start: Point, end: Point) -> int:
        """Append a new shape to the store.

        Returns:
            The store index of the new shape.
        """
        shape = self.build_shape(kind, start, end)
        index = self.store.append(shape)
        self._log.debug("Shape placed", index=index, kind=shape.kind.value)
        self._emit()
        return index

    def shape_bounds(self, index: int) -> BoundingBox:
        """Bounding box of the shape at ``index``, in canvas space."""
        return bounding_box(self.store.get(index).primitive)

    def _regenerate(self, kind: ShapeKind, start: Point, end: Point) -> PlacedShape:
        primitive = compute_primitive(kind, start, end)
        return PlacedShape(
            kind=kind,
            anchor_start=start,
            anchor_end=end,
            primitive=primitive,
            drawable=self.renderer.render(primitive, self.style),
        )

    def _stored_kind(self, index: int) -> ShapeKind:
        kind = self.store.get(index).kind
        if not isinstance(kind, ShapeKind):
            raise MissingGeometryTagError(index)
        return kind

    # Mode, selection and view

    def set_mode(self, mode: Mode | str) -> None:
        """Switch the editor mode.

        A draw in progress is abandoned; its preview never reaches the store.

        Args:
            mode: A mode or its UI label such as ``add-rectangle``.

        Raises:
            InvalidModeError: If a label names no mode.
        """
        if isinstance(mode, str):
            mode = parse_mode(mode)
        if isinstance(self.gesture, Drawing):
            self._preview = None
            self.gesture = None
        self.mode = mode
        self._log.debug("Mode changed", mode=mode.label)
        self._emit()

    def select(self, index: int) -> None:
        """Select the shape at ``index`` and place the handles around it.

        Raises:
            IndexOutOfRangeError: If no shape lives at ``index``.
        """
        self.selection.select(index, self.shape_bounds(index))
        self._emit()

    def deselect(self) -> None:
        self.selection.reset()
        self._emit()

    def confirm_clear(self) -> None:
        """Remove every shape, drop the selection and return to normal mode."""
        count = len(self.store)
        self.store.clear()
        self.selection.reset()
        self.gesture = None
        self._preview = None
        self.mode = NORMAL
        self._log.info("Canvas cleared", removed=count)
        self._emit()

    def wheel(self, delta_y: float) -> float:
        """Zoom in for negative ``delta_y``, out for positive.

        Returns:
            The new zoom factor.
        """
        if delta_y == 0:
            return self.view.zoom_factor
        factor = ZOOM_IN_FACTOR if delta_y < 0 else ZOOM_OUT_FACTOR
        zoom = self.view.zoom_by(factor, min_zoom=self.settings.min_zoom, max_zoom=self.settings.max_zoom)
        self._emit()
        return zoom

    def resize(self, index: int, corner: Corner | str, point: Point, *, symmetric: bool = False) -> PlacedShape:
        """Move one corner of a shape to ``point`` (canvas space) and select it.

        The opposite corner of the shape's current bounding box stays fixed.
        ``symmetric`` draws the symmetric variant; the stored kind stays canonical.

        Returns:
            The regenerated shape.
        """
        opposite = corners_from_box(self.shape_bounds(index))[Corner(corner).opposite]
        kind = self._stored_kind(index)
        if symmetric:
            kind = toggle_symmetric(kind)
        shape = self.build_shape(kind, opposite, point)
        self.store.replace_at(index, shape)
        self.selection.select(index, bounding_box(shape.primitive))
        self._emit()
        return shape

    def hit_test(self, screen: Point) -> PointerTarget:
        """Find what lies under a screen position.

        Handles of the selected shape win over shape bodies; among bodies the
        topmost (last placed) wins.
        """
        point = self.view.to_canvas_space(screen)
        corner = self.selection.handle_at(point, self.settings.handle_radius)
        if corner is not None:
            return HandleTarget(corner)
        tolerance = self.style.stroke_width / 2
        for index in reversed(range(len(self.store))):
            if self.shape_bounds(index).contains(point, tolerance):
                return ShapeTarget(index)
        return CanvasTarget()

    # Pointer protocol

    def pointer_down(self, event: PointerEvent) -> None:
        """Start at most one gesture, first matching rule wins."""
        self._reset_stale_gesture()
        self._last_pointer = event
        target = event.target if event.target is not None else self.hit_test(event.position)
        primary = event.button == PointerButton.PRIMARY
        mode = self.mode

        if primary and not isinstance(mode, AddMode) and isinstance(target, ShapeTarget):
            self._begin_move(target.index, event)
            return
        if primary and isinstance(target, HandleTarget) and self.selection.has_selection:
            self._begin_resize(Corner(target.corner))
            return
        if isinstance(mode, AddMode) and mode.kind == ShapeKind.TEXT:
            anchor = self.view.to_canvas_space(event.position)
            self.mode = NORMAL
            self.place(ShapeKind.TEXT, anchor, anchor)
            return
        if isinstance(mode, AddMode):
            self.gesture = Drawing(anchor=self.view.to_canvas_space(event.position))
            self._log.debug("Drawing started", kind=mode.kind.value)
            return
        if event.button == PointerButton.MIDDLE or isinstance(mode, MoveMode):
            self.gesture = Panning(pointer_start=event.position, offset_start=self.view.pan_offset)
            self._emit()

    def pointer_move(self, event: PointerEvent) -> None:
        """Advance the active gesture; a no-op when idle."""
        self._last_pointer = event
        gesture = self.gesture
        if isinstance(gesture, MovingSelection):
            self._update_move(gesture, event)
        elif isinstance(gesture, ResizingSelection):
            self._update_resize(gesture, event)
        elif isinstance(gesture, Drawing):
            self._update_preview(gesture, event)
        elif isinstance(gesture, Panning):
            self.view.pan_to(event.position - gesture.pointer_start + gesture.offset_start)
        else:
            return
        self._emit()

    def pointer_up(self, event: PointerEvent) -> None:
        """Commit or finalise the active gesture at the release position."""
        self._last_pointer = event
        if self.gesture is None:
            return
        self._finish(self.gesture, event)
        self._emit()

    def pointer_cancel(self) -> None:
        """Handle lost pointer capture as a release at the last known position."""
        gesture = self.gesture
        if gesture is None:
            return
        if self._last_pointer is None:
            self.gesture = None
            self._preview = None
        else:
            self._finish(gesture, self._last_pointer)
        self._log.debug("Pointer capture lost", gesture=type(gesture).__name__)
        self._emit()

    def _begin_move(self, index: int, event: PointerEvent) -> None:
        shape = self.store.get(index)
        box = bounding_box(shape.primitive)
        self.selection.select(index, box)
        self.gesture = MovingSelection(
            index=index,
            pointer_start=event.position,
            anchors_start=(shape.anchor_start, shape.anchor_end),
        )
        self._log.debug("Move started", index=index)
        self._emit()

    def _begin_resize(self, corner: Corner) -> None:
        index = self.selection.selected_index
        self.gesture = ResizingSelection(
            index=index,
            corner=corner,
            opposite_anchor=self.selection.corners[corner.opposite],
        )
        self._log.debug("Resize started", index=index, corner=corner.value)

    def _update_move(self, gesture: MovingSelection, event: PointerEvent) -> None:
        delta = (event.position - gesture.pointer_start).scaled(1 / self.view.zoom_factor)
        start, end = gesture.anchors_start
        shape = self._regenerate(self._stored_kind(gesture.index), start + delta, end + delta)
        self.store.replace_at(gesture.index, shape)
        self.selection.show_preview(bounding_box(shape.primitive))

    def _update_resize(self, gesture: ResizingSelection, event: PointerEvent) -> None:
        kind = self._stored_kind(gesture.index)
        if event.shift:
            kind = toggle_symmetric(kind)
        pointer = self.view.to_canvas_space(event.position)
        shape = self.build_shape(kind, gesture.opposite_anchor, pointer)
        self.store.replace_at(gesture.index, shape)
        self.selection.show_preview(bounding_box(shape.primitive))

    def _update_preview(self, gesture: Drawing, event: PointerEvent) -> None:
        kind = self._drawing_kind(event.shift)
        primitive = compute_primitive(kind, gesture.anchor, self.view.to_canvas_space(event.position))
        self._preview = self.renderer.render(primitive, self.style)

    def _drawing_kind(self, shift: bool) -> ShapeKind:
        kind = self.mode.kind
        return toggle_symmetric(kind) if shift else kind

    def _finish(self, gesture: Gesture, event: PointerEvent) -> None:
        if isinstance(gesture, MovingSelection):
            self._update_move(gesture, event)
            self.selection.commit_preview()
            self._log.debug("Move committed", index=gesture.index)
        elif isinstance(gesture, ResizingSelection):
            self._update_resize(gesture, event)
            self.selection.commit_preview()
            self._log.debug("Resize committed", index=gesture.index, corner=gesture.corner.value)
        elif isinstance(gesture, Drawing):
            self._preview = None
            shape = self.build_shape(
                self._drawing_kind(event.shift),
                gesture.anchor,
                self.view.to_canvas_space(event.position),
            )
            index = self.store.append(shape)
            self.mode = NORMAL
            self._log.debug("Drawing committed", index=index, kind=shape.kind.value)
        self.gesture = None

    def _reset_stale_gesture(self) -> None:
        gesture = self.gesture
        if gesture is None:
            return
        self._log.warning("Resetting stale gesture", gesture=type(gesture).__name__)
        if isinstance(gesture, (MovingSelection, ResizingSelection)):
            self.selection.commit_preview()
        self._preview = None
        self.gesture = None

    # Render surface

    def surface(self) -> RenderSurface:
        """Snapshot of what should be painted right now."""
        return RenderSurface.build(
            drawables=[shape.drawable for shape in self.store],
            preview=self._preview,
            handles=self.selection.displayed(),
            view=self.view,
            mode=self.mode.label,
            cursor=self.cursor,
            selected_index=self.selection.selected_index,
        )

    def subscribe(self, listener: SurfaceListener) -> Callable[[], None]:
        """Call ``listener`` with a new surface after every visible change.

        Returns:
            A function removing the listener again.
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _emit(self) -> None:
        if not self._listeners:
            return
        surface = self.surface()
        for listener in list(self._listeners):
            listener(surface)
