"""Tests for the session registry, service and input dispatch."""

from __future__ import annotations

import asyncio
from uuid import uuid4

import pytest

from sketch_canvas.core.events import CanvasTarget, HandleTarget, ShapeTarget
from sketch_canvas.core.input import InputType, finite_number, parse_input_type, pointer_event_from_dict
from sketch_canvas.core.models import BoundingBox
from sketch_canvas.core.types import Corner, PointerButton
from sketch_canvas.exceptions import InvalidEventError, InvalidModeError, SessionNotFoundError
from sketch_canvas.services.interaction import SketchSession
from sketch_canvas.services.sessions import SessionService
from sketch_canvas.storage.base import SessionStorageProtocol
from sketch_canvas.storage.memory import InMemorySessionStorage


class TestInMemorySessionStorage:
    """Tests for InMemorySessionStorage."""

    def test_satisfies_protocol(self, storage: InMemorySessionStorage) -> None:
        assert isinstance(storage, SessionStorageProtocol)

    @pytest.mark.asyncio
    async def test_add_and_get(self, storage: InMemorySessionStorage) -> None:
        session = SketchSession()
        await storage.add_session(session)
        assert await storage.get_session(session.id) is session
        assert await storage.count() == 1

    @pytest.mark.asyncio
    async def test_get_missing(self, storage: InMemorySessionStorage) -> None:
        assert await storage.get_session(uuid4()) is None

    @pytest.mark.asyncio
    async def test_delete(self, storage: InMemorySessionStorage) -> None:
        session = await storage.add_session(SketchSession())
        assert await storage.delete_session(session.id) is True
        assert await storage.delete_session(session.id) is False
        assert await storage.count() == 0

    @pytest.mark.asyncio
    async def test_concurrent_adds(self, storage: InMemorySessionStorage) -> None:
        sessions = [SketchSession() for _ in range(20)]
        await asyncio.gather(*(storage.add_session(s) for s in sessions))
        assert await storage.count() == 20


class TestSessionService:
    """Tests for SessionService registry operations."""

    @pytest.mark.asyncio
    async def test_create_session(self, service: SessionService) -> None:
        session = await service.create_session()
        assert len(session.store) == 0
        assert session.settings is service.settings
        assert await service.get_session(session.id) is session

    @pytest.mark.asyncio
    async def test_get_missing_session(self, service: SessionService) -> None:
        missing = uuid4()
        with pytest.raises(SessionNotFoundError) as exc_info:
            await service.get_session(missing)
        assert exc_info.value.session_id == missing

    @pytest.mark.asyncio
    async def test_list_sessions(self, service: SessionService) -> None:
        first = await service.create_session()
        second = await service.create_session()
        ids = {s.id for s in await service.list_sessions()}
        assert ids == {first.id, second.id}

    @pytest.mark.asyncio
    async def test_delete_session(self, service: SessionService) -> None:
        session = await service.create_session()
        await service.delete_session(session.id)
        with pytest.raises(SessionNotFoundError):
            await service.delete_session(session.id)


class TestDispatch:
    """Tests for SessionService.dispatch."""

    def test_draw_via_messages(self, service: SessionService, session: SketchSession) -> None:
        service.dispatch(session, {"type": "set_mode", "mode": "add-rectangle"})
        service.dispatch(session, {"type": "pointer_down", "x": 0, "y": 0})
        service.dispatch(session, {"type": "pointer_move", "x": 100, "y": 50})
        result = service.dispatch(session, {"type": "pointer_up", "x": 100, "y": 50})

        assert result == InputType.POINTER_UP
        assert session.shape_bounds(0) == BoundingBox(0, 0, 100, 50)

    def test_wheel(self, service: SessionService, session: SketchSession) -> None:
        service.dispatch(session, {"type": "wheel", "delta_y": -100})
        assert session.view.zoom_factor == pytest.approx(1.1)

    def test_select_clear_and_cancel(self, service: SessionService, session_with_rectangle: SketchSession) -> None:
        session = session_with_rectangle
        service.dispatch(session, {"type": "select", "index": 0})
        assert session.selection.selected_index == 0
        service.dispatch(session, {"type": "deselect"})
        assert session.selection.selected_index is None
        service.dispatch(session, {"type": "pointer_cancel"})
        service.dispatch(session, {"type": "clear"})
        assert len(session.store) == 0

    def test_get_surface_changes_nothing(self, service: SessionService, session: SketchSession) -> None:
        assert service.dispatch(session, {"type": "get_surface"}) == InputType.GET_SURFACE

    @pytest.mark.parametrize(
        "message",
        [
            {},
            {"type": "explode"},
            {"type": "pointer_down", "x": "left", "y": 0},
            {"type": "pointer_down", "y": 0},
            {"type": "pointer_down", "x": 0, "y": 0, "target": {"kind": "handle", "corner": "middle"}},
            {"type": "pointer_down", "x": 0, "y": 0, "target": {"kind": "shape", "index": 3}},
            {"type": "wheel"},
            {"type": "select", "index": 0},
        ],
    )
    def test_rejected_messages(self, service: SessionService, session: SketchSession, message: dict) -> None:
        with pytest.raises(InvalidEventError):
            service.dispatch(session, message)

    def test_invalid_mode(self, service: SessionService, session: SketchSession) -> None:
        with pytest.raises(InvalidModeError):
            service.dispatch(session, {"type": "set_mode", "mode": "clear-shapes"})


class TestInputParsing:
    """Tests for input message parsing."""

    def test_parse_input_type(self) -> None:
        assert parse_input_type("pointer_move") == InputType.POINTER_MOVE
        with pytest.raises(InvalidEventError):
            parse_input_type(None)

    def test_pointer_event_defaults(self) -> None:
        event = pointer_event_from_dict({"x": 1, "y": "2.5"})
        assert (event.x, event.y) == (1.0, 2.5)
        assert event.button == PointerButton.PRIMARY
        assert event.shift is False
        assert event.target is None

    def test_pointer_event_targets(self) -> None:
        base = {"x": 0, "y": 0}
        assert pointer_event_from_dict({**base, "target": {"kind": "canvas"}}).target == CanvasTarget()
        assert pointer_event_from_dict({**base, "target": {"kind": "shape", "index": 2}}).target == ShapeTarget(2)
        handle = pointer_event_from_dict({**base, "target": {"kind": "handle", "corner": "tr"}})
        assert handle.target == HandleTarget(Corner.TOP_RIGHT)

    def test_pointer_event_modifiers(self) -> None:
        event = pointer_event_from_dict({"x": 0, "y": 0, "button": 1, "shift": True})
        assert event.button == PointerButton.MIDDLE
        assert event.shift is True

    @pytest.mark.parametrize("value", [float("nan"), float("inf"), float("-inf"), "nan", "Infinity"])
    def test_non_finite_coordinates_rejected(self, value: object) -> None:
        with pytest.raises(InvalidEventError, match="'x'"):
            pointer_event_from_dict({"x": value, "y": 0})
        with pytest.raises(InvalidEventError, match="'y'"):
            pointer_event_from_dict({"x": 0, "y": value})

    def test_boolean_coordinates_rejected(self) -> None:
        with pytest.raises(InvalidEventError):
            pointer_event_from_dict({"x": True, "y": 0})

    @pytest.mark.parametrize("value", ["false", "true", 1, 0, None])
    def test_shift_must_be_boolean(self, value: object) -> None:
        with pytest.raises(InvalidEventError, match="shift"):
            pointer_event_from_dict({"x": 0, "y": 0, "shift": value})

    def test_finite_number(self) -> None:
        assert finite_number({"delta_y": "-3"}, "delta_y") == -3.0
        with pytest.raises(InvalidEventError):
            finite_number({}, "delta_y")
        with pytest.raises(InvalidEventError):
            finite_number({"delta_y": float("nan")}, "delta_y")


class TestDispatchRejectsNonFinite:
    """Non-finite numbers never reach a session."""

    def test_nan_pointer_leaves_store_untouched(self, service: SessionService, session: SketchSession) -> None:
        service.dispatch(session, {"type": "set_mode", "mode": "add-rectangle"})
        with pytest.raises(InvalidEventError):
            service.dispatch(session, {"type": "pointer_down", "x": float("nan"), "y": 0})
        service.dispatch(session, {"type": "pointer_up", "x": 10, "y": 10})

        assert len(session.store) == 0
        assert session.gesture is None

    def test_valid_draw_after_rejected_event(self, service: SessionService, session: SketchSession) -> None:
        service.dispatch(session, {"type": "set_mode", "mode": "add-rectangle"})
        with pytest.raises(InvalidEventError):
            service.dispatch(session, {"type": "pointer_down", "x": float("inf"), "y": 0})
        service.dispatch(session, {"type": "pointer_down", "x": 0, "y": 0})
        service.dispatch(session, {"type": "pointer_up", "x": 10, "y": 10})

        assert session.shape_bounds(0) == BoundingBox(0, 0, 10, 10)

    @pytest.mark.parametrize("value", [float("nan"), float("inf")])
    def test_wheel_rejects_non_finite(self, service: SessionService, session: SketchSession, value: float) -> None:
        with pytest.raises(InvalidEventError):
            service.dispatch(session, {"type": "wheel", "delta_y": value})
        assert session.view.zoom_factor == 1.0

    def test_select_rejects_non_finite(self, service: SessionService, session_with_rectangle: SketchSession) -> None:
        with pytest.raises(InvalidEventError):
            service.dispatch(session_with_rectangle, {"type": "select", "index": float("inf")})
        assert session_with_rectangle.selection.selected_index is None
