"""Tests for the WebSocket input stream."""

from __future__ import annotations

from typing import TYPE_CHECKING
from uuid import uuid4

import pytest
from litestar.exceptions import WebSocketDisconnect

from sketch_canvas.realtime.messages import ErrorMessage, MessageType, SurfaceMessage

if TYPE_CHECKING:
    from litestar import Litestar
    from litestar.testing import TestClient


class TestMessages:
    """Tests for server message serialization."""

    def test_message_type_values(self) -> None:
        assert MessageType.SURFACE.value == "surface"
        assert MessageType.ERROR.value == "error"

    def test_surface_message_to_dict(self) -> None:
        session_id = uuid4()
        data = SurfaceMessage(session_id=session_id, surface={"drawables": []}).to_dict()
        assert data["type"] == "surface"
        assert data["session_id"] == str(session_id)
        assert data["surface"] == {"drawables": []}
        assert "timestamp" in data

    def test_error_message_to_dict(self) -> None:
        data = ErrorMessage(code="invalid_event", message="nope").to_dict()
        assert data["type"] == "error"
        assert data["code"] == "invalid_event"
        assert data["message"] == "nope"


class TestSessionWebSocket:
    """Tests for driving a session over a WebSocket."""

    def test_initial_surface(self, client: TestClient[Litestar]) -> None:
        session_id = client.post("/api/sessions").json()["id"]
        with client.websocket_connect(f"/ws/sessions/{session_id}") as ws:
            message = ws.receive_json()
            assert message["type"] == "surface"
            assert message["session_id"] == session_id
            assert message["surface"]["drawables"] == []
            assert message["surface"]["mode"] == "normal"

    def test_draw_over_websocket(self, client: TestClient[Litestar]) -> None:
        session_id = client.post("/api/sessions").json()["id"]
        with client.websocket_connect(f"/ws/sessions/{session_id}") as ws:
            ws.receive_json()

            ws.send_json({"type": "set_mode", "mode": "add-arrow"})
            assert ws.receive_json()["surface"]["mode"] == "add-arrow"

            ws.send_json({"type": "pointer_down", "x": 0, "y": 0})
            ws.receive_json()
            ws.send_json({"type": "pointer_move", "x": 60, "y": 0})
            assert ws.receive_json()["surface"]["preview"] is not None
            ws.send_json({"type": "pointer_up", "x": 60, "y": 0})
            surface = ws.receive_json()["surface"]

        assert len(surface["drawables"]) == 1
        assert surface["preview"] is None

        detail = client.get(f"/api/sessions/{session_id}").json()
        assert detail["shapes"][0]["kind"] == "arrow"

    def test_errors_keep_connection_open(self, client: TestClient[Litestar]) -> None:
        session_id = client.post("/api/sessions").json()["id"]
        with client.websocket_connect(f"/ws/sessions/{session_id}") as ws:
            ws.receive_json()

            ws.send_text("not json")
            assert ws.receive_json()["code"] == "invalid_json"

            ws.send_json([1, 2, 3])
            assert ws.receive_json()["code"] == "invalid_message"

            ws.send_json({"type": "set_mode", "mode": "clear-shapes"})
            error = ws.receive_json()
            assert error["type"] == "error"
            assert error["code"] == "invalid_mode"

            ws.send_json({"type": "wheel", "delta_y": -1})
            message = ws.receive_json()
            assert message["type"] == "surface"
            assert abs(message["surface"]["view"]["zoom_factor"] - 1.1) < 1e-9

    def test_unknown_session_closes(self, client: TestClient[Litestar]) -> None:
        with pytest.raises(WebSocketDisconnect), client.websocket_connect(f"/ws/sessions/{uuid4()}") as ws:
            ws.receive_json()
