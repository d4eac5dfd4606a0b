"""Tests for logging context and request logging middleware."""

from __future__ import annotations

from typing import Any
from uuid import uuid4

import pytest
import structlog
from structlog.testing import capture_logs

from sketch_canvas.core.logging import CorrelationIdMiddleware, RequestLoggingMiddleware, session_id_from_path


async def _receive() -> dict[str, Any]:
    return {"type": "http.request", "body": b"", "more_body": False}


class RecordingApp:
    """ASGI app that remembers the log context it ran under."""

    def __init__(self, messages: list[dict[str, Any]] | None = None) -> None:
        self.messages = messages or [
            {"type": "http.response.start", "status": 200, "headers": []},
            {"type": "http.response.body", "body": b""},
        ]
        self.context: dict[str, Any] = {}
        self.scope: dict[str, Any] = {}

    async def __call__(self, scope: Any, receive: Any, send: Any) -> None:
        self.context = structlog.contextvars.get_contextvars()
        self.scope = scope
        for message in self.messages:
            await send(message)


def _scope(path: str, scope_type: str = "http", headers: list | None = None) -> dict[str, Any]:
    scope: dict[str, Any] = {"type": scope_type, "path": path, "headers": headers or [], "client": ("10.0.0.1", 1)}
    if scope_type == "http":
        scope["method"] = "POST"
    return scope


class TestSessionIdFromPath:
    """Tests for session ID extraction."""

    def test_api_paths(self) -> None:
        session_id = uuid4()
        assert session_id_from_path(f"/api/sessions/{session_id}") == str(session_id)
        assert session_id_from_path(f"/api/sessions/{session_id}/events") == str(session_id)

    def test_websocket_path(self) -> None:
        session_id = uuid4()
        assert session_id_from_path(f"/ws/sessions/{session_id}") == str(session_id)

    def test_upper_case_is_normalised(self) -> None:
        session_id = uuid4()
        assert session_id_from_path(f"/api/sessions/{str(session_id).upper()}") == str(session_id)

    @pytest.mark.parametrize("path", ["/api/sessions", "/api/sessions/", "/health", "/api/sessions/not-a-uuid"])
    def test_paths_without_session(self, path: str) -> None:
        assert session_id_from_path(path) is None


class TestCorrelationIdMiddleware:
    """Tests for log context binding."""

    @pytest.mark.asyncio
    async def test_binds_session_and_correlation_id(self) -> None:
        session_id = str(uuid4())
        app = RecordingApp()
        sent: list[dict[str, Any]] = []

        async def send(message: dict[str, Any]) -> None:
            sent.append(message)

        scope = _scope(f"/api/sessions/{session_id}/events", headers=[(b"x-request-id", b"req-9")])
        await CorrelationIdMiddleware(app)(scope, _receive, send)

        assert app.context["session_id"] == session_id
        assert app.context["correlation_id"] == "req-9"
        assert app.context["method"] == "POST"
        assert app.scope["state"] == {"correlation_id": "req-9", "session_id": session_id}
        assert (b"x-correlation-id", b"req-9") in sent[0]["headers"]
        assert structlog.contextvars.get_contextvars() == {}

    @pytest.mark.asyncio
    async def test_websocket_binds_session_without_method(self) -> None:
        session_id = str(uuid4())
        app = RecordingApp(messages=[{"type": "websocket.accept"}])

        async def send(message: dict[str, Any]) -> None:
            pass

        await CorrelationIdMiddleware(app)(_scope(f"/ws/sessions/{session_id}", "websocket"), _receive, send)

        assert app.context["session_id"] == session_id
        assert "method" not in app.context
        assert app.context["correlation_id"]

    @pytest.mark.asyncio
    async def test_no_session_outside_session_routes(self) -> None:
        app = RecordingApp()

        async def send(message: dict[str, Any]) -> None:
            pass

        await CorrelationIdMiddleware(app)(_scope("/api/sessions"), _receive, send)

        assert "session_id" not in app.context
        assert "session_id" not in app.scope["state"]


class TestRequestLoggingMiddleware:
    """Tests for access logging."""

    @pytest.mark.asyncio
    async def test_http_request_logged(self) -> None:
        async def send(message: dict[str, Any]) -> None:
            pass

        with capture_logs() as logs:
            await RequestLoggingMiddleware(RecordingApp())(_scope("/api/sessions"), _receive, send)

        assert logs[0]["event"] == "Request completed"
        assert logs[0]["status_code"] == 200
        assert logs[0]["client_ip"] == "10.0.0.1"

    @pytest.mark.asyncio
    async def test_client_error_logged_as_warning(self) -> None:
        app = RecordingApp(messages=[{"type": "http.response.start", "status": 404, "headers": []}])

        async def send(message: dict[str, Any]) -> None:
            pass

        with capture_logs() as logs:
            await RequestLoggingMiddleware(app)(_scope(f"/api/sessions/{uuid4()}"), _receive, send)

        assert logs[0]["log_level"] == "warning"

    @pytest.mark.asyncio
    async def test_health_paths_not_logged(self) -> None:
        async def send(message: dict[str, Any]) -> None:
            pass

        with capture_logs() as logs:
            await RequestLoggingMiddleware(RecordingApp())(_scope("/health"), _receive, send)

        assert logs == []

    @pytest.mark.asyncio
    async def test_websocket_lifetime_logged(self) -> None:
        app = RecordingApp(messages=[{"type": "websocket.accept"}, {"type": "websocket.close", "code": 4404}])

        async def send(message: dict[str, Any]) -> None:
            pass

        with capture_logs() as logs:
            await RequestLoggingMiddleware(app)(_scope(f"/ws/sessions/{uuid4()}", "websocket"), _receive, send)

        assert logs[0]["event"] == "WebSocket finished"
        assert logs[0]["close_code"] == 4404
        assert "duration_ms" in logs[0]
