"""WebSocket handler streaming input events into a canvas session."""

from __future__ import annotations

import json
from dataclasses import asdict
from typing import TYPE_CHECKING
from uuid import UUID

import structlog
from litestar import Router, WebSocket, websocket

from sketch_canvas.exceptions import SessionNotFoundError, SketchError
from sketch_canvas.realtime.messages import ErrorMessage, SurfaceMessage
from sketch_canvas.web.dto import surface_to_response

if TYPE_CHECKING:
    from sketch_canvas.services.interaction import SketchSession
    from sketch_canvas.services.sessions import SessionService

logger = structlog.get_logger(__name__)


class SessionWebSocketHandler:
    """Handler for session WebSocket connections.

    Each client message is one input event. Events are applied in arrival
    order and every one is answered with the resulting render surface, or
    with an error message when it could not be applied.
    """

    def __init__(self, session_service: SessionService) -> None:
        """Initialize the WebSocket handler.

        Args:
            session_service: The session service instance.
        """
        self._service = session_service

    async def handle_connection(self, socket: WebSocket, session_id: UUID) -> None:
        """Handle a WebSocket connection for a session.

        Args:
            socket: The WebSocket connection.
            session_id: The session ID from the URL.
        """
        try:
            session = await self._service.get_session(session_id)
        except SessionNotFoundError:
            await socket.close(code=4004, reason="Session not found")
            return

        await socket.accept()
        logger.debug("WebSocket connection accepted", session_id=str(session_id))

        try:
            await self._send_surface(socket, session)
            await self._receive_loop(socket, session)
        except Exception:
            logger.exception("WebSocket error", session_id=str(session_id))
        finally:
            logger.debug("WebSocket connection closed", session_id=str(session_id))

    async def _receive_loop(self, socket: WebSocket, session: SketchSession) -> None:
        """Main receive loop for WebSocket messages.

        Args:
            socket: The WebSocket connection.
            session: The session driven by this connection.
        """
        async for message in socket.iter_data():
            try:
                data = json.loads(message) if isinstance(message, (str, bytes)) else message
            except json.JSONDecodeError:
                await self._send_error(socket, "invalid_json", "Invalid JSON message")
                continue

            if not isinstance(data, dict):
                await self._send_error(socket, "invalid_message", "Message must be a JSON object")
                continue

            try:
                self._service.dispatch(session, data)
            except SketchError as exc:
                logger.warning(
                    "Rejected client message",
                    message_type=data.get("type"),
                    session_id=str(session.id),
                    error=str(exc),
                )
                await self._send_error(socket, exc.code, str(exc))
                continue

            await self._send_surface(socket, session)

    async def _send_surface(self, socket: WebSocket, session: SketchSession) -> None:
        surface = surface_to_response(session.surface())
        msg = SurfaceMessage(session_id=session.id, surface=asdict(surface))
        await socket.send_json(msg.to_dict())

    async def _send_error(self, socket: WebSocket, code: str, message: str) -> None:
        """Send an error message to the client.

        Args:
            socket: The WebSocket connection.
            code: Error code.
            message: Error message.
        """
        await socket.send_json(ErrorMessage(code=code, message=message).to_dict())


def create_websocket_handler(path: str, session_service: SessionService) -> Router:
    """Create a WebSocket router for canvas sessions.

    Args:
        path: Base path for WebSocket routes.
        session_service: The session service instance.

    Returns:
        A Litestar Router with WebSocket handlers.
    """
    handler = SessionWebSocketHandler(session_service)

    @websocket(path="/sessions/{session_id:uuid}")
    async def session_websocket(socket: WebSocket, session_id: UUID) -> None:
        """WebSocket endpoint for driving a canvas session.

        Args:
            socket: The WebSocket connection.
            session_id: The session ID from the URL.
        """
        await handler.handle_connection(socket, session_id)

    return Router(path=path, route_handlers=[session_websocket], tags=["WebSocket"])
