"""Real-time WebSocket module for sketch-canvas.

Clients stream pointer, wheel and mode messages over a WebSocket and get the
render surface back after each one.
"""

from __future__ import annotations

from sketch_canvas.realtime.handler import SessionWebSocketHandler, create_websocket_handler
from sketch_canvas.realtime.messages import ErrorMessage, MessageType, SurfaceMessage

__all__ = [
    "ErrorMessage",
    "MessageType",
    "SessionWebSocketHandler",
    "SurfaceMessage",
    "create_websocket_handler",
]
