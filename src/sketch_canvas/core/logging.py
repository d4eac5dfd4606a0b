"""Structured logging for sketch-canvas.

Every log line carries the correlation ID of the request or WebSocket
connection it belongs to and, for session routes, the ``session_id`` taken
from the path. Session objects bind the same key on their own loggers, so
HTTP access lines, WebSocket lifecycle lines and gesture lines for one
canvas can be filtered together.
"""

from __future__ import annotations

import logging
import re
import time
import uuid
from typing import TYPE_CHECKING

import structlog

if TYPE_CHECKING:
    from litestar.types import ASGIApp, Message, Receive, Scope, Send

# Matches /api/sessions/<uuid>/... and /ws/sessions/<uuid>
_SESSION_PATH = re.compile(r"/sessions/(?P<session_id>[0-9a-fA-F]{8}(?:-[0-9a-fA-F]{4}){3}-[0-9a-fA-F]{12})(?:/|$)")

QUIET_PATHS = frozenset({"/health", "/ready", "/favicon.ico"})


def session_id_from_path(path: str) -> str | None:
    """Extract the session ID from a session route path.

    Args:
        path: The request path, e.g. ``/api/sessions/<id>/events``.

    Returns:
        The lower-cased session ID, or None for paths outside a session.
    """
    match = _SESSION_PATH.search(path)
    return match.group("session_id").lower() if match else None


def configure_logging(*, debug: bool = False, json_logs: bool = False) -> None:
    """Configure structlog for the application.

    Args:
        debug: Emit debug lines too. Gesture begin/commit events are logged
            at debug level.
        json_logs: Render one JSON object per line instead of the colored
            console format.
    """
    shared: list = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
    ]
    renderer: list = (
        [structlog.processors.format_exc_info, structlog.processors.JSONRenderer()]
        if json_logs
        else [structlog.dev.ConsoleRenderer(colors=True)]
    )

    structlog.configure(
        processors=shared + renderer,
        wrapper_class=structlog.make_filtering_bound_logger(logging.DEBUG if debug else logging.INFO),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )


class CorrelationIdMiddleware:
    """Middleware that binds request context for every log line.

    For each HTTP request and WebSocket connection:
    1. The correlation ID is read from X-Correlation-ID or X-Request-ID, or
       generated
    2. It is stored in the scope state next to the session ID, if any
    3. Both are bound into the structlog context
    4. HTTP responses echo the correlation ID header
    """

    def __init__(self, app: ASGIApp) -> None:
        """Initialize the middleware.

        Args:
            app: The ASGI application.
        """
        self.app = app

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        """Bind the context, run the app, then clear the context."""
        if scope["type"] not in ("http", "websocket"):
            await self.app(scope, receive, send)
            return

        headers = dict(scope.get("headers", []))
        correlation_id = (
            headers.get(b"x-correlation-id", b"").decode()
            or headers.get(b"x-request-id", b"").decode()
            or str(uuid.uuid4())
        )
        path = scope.get("path", "")
        session_id = session_id_from_path(path)

        state = scope.setdefault("state", {})
        state["correlation_id"] = correlation_id
        context = {"correlation_id": correlation_id, "path": path}
        if scope["type"] == "http":
            context["method"] = scope.get("method", "")
        if session_id is not None:
            state["session_id"] = session_id
            context["session_id"] = session_id

        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(**context)

        async def send_wrapper(message: Message) -> None:
            """Echo the correlation ID on HTTP responses."""
            if message["type"] == "http.response.start":
                response_headers = list(message.get("headers", []))
                response_headers.append((b"x-correlation-id", correlation_id.encode()))
                message["headers"] = response_headers
            await send(message)

        try:
            await self.app(scope, receive, send_wrapper)
        finally:
            structlog.contextvars.clear_contextvars()


class RequestLoggingMiddleware:
    """Middleware that logs one line per HTTP request or WebSocket connection.

    HTTP requests log status code and duration; 5xx responses log at error
    level, 4xx at warning, the rest at info. WebSocket connections log how
    long the stream stayed open and the close code, if the server closed it.
    """

    def __init__(self, app: ASGIApp, *, exclude_paths: set[str] | None = None) -> None:
        """Initialize the middleware.

        Args:
            app: The ASGI application.
            exclude_paths: Paths that are never logged (health checks by default).
        """
        self.app = app
        self.exclude_paths = exclude_paths or set(QUIET_PATHS)

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        """Run the app and log the outcome."""
        if scope.get("path", "") in self.exclude_paths:
            await self.app(scope, receive, send)
            return
        if scope["type"] == "http":
            await self._log_http(scope, receive, send)
        elif scope["type"] == "websocket":
            await self._log_websocket(scope, receive, send)
        else:
            await self.app(scope, receive, send)

    async def _log_http(self, scope: Scope, receive: Receive, send: Send) -> None:
        logger = structlog.get_logger(__name__)
        start_time = time.perf_counter()
        status_code = 500
        client = scope.get("client")
        client_ip = client[0] if client else "unknown"

        async def send_wrapper(message: Message) -> None:
            nonlocal status_code
            if message["type"] == "http.response.start":
                status_code = message.get("status", 500)
            await send(message)

        try:
            await self.app(scope, receive, send_wrapper)
        except Exception:
            logger.exception("Request failed with exception", client_ip=client_ip)
            raise
        finally:
            if status_code >= 500:
                log_method = logger.error
            elif status_code >= 400:
                log_method = logger.warning
            else:
                log_method = logger.info
            log_method(
                "Request completed",
                status_code=status_code,
                duration_ms=round((time.perf_counter() - start_time) * 1000, 2),
                client_ip=client_ip,
            )

    async def _log_websocket(self, scope: Scope, receive: Receive, send: Send) -> None:
        logger = structlog.get_logger(__name__)
        start_time = time.perf_counter()
        accepted = False
        close_code: int | None = None

        async def send_wrapper(message: Message) -> None:
            nonlocal accepted, close_code
            if message["type"] == "websocket.accept":
                accepted = True
            elif message["type"] == "websocket.close":
                close_code = message.get("code", 1000)
            await send(message)

        try:
            await self.app(scope, receive, send_wrapper)
        finally:
            logger.info(
                "WebSocket finished" if accepted else "WebSocket rejected",
                close_code=close_code,
                duration_ms=round((time.perf_counter() - start_time) * 1000, 2),
            )


def get_middleware() -> list:
    """Get the logging middleware stack.

    Returns:
        Middleware classes, outermost first.
    """
    return [CorrelationIdMiddleware, RequestLoggingMiddleware]
