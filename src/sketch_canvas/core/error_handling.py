"""Error responses for the sketch-canvas HTTP API.

Every error leaves the API as one JSON shape::

    {"status": "error", "code": "invalid_mode", "message": "...",
     "correlation_id": "...", "session_id": "...", "details": [...]}

``session_id`` is present on session routes, ``details`` only for body
validation failures. Domain errors carry their own ``code``; the HTTP status
for each is looked up in ``SKETCH_ERROR_STATUS``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

import structlog
from litestar import Response
from litestar.status_codes import (
    HTTP_404_NOT_FOUND,
    HTTP_422_UNPROCESSABLE_ENTITY,
    HTTP_500_INTERNAL_SERVER_ERROR,
)

from sketch_canvas.exceptions import InvalidEventError, InvalidModeError, SessionNotFoundError, SketchError

if TYPE_CHECKING:
    from litestar import Request
    from litestar.exceptions import HTTPException, ValidationException

logger = structlog.get_logger(__name__)

# Domain errors a client can cause. Anything else derived from SketchError is a
# server bug and answers 500.
SKETCH_ERROR_STATUS: dict[type[SketchError], int] = {
    SessionNotFoundError: HTTP_404_NOT_FOUND,
    InvalidModeError: HTTP_422_UNPROCESSABLE_ENTITY,
    InvalidEventError: HTTP_422_UNPROCESSABLE_ENTITY,
}

_HTTP_ERROR_CODES = {
    400: "bad_request",
    404: "not_found",
    405: "method_not_allowed",
    422: "validation_error",
    500: "internal_error",
}


@dataclass
class ErrorDetail:
    """One rejected field of a request body."""

    field: str | None = None
    message: str = ""
    code: str = "validation_error"


@dataclass
class ErrorResponse:
    """Structured error body.

    Attributes:
        message: Human readable description.
        code: Machine readable error code.
        correlation_id: Correlation ID of the failed request.
        session_id: Session the request addressed, if any.
        details: Per-field validation failures.
    """

    message: str = ""
    code: str = "internal_error"
    correlation_id: str | None = None
    session_id: str | None = None
    details: list[ErrorDetail] = field(default_factory=list)

    @classmethod
    def for_request(cls, request: Request, *, message: str, code: str, **kwargs: Any) -> ErrorResponse:
        """Build a response carrying the request's correlation and session IDs."""
        return cls(
            message=message,
            code=code,
            correlation_id=get_correlation_id(request),
            session_id=request.scope.get("state", {}).get("session_id"),
            **kwargs,
        )

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {"status": "error", "message": self.message, "code": self.code}
        if self.correlation_id:
            result["correlation_id"] = self.correlation_id
        if self.session_id:
            result["session_id"] = self.session_id
        if self.details:
            result["details"] = [{"field": d.field, "message": d.message, "code": d.code} for d in self.details]
        return result

    def to_response(self, status_code: int) -> Response[dict[str, Any]]:
        return Response(content=self.to_dict(), status_code=status_code, media_type="application/json")


def get_correlation_id(request: Request) -> str | None:
    """Correlation ID bound by the logging middleware, else taken from the headers."""
    correlation_id = request.scope.get("state", {}).get("correlation_id")
    if correlation_id:
        return correlation_id
    return request.headers.get("X-Correlation-ID") or request.headers.get("X-Request-ID")


def status_for(exc: SketchError) -> int:
    """HTTP status for a domain error, following its class hierarchy."""
    for klass in type(exc).__mro__:
        if klass in SKETCH_ERROR_STATUS:
            return SKETCH_ERROR_STATUS[klass]
    return HTTP_500_INTERNAL_SERVER_ERROR


def sketch_error_handler(request: Request, exc: SketchError) -> Response[dict[str, Any]]:
    """Answer a domain error with its own code and mapped status.

    Client errors log at warning. Programming errors (unsupported kind, bad
    index, missing geometry tag) log with a traceback and hide their message.
    """
    status_code = status_for(exc)
    if status_code >= HTTP_500_INTERNAL_SERVER_ERROR:
        logger.error("Sketch invariant violated", error_code=exc.code, exc_info=exc)
        body = ErrorResponse.for_request(request, message="An unexpected error occurred.", code="internal_error")
    else:
        logger.warning("Request rejected", error_code=exc.code, error=str(exc))
        body = ErrorResponse.for_request(request, message=str(exc), code=exc.code)
    return body.to_response(status_code)


def validation_exception_handler(request: Request, exc: ValidationException) -> Response[dict[str, Any]]:
    """Answer a malformed request body with one detail per rejected field."""
    details: list[ErrorDetail] = []
    for error in exc.extra or []:
        if isinstance(error, dict):
            details.append(ErrorDetail(field=error.get("key"), message=error.get("message", str(error))))
        else:
            details.append(ErrorDetail(message=str(error)))
    if not details:
        details.append(ErrorDetail(message=str(exc.detail)))

    logger.warning("Validation error", error_count=len(details))
    return ErrorResponse.for_request(
        request, message="Validation failed", code="validation_error", details=details
    ).to_response(HTTP_422_UNPROCESSABLE_ENTITY)


def http_exception_handler(request: Request, exc: HTTPException) -> Response[dict[str, Any]]:
    """Answer routing and framework errors such as unknown paths."""
    error_code = _HTTP_ERROR_CODES.get(exc.status_code, "error")
    log_method = logger.warning if exc.status_code < HTTP_500_INTERNAL_SERVER_ERROR else logger.error
    log_method("HTTP exception", status_code=exc.status_code, error_code=error_code)
    message = exc.detail if isinstance(exc.detail, str) else str(exc.detail)
    return ErrorResponse.for_request(request, message=message, code=error_code).to_response(exc.status_code)


def generic_exception_handler(request: Request, exc: Exception) -> Response[dict[str, Any]]:
    """Log an unexpected exception and answer with a safe message."""
    logger.exception("Unhandled exception", exc_info=exc)
    return ErrorResponse.for_request(
        request, message="An unexpected error occurred.", code="internal_error"
    ).to_response(HTTP_500_INTERNAL_SERVER_ERROR)


def get_exception_handlers() -> dict:
    """Get all exception handlers for the application.

    Returns:
        Dictionary mapping exception types to handler functions.
    """
    from litestar.exceptions import HTTPException, ValidationException

    return {
        ValidationException: validation_exception_handler,
        HTTPException: http_exception_handler,
        SketchError: sketch_error_handler,
        Exception: generic_exception_handler,
    }
