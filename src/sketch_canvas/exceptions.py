"""Custom exceptions for sketch-canvas."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from uuid import UUID


class SketchError(Exception):
    """Base exception class for all sketch-canvas errors."""

    code = "sketch_error"


class UnsupportedShapeKindError(SketchError):
    """Raised when geometry is requested for a kind outside the closed set.

    Attributes:
        kind: The offending kind value.
    """

    code = "unsupported_shape_kind"

    def __init__(self, kind: Any) -> None:
        """Initialize the exception with the unsupported kind.

        Args:
            kind: The kind that could not be handled.
        """
        self.kind = kind
        super().__init__(f"Unsupported shape kind: {kind!r}")


class IndexOutOfRangeError(SketchError):
    """Raised when a shape store slot does not exist.

    Attributes:
        index: The requested index.
        length: The store length at the time of the request.
    """

    code = "index_out_of_range"

    def __init__(self, index: int, length: int) -> None:
        """Initialize the exception with the index and store length.

        Args:
            index: The requested index.
            length: Current number of shapes in the store.
        """
        self.index = index
        self.length = length
        super().__init__(f"Shape index {index} out of range for store of length {length}")


class MissingGeometryTagError(SketchError):
    """Raised when a placed shape carries no usable canonical kind."""

    code = "missing_geometry_tag"

    def __init__(self, index: int | None = None) -> None:
        """Initialize the exception.

        Args:
            index: Store index of the untagged shape, if known.
        """
        self.index = index
        super().__init__(f"Missing shape kind tag on shape {index}")


class InvalidModeError(SketchError):
    """Raised when a mode label received from the UI cannot be parsed.

    Attributes:
        label: The rejected label.
    """

    code = "invalid_mode"

    def __init__(self, label: str) -> None:
        """Initialize the exception with the rejected label.

        Args:
            label: The mode label that was not recognised.
        """
        self.label = label
        super().__init__(f"Invalid mode: {label!r}")


class InvalidEventError(SketchError):
    """Raised when an input event payload is malformed.

    This exception is used for validation errors at the HTTP and WebSocket boundary.
    """

    code = "invalid_event"

    def __init__(self, message: str) -> None:
        """Initialize the exception with a custom message.

        Args:
            message: Description of why the event is invalid.
        """
        super().__init__(message)


class SessionNotFoundError(SketchError):
    """Raised when a session with the specified ID cannot be found.

    Attributes:
        session_id: The UUID of the session that was not found.
    """

    code = "session_not_found"

    def __init__(self, session_id: UUID) -> None:
        """Initialize the exception with the session ID.

        Args:
            session_id: The UUID of the session that was not found.
        """
        self.session_id = session_id
        super().__init__(f"Session with ID {session_id} not found")
