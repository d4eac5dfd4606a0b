"""WebSocket messages sent from the server to the client."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import Enum
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from uuid import UUID


class MessageType(str, Enum):
    """Types of server -> client WebSocket messages.

    Client -> server messages are the input types in ``core.input``.
    """

    SURFACE = "surface"
    ERROR = "error"


@dataclass
class SurfaceMessage:
    """Render surface pushed to the client after an input message."""

    session_id: UUID
    surface: dict[str, Any]
    timestamp: datetime = field(default_factory=lambda: datetime.now(UTC))

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "type": MessageType.SURFACE.value,
            "timestamp": self.timestamp.isoformat(),
            "session_id": str(self.session_id),
            "surface": self.surface,
        }


@dataclass
class ErrorMessage:
    """Message sent when a client message cannot be handled."""

    code: str
    message: str
    timestamp: datetime = field(default_factory=lambda: datetime.now(UTC))

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "type": MessageType.ERROR.value,
            "timestamp": self.timestamp.isoformat(),
            "code": self.code,
            "message": self.message,
        }
