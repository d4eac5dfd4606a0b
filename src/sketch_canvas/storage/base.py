"""Session storage protocol definition for sketch-canvas."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from uuid import UUID

    from sketch_canvas.services.interaction import SketchSession


@runtime_checkable
class SessionStorageProtocol(Protocol):
    """Protocol defining where live canvas sessions are kept.

    Sessions are memory-only and vanish with the process; this protocol only
    lets the web layer find a session again between requests.
    """

    async def add_session(self, session: SketchSession) -> SketchSession:
        """Register a session.

        Args:
            session: The session to register.

        Returns:
            The registered session.
        """
        ...

    async def get_session(self, session_id: UUID) -> SketchSession | None:
        """Retrieve a session by its ID.

        Args:
            session_id: The unique identifier of the session.

        Returns:
            The session if found, None otherwise.
        """
        ...

    async def list_sessions(self) -> list[SketchSession]:
        """List all sessions, newest first."""
        ...

    async def delete_session(self, session_id: UUID) -> bool:
        """Forget a session.

        Args:
            session_id: The unique identifier of the session to delete.

        Returns:
            True if the session was deleted, False if it did not exist.
        """
        ...
