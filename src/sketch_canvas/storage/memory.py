"""In-memory session storage for sketch-canvas."""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from uuid import UUID

    from sketch_canvas.services.interaction import SketchSession


class InMemorySessionStorage:
    """Dictionary-backed session registry guarded by an asyncio lock.

    Sessions are live objects and are handed out as-is: each one is driven
    by a single event stream.

    Attributes:
        _sessions: Internal dictionary mapping session IDs to sessions.
        _lock: Asyncio lock serialising registry changes.
    """

    def __init__(self) -> None:
        """Initialize an empty registry."""
        self._sessions: dict[UUID, SketchSession] = {}
        self._lock = asyncio.Lock()

    async def add_session(self, session: SketchSession) -> SketchSession:
        async with self._lock:
            self._sessions[session.id] = session
            return session

    async def get_session(self, session_id: UUID) -> SketchSession | None:
        async with self._lock:
            return self._sessions.get(session_id)

    async def list_sessions(self) -> list[SketchSession]:
        async with self._lock:
            return sorted(self._sessions.values(), key=lambda s: s.created_at, reverse=True)

    async def delete_session(self, session_id: UUID) -> bool:
        async with self._lock:
            if session_id in self._sessions:
                del self._sessions[session_id]
                return True
            return False

    async def count(self) -> int:
        async with self._lock:
            return len(self._sessions)
