"""Session service providing the registry and input dispatch for canvas sessions."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import structlog

from sketch_canvas.core.events import ShapeTarget
from sketch_canvas.core.input import (
    POINTER_INPUTS,
    InputType,
    finite_number,
    parse_input_type,
    pointer_event_from_dict,
)
from sketch_canvas.core.settings import SessionSettings
from sketch_canvas.exceptions import InvalidEventError, SessionNotFoundError
from sketch_canvas.services.interaction import SketchSession

if TYPE_CHECKING:
    from collections.abc import Mapping
    from uuid import UUID

    from sketch_canvas.services.render import SketchRenderer
    from sketch_canvas.storage.base import SessionStorageProtocol

logger = structlog.get_logger(__name__)


class SessionService:
    """Service for creating canvas sessions and feeding them input.

    Attributes:
        settings: Settings handed to every new session.
    """

    def __init__(
        self,
        storage: SessionStorageProtocol,
        settings: SessionSettings | None = None,
        renderer: SketchRenderer | None = None,
    ) -> None:
        """Initialize the session service.

        Args:
            storage: Storage backend implementing SessionStorageProtocol.
            settings: Settings for new sessions.
            renderer: Sketch renderer for new sessions. Each session builds the
                default SVG renderer when None.
        """
        self._storage = storage
        self._renderer = renderer
        self.settings = settings or SessionSettings()

    async def create_session(self) -> SketchSession:
        """Create a new empty session.

        Returns:
            The newly created session.
        """
        session = SketchSession(settings=self.settings, renderer=self._renderer)
        await self._storage.add_session(session)
        logger.info("Session created", session_id=str(session.id))
        return session

    async def get_session(self, session_id: UUID) -> SketchSession:
        """Get a session by ID.

        Raises:
            SessionNotFoundError: If the session does not exist.
        """
        session = await self._storage.get_session(session_id)
        if session is None:
            raise SessionNotFoundError(session_id)
        return session

    async def list_sessions(self) -> list[SketchSession]:
        return await self._storage.list_sessions()

    async def delete_session(self, session_id: UUID) -> None:
        """Forget a session.

        Raises:
            SessionNotFoundError: If the session does not exist.
        """
        if not await self._storage.delete_session(session_id):
            raise SessionNotFoundError(session_id)
        logger.info("Session deleted", session_id=str(session_id))

    def dispatch(self, session: SketchSession, message: Mapping[str, Any]) -> InputType:
        """Apply one client input message to ``session``.

        Args:
            session: The session receiving the input.
            message: Parsed message with a ``type`` field and its payload.

        Returns:
            The handled message type.

        Raises:
            InvalidEventError: If the message is malformed.
            InvalidModeError: If a ``set_mode`` label names no mode.
        """
        msg_type = parse_input_type(message.get("type"))

        if msg_type in POINTER_INPUTS:
            event = pointer_event_from_dict(message)
            if isinstance(event.target, ShapeTarget) and not 0 <= event.target.index < len(session.store):
                raise InvalidEventError(f"No shape at index {event.target.index}")
            if msg_type == InputType.POINTER_DOWN:
                session.pointer_down(event)
            elif msg_type == InputType.POINTER_MOVE:
                session.pointer_move(event)
            else:
                session.pointer_up(event)
        elif msg_type == InputType.POINTER_CANCEL:
            session.pointer_cancel()
        elif msg_type == InputType.WHEEL:
            session.wheel(finite_number(message, "delta_y"))
        elif msg_type == InputType.SET_MODE:
            session.set_mode(str(message.get("mode", "")))
        elif msg_type == InputType.SELECT:
            index = int(finite_number(message, "index"))
            if not 0 <= index < len(session.store):
                raise InvalidEventError(f"No shape at index {index}")
            session.select(index)
        elif msg_type == InputType.DESELECT:
            session.deselect()
        elif msg_type == InputType.CLEAR:
            session.confirm_clear()
        elif msg_type != InputType.GET_SURFACE:
            raise InvalidEventError(f"Not a client message: {msg_type.value}")
        return msg_type
