"""Litestar controllers for sketch-canvas API endpoints."""

from __future__ import annotations

from typing import ClassVar
from uuid import UUID

from litestar import Controller, delete, get, post, put
from litestar.response import Response
from litestar.status_codes import HTTP_200_OK, HTTP_204_NO_CONTENT

from sketch_canvas.exceptions import InvalidEventError
from sketch_canvas.services.render import ExportService
from sketch_canvas.services.sessions import SessionService
from sketch_canvas.web.dto import (
    InputEventDTO,
    SelectDTO,
    SessionDetailDTO,
    SessionResponseDTO,
    SetModeDTO,
    SurfaceDTO,
    session_to_detail,
    session_to_response,
    surface_to_response,
)


class SessionController(Controller):
    """Controller for canvas sessions.

    A session is created empty and then driven by input events, mode changes
    and the clear action. Every mutating endpoint answers with the new render
    surface.
    """

    path = "/sessions"
    tags: ClassVar[list[str]] = ["Sessions"]

    @post("/")
    async def create_session(self, service: SessionService) -> SessionResponseDTO:
        """Create a new empty session.

        Args:
            service: The session service instance (injected).

        Returns:
            The created session.
        """
        session = await service.create_session()
        return session_to_response(session)

    @get("/")
    async def list_sessions(self, service: SessionService) -> list[SessionResponseDTO]:
        """List all live sessions, newest first."""
        sessions = await service.list_sessions()
        return [session_to_response(s) for s in sessions]

    @get("/{session_id:uuid}")
    async def get_session(self, session_id: UUID, service: SessionService) -> SessionDetailDTO:
        """Get a session with its shapes and current surface.

        Raises:
            SessionNotFoundError: If the session does not exist.
        """
        session = await service.get_session(session_id)
        return session_to_detail(session)

    @delete("/{session_id:uuid}", status_code=HTTP_204_NO_CONTENT)
    async def delete_session(self, session_id: UUID, service: SessionService) -> None:
        """Drop a session and everything drawn in it.

        Raises:
            SessionNotFoundError: If the session does not exist.
        """
        await service.delete_session(session_id)

    @put("/{session_id:uuid}/mode")
    async def set_mode(self, session_id: UUID, data: SetModeDTO, service: SessionService) -> SurfaceDTO:
        """Switch the editor mode.

        Args:
            session_id: The unique identifier of the session.
            data: The new mode label.
            service: The session service instance (injected).

        Returns:
            The render surface after the switch.

        Raises:
            SessionNotFoundError: If the session does not exist.
            InvalidModeError: If the label names no mode.
        """
        session = await service.get_session(session_id)
        session.set_mode(data.mode)
        return surface_to_response(session.surface())

    @post("/{session_id:uuid}/clear", status_code=HTTP_200_OK)
    async def confirm_clear(self, session_id: UUID, service: SessionService) -> SurfaceDTO:
        """Clear the canvas. The UI asks for confirmation before calling this."""
        session = await service.get_session(session_id)
        session.confirm_clear()
        return surface_to_response(session.surface())

    @post("/{session_id:uuid}/select", status_code=HTTP_200_OK)
    async def select_shape(self, session_id: UUID, data: SelectDTO, service: SessionService) -> SurfaceDTO:
        """Select a placed shape by index.

        Raises:
            InvalidEventError: If no shape lives at the index.
        """
        session = await service.get_session(session_id)
        if not 0 <= data.index < len(session.store):
            raise InvalidEventError(f"No shape at index {data.index}")
        session.select(data.index)
        return surface_to_response(session.surface())

    @post("/{session_id:uuid}/events", status_code=HTTP_200_OK)
    async def post_event(self, session_id: UUID, data: InputEventDTO, service: SessionService) -> SurfaceDTO:
        """Feed one input event to the session's state machine.

        Args:
            session_id: The unique identifier of the session.
            data: The input event.
            service: The session service instance (injected).

        Returns:
            The render surface after the event.
        """
        session = await service.get_session(session_id)
        service.dispatch(session, data.to_message())
        return surface_to_response(session.surface())

    @get("/{session_id:uuid}/svg")
    async def export_svg(
        self,
        session_id: UUID,
        service: SessionService,
        export_service: ExportService,
    ) -> Response[str]:
        """Export the current surface as an SVG document.

        Args:
            session_id: The unique identifier of the session.
            service: The session service instance (injected).
            export_service: The export service instance (injected).

        Returns:
            SVG content as a response with appropriate content type.
        """
        session = await service.get_session(session_id)
        return Response(
            content=export_service.to_svg(session.surface()),
            media_type="image/svg+xml",
            headers={"Content-Disposition": f'inline; filename="{session_id}.svg"'},
        )
