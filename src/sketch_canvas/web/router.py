"""Router configuration for the sketch-canvas API."""

from __future__ import annotations

from litestar import Router

from sketch_canvas.web.controllers import SessionController


def create_router(path: str = "/api") -> Router:
    """Create the sketch-canvas API router.

    Args:
        path: The base path for all API routes. Defaults to "/api".

    Returns:
        A configured Litestar Router instance.

    Example:
        >>> router = create_router("/api/v1")
    """
    return Router(
        path=path,
        route_handlers=[SessionController],
    )
