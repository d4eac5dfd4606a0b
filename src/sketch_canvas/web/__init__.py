"""Web layer for the sketch-canvas API."""

from sketch_canvas.web.controllers import SessionController
from sketch_canvas.web.health import HealthController
from sketch_canvas.web.router import create_router

__all__ = ["HealthController", "SessionController", "create_router"]
