"""Business logic services for sketch-canvas."""

from sketch_canvas.services.interaction import SketchSession
from sketch_canvas.services.render import ExportService, RenderSurface, SketchRenderer, SvgSketchRenderer
from sketch_canvas.services.sessions import SessionService

__all__ = ["ExportService", "RenderSurface", "SessionService", "SketchRenderer", "SketchSession", "SvgSketchRenderer"]
