"""Main Litestar application for sketch-canvas.

Run with ``uvicorn sketch_canvas.app:app``.
"""

from __future__ import annotations

import os

from litestar import Litestar
from litestar.openapi import OpenAPIConfig
from litestar.openapi.plugins import ScalarRenderPlugin, SwaggerRenderPlugin

from sketch_canvas.core.error_handling import get_exception_handlers
from sketch_canvas.core.logging import configure_logging, get_middleware
from sketch_canvas.plugin import SketchConfig, SketchPlugin
from sketch_canvas.web.health import HealthController


def create_app(
    config: SketchConfig | None = None,
    *,
    debug: bool = False,
    json_logs: bool = False,
) -> Litestar:
    """Create and configure the Litestar application.

    Args:
        config: Plugin configuration. Defaults to in-memory sessions with
            settings read from the environment.
        debug: Whether to enable debug mode and debug logging.
        json_logs: Whether to output logs as JSON.

    Returns:
        Configured Litestar application instance.
    """
    configure_logging(debug=debug, json_logs=json_logs)

    return Litestar(
        route_handlers=[HealthController],
        plugins=[SketchPlugin(config or SketchConfig())],
        debug=debug,
        middleware=get_middleware(),
        exception_handlers=get_exception_handlers(),
        openapi_config=OpenAPIConfig(
            title="sketch-canvas API",
            version="0.1.0",
            description="Infinite-canvas sketch editor sessions driven by pointer input",
            path="/schema",
            render_plugins=[ScalarRenderPlugin(path="/"), SwaggerRenderPlugin(path="/swagger")],
            use_handler_docstrings=True,
        ),
    )


_debug = os.environ.get("SKETCH_DEBUG", "").lower() in ("true", "1", "yes")
_json_logs = os.environ.get("SKETCH_JSON_LOGS", "").lower() in ("true", "1", "yes")
app = create_app(debug=_debug, json_logs=_json_logs)
