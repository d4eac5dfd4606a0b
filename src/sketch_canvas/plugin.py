"""Litestar plugin for sketch-canvas integration."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from litestar.di import Provide
from litestar.plugins import InitPluginProtocol

from sketch_canvas.core.settings import SessionSettings
from sketch_canvas.services.render import ExportService
from sketch_canvas.services.sessions import SessionService
from sketch_canvas.storage.memory import InMemorySessionStorage
from sketch_canvas.web.router import create_router

if TYPE_CHECKING:
    from litestar.config.app import AppConfig

    from sketch_canvas.services.render import SketchRenderer
    from sketch_canvas.storage.base import SessionStorageProtocol


@dataclass
class SketchConfig:
    """Configuration for the sketch-canvas plugin.

    Attributes:
        storage: Session registry backend. If None, InMemorySessionStorage is
            used.
        settings: Settings handed to every new session. If None, settings are
            read from the environment.
        renderer: Sketch renderer for new sessions. If None, each session uses
            the default SVG renderer.
        enable_api: Whether to mount the REST API routes. Defaults to True.
        enable_websocket: Whether to mount the WebSocket input stream.
            Defaults to True.
        api_path: Base path for mounting API routes. Defaults to "/api".
        ws_path: Base path for WebSocket routes. Defaults to "/ws".
        dependency_key: Extra dependency injection key for SessionService,
            for handlers of the host app. The built-in routes always receive
            it as "service". Defaults to "service".

    Example:
        >>> config = SketchConfig(api_path="/api/v1", dependency_key="sketch_service")
    """

    storage: SessionStorageProtocol | None = None
    settings: SessionSettings | None = None
    renderer: SketchRenderer | None = None
    enable_api: bool = True
    enable_websocket: bool = True
    api_path: str = "/api"
    ws_path: str = "/ws"
    dependency_key: str = "service"


class SketchPlugin(InitPluginProtocol):
    """Litestar plugin wiring sketch-canvas sessions into an application.

    Registers the SessionService and ExportService with dependency injection
    and mounts the REST API and WebSocket routes when enabled.

    Example:
        >>> from litestar import Litestar
        >>> from sketch_canvas import SketchConfig, SketchPlugin
        >>>
        >>> app = Litestar(plugins=[SketchPlugin(SketchConfig())])

    Attributes:
        _config: The plugin configuration.
        _service: The SessionService (None until on_app_init).
        _export_service: The ExportService (None until on_app_init).
    """

    def __init__(self, config: SketchConfig | None = None) -> None:
        """Initialize the plugin with optional configuration.

        Args:
            config: Plugin configuration. If None, SketchConfig defaults are used.
        """
        self._config = config or SketchConfig()
        self._service: SessionService | None = None
        self._export_service: ExportService | None = None

    @property
    def service(self) -> SessionService | None:
        return self._service

    def on_app_init(self, app_config: AppConfig) -> AppConfig:
        """Set up services, dependencies and routes during app startup.

        Args:
            app_config: The Litestar application configuration object.

        Returns:
            The modified application configuration.
        """
        settings = self._config.settings or SessionSettings()
        storage = self._config.storage or InMemorySessionStorage()
        self._service = SessionService(storage, settings=settings, renderer=self._config.renderer)
        self._export_service = ExportService(settings)

        def provide_service() -> SessionService:
            if self._service is None:
                msg = "Service not initialized"
                raise RuntimeError(msg)
            return self._service

        def provide_export_service() -> ExportService:
            if self._export_service is None:
                msg = "Export service not initialized"
                raise RuntimeError(msg)
            return self._export_service

        app_config.dependencies["service"] = Provide(provide_service, sync_to_thread=False)
        if self._config.dependency_key != "service":
            app_config.dependencies[self._config.dependency_key] = Provide(provide_service, sync_to_thread=False)
        app_config.dependencies["export_service"] = Provide(provide_export_service, sync_to_thread=False)

        if self._config.enable_api:
            app_config.route_handlers.append(create_router(path=self._config.api_path))

        if self._config.enable_websocket:
            from sketch_canvas.realtime.handler import create_websocket_handler

            app_config.route_handlers.append(
                create_websocket_handler(path=self._config.ws_path, session_service=self._service)
            )

        return app_config
