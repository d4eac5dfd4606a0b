"""Pytest configuration and fixtures for sketch-canvas tests."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest
from litestar.testing import TestClient

from sketch_canvas.app import create_app
from sketch_canvas.core.models import Point
from sketch_canvas.core.settings import SessionSettings
from sketch_canvas.core.style import BOLD
from sketch_canvas.plugin import SketchConfig
from sketch_canvas.services.interaction import SketchSession
from sketch_canvas.services.sessions import SessionService
from sketch_canvas.storage.memory import InMemorySessionStorage

if TYPE_CHECKING:
    from collections.abc import Iterator

    from litestar import Litestar


@pytest.fixture
def anyio_backend() -> str:
    """Use asyncio as the async backend."""
    return "asyncio"


# Settings and session fixtures


@pytest.fixture
def settings() -> SessionSettings:
    """Settings independent of the test environment."""
    return SessionSettings(style=BOLD, min_zoom=0.1, max_zoom=10.0, handle_radius=5.0, background_color="#e4d8b4")


@pytest.fixture
def session(settings: SessionSettings) -> SketchSession:
    """Create a fresh, empty session."""
    return SketchSession(settings=settings)


@pytest.fixture
def session_with_rectangle(session: SketchSession) -> SketchSession:
    """A session holding one rectangle spanning (0, 0) to (100, 50)."""
    session.place("rectangle", Point(0, 0), Point(100, 50))
    return session


# Storage and service fixtures


@pytest.fixture
def storage() -> InMemorySessionStorage:
    """Create a fresh session registry for each test."""
    return InMemorySessionStorage()


@pytest.fixture
def service(storage: InMemorySessionStorage, settings: SessionSettings) -> SessionService:
    """Create a session service over the in-memory registry."""
    return SessionService(storage, settings=settings)


# App and client fixtures


@pytest.fixture
def app(settings: SessionSettings) -> Litestar:
    """Create the sketch-canvas app with fixed settings."""
    return create_app(SketchConfig(settings=settings))


@pytest.fixture
def client(app: Litestar) -> Iterator[TestClient[Litestar]]:
    """Create a test client for the app."""
    with TestClient(app=app) as test_client:
        yield test_client
