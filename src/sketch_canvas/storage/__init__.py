"""Session storage backends for sketch-canvas."""

from __future__ import annotations

from sketch_canvas.storage.base import SessionStorageProtocol
from sketch_canvas.storage.memory import InMemorySessionStorage

__all__ = ["InMemorySessionStorage", "SessionStorageProtocol"]
