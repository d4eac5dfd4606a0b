"""Session settings for sketch-canvas."""

from __future__ import annotations

import os
from dataclasses import dataclass, field

from sketch_canvas.core.style import PRESETS, SketchStyle


def _preset_from_env() -> SketchStyle:
    name = os.getenv("SKETCH_STYLE_PRESET", "bold").lower()
    try:
        return PRESETS[name]
    except KeyError:
        msg = f"SKETCH_STYLE_PRESET must be one of {sorted(PRESETS)}, got {name!r}"
        raise ValueError(msg) from None


def _float_from_env(name: str, default: str) -> float:
    raw = os.getenv(name, default)
    try:
        return float(raw)
    except ValueError:
        msg = f"{name} must be a number, got {raw!r}"
        raise ValueError(msg) from None


@dataclass
class SessionSettings:
    """Settings shared by every canvas session.

    Invalid values, whether passed in or read from the environment, raise
    ValueError when the settings are built.

    Environment variables:
        SKETCH_STYLE_PRESET: ``bold`` (default) or ``fine``
        SKETCH_MIN_ZOOM: Lower zoom bound (default 0.1)
        SKETCH_MAX_ZOOM: Upper zoom bound (default 10)
        SKETCH_HANDLE_RADIUS: Handle hit radius in canvas units (default 5)
        SKETCH_BACKGROUND: Canvas background color
    """

    style: SketchStyle = field(default_factory=_preset_from_env)
    min_zoom: float = field(default_factory=lambda: _float_from_env("SKETCH_MIN_ZOOM", "0.1"))
    max_zoom: float = field(default_factory=lambda: _float_from_env("SKETCH_MAX_ZOOM", "10"))
    handle_radius: float = field(default_factory=lambda: _float_from_env("SKETCH_HANDLE_RADIUS", "5"))
    background_color: str = field(default_factory=lambda: os.getenv("SKETCH_BACKGROUND", "#e4d8b4"))
    canvas_width: int = 10000
    canvas_height: int = 10000
    handle_color: str = "#ff9fa0"

    def __post_init__(self) -> None:
        # NaN fails both comparisons, so it is rejected too.
        if not 0 < self.min_zoom <= self.max_zoom < float("inf"):
            msg = f"Zoom bounds must satisfy 0 < min_zoom <= max_zoom, got {self.min_zoom} and {self.max_zoom}"
            raise ValueError(msg)
        if not 0 <= self.handle_radius < float("inf"):
            msg = f"handle_radius must be a non-negative number, got {self.handle_radius}"
            raise ValueError(msg)
