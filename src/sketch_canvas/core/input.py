"""Input message types and parsing shared by the HTTP and WebSocket layers."""

from __future__ import annotations

import math
from enum import StrEnum
from typing import TYPE_CHECKING, Any

from sketch_canvas.core.events import CanvasTarget, HandleTarget, PointerEvent, ShapeTarget
from sketch_canvas.core.types import Corner, PointerButton
from sketch_canvas.exceptions import InvalidEventError

if TYPE_CHECKING:
    from collections.abc import Mapping

    from sketch_canvas.core.events import PointerTarget


class InputType(StrEnum):
    """Client -> server input messages."""

    POINTER_DOWN = "pointer_down"
    POINTER_MOVE = "pointer_move"
    POINTER_UP = "pointer_up"
    POINTER_CANCEL = "pointer_cancel"
    WHEEL = "wheel"
    SET_MODE = "set_mode"
    SELECT = "select"
    DESELECT = "deselect"
    CLEAR = "clear"
    GET_SURFACE = "get_surface"


POINTER_INPUTS = frozenset({InputType.POINTER_DOWN, InputType.POINTER_MOVE, InputType.POINTER_UP})


def parse_input_type(value: Any) -> InputType:
    """Validate the ``type`` field of a client message.

    Raises:
        InvalidEventError: If the type is missing or unknown.
    """
    if not value:
        raise InvalidEventError("Message type is required")
    try:
        return InputType(value)
    except ValueError:
        raise InvalidEventError(f"Unknown message type: {value}") from None


def finite_number(data: Mapping[str, Any], key: str) -> float:
    """Read a finite number from a client payload.

    Raises:
        InvalidEventError: If the field is missing, not numeric, NaN or infinite.
    """
    value = data.get(key)
    if isinstance(value, bool):
        raise InvalidEventError(f"Field {key!r} must be a number")
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise InvalidEventError(f"Field {key!r} must be a number") from None
    if not math.isfinite(number):
        raise InvalidEventError(f"Field {key!r} must be finite")
    return number


def pointer_event_from_dict(data: Mapping[str, Any]) -> PointerEvent:
    """Build a pointer event from a client payload.

    Expected keys: ``x`` and ``y`` (required), ``button``, ``shift`` and
    ``target``. ``target`` is either absent, ``{"kind": "canvas"}``,
    ``{"kind": "shape", "index": 2}`` or ``{"kind": "handle", "corner": "br"}``.

    Raises:
        InvalidEventError: If coordinates, button, shift or target are malformed.
    """
    x = finite_number(data, "x")
    y = finite_number(data, "y")
    try:
        button = int(data.get("button", PointerButton.PRIMARY))
    except (TypeError, ValueError):
        raise InvalidEventError("Field 'button' must be an integer") from None
    shift = data.get("shift", False)
    if not isinstance(shift, bool):
        raise InvalidEventError("Field 'shift' must be true or false")
    return PointerEvent(
        x=x,
        y=y,
        button=button,
        shift=shift,
        target=_target_from_dict(data.get("target")),
    )


def _target_from_dict(data: Mapping[str, Any] | None) -> PointerTarget | None:
    if data is None:
        return None
    kind = data.get("kind") if isinstance(data, dict) else None
    try:
        if kind == "canvas":
            return CanvasTarget()
        if kind == "shape":
            return ShapeTarget(int(data["index"]))
        if kind == "handle":
            return HandleTarget(Corner(data["corner"]))
    except (KeyError, TypeError, ValueError):
        pass
    raise InvalidEventError(f"Invalid pointer target: {data!r}")
