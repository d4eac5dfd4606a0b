"""Editor modes.

A mode is one of ``NormalMode``, ``MoveMode`` or ``AddMode(kind)``. The
``normal`` / ``move`` / ``add-<kind>`` labels exist only for the UI boundary.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar

from sketch_canvas.core.types import ShapeKind
from sketch_canvas.exceptions import InvalidModeError

ADD_PREFIX = "add-"


@dataclass(frozen=True)
class NormalMode:
    """Select and drag existing shapes."""

    label: ClassVar[str] = "normal"


@dataclass(frozen=True)
class MoveMode:
    """Pan the canvas with the primary button."""

    label: ClassVar[str] = "move"


@dataclass(frozen=True)
class AddMode:
    """Place a new shape of ``kind``."""

    kind: ShapeKind

    @property
    def label(self) -> str:
        return f"{ADD_PREFIX}{self.kind.value}"


Mode = NormalMode | MoveMode | AddMode

NORMAL = NormalMode()
MOVE = MoveMode()


def parse_mode(label: str) -> Mode:
    """Turn a UI label such as ``add-ellipse`` into a mode.

    ``clear-shapes`` is rejected: clearing is an action, not a mode.

    Raises:
        InvalidModeError: If the label names no mode.
    """
    if label == NormalMode.label:
        return NORMAL
    if label == MoveMode.label:
        return MOVE
    if label.startswith(ADD_PREFIX):
        try:
            return AddMode(ShapeKind(label.removeprefix(ADD_PREFIX)))
        except ValueError:
            pass
    raise InvalidModeError(label)
