"""Style definitions for sketched shapes."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class SketchStyle:
    """Styling handed to the sketch renderer with every primitive.

    One style record is fixed for a whole canvas session.

    Attributes:
        stroke_width: Width of the stroke in canvas units.
        roughness: How far the hand-drawn stroke strays from the true path.
        bowing: How much straight segments bow.
        stroke_color: The stroke color in hex format.
        seed: Optional random seed so the sketch renderer is repeatable.
    """

    stroke_width: float = 2.0
    roughness: float = 1.0
    bowing: float = 1.0
    stroke_color: str = "#000000"
    seed: int | None = None


BOLD = SketchStyle(stroke_width=4, roughness=2)
FINE = SketchStyle(stroke_width=2, bowing=1.5, roughness=1)

PRESETS: dict[str, SketchStyle] = {
    "bold": BOLD,
    "fine": FINE,
}
