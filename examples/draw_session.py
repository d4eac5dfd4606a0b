"""Drive a sketch session directly, without the web layer.

Draws a rectangle, a circle (shift held) and an arrow, moves the rectangle,
then writes the result to ``sketch.svg``.

Running:
    python examples/draw_session.py
"""

from __future__ import annotations

from pathlib import Path

from sketch_canvas import ExportService, PointerEvent, SketchSession


def main() -> None:
    session = SketchSession()

    session.set_mode("add-rectangle")
    session.pointer_down(PointerEvent(50, 50))
    session.pointer_up(PointerEvent(250, 150))

    session.set_mode("add-ellipse")
    session.pointer_down(PointerEvent(400, 100))
    session.pointer_up(PointerEvent(480, 160, shift=True))

    session.set_mode("add-arrow")
    session.pointer_down(PointerEvent(260, 100))
    session.pointer_up(PointerEvent(390, 120))

    # Drag the rectangle down by 100 units.
    session.pointer_down(PointerEvent(100, 100))
    session.pointer_up(PointerEvent(100, 200))

    svg = ExportService(session.settings).to_svg(session.surface())
    Path("sketch.svg").write_text(svg)
    print(f"Wrote {len(session.store)} shapes to sketch.svg")


if __name__ == "__main__":
    main()
