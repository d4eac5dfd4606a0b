"""Minimal example serving sketch-canvas sessions with Litestar.

The application will:
    - Keep sessions in InMemorySessionStorage
    - Mount REST API endpoints at /api and the input stream at /ws
    - Render shapes with the fine style preset

Running the Application:
    python examples/app.py

Example API Usage:
    # Create a session
    curl -X POST http://127.0.0.1:8000/api/sessions

    # Switch to rectangle drawing
    curl -X PUT http://127.0.0.1:8000/api/sessions/{session_id}/mode \\
        -H "Content-Type: application/json" -d '{"mode": "add-rectangle"}'

    # Drag out a rectangle
    curl -X POST http://127.0.0.1:8000/api/sessions/{session_id}/events \\
        -H "Content-Type: application/json" -d '{"type": "pointer_down", "x": 10, "y": 10}'
    curl -X POST http://127.0.0.1:8000/api/sessions/{session_id}/events \\
        -H "Content-Type: application/json" -d '{"type": "pointer_up", "x": 210, "y": 110}'

    # Export the canvas
    curl http://127.0.0.1:8000/api/sessions/{session_id}/svg
"""

from __future__ import annotations

from sketch_canvas import SessionSettings, SketchConfig
from sketch_canvas.app import create_app
from sketch_canvas.core.style import FINE

app = create_app(
    SketchConfig(
        # Sessions live in memory (default)
        storage=None,
        settings=SessionSettings(style=FINE),
        api_path="/api",
        ws_path="/ws",
    ),
    debug=True,
)

if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        app,
        host="127.0.0.1",
        port=8000,
        log_level="info",
    )
