from __future__ import annotations

import os

import uvicorn

from backend.app.main import app


def run() -> None:
    """Serve the Mindbloom API; ``PORT`` and ``HOST`` come from the environment."""

    host = os.getenv("HOST", "0.0.0.0")
    port = int(os.getenv("PORT", 8000))
    uvicorn.run(app, host=host, port=port)


if __name__ == "__main__":
    run()
