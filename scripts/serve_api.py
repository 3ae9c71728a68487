# Path: scripts/serve_api.py
# Purpose: Launch the HTTP API with uvicorn.
# Layer: scripts.
# Details: Settings come from the environment; see config/settings.py::AppSettings.from_env.

from __future__ import annotations

import sys
from pathlib import Path

# Ensure project root is on sys.path when running as a script.
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

import uvicorn

from api import create_app
from config import AppSettings


def main() -> None:
    settings = AppSettings.from_env()
    app = create_app(settings=settings)
    uvicorn.run(app, host=settings.host, port=settings.port)


if __name__ == "__main__":
    main()
