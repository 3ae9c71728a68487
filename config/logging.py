# Path: config/logging.py
# Purpose: Configure process-wide logging for scripts and the HTTP API.
# Layer: config.
# Details: Installs a single timestamped stream handler on the root logger.

from __future__ import annotations

import logging

LOG_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"


def configure_logging(level: str | int = "INFO") -> None:
    """Attach one stream handler to the root logger, replacing any earlier one installed here."""

    root = logging.getLogger()
    for handler in list(root.handlers):
        if getattr(handler, "_photoquery", False):
            root.removeHandler(handler)

    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    handler._photoquery = True  # type: ignore[attr-defined]
    root.addHandler(handler)
    root.setLevel(level.upper() if isinstance(level, str) else level)
