from __future__ import annotations

import logging
import os
import sys

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(level: str | int | None = None, handler: logging.Handler | None = None) -> None:
    """Route ``transit`` log records to one handler. Front-ends call this once.

    Without ``handler`` records go to stderr. Full-screen front-ends pass their
    own handler so log lines never draw over the terminal UI; it replaces any
    handler installed earlier.
    """
    if level is None:
        level = os.environ.get("TRANSIT_LOG_LEVEL", "WARNING")
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.WARNING

    root = logging.getLogger("transit")
    root.setLevel(level)
    installed = [h for h in root.handlers if getattr(h, "_transit", False)]
    if handler is None:
        if installed:
            return
        handler = logging.StreamHandler(sys.stderr)
    for old in installed:
        root.removeHandler(old)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    handler._transit = True  # type: ignore[attr-defined]
    root.addHandler(handler)
