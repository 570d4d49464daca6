"""Logging for the geocoin server and the headless walker.

Spawns, restores and corrupt-save warnings go to stdout on one handler.
Per-move viewport syncs log at DEBUG, so ``--log-level DEBUG`` traces every
cache hidden or revealed while the default INFO shows only new caches.
"""

from __future__ import annotations

import logging
import sys

# Loggers that flood INFO while the map polls the game state
_CHATTY = ("uvicorn.access",)


def setup_logging(level: str = "INFO") -> None:
    numeric_level = getattr(logging, level.upper(), logging.INFO)

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(numeric_level)
    handler.setFormatter(logging.Formatter(
        fmt="%(asctime)s [%(levelname)-5s] %(name)-28s | %(message)s",
        datefmt="%H:%M:%S",
    ))

    root = logging.getLogger()
    root.setLevel(numeric_level)
    root.handlers.clear()
    root.addHandler(handler)

    for name in _CHATTY:
        logging.getLogger(name).setLevel(max(numeric_level, logging.WARNING))
