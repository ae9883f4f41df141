"""
Structured logging for the sales copilot.

Every module logs through a child of the ``copilot`` logger so one stdout
handler serves the whole process.
"""
from __future__ import annotations

import logging
import sys

from src.core.config import get_settings

_ROOT_LOGGER = "copilot"
_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def _root_logger() -> logging.Logger:
    root = logging.getLogger(_ROOT_LOGGER)
    if not root.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(_FORMAT, datefmt=_DATE_FORMAT))
        root.addHandler(handler)
        root.propagate = False
    level = get_settings().log_level.upper()
    root.setLevel(getattr(logging, level, logging.INFO))
    return root


def get_logger(name: str) -> logging.Logger:
    """Return a logger named ``copilot.<name>`` sharing the root handler."""
    root = _root_logger()
    short = name[len("src."):] if name.startswith("src.") else name
    return root.getChild(short)
