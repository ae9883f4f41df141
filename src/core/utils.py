"""
Small shared utilities.
"""
from __future__ import annotations

import time
from contextlib import contextmanager
from typing import Generator


@contextmanager
def timer() -> Generator[dict, None, None]:
    """Record elapsed wall-clock milliseconds under ``result["elapsed_ms"]``."""
    result: dict = {"elapsed_ms": 0}
    start = time.perf_counter()
    try:
        yield result
    finally:
        result["elapsed_ms"] = int((time.perf_counter() - start) * 1000)


def normalise_text(text: str | None) -> str:
    """Trim *text*, treating ``None`` as empty."""
    if text is None:
        return ""
    return str(text).strip()
