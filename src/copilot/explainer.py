"""
Template-based explanation of hand-written query strings.

Classifies a grammar-valid query by its leading shape and returns a canned
plain-language description.  There is no semantic understanding of what the
query would do; callers must reject invalid strings before calling.
"""
from __future__ import annotations

import re

from src.core.logging import get_logger

logger = get_logger(__name__)

FALLBACK_EXPLANATION = "This query retrieves data from the database."

# Matched against whitespace-collapsed text. First match wins.
_SHAPE_TEMPLATES: list[tuple[re.Pattern[str], str]] = [
    (
        re.compile(r"^SELECT \* FROM", re.IGNORECASE),
        "This query selects all columns from the specified table.",
    ),
    (
        re.compile(r"^SELECT .+ FROM", re.IGNORECASE),
        "This query selects specific columns from the specified table.",
    ),
    (
        re.compile(r"^INSERT", re.IGNORECASE),
        "This query inserts new records into the specified table.",
    ),
    (
        re.compile(r"^UPDATE", re.IGNORECASE),
        "This query updates existing records in the specified table.",
    ),
    (
        re.compile(r"^DELETE", re.IGNORECASE),
        "This query deletes records from the specified table.",
    ),
]


def explain_query(query: str) -> str:
    """Return the description matching *query*'s shape."""
    collapsed = " ".join(query.split())
    for pattern, template in _SHAPE_TEMPLATES:
        if pattern.search(collapsed):
            return template
    logger.debug("No explanation shape matched; using fallback")
    return FALLBACK_EXPLANATION
