"""
Deterministic grammar check for hand-written query strings.

Accepts the minimal statement shape

    <VERB> <projection> FROM <identifier> [WHERE <predicate>]

where VERB is one of SELECT, UPDATE, DELETE, INSERT.  The check is purely
structural: it does not look at field names, operators, or values.
"""
from __future__ import annotations

import re

VERBS = ("SELECT", "UPDATE", "DELETE", "INSERT")

# ── Compiled patterns ────────────────────────────────────

# Matched against whitespace-collapsed text, so every separator is exactly
# one space and the match runs in linear time.
_STATEMENT_RE = re.compile(
    r"(?:" + "|".join(VERBS) + r") .+? FROM [A-Za-z0-9_]+(?: WHERE .+)?",
    re.IGNORECASE | re.ASCII,
)


def _collapse_whitespace(text: str) -> str:
    return " ".join(text.split())


def validate_query(text: str) -> bool:
    """Return True when *text* (trimmed) matches the statement shape."""
    if not isinstance(text, str):
        return False
    collapsed = _collapse_whitespace(text)
    if not collapsed:
        return False
    return _STATEMENT_RE.fullmatch(collapsed) is not None
