"""
Exceptions raised by the copilot entry points.

All of them are local and recoverable: the API layer turns them into
400 responses.
"""
from __future__ import annotations


class CopilotError(ValueError):
    """Base class for request-level copilot errors."""


class EmptyQueryError(CopilotError):
    """The query text was missing or blank."""

    def __init__(self, message: str = "Query is required."):
        super().__init__(message)


class InvalidQueryError(CopilotError):
    """The query string failed the grammar check."""

    def __init__(self, message: str = "Invalid SQL query. Cannot explain."):
        super().__init__(message)
