"""
Shared-secret API-key check.

Every copilot endpoint depends on ``require_api_key``; the core functions
assume the request was already authenticated.
"""
from __future__ import annotations

import hmac

from fastapi import HTTPException, Security
from fastapi.security import APIKeyHeader

from src.core.config import get_settings
from src.core.logging import get_logger

logger = get_logger(__name__)

API_KEY_HEADER = "x-api-key"
UNAUTHORIZED_DETAIL = "Unauthorized. Invalid API Key."

_api_key_header = APIKeyHeader(name=API_KEY_HEADER, auto_error=False)


def is_authenticated(sent: str | None, expected: str | None = None) -> bool:
    """Constant-time comparison of the sent key with the configured one."""
    if expected is None:
        expected = get_settings().api_key
    if not sent or not expected:
        return False
    return hmac.compare_digest(sent.encode(), expected.encode())


def require_api_key(api_key: str | None = Security(_api_key_header)) -> str:
    if not is_authenticated(api_key):
        logger.warning("Rejected request with missing/invalid API key")
        raise HTTPException(status_code=401, detail=UNAUTHORIZED_DETAIL)
    return api_key
