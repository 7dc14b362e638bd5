"""Optional shared-secret guard for the /habits routes."""

from __future__ import annotations

import logging
import secrets

from fastapi import Header, HTTPException

from habitkernel.config import settings

logger = logging.getLogger(__name__)

BEARER_PREFIX = "bearer "


def _bearer_token(authorization: str | None) -> str | None:
    """Token from `Authorization: Bearer <token>`; None for any other shape."""
    if not authorization or not authorization.lower().startswith(BEARER_PREFIX):
        return None
    token = authorization[len(BEARER_PREFIX):].strip()
    return token or None


async def verify_api_key(
    x_api_key: str | None = Header(default=None, alias="X-API-Key"),
    authorization: str | None = Header(default=None),
) -> str:
    """Require HABIT_API_KEY when it is configured; open access otherwise."""
    expected = settings.habit_api_key
    if expected is None:
        return ""

    supplied = x_api_key if x_api_key is not None else _bearer_token(authorization)
    if supplied is None:
        raise HTTPException(status_code=401, detail="Missing API key")
    if not secrets.compare_digest(supplied.encode(), expected.encode()):
        logger.warning("Rejected request with a wrong API key")
        raise HTTPException(status_code=401, detail="Invalid API key")
    return supplied
