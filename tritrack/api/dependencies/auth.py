"""Request identity.

Sign-in lives with the hosted backend's auth module; by the time a request
reaches this service the caller's user ID is known and sent as the
``X-User-Id`` header. ``DEV_USER_ID`` stands in for it during local
development.
"""

from __future__ import annotations

from fastapi import Header, HTTPException, status
from loguru import logger

from tritrack.config.settings import settings


def get_current_user_id(x_user_id: str | None = Header(default=None)) -> str:
    """FastAPI dependency returning the authenticated user's ID.

    Raises:
        HTTPException: 401 if no user identity is available
    """
    if x_user_id and x_user_id.strip():
        return x_user_id.strip()
    if settings.dev_user_id:
        logger.debug(f"No X-User-Id header, using DEV_USER_ID={settings.dev_user_id}")
        return settings.dev_user_id
    logger.warning("Request without user identity rejected")
    raise HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Missing user identity",
    )
