"""Shared FastAPI dependencies for API routes."""

from __future__ import annotations

import logging
import secrets

from fastapi import Cookie, Depends, Header, HTTPException, status
from sqlalchemy.orm import Session

from studentstay.config import get_settings
from studentstay.db.session import get_db  # re-export
from studentstay.models.user import User
from studentstay.services.auth import get_user_from_token

__all__ = [
    "AUTH_COOKIE",
    "get_db",
    "get_current_user",
    "require_auth",
    "require_admin_key",
]

logger = logging.getLogger(__name__)

# Cookie name for browser sessions
AUTH_COOKIE = "access_token"


def get_current_user(
    db: Session = Depends(get_db),
    authorization: str | None = Header(None),
    access_token: str | None = Cookie(None),
) -> User | None:
    """Return the authenticated user or None.

    Checks (in order):
    1. Authorization: Bearer <token> header
    2. access_token cookie
    """
    token: str | None = None

    if authorization and authorization.startswith("Bearer "):
        token = authorization[len("Bearer ") :]

    if token is None and access_token:
        token = access_token

    if token is None:
        return None

    return get_user_from_token(db, token)


def require_auth(user: User | None = Depends(get_current_user)) -> User:
    """Dependency that requires an authenticated user (401 otherwise)."""
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
        )
    return user


def require_admin_key(x_admin_key: str | None = Header(None)) -> None:
    """Validate the X-Admin-Key header against ADMIN_SECRET_KEY.

    Constant-time comparison. An unset ADMIN_SECRET_KEY rejects every request.
    """
    expected = get_settings().admin_secret_key
    if not expected or not x_admin_key or not secrets.compare_digest(x_admin_key, expected):
        logger.warning("Admin endpoint auth failed: invalid or missing admin key")
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Invalid admin key")
