"""Shared FastAPI dependencies."""

import secrets
from uuid import UUID

from fastapi import Depends, Request
from sqlalchemy.orm import Session

from .auth.models import User
from .config import settings
from .database.base import get_db


class AuthRequired(Exception):
    """Raised when the user is not authenticated. Handled in main.py as a JSON 401."""

    pass


def get_current_user(request: Request, db: Session = Depends(get_db)) -> User:
    """Get the authenticated user from the session cookie."""
    user_id_str = request.session.get("user_id")
    if not user_id_str:
        raise AuthRequired()
    try:
        user_id = UUID(user_id_str)
    except (ValueError, AttributeError):
        request.session.clear()
        raise AuthRequired()
    user = db.query(User).filter(User.id == user_id).first()
    if not user or not user.is_active:
        request.session.clear()
        raise AuthRequired()
    return user


def bearer_matches_cron_secret(request: Request) -> bool:
    """Constant-time comparison of `Authorization: Bearer <secret>` with CRON_SECRET."""
    if not settings.cron_secret:
        return False
    header = request.headers.get("authorization", "")
    return secrets.compare_digest(header.encode(), f"Bearer {settings.cron_secret}".encode())
