"""Authentication service: password hashing, user lookup, admin bootstrap."""

import logging

import bcrypt
from sqlalchemy.orm import Session

from ..config import settings
from .models import User

logger = logging.getLogger(__name__)


def hash_password(password: str) -> str:
    return bcrypt.hashpw(password.encode(), bcrypt.gensalt()).decode()


def verify_password(plain: str, hashed: str) -> bool:
    try:
        return bcrypt.checkpw(plain.encode(), hashed.encode())
    except ValueError:
        # Malformed hash stored in the row
        return False


def get_user_by_email(db: Session, email: str) -> User | None:
    return db.query(User).filter(User.email == email.strip().lower()).first()


def authenticate_user(db: Session, email: str, password: str) -> User | None:
    """Verify credentials and return the user, or None if invalid or disabled."""
    user = get_user_by_email(db, email)
    if not user or not user.is_active or not verify_password(password, user.password_hash):
        return None
    return user


def get_active_users(db: Session) -> list[User]:
    """Users whose outreach is scanned by the scheduled reminder run."""
    return db.query(User).filter(User.is_active == True).order_by(User.created_at.asc()).all()  # noqa: E712


def ensure_admin_user(db: Session) -> None:
    """Create the admin user from env vars if it doesn't exist yet."""
    if not settings.admin_email or not settings.admin_password:
        return

    if get_user_by_email(db, settings.admin_email):
        return

    db.add(
        User(
            email=settings.admin_email.strip().lower(),
            password_hash=hash_password(settings.admin_password),
        )
    )
    db.flush()
    logger.info("Admin user created: %s", settings.admin_email)
