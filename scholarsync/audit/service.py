"""Audit log service."""

import contextlib
from uuid import UUID

from fastapi import Request
from sqlalchemy.orm import Session

from .models import AuditLog


def _get_ip(request: Request) -> str:
    forwarded = request.headers.get("X-Forwarded-For")
    if forwarded:
        return forwarded.split(",")[0].strip()
    return request.client.host if request.client else ""


def _session_user_id(request: Request) -> UUID | None:
    uid = request.session.get("user_id")
    if not uid:
        return None
    with contextlib.suppress(ValueError, AttributeError):
        return UUID(uid)
    return None


def audit(db: Session, request: Request, action: str, detail: str = "", user_id=None) -> None:
    """Write an audit log entry. Flushed with the caller's commit."""
    if user_id is None:
        user_id = _session_user_id(request)

    db.add(
        AuditLog(
            user_id=user_id,
            action=action,
            detail=detail[:2000],
            ip_address=_get_ip(request),
        )
    )


def get_recent_audit_logs(db: Session, user_id: UUID, limit: int = 50) -> list[AuditLog]:
    return (
        db.query(AuditLog)
        .filter(AuditLog.user_id == user_id)
        .order_by(AuditLog.created_at.desc())
        .limit(limit)
        .all()
    )
