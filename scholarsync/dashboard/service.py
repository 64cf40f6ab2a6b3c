"""Dashboard service: outreach totals and reminder counters for one user."""

from datetime import date
from uuid import UUID

from sqlalchemy import func
from sqlalchemy.orm import Session

from ..audit.service import get_recent_audit_logs
from ..professors.service import count_by_status
from ..reminders.models import NotificationHistory
from ..reminders.policy import select_due_professors, select_upcoming_reminders
from ..reminders.service import load_reminder_settings


def get_dashboard(db: Session, user_id: UUID, today: date) -> dict:
    """Summary numbers for the dashboard.

    ``due_for_followup`` uses the same predicate as the scheduled run, so it
    is the number of professors the next run would remind.
    """
    by_status = count_by_status(db, user_id)
    user_settings = load_reminder_settings(db, user_id)
    sent = (
        db.query(func.count(NotificationHistory.id))
        .filter(NotificationHistory.user_id == user_id, NotificationHistory.status == "sent")
        .scalar()
    )
    return {
        "total": sum(by_status.values()),
        "by_status": by_status,
        "due_for_followup": len(select_due_professors(db, user_id, today, user_settings)),
        "upcoming_reminders": len(select_upcoming_reminders(db, user_id, today)),
        "notifications_sent": sent or 0,
    }


def get_activity(db: Session, user_id: UUID, limit: int = 50) -> list[dict]:
    return [
        {
            "action": entry.action,
            "detail": entry.detail or "",
            "ip_address": entry.ip_address or "",
            "created_at": entry.created_at.isoformat() if entry.created_at else None,
        }
        for entry in get_recent_audit_logs(db, user_id, limit)
    ]
