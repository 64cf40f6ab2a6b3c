"""Reminder routes.

``trigger_router`` holds the bearer-token endpoints hit by the external
scheduler; ``router`` holds the session-authenticated JSON API.
"""

import logging
from datetime import UTC, datetime

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from ..audit.service import audit
from ..auth.models import User
from ..config import settings
from ..database.base import get_db
from ..dependencies import bearer_matches_cron_secret, get_current_user
from ..professors.service import _to_uuid, days_since_email, professor_to_dict
from ..rate_limit import limiter
from .policy import select_due_professors, select_upcoming_reminders
from .schemas import ReminderSettingsUpdate
from .service import (
    get_notification_history,
    get_or_create_settings,
    load_reminder_settings,
    process_due_reminders_for_all_users,
    settings_to_dict,
    update_settings,
)

logger = logging.getLogger(__name__)

trigger_router = APIRouter(prefix="/api", tags=["reminder-triggers"])
router = APIRouter(tags=["reminders"])


def _timestamp() -> str:
    return datetime.now(UTC).isoformat()


@trigger_router.get("/cron/reminders")
@limiter.limit(settings.rate_limit_trigger)
def cron_reminders(request: Request, db: Session = Depends(get_db)):
    """Scheduled follow-up run. Open when CRON_SECRET is unset."""
    if settings.cron_secret and not bearer_matches_cron_secret(request):
        logger.error("Unauthorized cron job access attempt")
        return JSONResponse({"error": "Unauthorized"}, status_code=401)

    try:
        logger.info("Running professor follow-up reminders cron job")
        result = process_due_reminders_for_all_users(db)
        logger.info("Reminder processing complete: %s", result)
    except Exception as exc:
        db.rollback()
        logger.exception("Error processing reminders")
        return JSONResponse(
            {"success": False, "timestamp": _timestamp(), "error": str(exc) or "Error processing reminders"},
            status_code=500,
        )
    return JSONResponse({"timestamp": _timestamp(), **result.as_dict()})


@trigger_router.get("/test-reminders")
@limiter.limit(settings.rate_limit_trigger)
def test_reminders(request: Request, db: Session = Depends(get_db)):
    """On-demand run of the same job. Always requires CRON_SECRET."""
    if not bearer_matches_cron_secret(request):
        return JSONResponse(
            {
                "error": "Unauthorized. Please provide valid authorization header.",
                "hint": "Use: Authorization: Bearer YOUR_CRON_SECRET",
            },
            status_code=401,
        )

    try:
        logger.info("Manually triggering follow-up reminders")
        result = process_due_reminders_for_all_users(db)
    except Exception as exc:
        db.rollback()
        logger.exception("Error processing manual reminders")
        return JSONResponse(
            {"success": False, "timestamp": _timestamp(), "error": str(exc) or "Error processing reminders"},
            status_code=500,
        )
    return JSONResponse(
        {
            "success": True,
            "message": "Reminders processed successfully",
            "timestamp": _timestamp(),
            **result.as_dict(),
        }
    )


@router.get("/reminders/due")
def due_reminders(db: Session = Depends(get_db), user: User = Depends(get_current_user)):
    now = datetime.now(UTC)
    user_settings = load_reminder_settings(db, user.id)
    professors = select_due_professors(db, user.id, now, user_settings)
    today = now.date()
    return JSONResponse(
        {
            "professors": [
                {**professor_to_dict(p), "days_since_email": days_since_email(p, today)} for p in professors
            ]
        }
    )


@router.get("/reminders/upcoming")
def upcoming_reminders(db: Session = Depends(get_db), user: User = Depends(get_current_user)):
    professors = select_upcoming_reminders(db, user.id, datetime.now(UTC).date())
    return JSONResponse({"professors": [professor_to_dict(p) for p in professors]})


@router.get("/notification-settings")
def read_settings(db: Session = Depends(get_db), user: User = Depends(get_current_user)):
    s = get_or_create_settings(db, user.id)
    db.commit()
    return JSONResponse({"settings": settings_to_dict(s)})


@router.put("/notification-settings")
def write_settings(
    request: Request,
    payload: ReminderSettingsUpdate,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    s = update_settings(db, user.id, **payload.model_dump(exclude_unset=True))
    audit(db, request, "settings_update", f"reminder_days={s.reminder_days}", user_id=user.id)
    db.commit()
    return JSONResponse({"ok": True, "settings": settings_to_dict(s)})


@router.get("/notification-history")
def notification_history(
    professor_id: str | None = None,
    limit: int = 100,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    entries = get_notification_history(db, user.id, _to_uuid(professor_id), min(max(limit, 1), 500))
    return JSONResponse(
        {
            "history": [
                {
                    "id": str(h.id),
                    "professor_id": str(h.professor_id),
                    "notification_type": h.notification_type,
                    "message": h.message,
                    "status": h.status,
                    "error_message": h.error_message,
                    "sent_at": h.sent_at.isoformat() if h.sent_at else None,
                }
                for h in entries
            ]
        }
    )
