"""Reminder service: settings, notification history, and the reminder runs.

``process_due_reminders`` is what the scheduled trigger calls for each user;
``send_manual_reminder`` is the same flow for one hand-picked professor.
Each professor is committed on its own so one failed write does not undo
the rest of the batch.
"""

import logging
from dataclasses import dataclass
from datetime import UTC, date, datetime
from uuid import UUID

from sqlalchemy import inspect
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ..auth.service import get_active_users
from ..config import settings as app_config
from ..professors.models import Professor, ProfessorStatus
from ..professors.service import get_professor_by_id
from .channels import DispatchOutcome, enabled_channels
from .models import (
    DEFAULT_FOLLOWUP_TEMPLATE,
    DEFAULT_REMINDER_DAYS,
    DEFAULT_STATUS_UPDATE_TEMPLATE,
    NotificationHistory,
    ReminderSettings,
)
from .policy import REMINDER_STATUSES, StatusTransition, apply_status_transition, select_due_professors

logger = logging.getLogger(__name__)

NO_SETTINGS_ERROR = "No notification settings found"

SETTINGS_FIELDS = (
    "email_notifications",
    "sms_notifications",
    "phone_number",
    "reminder_days",
    "followup_message_template",
    "status_update_template",
)


@dataclass
class ReminderRun:
    success: bool
    notifications_sent: int = 0
    total_professors: int = 0
    error: str | None = None

    def as_dict(self) -> dict:
        """Wire shape used by the trigger endpoints."""
        result: dict = {"success": self.success}
        if self.success or self.total_professors:
            result["notificationsSent"] = self.notifications_sent
            result["totalProfessors"] = self.total_professors
        if self.error:
            result["error"] = self.error
        return result


# ── Settings ──────────────────────────────────────────────────────────


def get_reminder_settings(db: Session, user_id: UUID) -> ReminderSettings | None:
    return db.query(ReminderSettings).filter(ReminderSettings.user_id == user_id).first()


def load_reminder_settings(db: Session, user_id: UUID) -> ReminderSettings | None:
    """Settings for the reminder runs. None when missing or when the store fails."""
    try:
        return get_reminder_settings(db, user_id)
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Could not load notification settings for user %s", user_id)
        return None


def get_or_create_settings(db: Session, user_id: UUID) -> ReminderSettings:
    s = get_reminder_settings(db, user_id)
    if not s:
        s = ReminderSettings(
            user_id=user_id,
            email_notifications=True,
            sms_notifications=False,
            phone_number="",
            reminder_days=app_config.default_reminder_days or DEFAULT_REMINDER_DAYS,
            followup_message_template=DEFAULT_FOLLOWUP_TEMPLATE,
            status_update_template=DEFAULT_STATUS_UPDATE_TEMPLATE,
        )
        db.add(s)
        db.flush()
        logger.info("Created default notification settings for user %s", user_id)
    return s


def update_settings(db: Session, user_id: UUID, **fields) -> ReminderSettings:
    s = get_or_create_settings(db, user_id)
    for key, value in fields.items():
        if key in SETTINGS_FIELDS and value is not None:
            setattr(s, key, value)
    db.flush()
    return s


def settings_to_dict(s: ReminderSettings) -> dict:
    return {
        "email_notifications": bool(s.email_notifications),
        "sms_notifications": bool(s.sms_notifications),
        "phone_number": s.phone_number or "",
        "reminder_days": s.reminder_days or DEFAULT_REMINDER_DAYS,
        "followup_message_template": s.followup_message_template or DEFAULT_FOLLOWUP_TEMPLATE,
        "status_update_template": s.status_update_template or DEFAULT_STATUS_UPDATE_TEMPLATE,
    }


# ── Message templates ─────────────────────────────────────────────────


def render_template(template: str | None, professor: Professor, default: str = DEFAULT_FOLLOWUP_TEMPLATE) -> str:
    """Literal placeholder substitution, no template engine."""
    text = template or default
    return (
        text.replace("{name}", professor.name or "")
        .replace("{university}", professor.university_name or "university")
        .replace("{status}", professor.status or "pending")
    )


# ── Notification history ──────────────────────────────────────────────


def _insert_history(db: Session, **fields) -> None:
    db.add(NotificationHistory(**fields))
    db.commit()


def _history_table_exists(db: Session) -> bool:
    try:
        return inspect(db.get_bind()).has_table(NotificationHistory.__tablename__)
    except SQLAlchemyError:
        logger.exception("Could not inspect database for %s", NotificationHistory.__tablename__)
        return True


def _create_history_table(db: Session) -> bool:
    try:
        NotificationHistory.__table__.create(bind=db.get_bind(), checkfirst=True)
    except SQLAlchemyError:
        logger.exception("Could not create %s table", NotificationHistory.__tablename__)
        return False
    logger.warning("Created missing %s table", NotificationHistory.__tablename__)
    return True


def record_notification(
    db: Session,
    user_id: UUID,
    professor_id: UUID,
    notification_type: str,
    message: str,
    status: str,
    error_message: str | None = None,
) -> bool:
    """Append one history row and commit it.

    A missing history table is created once and the insert retried once.
    Returns False when the row could not be written.
    """
    fields = {
        "user_id": user_id,
        "professor_id": professor_id,
        "notification_type": notification_type,
        "message": message,
        "status": status,
        "error_message": error_message,
        "sent_at": datetime.now(UTC),
    }
    try:
        _insert_history(db, **fields)
        return True
    except SQLAlchemyError:
        db.rollback()
        if _history_table_exists(db):
            logger.exception("Error recording %s notification for professor %s", notification_type, professor_id)
            return False

    if not _create_history_table(db):
        return False
    try:
        _insert_history(db, **fields)
        return True
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Retry of %s notification record failed for professor %s", notification_type, professor_id)
        return False


def get_notification_history(
    db: Session,
    user_id: UUID,
    professor_id: UUID | None = None,
    limit: int = 100,
) -> list[NotificationHistory]:
    query = db.query(NotificationHistory).filter(NotificationHistory.user_id == user_id)
    if professor_id is not None:
        query = query.filter(NotificationHistory.professor_id == professor_id)
    return query.order_by(NotificationHistory.sent_at.desc()).limit(limit).all()


# ── Reminder runs ─────────────────────────────────────────────────────


def _remind_professor(
    db: Session,
    user_id: UUID,
    professor: Professor,
    settings: ReminderSettings,
    now: datetime,
) -> list[DispatchOutcome] | None:
    """Dispatch, move to Follow Up, stamp, record history.

    Returns the dispatch outcomes, or None when the professor could not be updated.
    """
    professor_id = professor.id
    message = render_template(settings.followup_message_template, professor)
    outcomes = [channel.send(professor, message) for channel in enabled_channels(settings)]

    try:
        apply_status_transition(db, professor, ProfessorStatus.FOLLOW_UP, now, settings)
        professor.last_notification_sent_at = now
        db.commit()
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception("Error updating professor %s after reminder", professor_id)
        for outcome in outcomes:
            record_notification(db, user_id, professor_id, outcome.channel, message, "failed", str(exc))
        return None

    for outcome in outcomes:
        record_notification(
            db, user_id, professor_id, outcome.channel, message, outcome.history_status, outcome.error
        )
    return outcomes


def process_due_reminders(db: Session, user_id: UUID, now: datetime | None = None) -> ReminderRun:
    """Remind every due professor of one user. Per-professor failures don't stop the batch."""
    now = now or datetime.now(UTC)
    settings = load_reminder_settings(db, user_id)

    try:
        professors = select_due_professors(db, user_id, now, settings)
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception("Error selecting professors due for follow-up")
        return ReminderRun(success=False, error=str(exc))

    logger.info("Found %d professors needing follow-up reminders for user %s", len(professors), user_id)
    if not professors:
        return ReminderRun(success=True)

    if settings is None:
        logger.error("%s for user %s", NO_SETTINGS_ERROR, user_id)
        return ReminderRun(success=False, error=NO_SETTINGS_ERROR)

    sent = 0
    for professor in professors:
        professor_id = professor.id
        try:
            outcomes = _remind_professor(db, user_id, professor, settings, now)
        except Exception:
            db.rollback()
            logger.exception("Error processing reminder for professor %s", professor_id)
            continue
        if outcomes and any(o.success for o in outcomes):
            sent += 1

    return ReminderRun(success=True, notifications_sent=sent, total_professors=len(professors))


def process_due_reminders_for_all_users(db: Session, now: datetime | None = None) -> ReminderRun:
    """Scheduled entry point: one run per active user, merged into one result."""
    now = now or datetime.now(UTC)
    user_ids = [u.id for u in get_active_users(db)]

    runs = [process_due_reminders(db, user_id, now) for user_id in user_ids]
    errors = list(dict.fromkeys(r.error for r in runs if r.error))
    return ReminderRun(
        success=all(r.success for r in runs),
        notifications_sent=sum(r.notifications_sent for r in runs),
        total_professors=sum(r.total_professors for r in runs),
        error="; ".join(errors) or None,
    )


def send_manual_reminder(
    db: Session,
    user_id: UUID,
    professor_id: str | UUID,
    now: datetime | None = None,
) -> bool:
    """Remind one professor regardless of whether they are due."""
    now = now or datetime.now(UTC)
    professor = get_professor_by_id(db, user_id, professor_id)
    if not professor:
        logger.warning("Manual reminder: professor %s not found", professor_id)
        return False

    settings = load_reminder_settings(db, user_id)
    if settings is None:
        logger.error("Manual reminder: %s for user %s", NO_SETTINGS_ERROR, user_id)
        return False

    return _remind_professor(db, user_id, professor, settings, now) is not None


# ── Manual status edits ───────────────────────────────────────────────


def update_status_details(
    db: Session,
    professor: Professor,
    status: str,
    now: datetime | date,
    settings: ReminderSettings | None = None,
    reminder_date: date | None = None,
    notes: str | None = None,
) -> StatusTransition:
    """Status change with an optional hand-picked reminder date.

    The date is only honoured for statuses that carry a reminder; closed and
    unknown statuses always follow the policy table.
    """
    if reminder_date is None or status not in REMINDER_STATUSES:
        return apply_status_transition(db, professor, status, now, settings, notes=notes)

    professor.status = status
    professor.reminder_date = reminder_date
    professor.notification_enabled = True
    if notes:
        professor.notes = notes
    db.flush()
    return StatusTransition(status=status, reminder_date=reminder_date, notification_enabled=True)


def reset_reminder(db: Session, professor: Professor) -> None:
    """Make the professor eligible for the automatic reminder again."""
    professor.last_notification_sent_at = None
    db.flush()
