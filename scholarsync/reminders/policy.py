"""Follow-up reminder policy.

Two rules live here:

* which outreach records are *due* for a follow-up nudge: still ``Pending``,
  emailed at least ``reminder_days`` calendar days ago, and never reminded;
* what a status change does to the reminder fields (``reminder_date``,
  ``notification_enabled``, ``reply_date``).

Everything is evaluated against an explicit ``now`` so callers (and tests)
control the clock. Comparisons are by calendar date, not by instant.
"""

from dataclasses import dataclass
from datetime import date, datetime, timedelta
from uuid import UUID

from sqlalchemy.orm import Session

from ..professors.models import Professor, ProfessorStatus
from .models import DEFAULT_REMINDER_DAYS, ReminderSettings

# Days until the next check, per status. Pending uses the user's cadence.
FIXED_REMINDER_OFFSETS: dict[str, int] = {
    ProfessorStatus.FOLLOW_UP: 3,
    ProfessorStatus.SCHEDULED: 1,
    ProfessorStatus.NO_RESPONSE: 14,
}
CLOSED_STATUSES = frozenset({ProfessorStatus.REPLIED, ProfessorStatus.REJECTED})
REMINDER_STATUSES = frozenset({ProfessorStatus.PENDING, *FIXED_REMINDER_OFFSETS})


@dataclass(frozen=True)
class StatusTransition:
    """Field updates implied by moving a professor to ``status``.

    ``touches_reminder`` is False for statuses outside the known set: only the
    status string is written in that case.
    """

    status: str
    reminder_date: date | None = None
    notification_enabled: bool | None = None
    reply_date: date | None = None
    touches_reminder: bool = True


def _as_date(value: datetime | date) -> date:
    return value.date() if isinstance(value, datetime) else value


def reminder_days_for(settings: ReminderSettings | None) -> int:
    """Cadence from settings, falling back to the default when unset or zero."""
    if settings is not None and settings.reminder_days:
        return int(settings.reminder_days)
    return DEFAULT_REMINDER_DAYS


def followup_cutoff(now: datetime | date, reminder_days: int) -> date:
    """Latest email_date that counts as overdue at ``now``."""
    return _as_date(now) - timedelta(days=reminder_days)


def plan_status_transition(new_status: str, now: datetime | date, reminder_days: int) -> StatusTransition:
    today = _as_date(now)

    if new_status == ProfessorStatus.PENDING:
        return StatusTransition(
            status=new_status,
            reminder_date=today + timedelta(days=reminder_days),
            notification_enabled=True,
        )
    if new_status in FIXED_REMINDER_OFFSETS:
        return StatusTransition(
            status=new_status,
            reminder_date=today + timedelta(days=FIXED_REMINDER_OFFSETS[new_status]),
            notification_enabled=True,
        )
    if new_status == ProfessorStatus.REPLIED:
        return StatusTransition(status=new_status, notification_enabled=False, reply_date=today)
    if new_status in CLOSED_STATUSES:
        return StatusTransition(status=new_status, notification_enabled=False)

    return StatusTransition(status=new_status, touches_reminder=False)


def apply_status_transition(
    db: Session,
    professor: Professor,
    new_status: str,
    now: datetime | date,
    settings: ReminderSettings | None = None,
    notes: str | None = None,
) -> StatusTransition:
    """Set the new status and the reminder fields it implies. Flushes, never commits."""
    transition = plan_status_transition(new_status, now, reminder_days_for(settings))

    professor.status = transition.status
    if transition.touches_reminder:
        professor.reminder_date = transition.reminder_date
        professor.notification_enabled = transition.notification_enabled
        if transition.reply_date is not None:
            professor.reply_date = transition.reply_date
    if notes:
        professor.notes = notes

    db.flush()
    return transition


def select_due_professors(
    db: Session,
    user_id: UUID,
    now: datetime | date,
    settings: ReminderSettings | None = None,
) -> list[Professor]:
    """Pending professors emailed at least ``reminder_days`` ago and not yet reminded."""
    cutoff = followup_cutoff(now, reminder_days_for(settings))
    return (
        db.query(Professor)
        .filter(
            Professor.user_id == user_id,
            Professor.status == ProfessorStatus.PENDING.value,
            Professor.email_date.isnot(None),
            Professor.email_date <= cutoff,
            Professor.last_notification_sent_at.is_(None),
        )
        .order_by(Professor.email_date.asc())
        .all()
    )


def select_upcoming_reminders(db: Session, user_id: UUID, today: date) -> list[Professor]:
    """Professors whose reminder_date has arrived and who were not reminded since."""
    return (
        db.query(Professor)
        .filter(
            Professor.user_id == user_id,
            Professor.notification_enabled == True,  # noqa: E712
            Professor.reminder_date.isnot(None),
            Professor.reminder_date <= today,
            Professor.last_notification_sent_at.is_(None),
        )
        .order_by(Professor.reminder_date.asc())
        .all()
    )
