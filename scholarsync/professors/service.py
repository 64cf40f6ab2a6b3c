"""Professor service: CRUD for outreach records, scoped to their owner."""

from datetime import date, timedelta
from uuid import UUID

from sqlalchemy import or_
from sqlalchemy.orm import Session

from .models import Professor, ProfessorStatus

# Columns a client may set directly on create/update
EDITABLE_FIELDS = (
    "name",
    "email",
    "university_id",
    "university_name",
    "country",
    "department",
    "lab",
    "research",
    "scholarship",
    "notes",
    "status",
    "email_date",
    "reply_date",
    "reminder_date",
    "notification_enabled",
)


def _to_uuid(value: str | UUID | None) -> UUID | None:
    """Convert string to UUID, returning None on failure."""
    if not value:
        return None
    if isinstance(value, UUID):
        return value
    try:
        return UUID(value)
    except (ValueError, AttributeError):
        return None


def create_professor(db: Session, user_id: UUID, reminder_days: int, **fields) -> Professor:
    """Create a professor. A pending record with an email date gets its first reminder date."""
    data = {k: v for k, v in fields.items() if k in EDITABLE_FIELDS and v is not None}
    if "university_id" in data:
        data["university_id"] = _to_uuid(data["university_id"])
    data.setdefault("status", ProfessorStatus.PENDING.value)

    if data["status"] == ProfessorStatus.PENDING and data.get("email_date") and not data.get("reminder_date"):
        data["reminder_date"] = data["email_date"] + timedelta(days=reminder_days)

    professor = Professor(user_id=user_id, **data)
    db.add(professor)
    db.flush()
    return professor


def get_professor_by_id(db: Session, user_id: UUID, professor_id: str | UUID) -> Professor | None:
    uid = _to_uuid(professor_id)
    if uid is None:
        return None
    return db.query(Professor).filter(Professor.id == uid, Professor.user_id == user_id).first()


def list_professors(
    db: Session,
    user_id: UUID,
    status: str | None = None,
    search: str | None = None,
) -> list[Professor]:
    query = db.query(Professor).filter(Professor.user_id == user_id)
    if status:
        query = query.filter(Professor.status == status)
    if search:
        pattern = f"%{search.strip()}%"
        query = query.filter(
            or_(
                Professor.name.ilike(pattern),
                Professor.email.ilike(pattern),
                Professor.university_name.ilike(pattern),
            )
        )
    return query.order_by(Professor.created_at.desc()).all()


def update_professor(db: Session, professor: Professor, **fields) -> Professor:
    """Overwrite the given fields in place. None means "leave unchanged"."""
    for key, value in fields.items():
        if key not in EDITABLE_FIELDS or value is None:
            continue
        if key == "university_id":
            value = _to_uuid(value)
        setattr(professor, key, value)
    db.flush()
    return professor


def delete_professor(db: Session, user_id: UUID, professor_id: str) -> bool:
    professor = get_professor_by_id(db, user_id, professor_id)
    if not professor:
        return False
    db.delete(professor)
    db.flush()
    return True


def count_by_status(db: Session, user_id: UUID) -> dict[str, int]:
    counts = {s.value: 0 for s in ProfessorStatus}
    for (status,) in db.query(Professor.status).filter(Professor.user_id == user_id).all():
        counts[status] = counts.get(status, 0) + 1
    return counts


def days_since_email(professor: Professor, today: date) -> int | None:
    if not professor.email_date:
        return None
    return (today - professor.email_date).days


def professor_to_dict(p: Professor) -> dict:
    return {
        "id": str(p.id),
        "name": p.name,
        "email": p.email,
        "university_id": str(p.university_id) if p.university_id else None,
        "university_name": p.university_name or "",
        "country": p.country or "",
        "department": p.department or "",
        "lab": p.lab or "",
        "research": p.research or "",
        "scholarship": p.scholarship or "",
        "notes": p.notes or "",
        "status": p.status,
        "email_date": p.email_date.isoformat() if p.email_date else None,
        "reply_date": p.reply_date.isoformat() if p.reply_date else None,
        "reminder_date": p.reminder_date.isoformat() if p.reminder_date else None,
        "last_notification_sent_at": (
            p.last_notification_sent_at.isoformat() if p.last_notification_sent_at else None
        ),
        "notification_enabled": bool(p.notification_enabled),
    }
