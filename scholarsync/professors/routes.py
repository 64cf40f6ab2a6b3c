"""Professor routes: CRUD, status changes, manual reminders."""

from datetime import UTC, datetime

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from ..audit.service import audit
from ..auth.models import User
from ..database.base import get_db
from ..dependencies import get_current_user
from ..reminders.models import DEFAULT_STATUS_UPDATE_TEMPLATE
from ..reminders.policy import reminder_days_for
from ..reminders.service import (
    NO_SETTINGS_ERROR,
    get_reminder_settings,
    render_template,
    reset_reminder,
    send_manual_reminder,
    update_status_details,
)
from .schemas import ProfessorCreateRequest, ProfessorUpdateRequest, StatusChangeRequest
from .service import (
    create_professor,
    delete_professor,
    get_professor_by_id,
    list_professors,
    professor_to_dict,
    update_professor,
)

router = APIRouter(tags=["professors"])


@router.get("/professors")
def get_professors(
    status: str | None = None,
    q: str | None = None,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    professors = list_professors(db, user.id, status=status, search=q)
    return JSONResponse({"professors": [professor_to_dict(p) for p in professors]})


@router.post("/professors")
def add_professor(
    request: Request,
    payload: ProfessorCreateRequest,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    fields = payload.model_dump()
    fields["status"] = payload.status.value
    reminder_days = reminder_days_for(get_reminder_settings(db, user.id))
    professor = create_professor(db, user.id, reminder_days, **fields)
    audit(db, request, "professor_create", f"id={professor.id}, email={professor.email}", user_id=user.id)
    db.commit()
    return JSONResponse({"ok": True, "professor": professor_to_dict(professor)}, status_code=201)


@router.get("/professors/{professor_id}")
def get_professor(
    professor_id: str,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    professor = get_professor_by_id(db, user.id, professor_id)
    if not professor:
        return JSONResponse({"error": "Professor not found"}, status_code=404)
    return JSONResponse({"professor": professor_to_dict(professor)})


@router.put("/professors/{professor_id}")
def edit_professor(
    request: Request,
    professor_id: str,
    payload: ProfessorUpdateRequest,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    professor = get_professor_by_id(db, user.id, professor_id)
    if not professor:
        return JSONResponse({"error": "Professor not found"}, status_code=404)
    update_professor(db, professor, **payload.model_dump(exclude_unset=True))
    audit(db, request, "professor_update", f"id={professor_id}", user_id=user.id)
    db.commit()
    return JSONResponse({"ok": True, "professor": professor_to_dict(professor)})


@router.delete("/professors/{professor_id}")
def remove_professor(
    request: Request,
    professor_id: str,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    if not delete_professor(db, user.id, professor_id):
        return JSONResponse({"error": "Professor not found"}, status_code=404)
    audit(db, request, "professor_delete", f"id={professor_id}", user_id=user.id)
    db.commit()
    return JSONResponse({"ok": True})


@router.post("/professors/{professor_id}/status")
def change_status(
    request: Request,
    professor_id: str,
    payload: StatusChangeRequest,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    professor = get_professor_by_id(db, user.id, professor_id)
    if not professor:
        return JSONResponse({"error": "Professor not found"}, status_code=404)

    settings = get_reminder_settings(db, user.id)
    update_status_details(
        db,
        professor,
        payload.status.value,
        datetime.now(UTC),
        settings,
        reminder_date=payload.reminder_date,
        notes=payload.notes,
    )
    summary = render_template(
        settings.status_update_template if settings else None, professor, default=DEFAULT_STATUS_UPDATE_TEMPLATE
    )
    audit(db, request, "status_change", f"id={professor_id}, status={payload.status.value}", user_id=user.id)
    db.commit()
    return JSONResponse({"ok": True, "professor": professor_to_dict(professor), "summary": summary})


@router.post("/professors/{professor_id}/remind")
def remind_professor(
    request: Request,
    professor_id: str,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    if not get_professor_by_id(db, user.id, professor_id):
        return JSONResponse({"error": "Professor not found"}, status_code=404)
    if not get_reminder_settings(db, user.id):
        return JSONResponse({"error": NO_SETTINGS_ERROR}, status_code=400)
    if not send_manual_reminder(db, user.id, professor_id):
        db.rollback()
        return JSONResponse({"error": "Reminder could not be recorded"}, status_code=500)
    audit(db, request, "manual_reminder", f"id={professor_id}", user_id=user.id)
    db.commit()
    return JSONResponse({"ok": True})


@router.post("/professors/{professor_id}/reminder/reset")
def reset_professor_reminder(
    request: Request,
    professor_id: str,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    professor = get_professor_by_id(db, user.id, professor_id)
    if not professor:
        return JSONResponse({"error": "Professor not found"}, status_code=404)
    reset_reminder(db, professor)
    audit(db, request, "reminder_reset", f"id={professor_id}", user_id=user.id)
    db.commit()
    return JSONResponse({"ok": True, "professor": professor_to_dict(professor)})
