"""Dashboard routes."""

from datetime import UTC, datetime

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from ..auth.models import User
from ..database.base import get_db
from ..dependencies import get_current_user
from .service import get_activity, get_dashboard

router = APIRouter(tags=["dashboard"])


@router.get("/dashboard")
def dashboard_api(
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    return JSONResponse(get_dashboard(db, user.id, datetime.now(UTC).date()))


@router.get("/activity")
def activity_api(
    limit: int = 50,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    return JSONResponse({"activity": get_activity(db, user.id, min(max(limit, 1), 200))})
