"""Authentication routes (session cookie)."""

from fastapi import APIRouter, Depends, Form, Request
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from ..audit.service import audit
from ..database.base import get_db
from ..dependencies import get_current_user
from ..rate_limit import limiter
from .models import User
from .service import authenticate_user

router = APIRouter(tags=["auth"])


@router.post("/login")
@limiter.limit("10/minute")
def login(
    request: Request,
    email: str = Form(...),
    password: str = Form(...),
    db: Session = Depends(get_db),
):
    user = authenticate_user(db, email, password)
    if not user:
        audit(db, request, "login_failed", f"email={email}")
        db.commit()
        return JSONResponse({"error": "Invalid credentials"}, status_code=401)
    request.session["user_id"] = str(user.id)
    audit(db, request, "login", f"email={email}", user_id=user.id)
    db.commit()
    return JSONResponse({"ok": True, "user": {"id": str(user.id), "email": user.email}})


@router.post("/logout")
def logout(request: Request, db: Session = Depends(get_db)):
    audit(db, request, "logout")
    db.commit()
    request.session.clear()
    return JSONResponse({"ok": True})


@router.get("/me")
def me(user: User = Depends(get_current_user)):
    return JSONResponse({"user": {"id": str(user.id), "email": user.email, "is_active": user.is_active}})
