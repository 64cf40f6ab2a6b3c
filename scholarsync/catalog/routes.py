"""Catalog routes: countries, universities, scholarships."""

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from ..audit.service import audit
from ..auth.models import User
from ..database.base import get_db
from ..dependencies import get_current_user
from .models import Country, Scholarship, University
from .schemas import (
    CountryPayload,
    CountryUpdate,
    ScholarshipPayload,
    ScholarshipUpdate,
    UniversityPayload,
    UniversityUpdate,
)
from .service import (
    DuplicateEntry,
    country_to_dict,
    create_item,
    delete_item,
    get_by_id,
    list_countries,
    list_scholarships,
    list_universities,
    scholarship_to_dict,
    university_to_dict,
    update_item,
)

router = APIRouter(tags=["catalog"])


# ── Countries ─────────────────────────────────────────────────────────


@router.get("/countries")
def get_countries(db: Session = Depends(get_db), user: User = Depends(get_current_user)):
    return JSONResponse({"countries": [country_to_dict(c) for c in list_countries(db)]})


@router.post("/countries")
def add_country(
    request: Request,
    payload: CountryPayload,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    try:
        country = create_item(db, Country, **payload.model_dump())
    except DuplicateEntry:
        return JSONResponse({"error": "Country already exists"}, status_code=409)
    audit(db, request, "country_create", f"name={country.name}", user_id=user.id)
    db.commit()
    return JSONResponse({"ok": True, "country": country_to_dict(country)}, status_code=201)


@router.put("/countries/{country_id}")
def edit_country(
    request: Request,
    country_id: str,
    payload: CountryUpdate,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    country = get_by_id(db, Country, country_id)
    if not country:
        return JSONResponse({"error": "Country not found"}, status_code=404)
    try:
        update_item(db, country, **payload.model_dump(exclude_unset=True))
    except DuplicateEntry:
        return JSONResponse({"error": "Country already exists"}, status_code=409)
    audit(db, request, "country_update", f"id={country_id}", user_id=user.id)
    db.commit()
    return JSONResponse({"ok": True, "country": country_to_dict(country)})


@router.delete("/countries/{country_id}")
def remove_country(
    request: Request,
    country_id: str,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    if not delete_item(db, Country, country_id):
        return JSONResponse({"error": "Country not found"}, status_code=404)
    audit(db, request, "country_delete", f"id={country_id}", user_id=user.id)
    db.commit()
    return JSONResponse({"ok": True})


# ── Universities ──────────────────────────────────────────────────────


@router.get("/universities")
def get_universities(
    country: str | None = None,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    return JSONResponse({"universities": [university_to_dict(u) for u in list_universities(db, country)]})


@router.post("/universities")
def add_university(
    request: Request,
    payload: UniversityPayload,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    university = create_item(db, University, **payload.model_dump())
    audit(db, request, "university_create", f"name={university.name}", user_id=user.id)
    db.commit()
    return JSONResponse({"ok": True, "university": university_to_dict(university)}, status_code=201)


@router.put("/universities/{university_id}")
def edit_university(
    request: Request,
    university_id: str,
    payload: UniversityUpdate,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    university = get_by_id(db, University, university_id)
    if not university:
        return JSONResponse({"error": "University not found"}, status_code=404)
    update_item(db, university, **payload.model_dump(exclude_unset=True))
    audit(db, request, "university_update", f"id={university_id}", user_id=user.id)
    db.commit()
    return JSONResponse({"ok": True, "university": university_to_dict(university)})


@router.delete("/universities/{university_id}")
def remove_university(
    request: Request,
    university_id: str,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    if not delete_item(db, University, university_id):
        return JSONResponse({"error": "University not found"}, status_code=404)
    audit(db, request, "university_delete", f"id={university_id}", user_id=user.id)
    db.commit()
    return JSONResponse({"ok": True})


# ── Scholarships ──────────────────────────────────────────────────────


@router.get("/scholarships")
def get_scholarships(
    country: str | None = None,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    return JSONResponse({"scholarships": [scholarship_to_dict(s) for s in list_scholarships(db, country)]})


@router.post("/scholarships")
def add_scholarship(
    request: Request,
    payload: ScholarshipPayload,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    scholarship = create_item(db, Scholarship, **payload.model_dump())
    audit(db, request, "scholarship_create", f"name={scholarship.name}", user_id=user.id)
    db.commit()
    return JSONResponse({"ok": True, "scholarship": scholarship_to_dict(scholarship)}, status_code=201)


@router.put("/scholarships/{scholarship_id}")
def edit_scholarship(
    request: Request,
    scholarship_id: str,
    payload: ScholarshipUpdate,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    scholarship = get_by_id(db, Scholarship, scholarship_id)
    if not scholarship:
        return JSONResponse({"error": "Scholarship not found"}, status_code=404)
    update_item(db, scholarship, **payload.model_dump(exclude_unset=True))
    audit(db, request, "scholarship_update", f"id={scholarship_id}", user_id=user.id)
    db.commit()
    return JSONResponse({"ok": True, "scholarship": scholarship_to_dict(scholarship)})


@router.delete("/scholarships/{scholarship_id}")
def remove_scholarship(
    request: Request,
    scholarship_id: str,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    if not delete_item(db, Scholarship, scholarship_id):
        return JSONResponse({"error": "Scholarship not found"}, status_code=404)
    audit(db, request, "scholarship_delete", f"id={scholarship_id}", user_id=user.id)
    db.commit()
    return JSONResponse({"ok": True})
