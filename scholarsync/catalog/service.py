"""Catalog service: CRUD for countries, universities and scholarships."""

from uuid import UUID

from sqlalchemy import nulls_last
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from .models import Country, Scholarship, University

CatalogModel = type[Country] | type[University] | type[Scholarship]

_EDITABLE: dict[type, tuple[str, ...]] = {
    Country: ("name", "code"),
    University: ("name", "country", "city", "website"),
    Scholarship: ("name", "country", "description", "deadline", "website"),
}


class DuplicateEntry(Exception):
    """Raised when a unique column (country name) is already taken."""


def _to_uuid(value: str) -> UUID | None:
    try:
        return UUID(value)
    except (ValueError, AttributeError, TypeError):
        return None


def get_by_id(db: Session, model: CatalogModel, item_id: str):
    uid = _to_uuid(item_id)
    if uid is None:
        return None
    return db.query(model).filter(model.id == uid).first()


def create_item(db: Session, model: CatalogModel, **fields):
    item = model(**{k: v for k, v in fields.items() if k in _EDITABLE[model]})
    db.add(item)
    try:
        db.flush()
    except IntegrityError as exc:
        db.rollback()
        raise DuplicateEntry(str(exc.orig)) from exc
    return item


def update_item(db: Session, item, **fields):
    for key, value in fields.items():
        if key in _EDITABLE[type(item)] and value is not None:
            setattr(item, key, value)
    try:
        db.flush()
    except IntegrityError as exc:
        db.rollback()
        raise DuplicateEntry(str(exc.orig)) from exc
    return item


def delete_item(db: Session, model: CatalogModel, item_id: str) -> bool:
    item = get_by_id(db, model, item_id)
    if not item:
        return False
    db.delete(item)
    db.flush()
    return True


def list_countries(db: Session) -> list[Country]:
    return db.query(Country).order_by(Country.name.asc()).all()


def list_universities(db: Session, country: str | None = None) -> list[University]:
    query = db.query(University)
    if country:
        query = query.filter(University.country == country)
    return query.order_by(University.name.asc()).all()


def list_scholarships(db: Session, country: str | None = None) -> list[Scholarship]:
    query = db.query(Scholarship)
    if country:
        query = query.filter(Scholarship.country == country)
    return query.order_by(nulls_last(Scholarship.deadline.asc()), Scholarship.name.asc()).all()


def country_to_dict(c: Country) -> dict:
    return {"id": str(c.id), "name": c.name, "code": c.code or ""}


def university_to_dict(u: University) -> dict:
    return {
        "id": str(u.id),
        "name": u.name,
        "country": u.country or "",
        "city": u.city or "",
        "website": u.website or "",
    }


def scholarship_to_dict(s: Scholarship) -> dict:
    return {
        "id": str(s.id),
        "name": s.name,
        "country": s.country or "",
        "description": s.description or "",
        "deadline": s.deadline.isoformat() if s.deadline else None,
        "website": s.website or "",
    }
