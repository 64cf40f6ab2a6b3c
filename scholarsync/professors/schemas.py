"""Professor request schemas."""

from datetime import date

from pydantic import BaseModel, EmailStr, Field

from .models import ProfessorStatus


class ProfessorCreateRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    email: EmailStr
    university_id: str | None = None
    university_name: str = Field("", max_length=255)
    country: str = Field("", max_length=120)
    department: str = Field("", max_length=255)
    lab: str = Field("", max_length=255)
    research: str = ""
    scholarship: str = Field("", max_length=255)
    notes: str = ""
    status: ProfessorStatus = ProfessorStatus.PENDING
    email_date: date | None = None
    reply_date: date | None = None
    reminder_date: date | None = None
    notification_enabled: bool = True


class ProfessorUpdateRequest(BaseModel):
    name: str | None = Field(None, min_length=1, max_length=255)
    email: EmailStr | None = None
    university_id: str | None = None
    university_name: str | None = Field(None, max_length=255)
    country: str | None = Field(None, max_length=120)
    department: str | None = Field(None, max_length=255)
    lab: str | None = Field(None, max_length=255)
    research: str | None = None
    scholarship: str | None = Field(None, max_length=255)
    notes: str | None = None
    email_date: date | None = None
    reply_date: date | None = None
    reminder_date: date | None = None
    notification_enabled: bool | None = None


class StatusChangeRequest(BaseModel):
    status: ProfessorStatus
    reminder_date: date | None = None
    notes: str | None = Field(None, max_length=5000)
