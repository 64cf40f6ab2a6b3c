"""Catalog request schemas."""

from datetime import date

from pydantic import BaseModel, Field


class CountryPayload(BaseModel):
    name: str = Field(..., min_length=1, max_length=120)
    code: str = Field("", max_length=3)


class CountryUpdate(BaseModel):
    name: str | None = Field(None, min_length=1, max_length=120)
    code: str | None = Field(None, max_length=3)


class UniversityPayload(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    country: str = Field("", max_length=120)
    city: str = Field("", max_length=120)
    website: str = Field("", max_length=500)


class UniversityUpdate(BaseModel):
    name: str | None = Field(None, min_length=1, max_length=255)
    country: str | None = Field(None, max_length=120)
    city: str | None = Field(None, max_length=120)
    website: str | None = Field(None, max_length=500)


class ScholarshipPayload(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    country: str = Field("", max_length=120)
    description: str = ""
    deadline: date | None = None
    website: str = Field("", max_length=500)


class ScholarshipUpdate(BaseModel):
    name: str | None = Field(None, min_length=1, max_length=255)
    country: str | None = Field(None, max_length=120)
    description: str | None = None
    deadline: date | None = None
    website: str | None = Field(None, max_length=500)
