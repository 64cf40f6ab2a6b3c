"""Reference data: countries, universities, scholarships."""

import uuid
from datetime import UTC, datetime

from sqlalchemy import Column, Date, DateTime, Index, String, Text
from sqlalchemy.dialects.postgresql import UUID

from ..database.base import Base


class Country(Base):
    __tablename__ = "countries"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    name = Column(String(120), unique=True, nullable=False)
    code = Column(String(3), default="")
    created_at = Column(DateTime(timezone=True), default=lambda: datetime.now(UTC))


class University(Base):
    __tablename__ = "universities"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    name = Column(String(255), nullable=False)
    country = Column(String(120), default="")
    city = Column(String(120), default="")
    website = Column(String(500), default="")
    created_at = Column(DateTime(timezone=True), default=lambda: datetime.now(UTC))

    __table_args__ = (Index("idx_universities_country", "country"),)


class Scholarship(Base):
    __tablename__ = "scholarships"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    name = Column(String(255), nullable=False)
    country = Column(String(120), default="")
    description = Column(Text, default="")
    deadline = Column(Date, nullable=True)
    website = Column(String(500), default="")
    created_at = Column(DateTime(timezone=True), default=lambda: datetime.now(UTC))

    __table_args__ = (Index("idx_scholarships_deadline", "deadline"),)
