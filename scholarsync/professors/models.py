"""Professor outreach record model and status values."""

import enum
import uuid
from datetime import UTC, datetime

from sqlalchemy import Boolean, Column, Date, DateTime, ForeignKey, Index, String, Text
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship

from ..database.base import Base


class ProfessorStatus(enum.StrEnum):
    """Outreach status. Stored as plain text so unknown values round-trip."""

    PENDING = "Pending"
    REPLIED = "Replied"
    REJECTED = "Rejected"
    FOLLOW_UP = "Follow Up"
    SCHEDULED = "Scheduled"
    NO_RESPONSE = "No Response"


class Professor(Base):
    __tablename__ = "professors"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    user_id = Column(
        UUID(as_uuid=True),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=True,
        index=True,
    )

    # Contact
    name = Column(String(255), nullable=False)
    email = Column(String(255), nullable=False)
    university_id = Column(
        UUID(as_uuid=True),
        ForeignKey("universities.id", ondelete="SET NULL"),
        nullable=True,
    )
    university_name = Column(String(255), default="")
    country = Column(String(120), default="")
    department = Column(String(255), default="")
    lab = Column(String(255), default="")
    research = Column(Text, default="")
    scholarship = Column(String(255), default="")
    notes = Column(Text, default="")

    # Outreach tracking
    status = Column(String(20), default=ProfessorStatus.PENDING.value, nullable=False)
    email_date = Column(Date, nullable=True)
    reply_date = Column(Date, nullable=True)
    reminder_date = Column(Date, nullable=True)
    last_notification_sent_at = Column(DateTime(timezone=True), nullable=True)
    notification_enabled = Column(Boolean, default=True)

    created_at = Column(
        DateTime(timezone=True),
        default=lambda: datetime.now(UTC),
    )
    updated_at = Column(
        DateTime(timezone=True),
        default=lambda: datetime.now(UTC),
        onupdate=lambda: datetime.now(UTC),
    )

    owner = relationship("User", back_populates="professors")
    history = relationship("NotificationHistory", back_populates="professor", cascade="all, delete-orphan")

    __table_args__ = (
        Index("idx_professors_status_email_date", "status", "email_date"),
        Index("idx_professors_reminder_date", "reminder_date"),
        Index("idx_professors_created", "created_at"),
    )
