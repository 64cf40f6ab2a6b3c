"""Reminder settings and notification history models."""

import uuid
from datetime import UTC, datetime

from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Index, Integer, String, Text
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship

from ..database.base import Base

DEFAULT_REMINDER_DAYS = 7
DEFAULT_FOLLOWUP_TEMPLATE = "Time to follow up with {name} from {university}."
DEFAULT_STATUS_UPDATE_TEMPLATE = "Status update for {name}: {status}"


class ReminderSettings(Base):
    """Per-user reminder cadence, channels and message templates."""

    __tablename__ = "notification_settings"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    user_id = Column(
        UUID(as_uuid=True),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        unique=True,
    )
    email_notifications = Column(Boolean, default=True)
    sms_notifications = Column(Boolean, default=False)
    phone_number = Column(String(50), default="")
    reminder_days = Column(Integer, default=DEFAULT_REMINDER_DAYS)
    followup_message_template = Column(Text, default=DEFAULT_FOLLOWUP_TEMPLATE)
    status_update_template = Column(Text, default=DEFAULT_STATUS_UPDATE_TEMPLATE)
    created_at = Column(
        DateTime(timezone=True),
        default=lambda: datetime.now(UTC),
    )
    updated_at = Column(
        DateTime(timezone=True),
        default=lambda: datetime.now(UTC),
        onupdate=lambda: datetime.now(UTC),
    )

    user = relationship("User", back_populates="notification_settings")


class NotificationHistory(Base):
    """Append-only log of reminder dispatch attempts."""

    __tablename__ = "notification_history"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    user_id = Column(UUID(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    professor_id = Column(
        UUID(as_uuid=True),
        ForeignKey("professors.id", ondelete="CASCADE"),
        nullable=False,
    )
    notification_type = Column(String(20), nullable=False)  # email / whatsapp
    message = Column(Text, default="")
    status = Column(String(10), nullable=False)  # sent / failed
    error_message = Column(Text, nullable=True)
    sent_at = Column(
        DateTime(timezone=True),
        default=lambda: datetime.now(UTC),
    )

    professor = relationship("Professor", back_populates="history")

    __table_args__ = (
        Index("idx_history_user_sent", "user_id", "sent_at"),
        Index("idx_history_professor", "professor_id"),
    )
