"""Reminder settings request schemas."""

from pydantic import BaseModel, Field


class ReminderSettingsUpdate(BaseModel):
    email_notifications: bool | None = None
    sms_notifications: bool | None = None
    phone_number: str | None = Field(None, max_length=50)
    reminder_days: int | None = Field(None, ge=1, le=365)
    followup_message_template: str | None = Field(None, max_length=2000)
    status_update_template: str | None = Field(None, max_length=2000)
