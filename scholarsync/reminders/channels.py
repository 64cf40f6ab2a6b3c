"""Reminder dispatch channels.

A channel delivers one rendered reminder for one professor and reports the
outcome. The transports shipped here only log; wiring a real provider means
adding another ``ReminderChannel`` subclass.
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass

from ..professors.models import Professor
from .models import ReminderSettings

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DispatchOutcome:
    channel: str
    success: bool
    error: str | None = None

    @property
    def history_status(self) -> str:
        return "sent" if self.success else "failed"


class ReminderChannel(ABC):
    name: str = ""

    def send(self, professor: Professor, message: str) -> DispatchOutcome:
        try:
            self.deliver(professor, message)
        except Exception as exc:
            logger.exception("%s dispatch failed for professor %s", self.name, professor.id)
            return DispatchOutcome(self.name, success=False, error=str(exc))
        return DispatchOutcome(self.name, success=True)

    @abstractmethod
    def deliver(self, professor: Professor, message: str) -> None:
        """Hand the message to the transport. Raise on failure."""


class EmailChannel(ReminderChannel):
    name = "email"

    def deliver(self, professor: Professor, message: str) -> None:
        logger.info("Follow-up reminder (email) for %s <%s>: %s", professor.name, professor.email, message)


class WhatsAppChannel(ReminderChannel):
    name = "whatsapp"

    def __init__(self, phone_number: str):
        self.phone_number = phone_number

    def deliver(self, professor: Professor, message: str) -> None:
        if not self.phone_number:
            raise ValueError("No phone number set for WhatsApp notifications")
        logger.info("Follow-up reminder (whatsapp) to %s: %s", self.phone_number, message)


def enabled_channels(settings: ReminderSettings) -> list[ReminderChannel]:
    """Channels switched on in the user's settings, in dispatch order."""
    channels: list[ReminderChannel] = []
    if settings.sms_notifications and settings.phone_number:
        channels.append(WhatsAppChannel(settings.phone_number))
    if settings.email_notifications:
        channels.append(EmailChannel())
    return channels
