"""Shared test fixtures."""

import uuid
from datetime import date, timedelta

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from scholarsync.audit.models import AuditLog
from scholarsync.auth.models import User
from scholarsync.catalog.models import Country, Scholarship, University
from scholarsync.database.base import Base
from scholarsync.professors.models import Professor, ProfessorStatus
from scholarsync.reminders.models import NotificationHistory, ReminderSettings

# Models must be imported so Base.metadata.create_all() sees all tables.
_ALL_MODELS = [AuditLog, Country, University, Scholarship, NotificationHistory]

TODAY = date(2024, 3, 15)


@pytest.fixture
def db_session():
    """Create an in-memory SQLite database for testing.

    Note: SQLite drops tzinfo on DateTime columns, so compare timestamps
    read back from the session naively.
    """
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    TestSession = sessionmaker(bind=engine)
    session = TestSession()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def test_user(db_session):
    """Create a test user."""
    user = User(
        id=uuid.uuid4(),
        email="test@example.com",
        password_hash="$2b$12$fakehash",
    )
    db_session.add(user)
    db_session.commit()
    return user


@pytest.fixture
def reminder_settings(db_session, test_user):
    """Email-only settings with the default 7-day cadence."""
    s = ReminderSettings(
        user_id=test_user.id,
        email_notifications=True,
        sms_notifications=False,
        phone_number="",
        reminder_days=7,
    )
    db_session.add(s)
    db_session.commit()
    return s


@pytest.fixture
def make_professor(db_session, test_user):
    """Factory for professors owned by the test user, emailed ``days_ago`` days before TODAY."""

    def _make(name="Dr. Ada Lovelace", days_ago=10, status=ProfessorStatus.PENDING.value, **fields):
        professor = Professor(
            user_id=fields.pop("user_id", test_user.id),
            name=name,
            email=fields.pop("email", f"{uuid.uuid4().hex[:8]}@uni.example"),
            university_name=fields.pop("university_name", "University of Turin"),
            status=status,
            email_date=TODAY - timedelta(days=days_ago) if days_ago is not None else None,
            **fields,
        )
        db_session.add(professor)
        db_session.commit()
        return professor

    return _make
