"""Tests for the follow-up reminder policy."""

from datetime import UTC, date, datetime, timedelta

import pytest

from scholarsync.professors.models import ProfessorStatus
from scholarsync.reminders.models import ReminderSettings
from scholarsync.reminders.policy import (
    apply_status_transition,
    followup_cutoff,
    plan_status_transition,
    reminder_days_for,
    select_due_professors,
    select_upcoming_reminders,
)

NOW = datetime(2024, 3, 15, 9, 30, tzinfo=UTC)
TODAY = NOW.date()


class TestReminderDaysFor:
    def test_defaults_to_seven_without_settings(self):
        assert reminder_days_for(None) == 7

    def test_uses_configured_value(self):
        assert reminder_days_for(ReminderSettings(reminder_days=14)) == 14

    def test_zero_falls_back_to_default(self):
        assert reminder_days_for(ReminderSettings(reminder_days=0)) == 7


class TestFollowupCutoff:
    def test_subtracts_calendar_days(self):
        assert followup_cutoff(NOW, 7) == date(2024, 3, 8)

    def test_accepts_plain_date(self):
        assert followup_cutoff(date(2024, 1, 1), 1) == date(2023, 12, 31)


class TestPlanStatusTransition:
    @pytest.mark.parametrize(
        "status,offset",
        [
            (ProfessorStatus.PENDING, 7),
            (ProfessorStatus.FOLLOW_UP, 3),
            (ProfessorStatus.SCHEDULED, 1),
            (ProfessorStatus.NO_RESPONSE, 14),
        ],
    )
    def test_open_statuses_schedule_next_reminder(self, status, offset):
        t = plan_status_transition(status.value, NOW, 7)
        assert t.reminder_date == TODAY + timedelta(days=offset)
        assert t.notification_enabled is True
        assert t.reply_date is None

    def test_pending_uses_user_cadence(self):
        t = plan_status_transition("Pending", NOW, 21)
        assert t.reminder_date == TODAY + timedelta(days=21)

    def test_fixed_offsets_ignore_user_cadence(self):
        t = plan_status_transition("Follow Up", NOW, 30)
        assert t.reminder_date == TODAY + timedelta(days=3)

    def test_replied_disables_reminders_and_sets_reply_date(self):
        t = plan_status_transition("Replied", NOW, 7)
        assert t.notification_enabled is False
        assert t.reminder_date is None
        assert t.reply_date == TODAY

    def test_rejected_disables_reminders(self):
        t = plan_status_transition("Rejected", NOW, 7)
        assert t.notification_enabled is False
        assert t.reminder_date is None
        assert t.reply_date is None

    def test_unknown_status_only_touches_status(self):
        t = plan_status_transition("Ghosted", NOW, 7)
        assert t.status == "Ghosted"
        assert t.touches_reminder is False

    def test_scheduled_on_new_year(self):
        t = plan_status_transition("Scheduled", date(2024, 1, 1), 7)
        assert t.reminder_date == date(2024, 1, 2)
        assert t.notification_enabled is True

    def test_deterministic(self):
        assert plan_status_transition("No Response", NOW, 7) == plan_status_transition("No Response", NOW, 7)


class TestApplyStatusTransition:
    def test_scheduled_sets_reminder_next_day(self, db_session, make_professor):
        professor = make_professor()
        apply_status_transition(db_session, professor, "Scheduled", datetime(2024, 1, 1, tzinfo=UTC))
        db_session.commit()
        db_session.refresh(professor)

        assert professor.status == "Scheduled"
        assert professor.reminder_date == date(2024, 1, 2)
        assert professor.notification_enabled is True

    def test_replied_clears_pending_reminder(self, db_session, make_professor):
        professor = make_professor(reminder_date=TODAY + timedelta(days=2), notification_enabled=True)
        apply_status_transition(db_session, professor, "Replied", NOW)
        db_session.commit()

        assert professor.notification_enabled is False
        assert professor.reminder_date is None
        assert professor.reply_date == TODAY

    def test_pending_uses_settings_cadence(self, db_session, make_professor, reminder_settings):
        reminder_settings.reminder_days = 10
        professor = make_professor(status="Follow Up")
        apply_status_transition(db_session, professor, "Pending", NOW, reminder_settings)

        assert professor.reminder_date == TODAY + timedelta(days=10)

    def test_unknown_status_keeps_reminder_fields(self, db_session, make_professor):
        reminder = TODAY + timedelta(days=4)
        professor = make_professor(reminder_date=reminder, notification_enabled=True)
        apply_status_transition(db_session, professor, "On Hold", NOW)
        db_session.commit()
        db_session.refresh(professor)

        assert professor.status == "On Hold"
        assert professor.reminder_date == reminder
        assert professor.notification_enabled is True

    def test_notes_are_stored(self, db_session, make_professor):
        professor = make_professor()
        apply_status_transition(db_session, professor, "Rejected", NOW, notes="Position filled")
        assert professor.notes == "Position filled"

    def test_empty_notes_do_not_overwrite(self, db_session, make_professor):
        professor = make_professor(notes="Met at conference")
        apply_status_transition(db_session, professor, "Rejected", NOW, notes="")
        assert professor.notes == "Met at conference"


class TestSelectDueProfessors:
    def test_selects_overdue_pending(self, db_session, make_professor, reminder_settings):
        professor = make_professor(days_ago=10)
        due = select_due_professors(db_session, reminder_settings.user_id, NOW, reminder_settings)
        assert [p.id for p in due] == [professor.id]

    def test_longer_cadence_excludes_record(self, db_session, make_professor, reminder_settings):
        reminder_settings.reminder_days = 14
        db_session.commit()
        make_professor(days_ago=10)
        assert select_due_professors(db_session, reminder_settings.user_id, NOW, reminder_settings) == []

    def test_already_reminded_never_selected(self, db_session, make_professor, test_user):
        make_professor(days_ago=400, last_notification_sent_at=NOW - timedelta(days=300))
        assert select_due_professors(db_session, test_user.id, NOW) == []

    def test_default_cadence_without_settings(self, db_session, make_professor, test_user):
        due_one = make_professor(days_ago=7)
        make_professor(days_ago=6)
        due = select_due_professors(db_session, test_user.id, NOW)
        assert [p.id for p in due] == [due_one.id]

    def test_boundary_is_inclusive(self, db_session, make_professor, reminder_settings):
        make_professor(days_ago=7)
        assert len(select_due_professors(db_session, reminder_settings.user_id, NOW, reminder_settings)) == 1

    def test_only_pending_status(self, db_session, make_professor, test_user):
        for status in ("Replied", "Rejected", "Follow Up", "Scheduled", "No Response"):
            make_professor(days_ago=30, status=status)
        assert select_due_professors(db_session, test_user.id, NOW) == []

    def test_missing_email_date_excluded(self, db_session, make_professor, test_user):
        make_professor(days_ago=None)
        assert select_due_professors(db_session, test_user.id, NOW) == []

    def test_scoped_to_user(self, db_session, make_professor, test_user):
        from scholarsync.auth.models import User

        other = User(email="other@example.com", password_hash="$2b$12$fakehash")
        db_session.add(other)
        db_session.commit()
        make_professor(days_ago=30, user_id=other.id)

        assert select_due_professors(db_session, test_user.id, NOW) == []
        assert len(select_due_professors(db_session, other.id, NOW)) == 1

    def test_ordered_oldest_first(self, db_session, make_professor, test_user):
        newer = make_professor(name="Newer", days_ago=8)
        older = make_professor(name="Older", days_ago=20)
        due = select_due_professors(db_session, test_user.id, NOW)
        assert [p.id for p in due] == [older.id, newer.id]


class TestSelectUpcomingReminders:
    def test_returns_arrived_reminders(self, db_session, make_professor, test_user):
        arrived = make_professor(status="Follow Up", reminder_date=TODAY)
        make_professor(status="Follow Up", reminder_date=TODAY + timedelta(days=1))
        result = select_upcoming_reminders(db_session, test_user.id, TODAY)
        assert [p.id for p in result] == [arrived.id]

    def test_skips_disabled(self, db_session, make_professor, test_user):
        make_professor(status="Replied", reminder_date=TODAY, notification_enabled=False)
        assert select_upcoming_reminders(db_session, test_user.id, TODAY) == []

    def test_skips_already_reminded(self, db_session, make_professor, test_user):
        make_professor(reminder_date=TODAY - timedelta(days=1), last_notification_sent_at=NOW)
        assert select_upcoming_reminders(db_session, test_user.id, TODAY) == []
