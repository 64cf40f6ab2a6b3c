"""Tests for dashboard service."""

from datetime import date, timedelta
from unittest.mock import MagicMock

from scholarsync.audit.service import audit
from scholarsync.dashboard.service import get_activity, get_dashboard
from scholarsync.reminders.models import NotificationHistory

TODAY = date(2024, 3, 15)


class TestGetDashboard:
    def test_empty(self, db_session, test_user):
        data = get_dashboard(db_session, test_user.id, TODAY)
        assert data["total"] == 0
        assert data["due_for_followup"] == 0
        assert data["upcoming_reminders"] == 0
        assert data["notifications_sent"] == 0
        assert data["by_status"]["Pending"] == 0

    def test_counts(self, db_session, make_professor, reminder_settings, test_user):
        due = make_professor(days_ago=10)
        make_professor(days_ago=2)
        make_professor(status="Follow Up", reminder_date=TODAY - timedelta(days=1))
        make_professor(status="Replied", notification_enabled=False)
        db_session.add_all(
            [
                NotificationHistory(
                    user_id=test_user.id, professor_id=due.id, notification_type="email", status="sent"
                ),
                NotificationHistory(
                    user_id=test_user.id, professor_id=due.id, notification_type="whatsapp", status="failed"
                ),
            ]
        )
        db_session.commit()

        data = get_dashboard(db_session, test_user.id, TODAY)

        assert data["total"] == 4
        assert data["by_status"]["Pending"] == 2
        assert data["by_status"]["Follow Up"] == 1
        assert data["by_status"]["Replied"] == 1
        assert data["due_for_followup"] == 1
        assert data["upcoming_reminders"] == 1
        assert data["notifications_sent"] == 1

    def test_uses_user_cadence(self, db_session, make_professor, reminder_settings, test_user):
        reminder_settings.reminder_days = 14
        db_session.commit()
        make_professor(days_ago=10)

        assert get_dashboard(db_session, test_user.id, TODAY)["due_for_followup"] == 0


class TestGetActivity:
    def test_serialises_entries(self, db_session, test_user):
        request = MagicMock()
        request.headers = {}
        request.client.host = "127.0.0.1"
        request.session = {"user_id": str(test_user.id)}
        audit(db_session, request, "manual_reminder", "id=abc")
        db_session.commit()

        activity = get_activity(db_session, test_user.id)

        assert len(activity) == 1
        assert activity[0]["action"] == "manual_reminder"
        assert activity[0]["detail"] == "id=abc"
        assert activity[0]["ip_address"] == "127.0.0.1"
        assert activity[0]["created_at"] is not None
