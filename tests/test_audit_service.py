"""Tests for audit service."""

from datetime import UTC, datetime, timedelta
from unittest.mock import MagicMock

from scholarsync.audit.models import AuditLog
from scholarsync.audit.service import _get_ip, audit, get_recent_audit_logs


def _request(session=None, forwarded=None, host="127.0.0.1"):
    request = MagicMock()
    request.headers = {"X-Forwarded-For": forwarded} if forwarded else {}
    request.client.host = host
    request.session = session or {}
    return request


class TestGetIp:
    def test_extracts_forwarded_ip(self):
        assert _get_ip(_request(forwarded="1.2.3.4, 5.6.7.8")) == "1.2.3.4"

    def test_uses_client_host(self):
        assert _get_ip(_request(host="10.0.0.1")) == "10.0.0.1"

    def test_returns_empty_when_no_client(self):
        request = _request()
        request.client = None
        assert _get_ip(request) == ""


class TestAudit:
    def test_creates_audit_log(self, db_session, test_user):
        request = _request(session={"user_id": str(test_user.id)}, forwarded="192.168.1.1")

        audit(db_session, request, "professor_create", "id=123")
        db_session.commit()

        logs = db_session.query(AuditLog).all()
        assert len(logs) == 1
        assert logs[0].action == "professor_create"
        assert logs[0].detail == "id=123"
        assert logs[0].ip_address == "192.168.1.1"
        assert logs[0].user_id == test_user.id

    def test_explicit_user_id_wins(self, db_session, test_user):
        audit(db_session, _request(), "login", "email=test", user_id=test_user.id)
        db_session.commit()

        assert db_session.query(AuditLog).one().user_id == test_user.id

    def test_without_user(self, db_session):
        audit(db_session, _request(), "login_failed")
        db_session.commit()

        assert db_session.query(AuditLog).one().user_id is None

    def test_malformed_session_user_ignored(self, db_session):
        audit(db_session, _request(session={"user_id": "not-a-uuid"}), "logout")
        db_session.commit()

        assert db_session.query(AuditLog).one().user_id is None

    def test_detail_truncated(self, db_session):
        audit(db_session, _request(), "settings_update", "x" * 5000)
        db_session.commit()

        assert len(db_session.query(AuditLog).one().detail) == 2000


class TestGetRecentAuditLogs:
    def test_newest_first_and_scoped(self, db_session, test_user):
        base = datetime(2024, 3, 1, tzinfo=UTC)
        for i, action in enumerate(["login", "professor_create", "manual_reminder"]):
            db_session.add(AuditLog(user_id=test_user.id, action=action, created_at=base + timedelta(minutes=i)))
        db_session.add(AuditLog(user_id=None, action="login_failed", created_at=base))
        db_session.commit()

        logs = get_recent_audit_logs(db_session, test_user.id, limit=2)

        assert [log.action for log in logs] == ["manual_reminder", "professor_create"]
