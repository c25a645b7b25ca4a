"""Tests dos modelos / Model tests."""

from lab_scheduler.models.audit import AuditLog
from lab_scheduler.models.booking import Booking, RecurringFrequency
from lab_scheduler.models.user import User, UserRole


def test_booking_repr():
    b = Booking(id=1, grade_id=3, grade_class="A", date="2024-03-04", time_slot_id=1)
    assert "2024-03-04" in repr(b)
    assert "3A" in repr(b)


def test_booking_period_follows_grade():
    assert Booking(grade_id=1).period == "afternoon"
    assert Booking(grade_id=6).period == "morning"
    assert Booking(grade_id=12).period == "night"
    assert Booking(grade_id=99).period is None


def test_user_repr():
    u = User(username="maria", role=UserRole.TEACHER)
    assert repr(u) == "<User maria (teacher)>"


def test_audit_repr():
    log = AuditLog(entity_type="Booking", entity_id=5, action="DELETE")
    assert "DELETE" in repr(log)


def test_enums():
    assert UserRole.ADMIN.value == "admin"
    assert UserRole.COORDINATOR.value == "coordinator"
    assert RecurringFrequency.WEEKLY.value == "weekly"
    assert [r.value for r in UserRole] == ["admin", "teacher", "coordinator"]
