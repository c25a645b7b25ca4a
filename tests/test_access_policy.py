"""Tests da política de acesso / Access policy tests."""

from types import SimpleNamespace

import pytest

from lab_scheduler.errors import PermissionDenied
from lab_scheduler.models.user import UserRole
from lab_scheduler.services.access_policy import (
    Action,
    Principal,
    can_act,
    can_view,
    ensure_can_act,
    parse_assigned_class,
)

WRITES = [Action.CREATE, Action.EDIT, Action.DELETE, Action.COMPLETE]


def booking(grade_id: int, grade_class: str):
    return SimpleNamespace(grade_id=grade_id, grade_class=grade_class)


def test_parse_assigned_class():
    assert parse_assigned_class("3A") == (3, "A")
    assert parse_assigned_class("9C") == (9, "C")
    assert parse_assigned_class("3a") == (3, "A")
    assert parse_assigned_class("1EM-A") == (10, "A")
    assert parse_assigned_class("1EM-C") == (11, "C")
    assert parse_assigned_class("3EM-B") == (13, "B")


@pytest.mark.parametrize("code", [None, "", "A3", "ABC", "33"])
def test_parse_assigned_class_invalid(code):
    assert parse_assigned_class(code) is None


@pytest.mark.parametrize("action", list(Action))
def test_admin_can_do_everything(admin, action):
    assert can_act(admin, action, booking(8, "C"))


@pytest.mark.parametrize("action", WRITES)
def test_teacher_acts_on_own_class(teacher, action):
    assert can_act(teacher, action, booking(3, "A"))


@pytest.mark.parametrize("action", WRITES)
def test_teacher_cannot_act_on_other_class(teacher, action):
    assert not can_act(teacher, action, booking(3, "B"))
    assert not can_act(teacher, action, booking(4, "A"))


@pytest.mark.parametrize("action", WRITES)
def test_coordinator_is_read_only(coordinator, action):
    assert not can_act(coordinator, action, booking(3, "A"))


def test_everyone_can_view(admin, teacher, coordinator):
    for principal in (admin, teacher, coordinator):
        assert can_act(principal, Action.VIEW, booking(5, "B"))
        assert can_view(principal)


def test_teacher_without_class_cannot_write():
    principal = Principal(id=9, role=UserRole.TEACHER, assigned_class=None)
    assert not can_act(principal, Action.CREATE, booking(3, "A"))
    assert can_view(principal)


def test_high_school_teacher():
    principal = Principal(id=9, role=UserRole.TEACHER, assigned_class="1EM-A")
    assert can_act(principal, Action.EDIT, booking(10, "A"))
    assert not can_act(principal, Action.EDIT, booking(1, "A"))
    assert not can_act(principal, Action.EDIT, booking(11, "A"))


def test_ensure_can_act_raises_with_message(other_teacher):
    with pytest.raises(PermissionDenied) as exc:
        ensure_can_act(other_teacher, Action.DELETE, booking(3, "A"))
    assert exc.value.status_code == 403
    assert "excluir" in exc.value.message


def test_ensure_can_act_allows(teacher):
    ensure_can_act(teacher, Action.COMPLETE, booking(3, "A"))


def test_principal_from_user():
    user = SimpleNamespace(id=7, role=UserRole.TEACHER, assigned_class="2B", username="ana")
    principal = Principal.from_user(user)
    assert principal == Principal(id=7, role=UserRole.TEACHER, assigned_class="2B", name="ana")
