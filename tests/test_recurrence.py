"""Tests da expansão semanal / Weekly expansion tests."""

import pytest

from lab_scheduler.errors import ValidationError
from lab_scheduler.models.booking import RecurringFrequency
from lab_scheduler.services.recurrence import expand

from tests.factories import make_request


def weekly(date: str, end: str | None):
    return make_request(
        date=date,
        is_recurring=True,
        recurring_frequency=RecurringFrequency.WEEKLY,
        recurring_end_date=end,
    )


def test_two_weeks_gives_parent_and_two_children():
    expansion = expand(weekly("2024-03-04", "2024-03-18"))
    assert expansion.total == 3
    assert expansion.parent.date == "2024-03-04"
    assert [c.date for c in expansion.children] == ["2024-03-11", "2024-03-18"]
    assert not expansion.truncated


def test_children_are_plain_copies_of_the_parent():
    expansion = expand(weekly("2024-03-04", "2024-03-18"))
    for child in expansion.children:
        assert child.is_recurring is False
        assert child.grade_id == expansion.parent.grade_id
        assert child.time_slot_id == expansion.parent.time_slot_id
        assert child.content == expansion.parent.content
    assert expansion.parent.is_recurring is True
    assert expansion.parent.recurring_parent_id is None


def test_linked_children_point_to_parent():
    expansion = expand(weekly("2024-03-04", "2024-03-18"))
    linked = expansion.linked_children(42)
    assert [c.recurring_parent_id for c in linked] == [42, 42]
    # Os rascunhos originais não mudam / Original drafts are untouched
    assert all(c.recurring_parent_id is None for c in expansion.children)


def test_end_date_not_on_a_week_boundary():
    expansion = expand(weekly("2024-03-04", "2024-03-20"))
    assert [c.date for c in expansion.children] == ["2024-03-11", "2024-03-18"]


def test_crosses_month_and_year():
    expansion = expand(weekly("2024-12-23", "2025-01-06"))
    assert [c.date for c in expansion.children] == ["2024-12-30", "2025-01-06"]


def test_no_end_date_gives_only_parent():
    expansion = expand(weekly("2024-03-04", None))
    assert expansion.total == 1
    assert expansion.children == []


def test_end_before_start_gives_only_parent():
    expansion = expand(weekly("2024-03-18", "2024-03-04"))
    assert expansion.total == 1


def test_end_equal_to_start_gives_only_parent():
    expansion = expand(weekly("2024-03-04", "2024-03-04"))
    assert expansion.total == 1


def test_not_recurring_ignores_end_date():
    request = make_request(recurring_end_date="2024-04-01")
    assert expand(request).total == 1


def test_recurring_with_frequency_none_is_single():
    request = make_request(is_recurring=True, recurring_end_date="2024-04-01")
    assert expand(request).total == 1


def test_cap_truncates_series():
    expansion = expand(weekly("2024-01-01", "2030-12-31"), max_occurrences=5)
    assert expansion.total == 5
    assert expansion.truncated
    assert expansion.children[-1].date == "2024-01-29"


def test_series_exactly_at_cap_is_not_truncated():
    expansion = expand(weekly("2024-01-01", "2024-01-29"), max_occurrences=5)
    assert expansion.total == 5
    assert not expansion.truncated


def test_default_cap_is_two_school_years():
    expansion = expand(weekly("2024-01-01", "2030-12-31"))
    assert expansion.total == 104
    assert expansion.truncated


def test_nonexistent_date_is_rejected():
    with pytest.raises(ValidationError):
        expand(weekly("2024-02-30", "2024-03-30"))


def test_nonexistent_end_date_is_rejected():
    with pytest.raises(ValidationError):
        expand(weekly("2024-02-01", "2024-02-31"))


@pytest.mark.parametrize("cap", [0, -3])
def test_non_positive_cap_is_rejected(cap):
    with pytest.raises(ValidationError):
        expand(weekly("2024-03-04", "2024-03-18"), max_occurrences=cap)


def test_cap_of_one_keeps_only_parent():
    expansion = expand(weekly("2024-03-04", "2024-03-18"), max_occurrences=1)
    assert expansion.total == 1
    assert expansion.truncated
