from datetime import date, timedelta

import pytest

from registrar.core import Weekday, conflicting_weekday, conflicts

from conftest import window


def test_touching_sessions_conflict():
    a = window({Weekday.MONDAY: "09:00"})
    b = window({Weekday.MONDAY: "10:00"})
    assert conflicts(a, b)
    assert conflicting_weekday(a, b) is Weekday.MONDAY


def test_gap_between_sessions_is_not_a_conflict():
    a = window({Weekday.MONDAY: "09:00"})
    b = window({Weekday.MONDAY: "10:01"})
    assert not conflicts(a, b)


def test_different_weekdays_never_conflict():
    a = window({Weekday.MONDAY: "09:00"})
    b = window({Weekday.TUESDAY: "09:00"})
    assert not conflicts(a, b)


def test_disjoint_date_ranges_never_conflict():
    a = window({Weekday.MONDAY: "09:00"}, start=date(2020, 1, 6), end=date(2020, 1, 27))
    b = window({Weekday.MONDAY: "09:00"}, start=date(2020, 1, 28), end=date(2020, 3, 2))
    assert not conflicts(a, b)


def test_ranges_sharing_one_day_conflict():
    a = window({Weekday.MONDAY: "09:00"}, start=date(2020, 1, 6), end=date(2020, 1, 27))
    b = window({Weekday.MONDAY: "09:30"}, start=date(2020, 1, 27), end=date(2020, 3, 2))
    assert conflicts(a, b)


def test_longer_session_swallows_shorter_one():
    a = window({Weekday.FRIDAY: "08:00"}, duration=timedelta(hours=4))
    b = window({Weekday.FRIDAY: "10:00"}, duration=timedelta(minutes=15))
    assert conflicts(a, b)


def test_conflict_found_on_any_shared_weekday():
    a = window({Weekday.MONDAY: "09:00", Weekday.THURSDAY: "14:00"})
    b = window({Weekday.MONDAY: "15:00", Weekday.THURSDAY: "14:30"})
    assert conflicting_weekday(a, b) is Weekday.THURSDAY


def test_session_running_past_midnight_does_not_wrap():
    a = window({Weekday.SATURDAY: "23:00"}, duration=timedelta(hours=2))
    b = window({Weekday.SATURDAY: "00:30"})
    assert not conflicts(a, b)


CASES = [
    ({Weekday.MONDAY: "09:00"}, {Weekday.MONDAY: "10:00"}),
    ({Weekday.MONDAY: "09:00"}, {Weekday.MONDAY: "11:00"}),
    ({Weekday.MONDAY: "09:00", Weekday.TUESDAY: "13:00"}, {Weekday.TUESDAY: "12:00"}),
    ({Weekday.SUNDAY: "07:45"}, {Weekday.SUNDAY: "06:00", Weekday.MONDAY: "07:45"}),
    ({Weekday.WEDNESDAY: "09:00"}, {Weekday.THURSDAY: "09:00"}),
]


@pytest.mark.parametrize("first,second", CASES)
def test_conflicts_is_symmetric(first, second):
    a, b = window(first), window(second)
    assert conflicts(a, b) == conflicts(b, a)


def test_conflicts_is_symmetric_with_unequal_durations():
    a = window({Weekday.MONDAY: "09:00"}, duration=timedelta(hours=3))
    b = window({Weekday.MONDAY: "11:30"}, duration=timedelta(minutes=10))
    assert conflicts(a, b) and conflicts(b, a)
