from datetime import date, time, timedelta

import pytest

from registrar.core import (
    InvalidArgumentError, InvalidRangeError, NotFoundError, ScheduleWindow, WeeklyPattern, Weekday,
)
from registrar.core.schedule import generate_occurrences

from conftest import HOUR, window


def test_occurrences_are_the_mondays_in_range(monday_nine):
    assert monday_nine.occurrences == (
        date(2020, 1, 6), date(2020, 1, 13), date(2020, 1, 20), date(2020, 1, 27),
    )


def test_single_day_range_on_pattern_weekday():
    w = window({Weekday.MONDAY: "09:00"}, start=date(2020, 1, 6), end=date(2020, 1, 6))
    assert w.occurrences == (date(2020, 1, 6),)


def test_single_day_range_off_pattern_is_empty():
    w = window({Weekday.TUESDAY: "09:00"}, start=date(2020, 1, 6), end=date(2020, 1, 6))
    assert w.occurrences == ()


def test_occurrences_match_day_by_day_scan():
    pattern = WeeklyPattern({Weekday.TUESDAY: time(8), Weekday.FRIDAY: time(14), Weekday.SUNDAY: time(10)})
    start, end = date(2020, 2, 27), date(2020, 5, 3)
    expected = []
    day = start
    while day <= end:
        if Weekday.of(day) in pattern:
            expected.append(day)
        day += timedelta(days=1)
    assert generate_occurrences(pattern, start, end) == expected


def test_start_after_end_is_rejected():
    with pytest.raises(InvalidRangeError):
        window({Weekday.MONDAY: "09:00"}, start=date(2020, 2, 1), end=date(2020, 1, 1))


def test_empty_pattern_is_rejected():
    with pytest.raises(InvalidArgumentError):
        ScheduleWindow({}, HOUR, date(2020, 1, 6), date(2020, 1, 27))


@pytest.mark.parametrize("duration", [timedelta(0), timedelta(minutes=-5), 60])
def test_non_positive_duration_is_rejected(duration):
    with pytest.raises(InvalidArgumentError):
        ScheduleWindow({Weekday.MONDAY: time(9)}, duration, date(2020, 1, 6), date(2020, 1, 27))


def test_setting_end_date_recomputes(monday_nine):
    monday_nine.set_end_date(date(2020, 1, 13))
    assert monday_nine.occurrences == (date(2020, 1, 6), date(2020, 1, 13))


def test_setting_start_date_past_end_leaves_window_unchanged(monday_nine):
    before = monday_nine.occurrences
    with pytest.raises(InvalidRangeError):
        monday_nine.set_start_date(date(2020, 2, 1))
    assert monday_nine.start_date == date(2020, 1, 6)
    assert monday_nine.occurrences == before


def test_set_pattern_recomputes(monday_nine):
    monday_nine.set_pattern({Weekday.TUESDAY: time(9)})
    assert monday_nine.occurrences == (date(2020, 1, 7), date(2020, 1, 14), date(2020, 1, 21))


def test_set_pattern_rejects_empty(monday_nine):
    with pytest.raises(InvalidArgumentError):
        monday_nine.set_pattern(WeeklyPattern())
    assert Weekday.MONDAY in monday_nine.pattern


def test_add_day_replaces_existing_time(monday_nine):
    monday_nine.add_day(Weekday.MONDAY, time(11))
    assert len(monday_nine.pattern) == 1
    assert monday_nine.pattern[Weekday.MONDAY] == time(11)


def test_add_day_is_idempotent(monday_nine):
    monday_nine.add_day(Weekday.FRIDAY, time(9))
    first = monday_nine.occurrences
    monday_nine.add_day(Weekday.FRIDAY, time(9))
    assert monday_nine.occurrences == first
    assert len(first) == 7


def test_remove_day(monday_nine):
    monday_nine.add_day(Weekday.FRIDAY, time(9))
    monday_nine.remove_day(Weekday.MONDAY)
    assert monday_nine.occurrences == (date(2020, 1, 10), date(2020, 1, 17), date(2020, 1, 24))


def test_remove_missing_day(monday_nine):
    with pytest.raises(NotFoundError):
        monday_nine.remove_day(Weekday.SATURDAY)


def test_remove_last_day_is_rejected(monday_nine):
    with pytest.raises(InvalidArgumentError):
        monday_nine.remove_day(Weekday.MONDAY)
    assert len(monday_nine.occurrences) == 4


def test_pattern_property_is_a_copy(monday_nine):
    pattern = monday_nine.pattern
    pattern.set(Weekday.TUESDAY, time(9))
    assert Weekday.TUESDAY not in monday_nine.pattern
    assert len(monday_nine.occurrences) == 4


def test_caller_pattern_is_copied():
    pattern = WeeklyPattern({Weekday.MONDAY: time(9)})
    w = ScheduleWindow(pattern, HOUR, date(2020, 1, 6), date(2020, 1, 27))
    pattern.set(Weekday.TUESDAY, time(9))
    assert len(w.occurrences) == 4


def test_weekly_pattern_iterates_monday_first():
    pattern = WeeklyPattern({Weekday.SUNDAY: time(9), Weekday.MONDAY: time(8)})
    assert pattern.weekdays() == [Weekday.MONDAY, Weekday.SUNDAY]


def test_weekly_pattern_accepts_weekday_names():
    pattern = WeeklyPattern()
    pattern.set("friday", time(9))
    assert Weekday.FRIDAY in pattern
    with pytest.raises(InvalidArgumentError):
        pattern.set("someday", time(9))


def test_mutation_bumps_version(monday_nine):
    version = monday_nine.version
    monday_nine.set_duration(timedelta(minutes=90))
    assert monday_nine.version == version + 1
    assert monday_nine.duration == timedelta(minutes=90)
