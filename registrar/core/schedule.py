"""
Recurring weekly schedules bounded by a date range, and conflict detection
between them.
"""

import logging
from datetime import date, time, timedelta
from typing import Dict, Iterator, List, Mapping, Optional, Tuple, Union

from .abstract_entity import AbstractEntity
from .enums import Weekday
from .exceptions import InvalidArgumentError, InvalidRangeError, NotFoundError

logger = logging.getLogger(__name__)

PatternLike = Union["WeeklyPattern", Mapping[Weekday, time]]


def _weekday(value) -> Weekday:
    try:
        return Weekday.parse(value)
    except (ValueError, KeyError) as e:
        raise InvalidArgumentError(f"not a weekday: {value!r}", details={'weekday': value}) from e


class WeeklyPattern:
    """Weekday -> start time template; at most one entry per weekday."""

    def __init__(self, entries: Optional[Mapping[Weekday, time]] = None):
        self._entries: Dict[Weekday, time] = {}
        for weekday, start_time in (entries or {}).items():
            self.set(weekday, start_time)

    def set(self, weekday: Weekday, start_time: time) -> None:
        """Add a weekday or replace its start time."""
        if weekday is None or start_time is None:
            raise InvalidArgumentError("weekday and start time cannot be None",
                                       details={'weekday': weekday, 'start_time': start_time})
        weekday = _weekday(weekday)
        if not isinstance(start_time, time):
            raise InvalidArgumentError(f"start time must be a time of day, got {start_time!r}",
                                       details={'start_time': start_time})
        self._entries[weekday] = start_time

    def remove(self, weekday: Weekday) -> time:
        """Remove a weekday and return the start time it had."""
        weekday = _weekday(weekday)
        if weekday not in self._entries:
            raise NotFoundError(f"{weekday.name} is not part of the weekly pattern",
                                details={'weekday': weekday})
        return self._entries.pop(weekday)

    def get(self, weekday: Weekday, default: Optional[time] = None) -> Optional[time]:
        return self._entries.get(weekday, default)

    def items(self) -> List[Tuple[Weekday, time]]:
        return [(weekday, self._entries[weekday]) for weekday in self]

    def weekdays(self) -> List[Weekday]:
        return list(self)

    def copy(self) -> "WeeklyPattern":
        return WeeklyPattern(self._entries)

    def __iter__(self) -> Iterator[Weekday]:
        return iter(sorted(self._entries, key=lambda weekday: weekday.value))

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, weekday) -> bool:
        return weekday in self._entries

    def __getitem__(self, weekday: Weekday) -> time:
        return self._entries[weekday]

    def __eq__(self, other) -> bool:
        if isinstance(other, WeeklyPattern):
            return self._entries == other._entries
        if isinstance(other, Mapping):
            return self._entries == dict(other)
        return NotImplemented

    def __repr__(self) -> str:
        days = ", ".join(f"{weekday.name}@{start:%H:%M}" for weekday, start in self.items())
        return f"WeeklyPattern({days})"


def _as_pattern(pattern: PatternLike) -> WeeklyPattern:
    if pattern is None:
        raise InvalidArgumentError("weekly pattern cannot be None")
    if isinstance(pattern, WeeklyPattern):
        pattern = pattern.copy()
    elif isinstance(pattern, Mapping):
        pattern = WeeklyPattern(pattern)
    else:
        raise InvalidArgumentError(f"weekly pattern must be a mapping, got {type(pattern).__name__}")
    if not len(pattern):
        raise InvalidArgumentError("weekly pattern must contain at least one day",
                                   details={'field': 'pattern'})
    return pattern


def _check_duration(duration: timedelta) -> timedelta:
    if not isinstance(duration, timedelta):
        raise InvalidArgumentError(f"duration must be a timedelta, got {duration!r}",
                                   details={'field': 'duration', 'value': duration})
    if duration <= timedelta(0):
        raise InvalidArgumentError(f"duration must be positive, got {duration}",
                                   details={'field': 'duration', 'value': duration})
    return duration


def _check_range(start_date: date, end_date: date) -> None:
    if start_date is None or end_date is None:
        raise InvalidArgumentError("start date and end date cannot be None",
                                   details={'start_date': start_date, 'end_date': end_date})
    if start_date > end_date:
        raise InvalidRangeError(f"start date {start_date} is after end date {end_date}",
                                details={'start_date': start_date, 'end_date': end_date})


def generate_occurrences(pattern: WeeklyPattern, start_date: date, end_date: date) -> List[date]:
    """Every date in [start_date, end_date] whose weekday is in the pattern, ascending."""
    dates: List[date] = []
    week = timedelta(days=7)
    for weekday in pattern:
        current = start_date + timedelta(days=(weekday.value - start_date.weekday()) % 7)
        while current <= end_date:
            dates.append(current)
            current += week
    dates.sort()
    return dates


class ScheduleWindow(AbstractEntity):
    """A weekly pattern with a fixed meeting duration, bounded by a date range."""

    def __init__(self, pattern: PatternLike, duration: timedelta, start_date: date,
                 end_date: date, entity_id=None):
        super().__init__(entity_id)
        try:
            self._pattern = _as_pattern(pattern)
            self._duration = _check_duration(duration)
            _check_range(start_date, end_date)
        except (InvalidArgumentError, InvalidRangeError) as e:
            logger.warning("Rejected schedule window: %s", e.message)
            raise
        self._start_date = start_date
        self._end_date = end_date
        self._occurrences: Tuple[date, ...] = ()
        self._regenerate()
        logger.info("Schedule window initialized: %r", self)

    @property
    def pattern(self) -> WeeklyPattern:
        """Get a copy of the weekly pattern."""
        return self._pattern.copy()

    @property
    def duration(self) -> timedelta:
        return self._duration

    @property
    def start_date(self) -> date:
        return self._start_date

    @property
    def end_date(self) -> date:
        return self._end_date

    @property
    def occurrences(self) -> Tuple[date, ...]:
        """Get the concrete meeting dates, ascending."""
        return self._occurrences

    def set_pattern(self, pattern: PatternLike) -> None:
        """Replace the weekly pattern."""
        try:
            self._pattern = _as_pattern(pattern)
        except InvalidArgumentError as e:
            logger.warning("Rejected pattern for %r: %s", self, e.message)
            raise
        self._regenerate()
        logger.info("New weekly pattern set: %r", self._pattern)

    def set_start_date(self, start_date: date) -> None:
        self.set_date_range(start_date, self._end_date)

    def set_end_date(self, end_date: date) -> None:
        self.set_date_range(self._start_date, end_date)

    def set_date_range(self, start_date: date, end_date: date) -> None:
        """Move both ends of the window at once."""
        try:
            _check_range(start_date, end_date)
        except (InvalidArgumentError, InvalidRangeError) as e:
            logger.warning("Rejected date range for %r: %s", self, e.message)
            raise
        self._start_date = start_date
        self._end_date = end_date
        self._regenerate()
        logger.info("Date range set to %s..%s", start_date, end_date)

    def set_duration(self, duration: timedelta) -> None:
        try:
            self._duration = _check_duration(duration)
        except InvalidArgumentError as e:
            logger.warning("Rejected duration for %r: %s", self, e.message)
            raise
        self.touch()
        logger.info("New duration set: %s", duration)

    def add_day(self, weekday: Weekday, start_time: time) -> None:
        """Add a weekday to the pattern, replacing its time if already present."""
        try:
            self._pattern.set(weekday, start_time)
        except InvalidArgumentError as e:
            logger.warning("Rejected day %r@%r: %s", weekday, start_time, e.message)
            raise
        self._regenerate()
        logger.info("Day %s at %s added", _weekday(weekday).name, start_time)

    def remove_day(self, weekday: Weekday) -> None:
        weekday = _weekday(weekday)
        if weekday in self._pattern and len(self._pattern) == 1:
            logger.warning("Refusing to remove the last day %s from %r", weekday.name, self)
            raise InvalidArgumentError("weekly pattern must contain at least one day",
                                       details={'field': 'pattern', 'weekday': weekday})
        try:
            self._pattern.remove(weekday)
        except NotFoundError as e:
            logger.warning("Cannot remove day: %s", e.message)
            raise
        self._regenerate()
        logger.info("Day %s removed", weekday.name)

    def meeting_interval(self, weekday: Weekday) -> Optional[Tuple[timedelta, timedelta]]:
        """Get (start, end) offsets from midnight for a weekday, or None."""
        start_time = self._pattern.get(_weekday(weekday))
        if start_time is None:
            return None
        start = _offset(start_time)
        return start, start + self._duration

    def _regenerate(self) -> None:
        self._occurrences = tuple(generate_occurrences(self._pattern, self._start_date, self._end_date))
        self.touch()

    def __repr__(self) -> str:
        return (f"ScheduleWindow(id={self.id}, pattern={self._pattern!r}, duration={self._duration}, "
                f"start_date={self._start_date}, end_date={self._end_date})")


def _offset(start_time: time) -> timedelta:
    return timedelta(hours=start_time.hour, minutes=start_time.minute,
                     seconds=start_time.second, microseconds=start_time.microsecond)


def conflicting_weekday(a: ScheduleWindow, b: ScheduleWindow) -> Optional[Weekday]:
    """Get the first weekday on which two windows collide, or None."""
    if a.end_date < b.start_date or b.end_date < a.start_date:
        return None

    for weekday in Weekday:
        a_interval = a.meeting_interval(weekday)
        b_interval = b.meeting_interval(weekday)
        if a_interval is None or b_interval is None:
            continue
        a_start, a_end = a_interval
        b_start, b_end = b_interval
        # Closed intervals: a session ending exactly when the other begins still collides.
        if a_end >= b_start and b_end >= a_start:
            return weekday
    return None


def conflicts(a: ScheduleWindow, b: ScheduleWindow) -> bool:
    """Check whether two windows overlap in both date range and weekly time slot."""
    return conflicting_weekday(a, b) is not None
