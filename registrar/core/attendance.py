import logging
from datetime import date
from typing import Dict, List, Tuple

from .enums import AttendanceStatus
from .exceptions import InvalidArgumentError, NotFoundError

logger = logging.getLogger(__name__)


class Attendance:
    """Attendance marks for every meeting date of a schedule window."""

    def __init__(self, window):
        if window is None:
            raise InvalidArgumentError("schedule window cannot be None")
        self.window = window
        self._records: Dict[date, AttendanceStatus] = {
            day: AttendanceStatus.NOT_RECORDED for day in window.occurrences
        }

    @property
    def records(self) -> List[Tuple[date, AttendanceStatus]]:
        return sorted(self._records.items())

    def status_on(self, day: date) -> AttendanceStatus:
        if day not in self._records:
            raise NotFoundError(f"{day} is not a meeting date", details={'date': day})
        return self._records[day]

    def assign_status(self, day: date, status: AttendanceStatus) -> None:
        if not isinstance(status, AttendanceStatus):
            raise InvalidArgumentError(f"status must be an AttendanceStatus, got {status!r}")
        if day not in self._records:
            logger.warning("Date %s not found in the attendance list", day)
            raise NotFoundError(f"{day} is not a meeting date", details={'date': day})
        self._records[day] = status

    def sync(self) -> None:
        """Follow the window after it was rescheduled, keeping marks for dates that remain."""
        previous = self._records
        self._records = {
            day: previous.get(day, AttendanceStatus.NOT_RECORDED) for day in self.window.occurrences
        }

    def count(self, status: AttendanceStatus) -> int:
        return sum(1 for value in self._records.values() if value is status)

    def rate(self) -> float:
        """Share of recorded dates the student attended (present or late)."""
        recorded = [value for value in self._records.values() if value is not AttendanceStatus.NOT_RECORDED]
        if not recorded:
            return 0.0
        attended = sum(1 for value in recorded if value in (AttendanceStatus.PRESENT, AttendanceStatus.LATE))
        return attended / len(recorded)
