import logging
import threading

from .abstract_entity import AbstractEntity
from .enums import SessionType
from .exceptions import InvalidArgumentError, InvalidRangeError, NotFoundError

logger = logging.getLogger(__name__)


def _require(**values):
    missing = [name for name, value in values.items() if value is None]
    if missing:
        raise InvalidArgumentError(f"{', '.join(missing)} cannot be None", details={'missing': missing})


def check_passing_grade(passing_grade):
    if passing_grade is None or isinstance(passing_grade, bool) or not isinstance(passing_grade, (int, float)):
        raise InvalidArgumentError(f"passing grade must be a number, got {passing_grade!r}",
                                   details={'field': 'passing_grade', 'value': passing_grade})
    if passing_grade < 0 or passing_grade > 100:
        raise InvalidArgumentError(f"passing grade should be between 0 and 100, got {passing_grade}",
                                   details={'field': 'passing_grade', 'value': passing_grade})
    return float(passing_grade)


class Course(AbstractEntity):
    def __init__(self, code, name, entity_id=None):
        super().__init__(entity_id)
        self.code = code
        self.name = name

    def __repr__(self):
        return f"Course({self.code})"


class SchoolYear(AbstractEntity):
    def __init__(self, start_date, end_date, school=None, entity_id=None):
        super().__init__(entity_id)
        _require(start_date=start_date, end_date=end_date)
        if start_date.year != end_date.year:
            raise InvalidRangeError("start date and end date must have the same year",
                                    details={'start_date': start_date, 'end_date': end_date})
        if start_date > end_date:
            raise InvalidRangeError("start date should be before end date",
                                    details={'start_date': start_date, 'end_date': end_date})
        self.school = school
        self.start_date = start_date
        self.end_date = end_date

    @property
    def year(self):
        return self.start_date.year


class Session(AbstractEntity):
    def __init__(self, session_type, school_year, start_date, end_date, entity_id=None):
        super().__init__(entity_id)
        _require(session_type=session_type, school_year=school_year, start_date=start_date, end_date=end_date)
        if not isinstance(session_type, SessionType):
            raise InvalidArgumentError(f"session type must be a SessionType, got {session_type!r}")
        if start_date.year != school_year.year or end_date.year != school_year.year:
            raise InvalidRangeError("start date and end date must be in the same year as the school year",
                                    details={'start_date': start_date, 'end_date': end_date,
                                             'year': school_year.year})
        if start_date > end_date:
            raise InvalidRangeError("start date should be before end date",
                                    details={'start_date': start_date, 'end_date': end_date})
        self.session_type = session_type
        self.school_year = school_year
        self.start_date = start_date
        self.end_date = end_date

    def contains(self, window):
        return self.start_date <= window.start_date and window.end_date <= self.end_date

    def check_window(self, window):
        """Reject a schedule window that runs outside the session."""
        if not self.contains(window):
            logger.warning("Window %s..%s falls outside session %s..%s",
                           window.start_date, window.end_date, self.start_date, self.end_date)
            raise InvalidRangeError(
                "schedule must not start before or end after its session",
                details={'start_date': window.start_date, 'end_date': window.end_date,
                         'session_start': self.start_date, 'session_end': self.end_date})


class CourseSection(AbstractEntity):
    """A scheduled offering of a course.

    Built by ``SchedulerService.create_section`` once the room and teacher
    calendars accepted the window.
    """
    def __init__(self, course, room, teacher, session, window, passing_grade=0.0, entity_id=None):
        super().__init__(entity_id)
        _require(course=course, room=room, teacher=teacher, session=session, window=window)
        session.check_window(window)
        self.course = course
        self.room = room
        self.teacher = teacher
        self.session = session
        self.window = window
        self.passing_grade = check_passing_grade(passing_grade)
        self._enrollments = []
        self._cancelled = False
        # Serializes enrollment, rescheduling and cancellation of this section.
        self.lock = threading.RLock()

    @property
    def enrollments(self):
        return tuple(self._enrollments)

    @property
    def cancelled(self):
        return self._cancelled

    def cancel(self):
        self._cancelled = True
        self.touch()

    def set_passing_grade(self, passing_grade):
        self.passing_grade = check_passing_grade(passing_grade)
        self.touch()

    def add_enrollment(self, enrollment):
        if enrollment is None:
            raise InvalidArgumentError("enrollment cannot be None")
        self._enrollments.append(enrollment)
        self.touch()

    def remove_enrollment(self, enrollment):
        for index, held in enumerate(self._enrollments):
            if held is enrollment:
                del self._enrollments[index]
                self.touch()
                return
        raise NotFoundError("enrollment not found in the section", details={'section': self.id})

    def is_passed(self, enrollment):
        if not any(held is enrollment for held in self._enrollments):
            raise NotFoundError("enrollment not found in the section", details={'section': self.id})
        return enrollment.is_passed()

    def __repr__(self):
        return f"CourseSection({self.course!r}, room={self.room!r}, teacher={self.teacher!r})"
