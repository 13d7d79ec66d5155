"""
Scheduler service for booking course sections into room and teacher calendars.
"""

import logging
import threading
from datetime import date, timedelta
from typing import Any, Dict, List, Optional

from ..core.academics import Course, CourseSection, Session
from ..core.enums import EnrollmentStatus
from ..core.exceptions import InvalidArgumentError, NotFoundError
from ..core.facilities import Room
from ..core.people import Teacher
from ..core.registry import ScheduleRegistry
from ..core.schedule import PatternLike, ScheduleWindow
from .concurrency_manager import ConcurrencyManager

logger = logging.getLogger(__name__)


class SchedulerService:
    """Service for creating, moving and cancelling course sections."""

    def __init__(self, concurrency_manager: ConcurrencyManager, default_passing_grade: float = 0.0):
        self._concurrency_manager = concurrency_manager
        self._default_passing_grade = default_passing_grade
        self._sections: List[CourseSection] = []
        self._lock = threading.RLock()

    @property
    def sections(self) -> List[CourseSection]:
        with self._lock:
            return list(self._sections)

    def create_section(self, course: Course, room: Room, teacher: Teacher, session: Session,
                       window: ScheduleWindow, passing_grade: Optional[float] = None) -> CourseSection:
        """Book ``window`` for the room and the teacher and build the section.

        Either both calendars accept the window or neither is touched.
        """
        if passing_grade is None:
            passing_grade = self._default_passing_grade
        if room is None or teacher is None or window is None:
            raise InvalidArgumentError("room, teacher and window cannot be None")
        # Validates everything that does not depend on the calendars.
        section = CourseSection(course, room, teacher, session, window, passing_grade)
        self._concurrency_manager.book_all([room.schedule, teacher.schedule], window)
        with self._lock:
            self._sections.append(section)
        logger.info("Section of %s created in %s with %s", course, room, teacher)
        return section

    def reassign_room(self, section: CourseSection, room: Room) -> None:
        """Move a section to another room; it keeps the old room if the new one is busy."""
        if room is None:
            raise InvalidArgumentError("room cannot be None")
        with section.lock:
            self._require_live(section)
            self._concurrency_manager.transfer(section.room.schedule, room.schedule, section.window)
            section.room = room
            section.touch()
        logger.info("Section of %s moved to %s", section.course, room)

    def reassign_teacher(self, section: CourseSection, teacher: Teacher) -> None:
        """Hand a section to another teacher; nothing changes if they are busy."""
        if teacher is None:
            raise InvalidArgumentError("teacher cannot be None")
        with section.lock:
            self._require_live(section)
            self._concurrency_manager.transfer(section.teacher.schedule, teacher.schedule, section.window)
            section.teacher = teacher
            section.touch()
        logger.info("Section of %s assigned to %s", section.course, teacher)

    def reschedule_section(self, section: CourseSection, pattern: Optional[PatternLike] = None,
                           start_date: Optional[date] = None, end_date: Optional[date] = None,
                           duration: Optional[timedelta] = None) -> ScheduleWindow:
        """Change a section's meeting times if every participant is free at the new times."""
        window = section.window
        # The section lock keeps the participant list stable until the window is changed.
        with section.lock:
            self._require_live(section)
            candidate = ScheduleWindow(
                pattern if pattern is not None else window.pattern,
                duration if duration is not None else window.duration,
                start_date if start_date is not None else window.start_date,
                end_date if end_date is not None else window.end_date,
            )
            section.session.check_window(candidate)
            registries = self._participants(section)
            with self._concurrency_manager.hold(*registries):
                self._concurrency_manager.check_all(registries, candidate, ignore=window)
                window.set_pattern(candidate.pattern)
                window.set_date_range(candidate.start_date, candidate.end_date)
                window.set_duration(candidate.duration)
            for enrollment in section.enrollments:
                enrollment.attendance.sync()
            section.touch()
        logger.info("Section of %s rescheduled to %r", section.course, window)
        return window

    def cancel_section(self, section: CourseSection) -> None:
        """Release the section's window everywhere and withdraw its active enrollments."""
        with section.lock:
            with self._lock:
                if not any(held is section for held in self._sections):
                    raise NotFoundError("section is not managed by this scheduler",
                                        details={'section': section.id})
                self._sections = [held for held in self._sections if held is not section]
            section.cancel()
            released = self._concurrency_manager.release_all(self._participants(section), section.window)
            for enrollment in section.enrollments:
                if enrollment.status in (EnrollmentStatus.PLANNED, EnrollmentStatus.IN_PROGRESS):
                    enrollment.withdraw()
        logger.info("Section of %s cancelled, released from %d calendars", section.course, released)

    @staticmethod
    def _require_live(section: CourseSection) -> None:
        if section.cancelled:
            logger.warning("Section of %s is cancelled", section.course)
            raise NotFoundError("section has been cancelled", details={'section': section.id})

    def _participants(self, section: CourseSection) -> List[ScheduleRegistry]:
        registries = [section.room.schedule, section.teacher.schedule]
        for enrollment in section.enrollments:
            if enrollment.status in (EnrollmentStatus.PLANNED, EnrollmentStatus.IN_PROGRESS):
                registries.append(enrollment.student.schedule)
        return registries

    def get_room_sections(self, room: Room) -> List[CourseSection]:
        with self._lock:
            return [section for section in self._sections if section.room is room]

    def get_teacher_sections(self, teacher: Teacher) -> List[CourseSection]:
        with self._lock:
            return [section for section in self._sections if section.teacher is teacher]

    def get_statistics(self) -> Dict[str, Any]:
        """Get scheduling statistics."""
        with self._lock:
            sections = list(self._sections)
        stats = {
            'total_sections': len(sections),
            'total_meetings': sum(len(section.window.occurrences) for section in sections),
            'rooms_in_use': len({id(section.room) for section in sections}),
            'teachers_in_use': len({id(section.teacher) for section in sections}),
        }
        stats.update(self._concurrency_manager.get_statistics())
        return stats
