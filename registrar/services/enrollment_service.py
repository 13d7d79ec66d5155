"""
Enrollment service: student calendars, grade recording and course completion.
"""

import logging
import threading
from typing import Any, Dict, List

from ..core.academics import CourseSection
from ..core.enrollment import Enrollment
from ..core.enums import EnrollmentStatus, PassStatus
from ..core.exceptions import InvalidArgumentError, NotFoundError
from ..core.grading import AssessmentGrade
from ..core.people import Student
from .concurrency_manager import ConcurrencyManager

logger = logging.getLogger(__name__)


class EnrollmentService:
    """Service for managing student enrollments."""

    def __init__(self, concurrency_manager: ConcurrencyManager):
        self._concurrency_manager = concurrency_manager
        self._enrollments: List[Enrollment] = []
        self._lock = threading.RLock()

    def enroll_student(self, student: Student, section: CourseSection) -> Enrollment:
        """Enroll a student; fails with ScheduleConflictError if their calendar is taken."""
        if student is None or section is None:
            raise InvalidArgumentError("student and section cannot be None")
        # Section lock first, then the student's calendar; rescheduling takes them in the same order.
        with section.lock, self._concurrency_manager.hold(student.schedule):
            if section.cancelled:
                logger.warning("Enrollment of %s rejected: %s is cancelled", student, section)
                raise NotFoundError("section has been cancelled", details={'section': section.id})
            for enrollment in self.get_enrollments(student):
                if enrollment.course_section is section and enrollment.status is not EnrollmentStatus.WITHDRAWN:
                    logger.info("%s already enrolled in %s", student, section)
                    return enrollment
            self._concurrency_manager.book_all([student.schedule], section.window)
            enrollment = Enrollment(student, section)
            section.add_enrollment(enrollment)
            with self._lock:
                self._enrollments.append(enrollment)
        logger.info("%s enrolled in %s", student, section)
        return enrollment

    def drop_student(self, enrollment: Enrollment) -> None:
        """Withdraw an enrollment and free the student's calendar."""
        self._require_managed(enrollment)
        section = enrollment.course_section
        with section.lock:
            enrollment.withdraw()
            self._concurrency_manager.release_all([enrollment.student.schedule], section.window)
            section.remove_enrollment(enrollment)
        logger.info("%s dropped from %s", enrollment.student, enrollment.course_section)

    def start(self, enrollment: Enrollment) -> None:
        self._require_managed(enrollment)
        enrollment.start()

    def record_grade(self, enrollment: Enrollment, grade: AssessmentGrade) -> None:
        self._require_managed(enrollment)
        enrollment.add_assessment_grade(grade)

    def complete(self, enrollment: Enrollment) -> bool:
        """Complete a course; returns False and keeps it in progress when not passed."""
        self._require_managed(enrollment)
        return enrollment.complete()

    def _require_managed(self, enrollment: Enrollment) -> None:
        with self._lock:
            if not any(held is enrollment for held in self._enrollments):
                raise NotFoundError("enrollment is not managed by this service",
                                    details={'enrollment': getattr(enrollment, 'id', None)})

    def get_enrollments(self, student: Student) -> List[Enrollment]:
        with self._lock:
            return [enrollment for enrollment in self._enrollments if enrollment.student is student]

    def get_section_enrollments(self, section: CourseSection) -> List[Enrollment]:
        with self._lock:
            return [enrollment for enrollment in self._enrollments if enrollment.course_section is section]

    def get_statistics(self) -> Dict[str, Any]:
        """Get enrollment statistics."""
        with self._lock:
            enrollments = list(self._enrollments)
        by_status = {status.value: 0 for status in EnrollmentStatus}
        for enrollment in enrollments:
            by_status[enrollment.status.value] += 1
        return {
            'total_enrollments': len(enrollments),
            'by_status': by_status,
            'failed': sum(1 for enrollment in enrollments if enrollment.pass_status is PassStatus.FAILED),
        }
