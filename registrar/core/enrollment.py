"""
A student's enrollment in a course section: status lifecycle, grade ledger,
final grade and attendance.
"""

import logging
import threading
from typing import Tuple

from .abstract_entity import AbstractEntity
from .attendance import Attendance
from .enums import EnrollmentStatus, GradeKind, PassStatus
from .exceptions import InvalidArgumentError
from .grading import AssessmentGrade, Grade, GradeLedger

logger = logging.getLogger(__name__)

_TRANSITIONS = {
    EnrollmentStatus.PLANNED: {EnrollmentStatus.IN_PROGRESS, EnrollmentStatus.WITHDRAWN},
    EnrollmentStatus.IN_PROGRESS: {EnrollmentStatus.COMPLETED, EnrollmentStatus.WITHDRAWN},
    EnrollmentStatus.COMPLETED: set(),
    EnrollmentStatus.WITHDRAWN: set(),
}

_GRADEABLE = (EnrollmentStatus.PLANNED, EnrollmentStatus.IN_PROGRESS)


class Enrollment(AbstractEntity):
    """Enrollment of one student in one course section.

    Status moves PLANNED -> IN_PROGRESS -> COMPLETED | WITHDRAWN. Completion
    only succeeds when the student passed; otherwise the enrollment stays
    IN_PROGRESS and its pass status records the failure.
    """

    def __init__(self, student, course_section, entity_id=None):
        super().__init__(entity_id)
        if student is None or course_section is None:
            logger.warning("Enrollment rejected: student and course section are required")
            raise InvalidArgumentError("student and course section cannot be None")
        self._student = student
        self._course_section = course_section
        self._status = EnrollmentStatus.PLANNED
        self._pass_status = PassStatus.NOT_DECIDED
        self._ledger = GradeLedger()
        self._final_grade = Grade(GradeKind.FINAL_COURSE, passing_grade=course_section.passing_grade)
        self._attendance = Attendance(course_section.window)
        self._lock = threading.RLock()
        logger.info("New enrollment created for %s", student)

    @property
    def student(self):
        return self._student

    @property
    def course_section(self):
        return self._course_section

    @property
    def status(self) -> EnrollmentStatus:
        return self._status

    @property
    def pass_status(self) -> PassStatus:
        return self._pass_status

    @property
    def ledger(self) -> GradeLedger:
        return self._ledger

    @property
    def assessment_grades(self) -> Tuple[AssessmentGrade, ...]:
        return self._ledger.grades

    @property
    def final_grade(self) -> Grade:
        return self._final_grade

    @property
    def attendance(self) -> Attendance:
        return self._attendance

    def _transition(self, target: EnrollmentStatus) -> None:
        if target not in _TRANSITIONS[self._status]:
            logger.warning("Invalid enrollment transition %s -> %s", self._status.value, target.value)
            raise InvalidArgumentError(
                f"cannot move enrollment from {self._status.value} to {target.value}",
                error_code="invalid_transition",
                details={'from': self._status, 'to': target})
        self._status = target
        self.touch()
        logger.info("Enrollment of %s is now %s", self._student, target.value)

    def start(self) -> None:
        with self._lock:
            self._transition(EnrollmentStatus.IN_PROGRESS)

    def withdraw(self) -> None:
        with self._lock:
            self._transition(EnrollmentStatus.WITHDRAWN)

    def add_assessment_grade(self, grade: AssessmentGrade) -> None:
        with self._lock:
            if self._status not in _GRADEABLE:
                logger.warning("Grade rejected for %s enrollment", self._status.value)
                raise InvalidArgumentError(
                    f"cannot add grades to a {self._status.value} enrollment",
                    error_code="invalid_transition", details={'status': self._status})
            self._ledger.add_assessment_grade(grade)
            self.touch()

    def current_weightage_total(self) -> float:
        return self._ledger.current_weightage_total()

    def unassigned_weightage(self) -> float:
        return self._ledger.unassigned_weightage()

    def calculate_final_grade(self) -> float:
        return self._ledger.calculate_final_grade()

    def commit_final_grade(self) -> float:
        """Store the calculated final grade; returns the stored value."""
        with self._lock:
            value = self._ledger.calculate_final_grade()
            self._final_grade.passing_grade = self._course_section.passing_grade
            self._final_grade.scored_grade = value
            self.touch()
        logger.info("Final grade %.2f committed for %s", value, self._student)
        return value

    @property
    def final_course_grade(self) -> float:
        return self._final_grade.scored_grade

    def is_passed(self) -> bool:
        return self._ledger.is_passed(self._course_section.passing_grade)

    def complete(self) -> bool:
        """Finish the course; returns whether the enrollment reached COMPLETED."""
        with self._lock:
            if self._status is not EnrollmentStatus.IN_PROGRESS:
                logger.warning("Cannot complete a %s enrollment", self._status.value)
                raise InvalidArgumentError(
                    f"only an in-progress enrollment can be completed, not a {self._status.value} one",
                    error_code="invalid_transition",
                    details={'from': self._status, 'to': EnrollmentStatus.COMPLETED})
            self.commit_final_grade()
            if self.is_passed():
                self._pass_status = PassStatus.PASSED
                self._transition(EnrollmentStatus.COMPLETED)
                return True
            self._pass_status = PassStatus.FAILED
            self.touch()
        logger.info("Enrollment of %s not completed: course not passed", self._student)
        return False

    def __repr__(self) -> str:
        return f"Enrollment({self._student!r}, {self._course_section!r}, {self._status.value})"
