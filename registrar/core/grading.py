"""
Grade values, weighted assessment grades and the per-enrollment grade ledger.
"""

import logging
import threading
from datetime import datetime
from typing import List, Optional, Tuple

from .enums import AssessmentType, GradeKind
from .exceptions import InvalidArgumentError, InvalidRangeError, WeightageExceededError

logger = logging.getLogger(__name__)

WEIGHTAGE_LIMIT = 100.0
FINAL_GRADE_TOTAL = 100.0
# Absorbs float noise such as 33.3 + 33.3 + 33.4
_TOLERANCE = 1e-9


def _number(value, field: str) -> float:
    if value is None or isinstance(value, bool) or not isinstance(value, (int, float)):
        raise InvalidArgumentError(f"{field} must be a number, got {value!r}",
                                   details={'field': field, 'value': value})
    return float(value)


class Grade:
    """Scored, total and passing marks of one graded item.

    ``kind`` decides whether the total can change: a final course grade is
    always out of 100.
    """

    def __init__(self, kind: GradeKind = GradeKind.ASSESSMENT, total_grade: Optional[float] = None,
                 scored_grade: float = 0.0, passing_grade: float = 0.0):
        if not isinstance(kind, GradeKind):
            raise InvalidArgumentError(f"grade kind must be a GradeKind, got {kind!r}")
        self._kind = kind
        if kind is GradeKind.FINAL_COURSE:
            if total_grade is not None and _number(total_grade, 'total_grade') != FINAL_GRADE_TOTAL:
                raise InvalidArgumentError("The total grade of a final course grade is always 100.",
                                           details={'field': 'total_grade', 'value': total_grade})
            self._total_grade = FINAL_GRADE_TOTAL
        else:
            total = _number(total_grade, 'total_grade')
            if total <= 0:
                raise InvalidArgumentError(f"total grade must be greater than 0, got {total_grade}",
                                           details={'field': 'total_grade', 'value': total_grade})
            self._total_grade = total
        self._scored_grade = 0.0
        self._passing_grade = 0.0
        self.scored_grade = scored_grade
        self.passing_grade = passing_grade

    @property
    def kind(self) -> GradeKind:
        return self._kind

    @property
    def total_grade(self) -> float:
        return self._total_grade

    @total_grade.setter
    def total_grade(self, value: float) -> None:
        if self._kind is GradeKind.FINAL_COURSE:
            logger.warning("Attempt to change the total of a final course grade to %s", value)
            raise InvalidArgumentError("The total grade of a final course grade is always 100.",
                                       details={'field': 'total_grade', 'value': value})
        total = _number(value, 'total_grade')
        if total <= 0 or total < self._scored_grade or total < self._passing_grade:
            raise InvalidArgumentError(
                f"total grade must be positive and cover scored ({self._scored_grade}) "
                f"and passing ({self._passing_grade}) grades, got {value}",
                details={'field': 'total_grade', 'value': value})
        self._total_grade = total
        logger.info("Total grade changed to %s", total)

    @property
    def scored_grade(self) -> float:
        return self._scored_grade

    @scored_grade.setter
    def scored_grade(self, value: float) -> None:
        self._scored_grade = self._in_range(value, 'scored_grade')

    @property
    def passing_grade(self) -> float:
        return self._passing_grade

    @passing_grade.setter
    def passing_grade(self, value: float) -> None:
        self._passing_grade = self._in_range(value, 'passing_grade')

    def _in_range(self, value, field: str) -> float:
        number = _number(value, field)
        if number < 0 or number > self._total_grade:
            logger.warning("%s %s outside 0..%s", field, value, self._total_grade)
            raise InvalidArgumentError(f"{field} should be between 0 and {self._total_grade:g}, got {value}",
                                       details={'field': field, 'value': value, 'total_grade': self._total_grade})
        return number

    @property
    def is_passing(self) -> bool:
        return self._scored_grade >= self._passing_grade

    def __eq__(self, other) -> bool:
        if not isinstance(other, Grade):
            return NotImplemented
        return (self._kind, self._scored_grade, self._total_grade, self._passing_grade) == \
            (other._kind, other._scored_grade, other._total_grade, other._passing_grade)

    def __hash__(self) -> int:
        return hash((self._kind, self._scored_grade, self._total_grade, self._passing_grade))

    def __repr__(self) -> str:
        return (f"Grade({self._kind.value}, scored={self._scored_grade:g}, "
                f"total={self._total_grade:g}, passing={self._passing_grade:g})")


class Assessment:
    """An assessment given in a course section."""

    def __init__(self, assessment_type: AssessmentType, description: str = "",
                 starts_at: Optional[datetime] = None, ends_at: Optional[datetime] = None,
                 duration_minutes: int = 0, entity_id=None):
        if not isinstance(assessment_type, AssessmentType):
            raise InvalidArgumentError(f"assessment type must be an AssessmentType, got {assessment_type!r}")
        if starts_at is not None and ends_at is not None and starts_at > ends_at:
            raise InvalidRangeError(f"assessment starts at {starts_at} after it ends at {ends_at}",
                                    details={'start': starts_at, 'end': ends_at})
        if duration_minutes is None or duration_minutes < 0:
            raise InvalidArgumentError(f"duration must not be negative, got {duration_minutes}",
                                       details={'field': 'duration_minutes', 'value': duration_minutes})
        self.id = entity_id
        self.assessment_type = assessment_type
        self.description = description
        self.starts_at = starts_at
        self.ends_at = ends_at
        self.duration_minutes = duration_minutes

    @property
    def is_bonus(self) -> bool:
        return self.assessment_type is AssessmentType.BONUS

    @property
    def requires_pass(self) -> bool:
        return self.assessment_type is AssessmentType.MANDATORY_PASS

    def __repr__(self) -> str:
        return f"Assessment({self.assessment_type.value}, {self.description!r})"


class AssessmentGrade:
    """The weighted grade a student earned on one assessment."""

    def __init__(self, assessment: Assessment, total_grade: float, weightage: float,
                 scored_grade: float = 0.0, passing_grade: float = 0.0):
        if assessment is None:
            raise InvalidArgumentError("assessment cannot be None", details={'field': 'assessment'})
        self._assessment = assessment
        self._weightage = self._check_weightage(weightage)
        self._grade = Grade(GradeKind.ASSESSMENT, total_grade, scored_grade, passing_grade)
        logger.info("New %s assessment grade created", assessment.assessment_type.value)

    @staticmethod
    def _check_weightage(weightage) -> float:
        value = _number(weightage, 'weightage')
        if value < 0 or value > WEIGHTAGE_LIMIT:
            logger.warning("Weightage %s outside 0..100", weightage)
            raise InvalidArgumentError("Weightage should be between 0 and 100",
                                       details={'field': 'weightage', 'value': weightage})
        return value

    @property
    def assessment(self) -> Assessment:
        return self._assessment

    @property
    def assessment_type(self) -> AssessmentType:
        return self._assessment.assessment_type

    @property
    def grade(self) -> Grade:
        return self._grade

    @property
    def weightage(self) -> float:
        return self._weightage

    @property
    def scored_grade(self) -> float:
        return self._grade.scored_grade

    @scored_grade.setter
    def scored_grade(self, value: float) -> None:
        self._grade.scored_grade = value

    @property
    def total_grade(self) -> float:
        return self._grade.total_grade

    @property
    def passing_grade(self) -> float:
        return self._grade.passing_grade

    @passing_grade.setter
    def passing_grade(self, value: float) -> None:
        self._grade.passing_grade = value

    @property
    def final_grade_contribution(self) -> float:
        return self._grade.scored_grade / self._grade.total_grade * self._weightage

    def is_passed(self) -> bool:
        """Only a mandatory-pass assessment can fail on its own."""
        return not (self._assessment.requires_pass and self._grade.scored_grade < self._grade.passing_grade)

    def __repr__(self) -> str:
        return f"AssessmentGrade({self._assessment!r}, weightage={self._weightage:g}, {self._grade!r})"


class GradeLedger:
    """Weighted assessment grades of one enrollment."""

    def __init__(self):
        self._grades: List[AssessmentGrade] = []
        self._lock = threading.RLock()

    @property
    def grades(self) -> Tuple[AssessmentGrade, ...]:
        with self._lock:
            return tuple(self._grades)

    def add_assessment_grade(self, grade: AssessmentGrade) -> None:
        """Append a grade unless it would overrun the non-bonus weightage budget."""
        if grade is None:
            raise InvalidArgumentError("assessment grade cannot be None")
        with self._lock:
            if grade.assessment.is_bonus:
                self._grades.append(grade)
                logger.info("Bonus grade added with the weightage of %s", grade.weightage)
                return
            budgeted = self._budgeted_total()
            if budgeted + grade.weightage > WEIGHTAGE_LIMIT + _TOLERANCE:
                error = WeightageExceededError(budgeted, grade.weightage, WEIGHTAGE_LIMIT)
                logger.warning(error.message)
                raise error
            self._grades.append(grade)
        logger.info("Assessment grade added with the weightage of %s", grade.weightage)

    def remove_assessment_grade(self, grade: AssessmentGrade) -> bool:
        with self._lock:
            for index, held in enumerate(self._grades):
                if held is grade:
                    del self._grades[index]
                    return True
        return False

    def current_weightage_total(self) -> float:
        """Sum of every held weightage, bonus grades included."""
        with self._lock:
            return sum(grade.weightage for grade in self._grades)

    def unassigned_weightage(self) -> float:
        """Budget still available to non-bonus grades."""
        with self._lock:
            return WEIGHTAGE_LIMIT - self._budgeted_total()

    def _budgeted_total(self) -> float:
        return sum(grade.weightage for grade in self._grades if not grade.assessment.is_bonus)

    def calculate_final_grade(self) -> float:
        """Sum of contributions, capped at 100."""
        with self._lock:
            total = sum(grade.final_grade_contribution for grade in self._grades)
        return min(FINAL_GRADE_TOTAL, total)

    def failed_mandatory(self) -> List[AssessmentGrade]:
        with self._lock:
            return [grade for grade in self._grades if not grade.is_passed()]

    def is_passed(self, passing_grade: float) -> bool:
        """A failed mandatory-pass assessment fails the whole ledger."""
        if self.failed_mandatory():
            return False
        return self.calculate_final_grade() >= passing_grade

    def __len__(self) -> int:
        with self._lock:
            return len(self._grades)

    def __iter__(self):
        return iter(self.grades)
