"""
Enumerations and constants for the registrar core.
"""

from datetime import date
from enum import Enum


class Weekday(Enum):
    """Days of the week, valued like ``date.weekday()``."""
    MONDAY = 0
    TUESDAY = 1
    WEDNESDAY = 2
    THURSDAY = 3
    FRIDAY = 4
    SATURDAY = 5
    SUNDAY = 6

    @classmethod
    def of(cls, day: date) -> "Weekday":
        """Get the weekday a calendar date falls on."""
        return cls(day.weekday())

    @classmethod
    def parse(cls, value) -> "Weekday":
        """Accept a Weekday, its name (any case) or its number."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            key = value.strip().upper()
            if key in cls.__members__:
                return cls[key]
            if key.isdigit():
                return cls(int(key))
            raise ValueError(f"Unknown weekday: {value!r}")
        return cls(value)


class OwnerKind(Enum):
    """Kinds of calendar owners that keep a schedule registry."""
    ROOM = "room"
    TEACHER = "teacher"
    STUDENT = "student"


class GradeKind(Enum):
    """Kinds of grade values."""
    ASSESSMENT = "assessment"
    FINAL_COURSE = "final_course"


class AssessmentType(Enum):
    """Types of assessments."""
    FORMATIVE = "formative"
    SUMMATIVE = "summative"
    DIAGNOSTIC = "diagnostic"
    PERFORMANCE = "performance"
    PORTFOLIO = "portfolio"
    AUTHENTIC = "authentic"
    SELF_ASSESSMENT = "self_assessment"
    PEER_ASSESSMENT = "peer_assessment"
    QUIZ = "quiz"
    ASSIGNMENT_FILE_SUBMISSION = "assignment_file_submission"
    ESSAY = "essay"
    PROJECT = "project"
    PRESENTATION = "presentation"
    MULTIPLE_CHOICE = "multiple_choice"
    SHORT_ANSWER = "short_answer"
    BONUS = "bonus"  # Exempt from the weightage budget
    MANDATORY_PASS = "mandatory_pass"  # Must be passed individually


class EnrollmentStatus(Enum):
    """Lifecycle status of an enrollment."""
    PLANNED = "planned"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    WITHDRAWN = "withdrawn"


class PassStatus(Enum):
    """Recorded outcome of an enrollment."""
    NOT_DECIDED = "not_decided"
    PASSED = "passed"
    FAILED = "failed"


class AttendanceStatus(Enum):
    """Attendance marks for a single occurrence date."""
    NOT_RECORDED = "not_recorded"
    PRESENT = "present"
    ABSENT = "absent"
    LATE = "late"
    EXCUSED = "excused"


class SessionType(Enum):
    """Types of academic sessions within a school year."""
    FALL = "fall"
    WINTER = "winter"
    SPRING = "spring"
    SUMMER = "summer"
