"""
Core module containing schedules, calendars, grading and the academic entities
they attach to.
"""

from .abstract_entity import AbstractEntity
from .academics import Course, CourseSection, SchoolYear, Session
from .attendance import Attendance
from .enrollment import Enrollment
from .enums import (
    AssessmentType, AttendanceStatus, EnrollmentStatus, GradeKind, OwnerKind,
    PassStatus, SessionType, Weekday,
)
from .exceptions import (
    InvalidArgumentError, InvalidRangeError, NotFoundError, RegistrarError,
    ScheduleConflictError, WeightageExceededError,
)
from .facilities import Room
from .grading import Assessment, AssessmentGrade, Grade, GradeLedger
from .people import Student, Teacher
from .registry import ScheduleRegistry
from .schedule import ScheduleWindow, WeeklyPattern, conflicting_weekday, conflicts, generate_occurrences

__all__ = [
    # Scheduling
    "WeeklyPattern",
    "ScheduleWindow",
    "ScheduleRegistry",
    "conflicts",
    "conflicting_weekday",
    "generate_occurrences",

    # Grading
    "Grade",
    "Assessment",
    "AssessmentGrade",
    "GradeLedger",
    "Enrollment",
    "Attendance",

    # Entities
    "AbstractEntity",
    "Course",
    "CourseSection",
    "SchoolYear",
    "Session",
    "Room",
    "Teacher",
    "Student",

    # Enums
    "Weekday",
    "OwnerKind",
    "GradeKind",
    "AssessmentType",
    "EnrollmentStatus",
    "PassStatus",
    "AttendanceStatus",
    "SessionType",

    # Exceptions
    "RegistrarError",
    "InvalidArgumentError",
    "InvalidRangeError",
    "ScheduleConflictError",
    "WeightageExceededError",
    "NotFoundError",
]
