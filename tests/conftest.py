from datetime import date, time, timedelta

import pytest

from registrar.core import (
    Assessment, AssessmentGrade, AssessmentType, Course, Room, ScheduleWindow, SchoolYear,
    Session, SessionType, Student, Teacher, Weekday,
)
from registrar.services import ConcurrencyManager, EnrollmentService, SchedulerService

HOUR = timedelta(hours=1)


def window(days, start=date(2020, 1, 6), end=date(2020, 1, 27), duration=HOUR):
    """Build a window from {Weekday: "HH:MM"}."""
    pattern = {weekday: time.fromisoformat(at) for weekday, at in days.items()}
    return ScheduleWindow(pattern, duration, start, end)


def graded(assessment_type=AssessmentType.SUMMATIVE, weightage=10, scored=100, total=100, passing=0):
    return AssessmentGrade(Assessment(assessment_type, "test"), total, weightage, scored, passing)


@pytest.fixture()
def monday_nine():
    return window({Weekday.MONDAY: "09:00"})


@pytest.fixture()
def session():
    year = SchoolYear(date(2020, 1, 1), date(2020, 12, 31))
    return Session(SessionType.WINTER, year, date(2020, 1, 6), date(2020, 4, 24))


@pytest.fixture()
def concurrency_manager():
    return ConcurrencyManager()


@pytest.fixture()
def scheduler(concurrency_manager):
    return SchedulerService(concurrency_manager)


@pytest.fixture()
def enrollment_service(concurrency_manager):
    return EnrollmentService(concurrency_manager)


@pytest.fixture()
def section(scheduler, session):
    return scheduler.create_section(
        Course("MATH101", "Algebra"), Room("B-101", 30), Teacher("Ada"), session,
        window({Weekday.MONDAY: "09:00", Weekday.WEDNESDAY: "09:00"}),
        passing_grade=50,
    )


@pytest.fixture()
def student():
    return Student("Alice")
