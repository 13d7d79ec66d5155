#!/usr/bin/env python3
"""
Demo scenario for the registrar platform.
"""

import logging
from datetime import date, time, timedelta

from registrar.core import (
    AssessmentType, Course, ScheduleConflictError, ScheduleWindow, SchoolYear, Session,
    SessionType, Student, Teacher, Room, Weekday, WeightageExceededError,
)
from registrar.main import RegistrarPlatform
from registrar.schemas import parse_assessment_grade, parse_window

logger = logging.getLogger("registrar.demo")


def run_demo():
    """Run a walk-through of booking, enrolling and grading."""
    platform = RegistrarPlatform()

    logger.info("1. Creating sample data...")
    year = SchoolYear(date(2020, 1, 1), date(2020, 12, 31))
    winter = Session(SessionType.WINTER, year, date(2020, 1, 6), date(2020, 4, 24))
    room = Room("B-101", capacity=40)
    teacher = Teacher("Ada Lovelace")
    alice = Student("Alice")

    logger.info("2. Demonstrating scheduling...")
    algebra = platform.scheduler.create_section(
        Course("MATH101", "Algebra"), room, teacher, winter,
        ScheduleWindow({Weekday.MONDAY: time(9), Weekday.WEDNESDAY: time(9)},
                       timedelta(hours=1), date(2020, 1, 6), date(2020, 4, 24)),
        passing_grade=50,
    )
    logger.info("Algebra meets %d times", len(algebra.window.occurrences))

    clashing = parse_window({
        'days': [{'weekday': 'monday', 'start_time': '10:00'}],
        'duration_minutes': 60,
        'start_date': '2020-02-03',
        'end_date': '2020-03-30',
    })
    try:
        platform.scheduler.create_section(Course("PHYS101", "Physics"), room, teacher, winter, clashing)
    except ScheduleConflictError as e:
        logger.info("Rejected as expected: %s", e.message)

    logger.info("3. Demonstrating enrollment and grading...")
    enrollment = platform.enrollments.enroll_student(alice, algebra)
    platform.enrollments.start(enrollment)
    platform.enrollments.record_grade(enrollment, parse_assessment_grade({
        'assessment': {'assessment_type': 'SUMMATIVE', 'description': 'Midterm'},
        'total_grade': 50, 'weightage': 60, 'scored_grade': 40,
    }))
    try:
        platform.enrollments.record_grade(enrollment, parse_assessment_grade({
            'assessment': {'assessment_type': AssessmentType.PROJECT.value, 'description': 'Project'},
            'total_grade': 100, 'weightage': 45, 'scored_grade': 90,
        }))
    except WeightageExceededError as e:
        logger.info("Rejected as expected: %s", e.message)

    passed = platform.enrollments.complete(enrollment)
    logger.info("Final grade %.1f, completed: %s", enrollment.final_course_grade, passed)

    logger.info("4. Platform statistics: %s", platform.get_statistics())


if __name__ == "__main__":
    run_demo()
