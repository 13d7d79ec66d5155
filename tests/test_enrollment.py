from datetime import date

import pytest

from registrar.core import (
    AssessmentType, AttendanceStatus, Enrollment, EnrollmentStatus, InvalidArgumentError, NotFoundError,
    PassStatus,
)

from conftest import graded


@pytest.fixture()
def enrollment(section, student):
    return Enrollment(student, section)


def test_new_enrollment_is_planned(enrollment):
    assert enrollment.status is EnrollmentStatus.PLANNED
    assert enrollment.pass_status is PassStatus.NOT_DECIDED
    assert enrollment.final_course_grade == 0


def test_student_and_section_are_required(section, student):
    with pytest.raises(InvalidArgumentError):
        Enrollment(None, section)
    with pytest.raises(InvalidArgumentError):
        Enrollment(student, None)


def test_attendance_covers_every_meeting(enrollment, section):
    assert [day for day, _ in enrollment.attendance.records] == list(section.window.occurrences)
    assert all(status is AttendanceStatus.NOT_RECORDED for _, status in enrollment.attendance.records)


def test_attendance_rejects_dates_outside_the_window(enrollment):
    enrollment.attendance.assign_status(date(2020, 1, 6), AttendanceStatus.PRESENT)
    enrollment.attendance.assign_status(date(2020, 1, 8), AttendanceStatus.ABSENT)
    assert enrollment.attendance.status_on(date(2020, 1, 6)) is AttendanceStatus.PRESENT
    assert enrollment.attendance.rate() == pytest.approx(0.5)
    with pytest.raises(NotFoundError):
        enrollment.attendance.assign_status(date(2020, 1, 7), AttendanceStatus.PRESENT)


def test_completing_a_planned_enrollment_is_rejected(enrollment):
    with pytest.raises(InvalidArgumentError) as excinfo:
        enrollment.complete()
    assert excinfo.value.error_code == "invalid_transition"
    assert enrollment.status is EnrollmentStatus.PLANNED


def test_complete_when_passed(enrollment):
    enrollment.start()
    enrollment.add_assessment_grade(graded(weightage=60, scored=80))
    enrollment.add_assessment_grade(graded(weightage=40, scored=50))

    assert enrollment.complete() is True
    assert enrollment.status is EnrollmentStatus.COMPLETED
    assert enrollment.pass_status is PassStatus.PASSED
    assert enrollment.final_course_grade == pytest.approx(68)


def test_complete_when_failed_stays_in_progress(enrollment):
    enrollment.start()
    enrollment.add_assessment_grade(graded(weightage=100, scored=30))

    assert enrollment.complete() is False
    assert enrollment.status is EnrollmentStatus.IN_PROGRESS
    assert enrollment.pass_status is PassStatus.FAILED
    assert enrollment.final_course_grade == pytest.approx(30)


def test_failed_mandatory_assessment_blocks_completion(enrollment):
    enrollment.start()
    enrollment.add_assessment_grade(graded(weightage=80, scored=100))
    enrollment.add_assessment_grade(graded(AssessmentType.MANDATORY_PASS, weightage=20, scored=40, passing=50))
    assert enrollment.calculate_final_grade() == pytest.approx(88)
    assert enrollment.complete() is False


def test_failed_enrollment_can_complete_after_regrade(enrollment):
    enrollment.start()
    enrollment.add_assessment_grade(graded(weightage=50, scored=60))
    assert enrollment.complete() is False
    enrollment.add_assessment_grade(graded(weightage=50, scored=100))
    assert enrollment.complete() is True
    assert enrollment.pass_status is PassStatus.PASSED


def test_withdrawn_enrollment_is_final(enrollment):
    enrollment.withdraw()
    assert enrollment.status is EnrollmentStatus.WITHDRAWN
    with pytest.raises(InvalidArgumentError):
        enrollment.start()
    with pytest.raises(InvalidArgumentError):
        enrollment.add_assessment_grade(graded())


def test_completed_enrollment_rejects_grades(enrollment):
    enrollment.start()
    enrollment.add_assessment_grade(graded(weightage=100, scored=90))
    enrollment.complete()
    with pytest.raises(InvalidArgumentError):
        enrollment.add_assessment_grade(graded(AssessmentType.BONUS))
    with pytest.raises(InvalidArgumentError):
        enrollment.withdraw()


def test_weightage_totals_delegate_to_ledger(enrollment):
    enrollment.add_assessment_grade(graded(weightage=35))
    assert enrollment.current_weightage_total() == 35
    assert enrollment.unassigned_weightage() == 65
    assert len(enrollment.assessment_grades) == 1


def test_section_is_passed_requires_membership(section, enrollment):
    with pytest.raises(NotFoundError):
        section.is_passed(enrollment)
    section.add_enrollment(enrollment)
    enrollment.add_assessment_grade(graded(weightage=100, scored=75))
    assert section.is_passed(enrollment) is True


def test_final_grade_follows_section_passing_grade(section, enrollment):
    enrollment.start()
    enrollment.add_assessment_grade(graded(weightage=100, scored=65))
    section.set_passing_grade(70)

    assert enrollment.complete() is False
    assert enrollment.final_grade.passing_grade == 70
    assert enrollment.final_grade.is_passing is False


def test_completing_twice_is_an_invalid_transition(enrollment):
    enrollment.start()
    enrollment.add_assessment_grade(graded(weightage=100, scored=90))
    assert enrollment.complete() is True
    version = enrollment.version

    with pytest.raises(InvalidArgumentError) as excinfo:
        enrollment.complete()
    assert excinfo.value.error_code == "invalid_transition"
    assert excinfo.value.details['to'] is EnrollmentStatus.COMPLETED
    assert enrollment.version == version
