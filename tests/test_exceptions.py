import pytest

from registrar.core import (
    InvalidArgumentError, InvalidRangeError, NotFoundError, RegistrarError, ScheduleConflictError,
    WeightageExceededError,
)


@pytest.mark.parametrize("error, code", [
    (InvalidArgumentError("bad"), "invalid_argument"),
    (InvalidRangeError("inverted"), "invalid_range"),
    (NotFoundError("missing"), "not_found"),
    (ScheduleConflictError("a", "b"), "schedule_conflict"),
    (WeightageExceededError(60, 45), "weightage_exceeded"),
])
def test_error_codes(error, code):
    assert isinstance(error, RegistrarError)
    assert error.error_code == code


def test_weightage_message_reports_excess():
    error = WeightageExceededError(60, 45)
    assert "Excess weightage: 5.00" in error.message
    assert error.details == {'current_total': 60, 'attempted': 45, 'excess': 5}


def test_conflict_names_owner():
    error = ScheduleConflictError("held", "new", owner="room B-101")
    assert "room B-101" in str(error)
    assert error.details['owner'] == "room B-101"


def test_details_default_to_empty_dict():
    assert InvalidArgumentError("bad").details == {}
