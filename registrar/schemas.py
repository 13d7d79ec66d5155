"""
Pydantic models for raw schedule and grade input coming from an outer layer.

They only parse and coerce; business rules stay in the domain objects.
"""

from datetime import date, datetime, time, timedelta
from typing import Any, Dict, List, Optional, Type, TypeVar

from pydantic import BaseModel, Field, ValidationError, field_validator

from .core.enums import AssessmentType, Weekday
from .core.exceptions import InvalidArgumentError
from .core.grading import Assessment, AssessmentGrade
from .core.schedule import ScheduleWindow, WeeklyPattern

M = TypeVar("M", bound=BaseModel)


class WeeklyEntryIn(BaseModel):
    weekday: Weekday
    start_time: time

    @field_validator("weekday", mode="before")
    @classmethod
    def parse_weekday(cls, value: Any) -> Weekday:
        return Weekday.parse(value)


class ScheduleWindowIn(BaseModel):
    days: List[WeeklyEntryIn] = Field(..., min_length=1)
    duration_minutes: int = Field(..., gt=0, le=24 * 60)
    start_date: date
    end_date: date

    def to_pattern(self) -> WeeklyPattern:
        pattern = WeeklyPattern()
        for entry in self.days:
            pattern.set(entry.weekday, entry.start_time)
        return pattern

    def to_window(self) -> ScheduleWindow:
        return ScheduleWindow(self.to_pattern(), timedelta(minutes=self.duration_minutes),
                              self.start_date, self.end_date)


class AssessmentIn(BaseModel):
    assessment_type: AssessmentType
    description: str = Field("", max_length=1000)
    starts_at: Optional[datetime] = None
    ends_at: Optional[datetime] = None
    duration_minutes: int = Field(0, ge=0)

    @field_validator("assessment_type", mode="before")
    @classmethod
    def parse_assessment_type(cls, value: Any) -> Any:
        if isinstance(value, str):
            key = value.strip()
            if key.upper() in AssessmentType.__members__:
                return AssessmentType[key.upper()]
            return key.lower()
        return value

    def to_assessment(self) -> Assessment:
        return Assessment(self.assessment_type, self.description, self.starts_at,
                          self.ends_at, self.duration_minutes)


class AssessmentGradeIn(BaseModel):
    assessment: AssessmentIn
    total_grade: float = Field(..., gt=0)
    weightage: float = Field(..., ge=0, le=100)
    scored_grade: float = Field(0.0, ge=0)
    passing_grade: float = Field(0.0, ge=0)

    def to_grade(self) -> AssessmentGrade:
        return AssessmentGrade(self.assessment.to_assessment(), self.total_grade, self.weightage,
                               self.scored_grade, self.passing_grade)


def load(model: Type[M], data: Dict[str, Any]) -> M:
    """Validate raw input, reporting failures as InvalidArgumentError."""
    try:
        return model.model_validate(data)
    except ValidationError as e:
        errors = [
            {'field': ".".join(str(part) for part in error['loc']), 'message': error['msg']}
            for error in e.errors()
        ]
        raise InvalidArgumentError(f"invalid {model.__name__}: {errors[0]['field']}: {errors[0]['message']}",
                                   details={'errors': errors}) from e


def parse_window(data: Dict[str, Any]) -> ScheduleWindow:
    return load(ScheduleWindowIn, data).to_window()


def parse_assessment_grade(data: Dict[str, Any]) -> AssessmentGrade:
    return load(AssessmentGradeIn, data).to_grade()
