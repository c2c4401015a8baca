"""Attendance projection: pure functions from configuration and subjects to metrics.

Nothing here reads settings, touches the disk, or keeps state between calls.
All arithmetic is done on :class:`fractions.Fraction` so percentage boundaries
such as ``"7"`` -> ``7/100`` are compared and rounded exactly.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from fractions import Fraction
from typing import Iterable, Sequence

from bunk_calculator.models import Configuration, DurationMode, Subject
from bunk_calculator.utils import InvalidNumber, parse_decimal, parse_int

WEEKS_PER_MONTH = Fraction("4.345")

FIELD_CRITERION = "attendanceCriterion"
FIELD_DURATION = "duration"
FIELD_WORKING_DAYS = "workingDays"
FIELD_SUBJECT_NAME = "subjectName"
FIELD_LECTURES = "lecturesPerWeek"

STATUS_SAFE = "safe"
STATUS_DANGER = "danger"


@dataclass(frozen=True, slots=True)
class FieldError:
    field: str
    message: str


@dataclass(frozen=True, slots=True)
class ValidatedConfiguration:
    criterion: Fraction
    duration_value: Fraction
    working_days: int


@dataclass(frozen=True, slots=True)
class SubjectProjection:
    total_lectures: int
    required_lectures: int
    max_bunkable: int
    weekly_skip_limit: int

    @property
    def bunkable_status(self) -> str:
        return status_for(self.max_bunkable)

    @property
    def skip_limit_status(self) -> str:
        return status_for(self.weekly_skip_limit)


@dataclass(frozen=True, slots=True)
class SubjectMetrics:
    subject: Subject
    projection: SubjectProjection


@dataclass(frozen=True, slots=True)
class Projection:
    metrics: tuple[SubjectMetrics, ...] = ()
    errors: tuple[FieldError, ...] = ()
    semester_weeks: Fraction | None = None

    @property
    def is_valid(self) -> bool:
        return not self.errors

    def error_for(self, field: str) -> str | None:
        for error in self.errors:
            if error.field == field:
                return error.message
        return None


@dataclass(frozen=True, slots=True)
class ChartSlice:
    label: str
    value: int
    share: float


@dataclass(frozen=True, slots=True)
class ChartData:
    labels: tuple[str, ...]
    values: tuple[int, ...]

    @property
    def total(self) -> int:
        return sum(self.values)

    def slices(self) -> list[ChartSlice]:
        total = self.total
        return [
            ChartSlice(label=label, value=value, share=(value / total * 100) if total > 0 else 0.0)
            for label, value in zip(self.labels, self.values)
        ]


def status_for(value: int) -> str:
    return STATUS_SAFE if value >= 0 else STATUS_DANGER


def _parse_criterion(raw: str | int | float) -> Fraction | None:
    try:
        criterion = parse_decimal(raw) / 100
    except InvalidNumber:
        return None
    return criterion if 0 < criterion <= 1 else None


def _parse_duration(raw: str | int | float) -> Fraction | None:
    try:
        duration = parse_decimal(raw)
    except InvalidNumber:
        return None
    return duration if duration > 0 else None


def _parse_working_days(raw: str | int) -> int | None:
    try:
        working_days = parse_int(raw)
    except InvalidNumber:
        return None
    return working_days if 1 <= working_days <= 7 else None


def _parse_lectures(raw: str | int) -> int | None:
    try:
        lectures = parse_int(raw)
    except InvalidNumber:
        return None
    return lectures if lectures > 0 else None


def validate_configuration(
    criterion_raw: str | int | float,
    duration_raw: str | int | float,
    working_days_raw: str | int,
) -> ValidatedConfiguration | tuple[FieldError, ...]:
    """Validate the three configuration inputs independently.

    Returns the parsed configuration, or one :class:`FieldError` per invalid
    field. A caller never receives only the first failure.
    """

    criterion = _parse_criterion(criterion_raw)
    duration = _parse_duration(duration_raw)
    working_days = _parse_working_days(working_days_raw)

    if criterion is None or duration is None or working_days is None:
        errors: list[FieldError] = []
        if criterion is None:
            errors.append(FieldError(FIELD_CRITERION, "Enter a valid % (e.g., 75)"))
        if duration is None:
            errors.append(FieldError(FIELD_DURATION, "Enter a positive number."))
        if working_days is None:
            errors.append(FieldError(FIELD_WORKING_DAYS, "Enter 1-7 days."))
        return tuple(errors)

    return ValidatedConfiguration(criterion=criterion, duration_value=duration, working_days=working_days)


def semester_weeks(duration_value: Fraction | int, mode: DurationMode, working_days: int) -> Fraction:
    duration = Fraction(duration_value)
    if mode is DurationMode.DAYS:
        if working_days <= 0:
            return Fraction(0)
        return duration / working_days
    if mode is DurationMode.MONTHS:
        return duration * WEEKS_PER_MONTH
    return duration


def _as_fraction(value: Fraction | int | float) -> Fraction | None:
    if isinstance(value, float) and not math.isfinite(value):
        return None
    return Fraction(value)


def project_subject(
    lectures_per_week: int,
    weeks: Fraction | int | float,
    criterion: Fraction | int | float,
) -> SubjectProjection:
    exact_weeks = _as_fraction(weeks)
    ratio = Fraction(criterion)

    if exact_weeks is None:
        return SubjectProjection(0, 0, 0, 0)

    total = math.floor(lectures_per_week * exact_weeks)
    required = math.ceil(ratio * total)
    max_bunkable = total - required

    if exact_weeks > 0:
        weekly_skip_limit = math.floor(max_bunkable / exact_weeks)
    else:
        weekly_skip_limit = 0

    return SubjectProjection(
        total_lectures=total,
        required_lectures=required,
        max_bunkable=max_bunkable,
        weekly_skip_limit=weekly_skip_limit,
    )


def project(configuration: Configuration, subjects: Sequence[Subject]) -> Projection:
    validated = validate_configuration(
        configuration.attendance_criterion,
        configuration.duration_value,
        configuration.working_days,
    )
    if isinstance(validated, tuple):
        return Projection(metrics=(), errors=validated)

    weeks = semester_weeks(validated.duration_value, configuration.duration_mode, validated.working_days)
    metrics = tuple(
        SubjectMetrics(
            subject=subject,
            projection=project_subject(subject.lectures_per_week, weeks, validated.criterion),
        )
        for subject in subjects
    )
    return Projection(metrics=metrics, errors=(), semester_weeks=weeks)


def validate_subject_input(name_raw: str, lectures_raw: str | int) -> Subject | tuple[FieldError, ...]:
    name = (name_raw or "").strip()
    lectures = _parse_lectures(lectures_raw)

    if not name or lectures is None:
        errors: list[FieldError] = []
        if not name:
            errors.append(FieldError(FIELD_SUBJECT_NAME, "Subject name is required."))
        if lectures is None:
            errors.append(FieldError(FIELD_LECTURES, "Enter a positive number of lectures."))
        return tuple(errors)

    return Subject(name=name, lectures_per_week=lectures)


def weightage_chart_data(subjects: Iterable[Subject], projection: Projection) -> ChartData | None:
    """Chart input for the lecture-weightage pie, or ``None`` when it must be hidden."""

    subject_list = list(subjects)
    if not subject_list or not projection.is_valid:
        return None
    return ChartData(
        labels=tuple(subject.name for subject in subject_list),
        values=tuple(subject.lectures_per_week for subject in subject_list),
    )
