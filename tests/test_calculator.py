from fractions import Fraction

import pytest

from bunk_calculator.models import Configuration, DurationMode, Subject
from bunk_calculator.services import (
    project,
    project_subject,
    semester_weeks,
    validate_configuration,
    validate_subject_input,
    weightage_chart_data,
)
from bunk_calculator.services.calculator import ValidatedConfiguration


def make_config(criterion="75", working_days="5", mode=DurationMode.WEEKS, **durations):
    values = {"weeks": "16", "days": "80", "months": "4"}
    values.update(durations)
    return Configuration(
        attendance_criterion=criterion,
        working_days=working_days,
        duration_mode=mode,
        duration_values=values,
    )


def test_sixteen_week_semester_with_five_lectures():
    result = project(make_config(), [Subject("Maths", 5)])

    assert result.errors == ()
    metrics = result.metrics[0].projection
    assert metrics.total_lectures == 80
    assert metrics.required_lectures == 60
    assert metrics.max_bunkable == 20
    assert metrics.weekly_skip_limit == 1


def test_days_mode_matches_equivalent_weeks():
    weeks_result = project(make_config(), [Subject("Maths", 5)])
    days_result = project(make_config(mode=DurationMode.DAYS, days="80"), [Subject("Maths", 5)])

    assert days_result.semester_weeks == 16
    assert days_result.metrics[0].projection == weeks_result.metrics[0].projection


def test_months_mode_uses_average_weeks_per_month():
    weeks = semester_weeks(Fraction(4), DurationMode.MONTHS, 5)
    assert weeks == Fraction("17.38")

    metrics = project_subject(5, weeks, Fraction(3, 4))
    assert metrics.total_lectures == 86
    assert metrics.required_lectures == 65
    assert metrics.max_bunkable == 21
    assert metrics.weekly_skip_limit == 1


def test_zero_criterion_suppresses_metrics_and_chart():
    subjects = [Subject("Maths", 5)]
    result = project(make_config(criterion="0"), subjects)

    assert result.metrics == ()
    assert [error.field for error in result.errors] == ["attendanceCriterion"]
    assert weightage_chart_data(subjects, result) is None


def test_empty_subjects_is_not_an_error():
    result = project(make_config(), [])

    assert result.metrics == ()
    assert result.errors == ()
    assert weightage_chart_data([], result) is None


def test_every_invalid_field_is_reported():
    errors = validate_configuration("abc", "-3", "8")

    assert isinstance(errors, tuple)
    assert {error.field for error in errors} == {"attendanceCriterion", "duration", "workingDays"}


@pytest.mark.parametrize("criterion", ["0", "-5", "100.5", "", "nan", "inf", "seventy"])
def test_invalid_criterion_values(criterion):
    errors = validate_configuration(criterion, "16", "5")
    assert isinstance(errors, tuple)
    assert [error.message for error in errors] == ["Enter a valid % (e.g., 75)"]


@pytest.mark.parametrize("working_days", ["0", "8", "5.5", "five", ""])
def test_invalid_working_days(working_days):
    errors = validate_configuration("75", "16", working_days)
    assert isinstance(errors, tuple)
    assert [error.message for error in errors] == ["Enter 1-7 days."]


def test_full_attendance_is_valid_boundary():
    validated = validate_configuration("100", "16", "7")

    assert validated == ValidatedConfiguration(Fraction(1), Fraction(16), 7)
    metrics = project_subject(3, validated.duration_value, validated.criterion)
    assert metrics.max_bunkable == 0
    assert metrics.weekly_skip_limit == 0


def test_decimal_percentages_round_exactly():
    # 0.07 * 100 in binary floating point is slightly above 7.
    validated = validate_configuration("7", "20", "5")
    metrics = project_subject(5, validated.duration_value, validated.criterion)

    assert metrics.total_lectures == 100
    assert metrics.required_lectures == 7
    assert metrics.max_bunkable == 93


def test_non_positive_weeks_gives_zero_skip_limit():
    assert project_subject(4, 0, Fraction(3, 4)).weekly_skip_limit == 0
    assert project_subject(4, float("inf"), Fraction(3, 4)).weekly_skip_limit == 0


@pytest.mark.parametrize("lectures", [1, 2, 5, 9])
@pytest.mark.parametrize("weeks", [Fraction(1, 3), Fraction(16), Fraction("17.38"), Fraction(45, 7)])
@pytest.mark.parametrize("criterion", [Fraction(1, 100), Fraction(3, 4), Fraction(1)])
def test_required_never_exceeds_total(lectures, weeks, criterion):
    metrics = project_subject(lectures, weeks, criterion)

    assert 0 <= metrics.required_lectures <= metrics.total_lectures
    assert metrics.max_bunkable == metrics.total_lectures - metrics.required_lectures
    assert metrics.max_bunkable >= 0
    assert metrics.bunkable_status == "safe"


def test_projection_is_repeatable():
    config = make_config(mode=DurationMode.MONTHS, months="5")
    subjects = [Subject("Maths", 5), Subject("Physics", 4)]

    assert project(config, subjects) == project(config, subjects)


def test_metrics_keep_subject_order():
    subjects = [Subject("B", 2), Subject("A", 5), Subject("C", 3)]
    result = project(make_config(), subjects)

    assert [item.subject.name for item in result.metrics] == ["B", "A", "C"]


def test_subject_input_validation():
    subject = validate_subject_input("  Algebra ", "3")
    assert isinstance(subject, Subject)
    assert subject.name == "Algebra"
    assert subject.lectures_per_week == 3

    errors = validate_subject_input("   ", "0")
    assert isinstance(errors, tuple)
    assert {error.field for error in errors} == {"subjectName", "lecturesPerWeek"}


def test_chart_data_shares():
    subjects = [Subject("Maths", 3), Subject("Physics", 1)]
    chart = weightage_chart_data(subjects, project(make_config(), subjects))

    assert chart is not None
    assert chart.labels == ("Maths", "Physics")
    assert chart.values == (3, 1)
    assert [round(item.share, 1) for item in chart.slices()] == [75.0, 25.0]


@pytest.mark.parametrize("duration", ["1e5000", "1e999999999", "1" + "0" * 400 + ".5"])
def test_oversized_duration_is_a_field_error(duration):
    errors = validate_configuration("75", duration, "5")

    assert isinstance(errors, tuple)
    assert [error.field for error in errors] == ["duration"]


def test_oversized_lecture_count_is_a_field_error():
    errors = validate_subject_input("Maths", "9" * 5000)

    assert isinstance(errors, tuple)
    assert [error.field for error in errors] == ["lecturesPerWeek"]
