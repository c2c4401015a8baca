from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Mapping
from uuid import uuid4


class DurationMode(str, Enum):
    WEEKS = "weeks"
    DAYS = "days"
    MONTHS = "months"

    @property
    def label(self) -> str:
        return DURATION_LABELS[self]

    @classmethod
    def parse(cls, raw: str | None, default: "DurationMode | None" = None) -> "DurationMode":
        try:
            return cls(raw)
        except ValueError:
            if default is None:
                raise
            return default


DURATION_LABELS = {
    DurationMode.WEEKS: "Semester Duration (weeks)",
    DurationMode.DAYS: "Total Working Days",
    DurationMode.MONTHS: "Number of Months",
}


def _new_subject_id() -> str:
    return uuid4().hex


@dataclass(frozen=True, slots=True)
class Subject:
    name: str
    lectures_per_week: int
    subject_id: str = field(default_factory=_new_subject_id, compare=False)

    def renamed(self, name: str) -> "Subject":
        return replace(self, name=name)


@dataclass(frozen=True, slots=True)
class Configuration:
    attendance_criterion: str = "75"
    working_days: str = "5"
    duration_mode: DurationMode = DurationMode.WEEKS
    duration_values: Mapping[str, str] = field(
        default_factory=lambda: {"weeks": "16", "days": "80", "months": "4"}
    )

    @property
    def duration_value(self) -> str:
        return self.duration_values.get(self.duration_mode.value, "")

    def with_mode(self, mode: DurationMode) -> "Configuration":
        return replace(self, duration_mode=mode)

    def with_duration(self, raw: str) -> "Configuration":
        values = dict(self.duration_values)
        values[self.duration_mode.value] = raw
        return replace(self, duration_values=values)

    def with_criterion(self, raw: str) -> "Configuration":
        return replace(self, attendance_criterion=raw)

    def with_working_days(self, raw: str) -> "Configuration":
        return replace(self, working_days=raw)


@dataclass(frozen=True, slots=True)
class SessionState:
    subjects: tuple[Subject, ...] = ()
    configuration: Configuration = field(default_factory=Configuration)
    last_lectures_per_week: int = 4

    def with_subjects(self, subjects: tuple[Subject, ...] | list[Subject]) -> "SessionState":
        return replace(self, subjects=tuple(subjects))

    def with_configuration(self, configuration: Configuration) -> "SessionState":
        return replace(self, configuration=configuration)

    def with_last_lectures(self, lectures_per_week: int) -> "SessionState":
        return replace(self, last_lectures_per_week=lectures_per_week)
