from __future__ import annotations

from loguru import logger

from bunk_calculator.config.session_store import SessionStore
from bunk_calculator.models import DurationMode, SessionState
from bunk_calculator.services.calculator import (
    ChartData,
    FieldError,
    Projection,
    project,
    validate_subject_input,
    weightage_chart_data,
)


class SubjectInputError(ValueError):
    """Raised when a new subject fails validation; carries one error per field."""

    def __init__(self, errors: tuple[FieldError, ...]) -> None:
        super().__init__("; ".join(error.message for error in errors))
        self.errors = errors


class EmptySubjectNameError(ValueError):
    """Raised when an in-place rename would leave a subject without a name."""


class SessionService:
    def __init__(self, store: SessionStore, state: SessionState | None = None) -> None:
        self._store = store
        self._state = state if state is not None else store.load()

    @property
    def state(self) -> SessionState:
        return self._state

    # ------------------------------------------------------------------
    # Derived views
    # ------------------------------------------------------------------
    def projection(self) -> Projection:
        return project(self._state.configuration, self._state.subjects)

    def chart_data(self) -> ChartData | None:
        return weightage_chart_data(self._state.subjects, self.projection())

    # ------------------------------------------------------------------
    # Subjects
    # ------------------------------------------------------------------
    def add_subject(self, name_raw: str, lectures_raw: str | int) -> Projection:
        result = validate_subject_input(name_raw, lectures_raw)
        if isinstance(result, tuple):
            raise SubjectInputError(result)

        new_state = self._state.with_subjects((*self._state.subjects, result)).with_last_lectures(
            result.lectures_per_week
        )
        logger.debug(f"Added subject {result.name!r} ({result.lectures_per_week}/week)")
        return self._commit(new_state)

    def rename_subject(self, index: int, new_name: str) -> Projection:
        subjects = list(self._state.subjects)
        current = subjects[self._check_index(index)]

        name = (new_name or "").strip()
        if not name:
            raise EmptySubjectNameError("Subject name cannot be empty.")

        subjects[index] = current.renamed(name)
        logger.debug(f"Renamed subject {index} from {current.name!r} to {name!r}")
        return self._commit(self._state.with_subjects(subjects))

    def remove_subject(self, index: int) -> Projection:
        subjects = list(self._state.subjects)
        removed = subjects.pop(self._check_index(index))
        logger.debug(f"Removed subject {index} ({removed.name!r})")
        return self._commit(self._state.with_subjects(subjects))

    def clear_subjects(self) -> Projection:
        logger.debug(f"Cleared {len(self._state.subjects)} subject(s)")
        return self._commit(self._state.with_subjects(()))

    def index_of(self, subject_id: str) -> int:
        for index, subject in enumerate(self._state.subjects):
            if subject.subject_id == subject_id:
                return index
        raise KeyError(subject_id)

    # ------------------------------------------------------------------
    # Configuration
    # ------------------------------------------------------------------
    def set_duration_mode(self, mode: DurationMode | str) -> str:
        """Activate a duration mode and return the value last entered for it."""

        duration_mode = DurationMode(mode)
        configuration = self._state.configuration.with_mode(duration_mode)
        self._commit(self._state.with_configuration(configuration))
        return configuration.duration_value

    def set_duration_value(self, raw: str) -> Projection:
        configuration = self._state.configuration.with_duration(str(raw).strip())
        return self._commit(self._state.with_configuration(configuration))

    def set_attendance_criterion(self, raw: str) -> Projection:
        configuration = self._state.configuration.with_criterion(str(raw).strip())
        return self._commit(self._state.with_configuration(configuration))

    def set_working_days(self, raw: str) -> Projection:
        configuration = self._state.configuration.with_working_days(str(raw).strip())
        return self._commit(self._state.with_configuration(configuration))

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------
    def _commit(self, state: SessionState) -> Projection:
        self._state = state
        self._store.save(state)
        return self.projection()

    def _check_index(self, index: int) -> int:
        if not 0 <= index < len(self._state.subjects):
            raise IndexError(f"No subject at index {index}.")
        return index

