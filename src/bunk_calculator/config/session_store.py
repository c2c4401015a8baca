from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict

from loguru import logger

from bunk_calculator.models import Configuration, DurationMode, SessionState, Subject
from bunk_calculator.utils import InvalidNumber, format_number, parse_decimal, parse_int

DEFAULT_SESSION: Dict[str, Any] = {
	"subjects": [
		{"name": "Maths", "lecturesPerWeek": 5},
		{"name": "Physics", "lecturesPerWeek": 4},
		{"name": "Chemistry", "lecturesPerWeek": 3},
		{"name": "Biology", "lecturesPerWeek": 2},
	],
	"lastLecturesPerWeek": 4,
	"calculationMode": DurationMode.WEEKS.value,
	"durationValues": {"weeks": 16, "days": 80, "months": 4},
	"attendanceCriterion": "75",
	"workingDays": "5",
}


def state_from_payload(payload: Dict[str, Any]) -> SessionState:
	"""Build a session from stored keys, falling back to defaults key by key."""

	subjects_raw = payload.get("subjects")
	if not isinstance(subjects_raw, list):
		subjects_raw = DEFAULT_SESSION["subjects"]
	subjects = []
	for entry in subjects_raw:
		subject = _subject_from_entry(entry)
		if subject is None:
			logger.warning("Skipping malformed stored subject: {!r}", entry)
			continue
		subjects.append(subject)

	try:
		last_lectures = parse_int(payload.get("lastLecturesPerWeek", DEFAULT_SESSION["lastLecturesPerWeek"]))
	except InvalidNumber:
		last_lectures = 0
	if last_lectures <= 0:
		last_lectures = DEFAULT_SESSION["lastLecturesPerWeek"]

	mode = DurationMode.parse(payload.get("calculationMode"), default=DurationMode.WEEKS)

	duration_values = {key: format_number(value) for key, value in DEFAULT_SESSION["durationValues"].items()}
	stored_durations = payload.get("durationValues")
	if isinstance(stored_durations, dict):
		for key in duration_values:
			if key in stored_durations:
				duration_values[key] = _duration_text(stored_durations[key], duration_values[key])

	criterion = payload.get("attendanceCriterion")
	working_days = payload.get("workingDays")

	configuration = Configuration(
		attendance_criterion=str(criterion) if criterion is not None else DEFAULT_SESSION["attendanceCriterion"],
		working_days=str(working_days) if working_days is not None else DEFAULT_SESSION["workingDays"],
		duration_mode=mode,
		duration_values=duration_values,
	)
	return SessionState(
		subjects=tuple(subjects),
		configuration=configuration,
		last_lectures_per_week=last_lectures,
	)


def payload_from_state(state: SessionState) -> Dict[str, Any]:
	configuration = state.configuration
	return {
		"subjects": [
			{"name": subject.name, "lecturesPerWeek": subject.lectures_per_week}
			for subject in state.subjects
		],
		"lastLecturesPerWeek": state.last_lectures_per_week,
		"calculationMode": configuration.duration_mode.value,
		"durationValues": {
			key: _duration_number(value) for key, value in configuration.duration_values.items()
		},
		"attendanceCriterion": configuration.attendance_criterion,
		"workingDays": configuration.working_days,
	}


def _subject_from_entry(entry: Any) -> Subject | None:
	if not isinstance(entry, dict):
		return None
	name = str(entry.get("name") or "").strip()
	try:
		lectures = parse_int(entry.get("lecturesPerWeek"))
	except (InvalidNumber, TypeError):
		return None
	if not name or lectures <= 0:
		return None
	return Subject(name=name, lectures_per_week=lectures)


def _duration_text(value: Any, fallback: str) -> str:
	if value is None or isinstance(value, bool):
		return fallback
	return str(value)


def _duration_number(value: str) -> Any:
	# Numeric input goes back to disk as a number; anything else keeps its text.
	try:
		number = parse_decimal(value)
	except InvalidNumber:
		return value
	if number.denominator == 1:
		return number.numerator
	return float(number)


@dataclass
class SessionStore:
	"""Mirror the session state into a JSON key-value file."""

	session_file: Path

	def __post_init__(self) -> None:
		self.session_file = Path(self.session_file).expanduser()

	# ------------------------------------------------------------------
	# Public API
	# ------------------------------------------------------------------
	def load(self) -> SessionState:
		state = state_from_payload(self._load_json(self.session_file))
		logger.debug("Loaded session from {} with {} subject(s)", self.session_file, len(state.subjects))
		return state

	def save(self, state: SessionState) -> None:
		"""Write the session; failures are logged and the previous file is left as it was."""

		try:
			text = json.dumps(payload_from_state(state), indent=2)
		except (TypeError, ValueError, OverflowError) as exc:
			logger.warning("Could not serialise session for {}: {}", self.session_file, exc)
			return

		try:
			self.session_file.parent.mkdir(parents=True, exist_ok=True)
			self.session_file.write_text(text, encoding="utf-8")
		except OSError as exc:
			logger.warning("Could not persist session to {}: {}", self.session_file, exc)

	# ------------------------------------------------------------------
	# Internal helpers
	# ------------------------------------------------------------------
	@staticmethod
	def _load_json(path: Path) -> Dict[str, Any]:
		try:
			if path.exists():
				with path.open("r", encoding="utf-8") as handle:
					data = json.load(handle)
				if isinstance(data, dict):
					return data
				logger.warning("Ignoring session file {}: expected a JSON object", path)
		except (OSError, ValueError) as exc:
			logger.warning("Ignoring unreadable session file {}: {}", path, exc)
		return {}
