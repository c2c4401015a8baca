from __future__ import annotations

import json
from pathlib import Path

from loguru import logger

from bunk_calculator.config.session_store import SessionStore
from bunk_calculator.models import Configuration, DurationMode


def test_first_load_uses_defaults(tmp_path: Path) -> None:
    store = SessionStore(tmp_path / "session.json")
    state = store.load()

    assert [(s.name, s.lectures_per_week) for s in state.subjects] == [
        ("Maths", 5),
        ("Physics", 4),
        ("Chemistry", 3),
        ("Biology", 2),
    ]
    assert state.last_lectures_per_week == 4
    assert state.configuration.duration_mode is DurationMode.WEEKS
    assert dict(state.configuration.duration_values) == {"weeks": "16", "days": "80", "months": "4"}
    assert state.configuration.attendance_criterion == "75"
    assert state.configuration.working_days == "5"


def test_save_writes_expected_keys(tmp_path: Path) -> None:
    session_file = tmp_path / "nested" / "session.json"
    store = SessionStore(session_file)
    state = store.load()
    store.save(state.with_configuration(state.configuration.with_mode(DurationMode.DAYS)))

    payload = json.loads(session_file.read_text(encoding="utf-8"))
    assert set(payload) == {
        "subjects",
        "lastLecturesPerWeek",
        "calculationMode",
        "durationValues",
        "attendanceCriterion",
        "workingDays",
    }
    assert payload["subjects"][0] == {"name": "Maths", "lecturesPerWeek": 5}
    assert payload["calculationMode"] == "days"
    assert payload["durationValues"] == {"weeks": 16, "days": 80, "months": 4}
    assert payload["attendanceCriterion"] == "75"
    assert payload["workingDays"] == "5"


def test_round_trip_keeps_empty_subject_list(tmp_path: Path) -> None:
    store = SessionStore(tmp_path / "session.json")
    store.save(store.load().with_subjects(()))

    reloaded = SessionStore(tmp_path / "session.json").load()
    assert reloaded.subjects == ()


def test_corrupt_file_falls_back_to_defaults(tmp_path: Path) -> None:
    session_file = tmp_path / "session.json"
    session_file.write_text("{not json", encoding="utf-8")

    state = SessionStore(session_file).load()
    assert len(state.subjects) == 4


def test_bad_entries_are_replaced_per_key(tmp_path: Path) -> None:
    session_file = tmp_path / "session.json"
    session_file.write_text(
        json.dumps(
            {
                "subjects": [{"name": "Art", "lecturesPerWeek": 2}, {"name": "", "lecturesPerWeek": 3}, "junk"],
                "lastLecturesPerWeek": "zero",
                "calculationMode": "fortnights",
                "durationValues": {"weeks": 12.5},
                "workingDays": 6,
            }
        ),
        encoding="utf-8",
    )

    state = SessionStore(session_file).load()
    assert [(s.name, s.lectures_per_week) for s in state.subjects] == [("Art", 2)]
    assert state.last_lectures_per_week == 4
    assert state.configuration.duration_mode is DurationMode.WEEKS
    assert state.configuration.duration_values["weeks"] == "12.5"
    assert state.configuration.duration_values["days"] == "80"
    assert state.configuration.working_days == "6"
    assert state.configuration.attendance_criterion == "75"


def test_save_to_unwritable_path_logs_and_returns(tmp_path: Path) -> None:
    session_dir = tmp_path / "session.json"
    session_dir.mkdir()
    store = SessionStore(session_dir)
    state = store.load()

    messages: list[str] = []
    sink_id = logger.add(messages.append, level="WARNING", format="{message}")
    try:
        store.save(state)
    finally:
        logger.remove(sink_id)

    assert session_dir.is_dir()
    assert len(messages) == 1
    assert "Could not persist session" in messages[0]


def test_unserialisable_state_keeps_previous_file(tmp_path: Path) -> None:
    session_file = tmp_path / "session.json"
    store = SessionStore(session_file)
    state = store.load()
    store.save(state)
    before = session_file.read_text(encoding="utf-8")

    broken = state.with_configuration(
        Configuration(duration_values={"weeks": b"16", "days": "80", "months": "4"})  # type: ignore[dict-item]
    )
    messages: list[str] = []
    sink_id = logger.add(messages.append, level="WARNING", format="{message}")
    try:
        store.save(broken)
    finally:
        logger.remove(sink_id)

    assert session_file.read_text(encoding="utf-8") == before
    assert len(messages) == 1
    assert "Could not serialise session" in messages[0]
