from bunk_calculator.ui.row_edit import PendingRename


def test_return_then_focus_out_commits_once():
    pending = PendingRename(subject_id="abc", original="Physics")

    assert pending.claim("Quantum Physics") is True
    assert pending.claim("Quantum Physics") is False


def test_empty_name_is_claimed_only_once():
    pending = PendingRename(subject_id="abc", original="Physics")

    assert pending.claim("   ") is True
    assert pending.claim("   ") is False


def test_unchanged_name_is_never_claimed():
    pending = PendingRename(subject_id="abc", original="Physics")

    assert pending.claim(" Physics ") is False
    assert pending.committed is False
    assert pending.claim("Biology") is True
