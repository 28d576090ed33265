"""Tests for the GradeTracker orchestrator."""
import pytest

from gradetracker import GradeTracker, RecordNotFoundError, ValidationError
from gradetracker.config import CSV_HEADERS

HEADER = ",".join(CSV_HEADERS)


def _add(tracker, code="CS1101S", credits=4, grade="", categories="", year=1, part="Semester 1"):
    return tracker.add_record(year, part, code, f"{code} title", credits=credits,
                              categories=categories, grade=grade)


# =============================================================================
# Records
# =============================================================================

def test_starts_empty_without_seeding(tracker) -> None:
    assert len(tracker.records) == 0
    assert tracker.snapshot.gpa is None
    assert tracker.snapshot.total_credits == 0


def test_seeds_sample_modules_only_when_never_saved(tmp_path) -> None:
    seeded = GradeTracker(data_dir=tmp_path, seed_samples=True)
    assert [r.code for r in seeded.records] == ["CS3230", "CS2102", "CS3244"]

    seeded.clear_records()
    again = GradeTracker(data_dir=tmp_path, seed_samples=True)
    assert len(again.records) == 0


def test_add_record_updates_snapshot(tracker) -> None:
    _add(tracker, "CS1101S", grade="A")
    _add(tracker, "CS1231S", grade="B-")
    assert [r.record_id for r in tracker.records] == [1, 2]
    assert tracker.snapshot.gpa == 4.0
    assert tracker.snapshot.total_credits == 8


def test_invalid_add_leaves_state_untouched(tracker) -> None:
    _add(tracker, "CS1101S", grade="A")
    before = tracker.snapshot
    with pytest.raises(ValidationError):
        tracker.add_record(7, "Semester 1", "CS9999", "Too late")
    with pytest.raises(ValidationError):
        tracker.add_record(1, "Semester 1", "", "No code")
    with pytest.raises(ValidationError):
        tracker.add_record(1, "Semester 1", "CS1010", "Bad credits", credits=0)
    assert tracker.snapshot is before
    assert len(tracker.records) == 1


def test_edit_keeps_id_position_and_unspecified_fields(tracker) -> None:
    _add(tracker, "CS1101S", categories="Core")
    _add(tracker, "CS1231S")
    edited = tracker.edit_record(1, grade="A-", year=2)
    assert edited.record_id == 1
    assert edited.term == "Year 2 Semester 1"
    assert edited.categories == ("Core",)
    assert [r.code for r in tracker.records] == ["CS1101S", "CS1231S"]
    assert tracker.snapshot.gpa == 4.5


def test_edit_rejects_unknown_fields_and_missing_ids(tracker) -> None:
    _add(tracker)
    with pytest.raises(ValidationError):
        tracker.edit_record(1, colour="red")
    with pytest.raises(RecordNotFoundError):
        tracker.edit_record(99, grade="A")


def test_delete_keeps_category_configured(tracker) -> None:
    _add(tracker, "CS2040S", categories="Core")
    tracker.add_category("Core", 40)
    tracker.delete_record(1)
    assert len(tracker.records) == 0
    assert tracker.requirements.names == ["Core"]
    with pytest.raises(RecordNotFoundError):
        tracker.delete_record(1)


def test_ids_stay_monotonic_after_delete(tracker) -> None:
    _add(tracker, "CS1")
    _add(tracker, "CS2")
    tracker.delete_record(1)
    assert _add(tracker, "CS3").record_id == 3


def test_subscribers_receive_every_new_snapshot(tracker) -> None:
    seen = []
    unsubscribe = tracker.subscribe(seen.append)
    _add(tracker, grade="A")
    tracker.set_total_credits(160)
    assert [s.gpa for s in seen] == [5.0, 5.0]
    assert seen[-1].graduation_progress.required == 160

    unsubscribe()
    _add(tracker, "CS2")
    assert len(seen) == 2


def test_failed_mutation_does_not_notify(tracker) -> None:
    seen = []
    tracker.subscribe(seen.append)
    with pytest.raises(ValidationError):
        tracker.add_category("")
    assert seen == []


def test_filtered_terms(tracker) -> None:
    _add(tracker, "CS1", categories="AI", year=1)
    _add(tracker, "CS2", categories="Systems", year=2)
    summaries = tracker.filtered_terms(category="AI")
    assert [s.term for s in summaries] == ["Year 1 Semester 1"]


# =============================================================================
# Requirements
# =============================================================================

def test_quick_add_only_accepts_unconfigured_labels(tracker) -> None:
    _add(tracker, "CS3244", categories="AI;Data")
    assert tracker.suggested_categories() == ["AI", "Data"]
    tracker.quick_add_category("AI")
    assert tracker.requirements.get("AI").required_credits == 0
    assert tracker.suggested_categories() == ["Data"]
    with pytest.raises(ValidationError):
        tracker.quick_add_category("AI")


def test_category_progress_follows_requirement_edits(tracker) -> None:
    _add(tracker, "CS1", categories="Core")
    tracker.add_category("Core", 8)
    assert tracker.snapshot.category_progress[0].percentage == pytest.approx(50.0)
    tracker.update_category("Core", required_credits=4)
    assert tracker.snapshot.category_progress[0].percentage == 100.0
    tracker.remove_category("Core")
    assert tracker.snapshot.category_progress == ()


def test_clear_requirements_leaves_records(tracker) -> None:
    _add(tracker)
    tracker.add_category("Core", 40)
    tracker.clear_requirements()
    assert tracker.requirements.names == []
    assert len(tracker.records) == 1


# =============================================================================
# Import / export
# =============================================================================

def test_import_appends_and_creates_zero_credit_categories(tracker) -> None:
    _add(tracker, "CS1101S")
    tracker.add_category("Core", 40)
    text = "\n".join([
        HEADER,
        "Year 2 Semester 1,CS2040S,DSA,4,Core;Algorithms,,10,A",
        "Year 2 Semester 1,,Missing code,4",
        "Year 2 Semester 2,CS2100,Computer Organisation,,Systems",
    ])
    result = tracker.import_csv(text)
    assert result.imported == 2
    assert result.skipped == 1
    assert [r.record_id for r in tracker.records] == [1, 2, 3]
    assert tracker.requirements.names == ["Core", "Algorithms", "Systems"]
    assert tracker.requirements.get("Core").required_credits == 40
    assert tracker.requirements.get("Systems").required_credits == 0
    assert tracker.snapshot.total_credits == 12


def test_non_utf8_file_is_rejected_without_changes(tracker, tmp_path) -> None:
    _add(tracker, "CS1101S")
    before = tracker.snapshot
    path = tmp_path / "latin1.csv"
    path.write_bytes(f"{HEADER}\nYear 1 Semester 1,FR1101E,Français 1,4\n".encode("latin-1"))
    with pytest.raises(ValidationError):
        tracker.import_file(path)
    assert tracker.snapshot is before
    assert len(tracker.records) == 1


def test_garbage_bytes_are_rejected(tracker, tmp_path) -> None:
    path = tmp_path / "garbage.csv"
    path.write_bytes(b"\xff\xfe\x00\x81\x8d\x90")
    with pytest.raises(ValidationError):
        tracker.import_file(path)
    assert len(tracker.records) == 0


def test_import_accepts_byte_order_mark(tracker, tmp_path) -> None:
    path = tmp_path / "excel.csv"
    path.write_bytes(f"{HEADER}\nYear 1 Semester 1,FR1101E,Français 1,4\n".encode("utf-8-sig"))
    result = tracker.import_file(path)
    assert result.imported == 1
    assert tracker.records.records[0].title == "Français 1"


def test_export_file_round_trips_through_import(tracker, tmp_path) -> None:
    _add(tracker, "CS1101S", grade="A", categories="Core")
    _add(tracker, "GEA1000", grade="S")
    path = tracker.export_file(tmp_path / "modules.csv")

    other = GradeTracker(data_dir=tmp_path / "other")
    other.import_file(path)
    assert [(r.code, r.grade, r.categories) for r in other.records] == [
        ("CS1101S", "A", ("Core",)), ("GEA1000", "S", ()),
    ]
    assert other.snapshot.gpa == tracker.snapshot.gpa


# =============================================================================
# Persistence, projection and UI state
# =============================================================================

def test_state_survives_restart(tracker, tmp_path) -> None:
    _add(tracker, "CS1101S", grade="B+")
    tracker.set_total_credits(160)
    tracker.toggle_term("Year 1 Semester 1")

    restarted = GradeTracker(data_dir=tmp_path)
    assert [r.code for r in restarted.records] == ["CS1101S"]
    assert restarted.requirements.total_credits == 160
    assert restarted.expanded_terms == {"Year 1 Semester 1"}
    assert restarted.snapshot.gpa == 4.0


def test_project_uses_current_records(tracker) -> None:
    _add(tracker, "CS1", grade="A")
    _add(tracker, "CS2")
    result = tracker.project("4.5")
    assert result.required_average == pytest.approx(4.0)
    with pytest.raises(ValidationError):
        tracker.project("6")


def test_expand_and_collapse_terms(tracker) -> None:
    _add(tracker, "CS1", year=1)
    _add(tracker, "CS2", year=2)
    assert tracker.toggle_term("Year 1 Semester 1") is True
    assert tracker.toggle_term("Year 1 Semester 1") is False
    tracker.expand_all()
    assert tracker.expanded_terms == {"Year 1 Semester 1", "Year 2 Semester 1"}
    tracker.collapse_all()
    assert tracker.expanded_terms == frozenset()


def test_clear_records_also_collapses_terms(tracker) -> None:
    _add(tracker)
    tracker.expand_all()
    tracker.clear_records()
    assert len(tracker.records) == 0
    assert tracker.expanded_terms == frozenset()
    assert tracker.snapshot.record_count == 0
