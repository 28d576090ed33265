"""Shared fixtures for the tracker tests."""
import pytest

from gradetracker import CourseRecord, GradeTracker, RequirementsSchema


@pytest.fixture
def make_record():
    """Factory for valid records with sensible defaults."""
    counter = {"next": 1}

    def _make(credits=4, grade="", term="Year 1 Semester 1", categories=(), code=None,
              title="Module", workload=None, record_id=None):
        if record_id is None:
            record_id = counter["next"]
        counter["next"] = max(counter["next"], record_id) + 1
        return CourseRecord(
            record_id=record_id,
            term=term,
            code=code or f"CS{1000 + record_id}",
            title=title,
            credits=credits,
            categories=tuple(categories),
            workload=workload,
            grade=grade,
        )

    return _make


@pytest.fixture
def tracker(tmp_path):
    """A tracker backed by an empty temporary data directory."""
    return GradeTracker(data_dir=tmp_path)


@pytest.fixture
def core_schema():
    return RequirementsSchema().with_total(160).add_category("Core", 40).add_category("Electives", 20)
