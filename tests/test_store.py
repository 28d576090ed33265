"""Tests for the JSON-backed local store."""
import json

import pytest

from gradetracker import LocalStore, RequirementsSchema
from gradetracker.config import EXPANDED_TERMS_FILE, RECORDS_FILE, REQUIREMENTS_FILE


@pytest.fixture
def store(tmp_path) -> LocalStore:
    return LocalStore(tmp_path)


def test_never_saved_records_load_as_none(store) -> None:
    assert store.load_records() is None
    assert store.load_requirements() == RequirementsSchema()
    assert store.load_expanded_terms() == set()


def test_records_round_trip(store, make_record) -> None:
    records = [make_record(credits=4, grade="A", categories=["Core"], workload=6),
               make_record(credits=2, term="Exchange")]
    store.save_records(records)
    assert store.load_records() == records


def test_saved_empty_list_is_not_never_saved(store) -> None:
    store.save_records([])
    assert store.load_records() == []


def test_corrupt_documents_fall_back_to_defaults(store, tmp_path) -> None:
    (tmp_path / RECORDS_FILE).write_text("{not json", encoding="utf-8")
    (tmp_path / REQUIREMENTS_FILE).write_text("[1, 2", encoding="utf-8")
    (tmp_path / EXPANDED_TERMS_FILE).write_text('"Year 1 Semester 1"', encoding="utf-8")
    assert store.load_records() == []
    assert store.load_requirements() == RequirementsSchema()
    assert store.load_expanded_terms() == set()


def test_requirements_use_camel_case_keys_on_disk(store, tmp_path, core_schema) -> None:
    store.save_requirements(core_schema)
    payload = json.loads((tmp_path / REQUIREMENTS_FILE).read_text(encoding="utf-8"))
    assert payload["totalCredits"] == 160
    assert payload["categories"][0]["requiredCredits"] == 40
    assert store.load_requirements() == core_schema


def test_documents_clear_independently(store, make_record, core_schema) -> None:
    store.save_records([make_record()])
    store.save_requirements(core_schema)
    store.save_expanded_terms({"Year 1 Semester 1"})

    store.clear_records()
    assert store.load_records() is None
    assert store.load_requirements() == core_schema

    store.clear_requirements()
    assert store.load_requirements() == RequirementsSchema()
    assert store.load_expanded_terms() == {"Year 1 Semester 1"}

    store.clear_expanded_terms()
    store.clear_expanded_terms()
    assert store.load_expanded_terms() == set()


def test_data_directory_is_created_on_first_write(tmp_path, make_record) -> None:
    store = LocalStore(tmp_path / "nested" / "home")
    store.save_records([make_record()])
    assert (tmp_path / "nested" / "home" / RECORDS_FILE).exists()
