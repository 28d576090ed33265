"""Tests for bulk CSV import and export."""
import pytest

from gradetracker import ModuleCsvParser
from gradetracker.config import CSV_HEADERS

HEADER = ",".join(CSV_HEADERS)


@pytest.fixture
def parser() -> ModuleCsvParser:
    return ModuleCsvParser()


def test_header_is_skipped_and_ids_start_at_next_id(parser) -> None:
    text = "\n".join([
        HEADER,
        "Year 1 Semester 1,CS1101S,Programming Methodology,4,Core,,10,A",
        "Year 1 Semester 2,CS2030S,Programming II,4,Core,,8,",
    ])
    result = parser.parse(text, next_id=12)
    assert result.imported == 2
    assert [r.record_id for r in result.records] == [12, 13]
    assert result.records[0].grade == "A"
    assert result.records[1].grade == ""
    assert result.records[0].workload == 10.0


def test_header_is_always_the_first_non_blank_line(parser) -> None:
    text = "\n\nTerm,Code\nYear 1 Semester 1,CS1231S,Discrete Structures,4\n\n"
    result = parser.parse(text)
    assert [r.code for r in result.records] == ["CS1231S"]


def test_missing_or_bad_credits_default_to_four(parser) -> None:
    text = f"{HEADER}\nYear 1 Semester 1,GEA1000,Quantitative Reasoning\nYear 1 Semester 1,GEC1030,Ethics,lots\n"
    result = parser.parse(text)
    assert [r.credits for r in result.records] == [4, 4]


def test_rows_without_code_or_title_are_dropped(parser) -> None:
    text = "\n".join([
        HEADER,
        "Year 1 Semester 1,,No code,4",
        "Year 1 Semester 1,CS1010,,4",
        "Year 1 Semester 1,CS1010,Programming,4",
    ])
    result = parser.parse(text)
    assert result.imported == 1
    assert result.skipped == 2


def test_several_category_labels_and_quoted_fields(parser) -> None:
    text = f'{HEADER}\nYear 3 Semester 1,CS3244,"Machine Learning, Intro",4,AI; Data Science,AI,10,B+\n'
    record = parser.parse(text).records[0]
    assert record.title == "Machine Learning, Intro"
    assert record.categories == ("AI", "Data Science")
    assert record.specialization == "AI"


def test_labels_in_first_seen_order(parser) -> None:
    text = "\n".join([
        HEADER,
        "Year 1 Semester 1,CS1,One,4,Systems;AI",
        "Year 1 Semester 1,CS2,Two,4,AI;Theory",
    ])
    assert parser.parse(text).labels == ["Systems", "AI", "Theory"]


def test_quoted_field_may_span_lines(parser, make_record) -> None:
    record = make_record(code="CS4248", title="Line one\nLine two", categories=["AI"])
    restored = parser.parse(parser.export([record])).records
    assert len(restored) == 1
    assert restored[0].title == "Line one\nLine two"
    assert restored[0].categories == ("AI",)


def test_blank_rows_and_crlf_line_endings(parser) -> None:
    text = (f"\r\n{HEADER}\r\n,,,\r\nYear 1 Semester 1,CS1010,Programming,4\r\n\r\n"
            "Year 1 Semester 2,CS1231,Discrete,4\r\n")
    result = parser.parse(text)
    assert [r.code for r in result.records] == ["CS1010", "CS1231"]
    assert result.skipped == 0


def test_empty_text_imports_nothing(parser) -> None:
    assert parser.parse("").imported == 0
    assert parser.parse(HEADER).imported == 0


def test_export_writes_header_and_every_field(parser, make_record) -> None:
    records = [
        make_record(term="Year 2 Semester 1", code="CS2040S", title="DSA", credits=4,
                    categories=["Core", "Algorithms"], workload=10, grade="A-"),
        make_record(term="Year 2 Semester 1", code="CS2100", title="Computer Organisation", credits=4),
    ]
    lines = parser.export(records).splitlines()
    assert lines[0] == HEADER
    assert lines[1] == "Year 2 Semester 1,CS2040S,DSA,4,Core;Algorithms,,10,A-"
    assert lines[2] == "Year 2 Semester 1,CS2100,Computer Organisation,4,,,,"


def test_export_then_import_preserves_records(parser, make_record) -> None:
    records = [
        make_record(term="Year 1 Special Term 1", code="CS2103T", title="Software Engineering, Part 1",
                    credits=4, categories=["Core"], workload=7.5, grade="S"),
        make_record(term="Exchange", code="EX1000", title="Exchange Module", credits=6),
    ]
    restored = parser.parse(parser.export(records), next_id=1).records
    for before, after in zip(records, restored):
        assert (after.term, after.code, after.title, after.credits, after.categories,
                after.workload, after.grade) == (before.term, before.code, before.title, before.credits,
                                                 before.categories, before.workload, before.grade)
