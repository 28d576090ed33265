"""Tests for the NUSMods catalog lookup script."""
import importlib.util
from pathlib import Path

import pytest
import requests
from click.testing import CliRunner

from gradetracker import ModuleCsvParser
from gradetracker.config import CSV_HEADERS, DEFAULT_CREDITS

SCRIPT = Path(__file__).resolve().parent.parent / "scripts" / "fetch_module_info.py"

CATALOG = {
    "CS2040S": {"title": "Data Structures and Algorithms", "moduleCredit": "4", "workload": [3, 1, 1, 3, 2]},
    "CS3203": {"title": "Software Engineering Project", "moduleCredit": "8", "workload": "varies"},
}


@pytest.fixture
def script(monkeypatch):
    spec = importlib.util.spec_from_file_location("fetch_module_info", SCRIPT)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    monkeypatch.setattr(module.time, "sleep", lambda seconds: None)
    monkeypatch.setattr(module, "create_retry_session", lambda: FakeSession())
    return module


class FakeResponse:
    def __init__(self, status_code, payload=None):
        self.status_code = status_code
        self._payload = payload

    def json(self):
        return self._payload


class FakeSession:
    def get(self, url, timeout=None):
        code = url.rsplit("/", 1)[-1].replace(".json", "")
        if code == "BOOM":
            raise requests.ConnectionError("offline")
        if code not in CATALOG:
            return FakeResponse(404)
        return FakeResponse(200, CATALOG[code])


def test_weekly_hours(script) -> None:
    assert script.weekly_hours([2, 1, 0, 3, 4]) == 10
    assert script.weekly_hours("see syllabus") == ""
    assert script.weekly_hours([1, "x"]) == ""


def test_fetch_module_falls_back_on_errors(script) -> None:
    session = FakeSession()
    assert script.fetch_module(session, "2025-2026", "CS2040S") == ("Data Structures and Algorithms", 4, 10)
    assert script.fetch_module(session, "2025-2026", "CS3203") == ("Software Engineering Project", 8, "")
    assert script.fetch_module(session, "2025-2026", "XX0000") == ("XX0000", 4, "")
    assert script.fetch_module(session, "2025-2026", "BOOM") == ("BOOM", 4, "")


def test_written_csv_imports_cleanly(script, tmp_path) -> None:
    output = tmp_path / "y2s1.csv"
    rows = script.run("Year 2 Semester 1", ["cs2040s", " ", "CS3203", "XX0000"], output, category="Core")
    assert len(rows) == 3

    result = ModuleCsvParser().parse(output.read_text(encoding="utf-8"))
    assert [r.code for r in result.records] == ["CS2040S", "CS3203", "XX0000"]
    assert [r.credits for r in result.records] == [4, 8, 4]
    assert result.records[0].workload == 10.0
    assert result.records[0].categories == ("Core",)
    assert all(r.term == "Year 2 Semester 1" for r in result.records)


def test_command_line(script, tmp_path) -> None:
    output = tmp_path / "out.csv"
    result = CliRunner().invoke(script.main, ["Year 1 Semester 2", "CS2040S", "-o", str(output)])
    assert result.exit_code == 0, result.output
    assert "1 rows written" in result.output
    assert output.exists()


def test_command_line_requires_codes(script) -> None:
    result = CliRunner().invoke(script.main, ["Year 1 Semester 2"])
    assert result.exit_code != 0


def test_script_writes_the_importer_header(script, tmp_path) -> None:
    output = tmp_path / "out.csv"
    script.run("Year 1 Semester 1", ["XX0000"], output)
    first_line = output.read_text(encoding="utf-8").splitlines()[0]
    assert first_line == ",".join(CSV_HEADERS)
    assert script.DEFAULT_CREDITS == DEFAULT_CREDITS
