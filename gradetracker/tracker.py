"""
Grade Tracker - Main Orchestrator.

This module contains the GradeTracker class that owns the current record
and requirements snapshots, applies mutations, and connects the engines to
the presentation layer.

NOTE: Don't run this file directly. Run from the project root:
    python3 -m gradetracker
"""

import logging
from pathlib import Path
from typing import Callable, Optional

from .config import SAMPLE_RECORDS
from .data import LocalStore, ModuleCsvParser, RecordValidator
from .engines import AggregationEngine, ProjectionEngine
from .errors import ValidationError
from .models import (
    AggregateSnapshot,
    CourseRecord,
    ImportResult,
    ProjectionResult,
    RecordStore,
    RequirementsSchema,
)

logger = logging.getLogger(__name__)

_UNSET = object()


class GradeTracker:
    """
    Main interface for the module tracker.

    ═══════════════════════════════════════════════════════════════════════════
    ROLE: ORCHESTRATOR
    ═══════════════════════════════════════════════════════════════════════════

    1. Receives user actions (add/edit/delete a record, edit requirements,
       import, export, project)
    2. Validates them; a ValidationError leaves every snapshot untouched
    3. Swaps in new immutable RecordStore / RequirementsSchema snapshots and
       persists them
    4. Recomputes the AggregateSnapshot from scratch and hands it to every
       subscriber

    There is no ambient mutable state beyond the three current snapshots.
    A presentation layer either subscribes, or reads `snapshot` after each
    call.

    ═══════════════════════════════════════════════════════════════════════════

    USAGE:
        tracker = GradeTracker(data_dir="~/.gradetracker")
        tracker.subscribe(lambda snap: print(snap.gpa))

        tracker.add_record(year=1, part="Semester 1", code="CS1101S",
                           title="Programming Methodology", credits=4, grade="A")
        tracker.add_category("Core", 40)
        result = tracker.project(4.5)
    """

    def __init__(self, data_dir=None, seed_samples: bool = False, store: Optional[LocalStore] = None):
        self.store = store or LocalStore(data_dir)
        self.parser = ModuleCsvParser()
        self.aggregation_engine = AggregationEngine()
        self.projection_engine = ProjectionEngine()

        self._subscribers = []

        records = self.store.load_records()
        if records is None:
            records = RecordValidator.parse_records(SAMPLE_RECORDS) if seed_samples else []
            if records:
                logger.info("No saved records found; seeding %s sample modules", len(records))
        self._records = RecordStore(tuple(records))
        self._requirements = self.store.load_requirements()
        self._expanded_terms = self.store.load_expanded_terms()
        self._snapshot = self.aggregation_engine.aggregate(self._records, self._requirements)

    # =========================================================================
    # Snapshots and subscription
    # =========================================================================

    @property
    def records(self) -> RecordStore:
        return self._records

    @property
    def requirements(self) -> RequirementsSchema:
        return self._requirements

    @property
    def snapshot(self) -> AggregateSnapshot:
        return self._snapshot

    @property
    def expanded_terms(self) -> frozenset:
        return frozenset(self._expanded_terms)

    def subscribe(self, callback: Callable[[AggregateSnapshot], None]) -> Callable[[], None]:
        """
        Call `callback` with a fresh AggregateSnapshot after every mutation.

        Returns a function that removes the subscription.
        """
        self._subscribers.append(callback)

        def unsubscribe():
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe

    def _commit(self, records: Optional[RecordStore] = None,
                requirements: Optional[RequirementsSchema] = None) -> None:
        """Install new snapshots, persist them, recompute, notify."""
        if records is not None:
            self._records = records
            self.store.save_records(records)
        if requirements is not None:
            self._requirements = requirements
            self.store.save_requirements(requirements)

        self._snapshot = self.aggregation_engine.aggregate(self._records, self._requirements)
        for callback in list(self._subscribers):
            callback(self._snapshot)

    # =========================================================================
    # Records
    # =========================================================================

    def add_record(self, year, part: str, code: str, title: str, credits=4,
                   categories=(), specialization: str = "", workload=None,
                   grade: str = "") -> CourseRecord:
        """
        Add a record from form input.

        Raises:
            ValidationError: year not in 1..6, missing code/title, bad credits,
                unknown grade or bad workload
        """
        record = RecordValidator.build_record(
            self._records.next_id, year, part, code, title, credits,
            categories, specialization, workload, grade,
        )
        self._commit(records=self._records.add(record))
        logger.info("Added %s (%s)", record.code, record.term)
        return self._records.records[-1]

    def edit_record(self, record_id: int, year=_UNSET, part=_UNSET, **fields) -> CourseRecord:
        """
        Edit a record in place (same id, same position).

        Fields not given keep their current value. The year/part pair falls
        back to the record's current term, which must then be parseable.

        Raises:
            RecordNotFoundError: no record with this id
            ValidationError: the merged record is invalid
        """
        existing = self._records.get(record_id)
        current_term = existing.parsed_term
        if year is _UNSET or part is _UNSET:
            if current_term is None:
                raise ValidationError(f"Please choose a year and term part for {existing.code}")
            year = current_term.year if year is _UNSET else year
            part = current_term.part if part is _UNSET else part

        unknown = set(fields) - {"code", "title", "credits", "categories", "specialization", "workload", "grade"}
        if unknown:
            raise ValidationError(f"Unknown field(s): {', '.join(sorted(unknown))}")

        record = RecordValidator.build_record(
            record_id, year, part,
            fields.get("code", existing.code),
            fields.get("title", existing.title),
            fields.get("credits", existing.credits),
            fields.get("categories", existing.categories),
            fields.get("specialization", existing.specialization),
            fields.get("workload", existing.workload),
            fields.get("grade", existing.grade),
        )
        self._commit(records=self._records.update(record))
        logger.info("Edited record %s", record_id)
        return record

    def delete_record(self, record_id: int) -> None:
        """
        Delete a record.

        Configured categories are sticky: deleting the last record of a
        category does not remove it from the requirements.
        """
        self._commit(records=self._records.delete(record_id))
        logger.info("Deleted record %s", record_id)

    def clear_records(self) -> None:
        """
        Remove every record and the expanded-term UI state.

        An empty list is saved rather than the file removed, so the next
        session does not seed the sample modules again.
        """
        self._expanded_terms = set()
        self.store.clear_expanded_terms()
        self._commit(records=RecordStore())

    def filtered_terms(self, term: Optional[str] = None, category: Optional[str] = None) -> tuple:
        """Term summaries of the records that pass the term/category filters."""
        records = self.aggregation_engine.filter_records(self._records, term, category)
        return self.aggregation_engine.compute_term_summaries(records)

    # =========================================================================
    # Requirements
    # =========================================================================

    def set_total_credits(self, total_credits) -> None:
        self._commit(requirements=self._requirements.with_total(total_credits))

    def add_category(self, name: str, required_credits=0, color: str = "") -> None:
        self._commit(requirements=self._requirements.add_category(name, required_credits, color))

    def quick_add_category(self, name: str) -> None:
        """Configure a suggested label with a zero requirement."""
        if name not in self.suggested_categories():
            raise ValidationError(f"'{name}' is not an unconfigured category label")
        self.add_category(name, 0)

    def update_category(self, name: str, required_credits=None, color: str = None) -> None:
        self._commit(requirements=self._requirements.update_category(name, required_credits, color))

    def remove_category(self, name: str) -> None:
        self._commit(requirements=self._requirements.remove_category(name))

    def suggested_categories(self) -> list:
        """Labels used on records that have no requirement entry yet."""
        return self.aggregation_engine.unconfigured_categories(self._records, self._requirements)

    def clear_requirements(self) -> None:
        self._requirements = RequirementsSchema()
        self.store.clear_requirements()
        self._commit()

    # =========================================================================
    # Import / export
    # =========================================================================

    def import_csv(self, text: str) -> ImportResult:
        """
        Append records from CSV text.

        Every category label not configured yet gets a zero-credit entry,
        so imported modules show up in the progress view immediately.
        """
        result = self.parser.parse(text, next_id=self._records.next_id)
        requirements = self._requirements.ensure_categories(result.labels)
        self._commit(
            records=self._records.extend(result.records),
            requirements=requirements if requirements != self._requirements else None,
        )
        return result

    def import_file(self, path) -> ImportResult:
        """
        Append records from a UTF-8 CSV file (a leading BOM is accepted).

        Raises:
            ValidationError: the file isn't UTF-8 text; nothing is imported
        """
        path = Path(path).expanduser()
        try:
            with open(path, "r", encoding="utf-8-sig") as f:
                text = f.read()
        except UnicodeDecodeError as e:
            logger.warning("Could not decode %s: %s", path, e)
            raise ValidationError(f"{path.name} is not a UTF-8 text file; save it as UTF-8 CSV and try again")
        return self.import_csv(text)

    def export_csv(self) -> str:
        return self.parser.export(self._records)

    def export_file(self, path) -> Path:
        path = Path(path).expanduser()
        with open(path, "w", encoding="utf-8", newline="") as f:
            f.write(self.export_csv())
        return path

    # =========================================================================
    # Projection
    # =========================================================================

    def project(self, target_gpa) -> ProjectionResult:
        """
        Project the grade needed on open modules to reach target_gpa.

        Raises:
            ValidationError: target is not a number in [0, 5.0]
        """
        return self.projection_engine.project_required_grade(self._records, target_gpa)

    # =========================================================================
    # Expanded terms (UI state)
    # =========================================================================

    def toggle_term(self, term: str) -> bool:
        """Flip a term's expanded state. Returns the new state."""
        if term in self._expanded_terms:
            self._expanded_terms.discard(term)
        else:
            self._expanded_terms.add(term)
        self.store.save_expanded_terms(self._expanded_terms)
        return term in self._expanded_terms

    def expand_all(self) -> None:
        self._expanded_terms = set(self.aggregation_engine.unique_terms(self._records))
        self.store.save_expanded_terms(self._expanded_terms)

    def collapse_all(self) -> None:
        self._expanded_terms = set()
        self.store.save_expanded_terms(self._expanded_terms)
