"""
Boundary validation.

Persisted and imported data is loosely typed. This module is the single
place where raw dicts become CourseRecord / RequirementsSchema objects;
everything past this point can assume well-formed input.
"""

import logging
import math
from dataclasses import replace
from typing import Optional

from ..config import CATEGORY_SEPARATOR, CHART_COLORS
from ..errors import ValidationError
from ..models import CourseRecord, RequirementsSchema, CategoryRequirement, GradeScale, Term

logger = logging.getLogger(__name__)


def coerce_credits(value) -> Optional[int]:
    """Positive whole number, or None when the value isn't one."""
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, float):
        if not math.isfinite(value) or not value.is_integer():
            return None
        value = int(value)
    if not isinstance(value, int):
        try:
            value = int(str(value).strip())
        except ValueError:
            return None
    return value if value > 0 else None


def coerce_workload(value) -> Optional[float]:
    """Weekly hours. Advisory only, so a bad value is dropped, not the record."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str) and not value.strip():
        return None
    try:
        hours = float(value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(hours) or hours < 0:
        return None
    return hours


def split_categories(value) -> tuple:
    """
    Normalize category labels.

    Accepts a list of labels or a single ";"-separated string. Labels are
    stripped but otherwise kept verbatim (matching is case-sensitive).
    """
    if value is None:
        return ()
    if isinstance(value, str):
        parts = value.split(CATEGORY_SEPARATOR)
    elif isinstance(value, (list, tuple)):
        parts = value
    else:
        return ()
    labels = []
    for part in parts:
        if not isinstance(part, str):
            continue
        label = part.strip()
        if label and label not in labels:
            labels.append(label)
    return tuple(labels)


def _text(value) -> str:
    if value is None:
        return ""
    return str(value).strip()


class RecordValidator:
    """
    Converts raw dicts into CourseRecord objects.

    SKIP INVALID, NEVER CRASH:
    --------------------------
    A persisted or imported row that is missing its code or title, or whose
    credit value isn't a positive whole number, is dropped and logged. The
    rest of the batch goes through.

    Form input is the exception: the user is still looking at it, so
    build_record() raises ValidationError instead of dropping anything.
    """

    @staticmethod
    def parse_record(raw, record_id: Optional[int] = None) -> Optional[CourseRecord]:
        """Parse one persisted record dict. Returns None if it's unusable."""
        if not isinstance(raw, dict):
            logger.warning("Skipping record that is not an object: %r", raw)
            return None

        code = _text(raw.get("code"))
        title = _text(raw.get("title"))
        if not code or not title:
            logger.warning("Skipping record without code/title: %r", raw)
            return None

        credits = coerce_credits(raw.get("credits"))
        if credits is None:
            logger.warning("Skipping record %s with invalid credits %r", code, raw.get("credits"))
            return None

        grade = _text(raw.get("grade"))
        if grade and not GradeScale.is_known(grade):
            logger.warning("Unknown grade %r on %s treated as ungraded", grade, code)
            grade = ""

        if record_id is None:
            record_id = raw.get("id")

        return CourseRecord(
            record_id=record_id,
            term=_text(raw.get("term")),
            code=code,
            title=title,
            credits=credits,
            categories=split_categories(raw.get("categories")),
            specialization=_text(raw.get("specialization")),
            workload=coerce_workload(raw.get("workload")),
            grade=grade,
        )

    @classmethod
    def parse_records(cls, raw_list) -> list:
        """
        Parse a persisted record list.

        Ids must be unique positive ints; any record without one gets the
        next id after the highest seen, so ids stay monotonic.
        """
        if not isinstance(raw_list, list):
            logger.warning("Record store is not a list; starting empty")
            return []

        parsed = []
        for raw in raw_list:
            record = cls.parse_record(raw)
            if record is not None:
                parsed.append(record)

        seen = set()
        next_id = max((r.record_id for r in parsed if _is_id(r.record_id)), default=0) + 1
        records = []
        for record in parsed:
            if not _is_id(record.record_id) or record.record_id in seen:
                record = replace(record, record_id=next_id)
                next_id += 1
            seen.add(record.record_id)
            records.append(record)
        return records

    @staticmethod
    def build_record(record_id: int, year, part: str, code: str, title: str,
                     credits=4, categories=(), specialization: str = "",
                     workload=None, grade: str = "") -> CourseRecord:
        """
        Build a record from form input.

        Raises:
            ValidationError: any field is out of domain
        """
        term = Term.from_input(year, part)

        code = _text(code)
        title = _text(title)
        if not code or not title:
            raise ValidationError("Please fill in all required fields (module code and name)")

        credit_value = coerce_credits(credits)
        if credit_value is None:
            raise ValidationError("Credits must be a positive whole number")

        grade = _text(grade)
        if grade and not GradeScale.is_known(grade):
            raise ValidationError(f"Unknown grade: {grade}")

        workload_value = coerce_workload(workload)
        if workload_value is None and _text(workload):
            raise ValidationError("Workload must be a non-negative number of hours")

        return CourseRecord(
            record_id=record_id,
            term=term.label,
            code=code,
            title=title,
            credits=credit_value,
            categories=split_categories(categories),
            specialization=_text(specialization),
            workload=workload_value,
            grade=grade,
        )

    @staticmethod
    def parse_requirements(raw) -> RequirementsSchema:
        """
        Parse a persisted requirements document.

        Falls back to the default (empty) schema when the document itself is
        malformed; individual bad categories are dropped.
        """
        if not isinstance(raw, dict):
            logger.warning("Requirements document is not an object; using defaults")
            return RequirementsSchema()

        total = raw.get("totalCredits", 0)
        if isinstance(total, bool) or not isinstance(total, int) or total < 0:
            logger.warning("Invalid totalCredits %r; using 0", total)
            total = 0

        categories = []
        names = set()
        raw_categories = raw.get("categories", [])
        if not isinstance(raw_categories, list):
            raw_categories = []
        for item in raw_categories:
            if not isinstance(item, dict):
                continue
            name = _text(item.get("name"))
            required = item.get("requiredCredits", 0)
            if not name or name in names:
                logger.warning("Skipping category entry %r", item)
                continue
            if isinstance(required, bool) or not isinstance(required, int) or required < 0:
                required = 0
            color = _text(item.get("color")) or CHART_COLORS[len(categories) % len(CHART_COLORS)]
            names.add(name)
            categories.append(CategoryRequirement(name, required, color))

        return RequirementsSchema(total_credits=total, categories=tuple(categories))


def _is_id(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value > 0
