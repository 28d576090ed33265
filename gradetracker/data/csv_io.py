"""
Bulk import and export.

This module handles the delimited text format used to move records in and
out of the tracker in bulk.
"""

import csv
import io
import logging

from ..config import CSV_HEADERS, DEFAULT_CREDITS, CATEGORY_SEPARATOR
from ..models import ImportResult
from .validator import RecordValidator, coerce_credits

logger = logging.getLogger(__name__)


class ModuleCsvParser:
    """
    Reads and writes the bulk CSV format.

    FIELD ORDER (fixed, positional):
    --------------------------------
        0  term label        "Year 2 Semester 1"
        1  module code       "CS2040S"
        2  module title      "Data Structures and Algorithms"
        3  credits           defaults to 4 when missing or non-numeric
        4  category label(s) several labels separated by ";"
        5  specialization
        6  workload          weekly hours
        7  grade             "" when ungraded

    The first non-blank row is a header and is always skipped. Export
    writes the same header and every field, so an export can be imported
    back as-is.

    Usage:
        parser = ModuleCsvParser()
        result = parser.parse(text, next_id=12)
        text = parser.export(records)
    """

    def parse(self, text: str, next_id: int = 1) -> ImportResult:
        """
        Parse CSV text into records.

        Rows without a code or title are dropped; the rest of the batch goes
        through. Imported records get fresh ids starting at next_id.
        """
        records = []
        skipped = 0
        header_seen = False
        # quoted fields may span lines
        for row in csv.reader(io.StringIO(text)):
            if not any(cell.strip() for cell in row):
                continue
            if not header_seen:
                header_seen = True
                continue
            raw = self._row_to_dict(row)
            record = RecordValidator.parse_record(raw, record_id=next_id)
            if record is None:
                skipped += 1
                continue
            records.append(record)
            next_id += 1

        if skipped:
            logger.warning("Import dropped %s malformed row(s)", skipped)
        logger.info("Imported %s record(s)", len(records))
        return ImportResult(records=tuple(records), skipped=skipped)

    @staticmethod
    def _row_to_dict(row: list) -> dict:
        values = [value.strip() for value in row] + [""] * (len(CSV_HEADERS) - len(row))
        credits = coerce_credits(values[3])
        return {
            "term": values[0],
            "code": values[1],
            "title": values[2],
            "credits": credits if credits is not None else DEFAULT_CREDITS,
            "categories": values[4],
            "specialization": values[5],
            "workload": values[6],
            "grade": values[7],
        }

    def export(self, records) -> str:
        """Serialize records in store order, header first."""
        buffer = io.StringIO()
        writer = csv.writer(buffer, lineterminator="\n")
        writer.writerow(CSV_HEADERS)
        for record in records:
            writer.writerow([
                record.term,
                record.code,
                record.title,
                record.credits,
                CATEGORY_SEPARATOR.join(record.categories),
                record.specialization,
                _format_workload(record.workload),
                record.grade,
            ])
        return buffer.getvalue()


def _format_workload(workload) -> str:
    if workload is None:
        return ""
    if float(workload).is_integer():
        return str(int(workload))
    return str(workload)
