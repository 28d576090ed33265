"""
Local key-value persistence.

This module stores the tracker's three documents (records, requirements,
expanded terms) as JSON files in the data directory. Each one is read,
written and cleared on its own.
"""

import json
import logging
from pathlib import Path
from typing import Optional

from ..config import DATA_DIR, RECORDS_FILE, REQUIREMENTS_FILE, EXPANDED_TERMS_FILE
from ..models import RequirementsSchema
from .validator import RecordValidator

logger = logging.getLogger(__name__)

_MISSING = object()


class LocalStore:
    """
    Reads and writes the persisted tracker state.

    WHY THREE FILES: records and requirements have independent lifecycles.
    Clearing all records must leave the requirements alone, and vice versa.
    The expanded-terms list is UI state only; the engines never read it.

    FAILURE POLICY:
    - A missing file means "never saved".
    - A file that isn't valid JSON is logged and treated as empty/default.
      Losing a corrupt document is preferred over a session that won't start.
    - Write failures are logged; the in-memory state stays authoritative.

    Usage:
        store = LocalStore()
        records = store.load_records()          # None if never saved
        store.save_records(records)
        schema = store.load_requirements()
    """

    def __init__(self, data_dir=None):
        self.data_dir = Path(data_dir).expanduser() if data_dir is not None else DATA_DIR

    def _path(self, name: str) -> Path:
        return self.data_dir / name

    def _read(self, name: str):
        path = self._path(name)
        if not path.exists():
            return _MISSING
        try:
            with open(path, "r", encoding="utf-8") as f:
                return json.load(f)
        except (OSError, ValueError) as e:
            logger.warning("Could not read %s, falling back to defaults: %s", path, e)
            return None

    def _write(self, name: str, payload) -> None:
        path = self._path(name)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            with open(path, "w", encoding="utf-8") as f:
                json.dump(payload, f, indent=2)
        except OSError as e:
            logger.error("Could not write %s: %s", path, e)

    def _remove(self, name: str) -> None:
        path = self._path(name)
        try:
            path.unlink()
        except FileNotFoundError:
            pass
        except OSError as e:
            logger.error("Could not remove %s: %s", path, e)

    # -------------------------------------------------------------------------
    # Records
    # -------------------------------------------------------------------------

    def load_records(self) -> Optional[list]:
        """Validated records, [] for a corrupt document, None if never saved."""
        raw = self._read(RECORDS_FILE)
        if raw is _MISSING:
            return None
        return RecordValidator.parse_records(raw)

    def save_records(self, records) -> None:
        self._write(RECORDS_FILE, [r.to_dict() for r in records])

    def clear_records(self) -> None:
        self._remove(RECORDS_FILE)

    # -------------------------------------------------------------------------
    # Requirements
    # -------------------------------------------------------------------------

    def load_requirements(self) -> RequirementsSchema:
        raw = self._read(REQUIREMENTS_FILE)
        if raw is _MISSING:
            return RequirementsSchema()
        return RecordValidator.parse_requirements(raw)

    def save_requirements(self, schema: RequirementsSchema) -> None:
        self._write(REQUIREMENTS_FILE, schema.to_dict())

    def clear_requirements(self) -> None:
        self._remove(REQUIREMENTS_FILE)

    # -------------------------------------------------------------------------
    # Expanded terms (UI state)
    # -------------------------------------------------------------------------

    def load_expanded_terms(self) -> set:
        raw = self._read(EXPANDED_TERMS_FILE)
        if not isinstance(raw, list):
            return set()
        return {t for t in raw if isinstance(t, str)}

    def save_expanded_terms(self, terms) -> None:
        self._write(EXPANDED_TERMS_FILE, sorted(terms))

    def clear_expanded_terms(self) -> None:
        self._remove(EXPANDED_TERMS_FILE)
