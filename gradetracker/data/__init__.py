"""
Data validation, persistence and import/export.

This package handles all file I/O and the boundary between loosely-typed
external data and the tracker's models.
"""

from .validator import RecordValidator
from .csv_io import ModuleCsvParser
from .store import LocalStore

__all__ = ["RecordValidator", "ModuleCsvParser", "LocalStore"]
