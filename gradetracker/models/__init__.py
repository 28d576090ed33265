"""
Data models for the module tracker.

This package contains all dataclasses and enums used throughout the system.
These serve as "contracts" between different parts of the system.
"""

from .grade import GradeScale, GradeStatus
from .term import Term, term_order
from .record import CourseRecord
from .record_store import RecordStore
from .requirements import CategoryRequirement, RequirementsSchema
from .results import (
    TermGrouping,
    TermSummary,
    GradedCounts,
    CategoryProgress,
    CategoryStat,
    AggregateSnapshot,
    ProjectionResult,
    ImportResult,
)

__all__ = [
    # Grade scale
    "GradeScale",
    "GradeStatus",
    # Records
    "Term",
    "term_order",
    "CourseRecord",
    "RecordStore",
    # Requirements
    "CategoryRequirement",
    "RequirementsSchema",
    # Results
    "TermGrouping",
    "TermSummary",
    "GradedCounts",
    "CategoryProgress",
    "CategoryStat",
    "AggregateSnapshot",
    "ProjectionResult",
    "ImportResult",
]
