"""
Module Tracker Package
======================

A personal academic-record tracker: modules per term, MCs and grades in,
GPA, credit totals, degree progress and target-GPA projections out.

ARCHITECTURE OVERVIEW
---------------------

┌─────────────────────────────────────────────────────────────────────────┐
│                         ALGORITHM LAYER                                  │
│        (Pure logic - returns data structures, NO UI/printing)           │
│                                                                         │
│  ┌─────────────────┐  ┌─────────────────┐  ┌─────────────────────────┐  │
│  │ RecordValidator │  │ ModuleCsvParser │  │      LocalStore         │  │
│  │ (boundary)      │  │ (import/export) │  │ (JSON key-value files)  │  │
│  └─────────────────┘  └─────────────────┘  └─────────────────────────┘  │
│                                                                         │
│  ┌─────────────────────────┐  ┌─────────────────────────────────────┐  │
│  │   AggregationEngine     │  │        ProjectionEngine             │  │
│  │ (GPA, MCs, progress)    │  │   (grade needed for a target)       │  │
│  └─────────────────────────┘  └─────────────────────────────────────┘  │
└─────────────────────────────────────────────────────────────────────────┘
                                   │
                                   │ Returns immutable snapshots
                                   ▼
┌─────────────────────────────────────────────────────────────────────────┐
│                      PRESENTATION LAYER                                  │
│           (UI only - can be swapped without touching algorithm)         │
│                                                                         │
│  ┌─────────────────────────────────────────────────────────────────┐   │
│  │                    TerminalDisplay                               │   │
│  └─────────────────────────────────────────────────────────────────┘   │
└─────────────────────────────────────────────────────────────────────────┘
                                   │
                                   ▼
┌─────────────────────────────────────────────────────────────────────────┐
│                        GradeTracker                                      │
│   (Orchestrator - applies mutations, recomputes, notifies subscribers)  │
└─────────────────────────────────────────────────────────────────────────┘

PACKAGE STRUCTURE
-----------------

gradetracker/
├── __init__.py          # This file - main exports
├── config.py            # Grade scale, term parts, defaults, logging
├── errors.py            # TrackerError, ValidationError, RecordNotFoundError
├── tracker.py           # GradeTracker orchestrator
├── cli.py               # Interactive command-line interface
│
├── models/              # Data classes and enums
│   ├── grade.py         # GradeScale, GradeStatus
│   ├── term.py          # Term, term_order
│   ├── record.py        # CourseRecord
│   ├── record_store.py  # RecordStore
│   ├── requirements.py  # RequirementsSchema, CategoryRequirement
│   └── results.py       # AggregateSnapshot, ProjectionResult, ...
│
├── data/                # Validation, persistence, import/export
│   ├── validator.py     # RecordValidator
│   ├── csv_io.py        # ModuleCsvParser
│   └── store.py         # LocalStore
│
├── engines/             # Pure computations
│   ├── aggregation.py   # AggregationEngine
│   └── projection.py    # ProjectionEngine
│
└── ui/
    └── terminal.py      # TerminalDisplay

USAGE
-----

    from gradetracker import AggregationEngine, CourseRecord

    records = [
        CourseRecord(1, "Year 1 Semester 1", "CS1101S", "Programming Methodology", 4, grade="A"),
        CourseRecord(2, "Year 1 Semester 1", "MA1521", "Calculus for Computing", 4, grade="B-"),
    ]
    AggregationEngine().compute_gpa(records)    # 4.0

Running from command line:

    python -m gradetracker

"""

# Version
__version__ = "1.0.0"

# Main exports
from .tracker import GradeTracker
from .cli import main

# Model exports (for programmatic use)
from .models import (
    GradeScale,
    GradeStatus,
    Term,
    term_order,
    CourseRecord,
    RecordStore,
    CategoryRequirement,
    RequirementsSchema,
    TermGrouping,
    TermSummary,
    GradedCounts,
    CategoryProgress,
    CategoryStat,
    AggregateSnapshot,
    ProjectionResult,
    ImportResult,
)

# Engine exports
from .engines import AggregationEngine, ProjectionEngine, recommend_grade

# Data exports
from .data import LocalStore, ModuleCsvParser, RecordValidator

# UI exports
from .ui import TerminalDisplay

# Errors
from .errors import TrackerError, ValidationError, RecordNotFoundError

__all__ = [
    # Version
    "__version__",
    # Main entry points
    "GradeTracker",
    "main",
    # Models
    "GradeScale",
    "GradeStatus",
    "Term",
    "term_order",
    "CourseRecord",
    "RecordStore",
    "CategoryRequirement",
    "RequirementsSchema",
    "TermGrouping",
    "TermSummary",
    "GradedCounts",
    "CategoryProgress",
    "CategoryStat",
    "AggregateSnapshot",
    "ProjectionResult",
    "ImportResult",
    # Engines
    "AggregationEngine",
    "ProjectionEngine",
    "recommend_grade",
    # Data
    "LocalStore",
    "ModuleCsvParser",
    "RecordValidator",
    # UI
    "TerminalDisplay",
    # Errors
    "TrackerError",
    "ValidationError",
    "RecordNotFoundError",
]
