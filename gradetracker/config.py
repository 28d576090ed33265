"""
Configuration constants for the module tracker.

This module contains all configuration values and constants used throughout
the tracker. Centralizing these makes it easy to adjust behavior if the
grading policy changes.
"""

import logging
import os
from pathlib import Path

# =============================================================================
# FILE PATHS
# =============================================================================

# Where the local key-value documents live. Override with GRADETRACKER_HOME.
DATA_DIR = Path(os.environ.get("GRADETRACKER_HOME", Path.home() / ".gradetracker")).expanduser()

RECORDS_FILE = "records.json"
REQUIREMENTS_FILE = "requirements.json"
EXPANDED_TERMS_FILE = "expanded_terms.json"


# =============================================================================
# GRADE DEFINITIONS
# =============================================================================

# Grade points per letter grade (5-point scale).
# S (Satisfactory) and U (Unsatisfactory) count toward credit totals but
# are excluded from every GPA computation.
GRADE_POINTS = {
    "A+": 5.0, "A": 5.0, "A-": 4.5,
    "B+": 4.0, "B": 3.5, "B-": 3.0,
    "C+": 2.5, "C": 2.0, "D+": 1.5,
    "D": 1.0, "F": 0.0,
}

UNSCORED_GRADES = {"S", "U"}

# Display order for grade pickers
GRADE_CHOICES = list(GRADE_POINTS) + ["S", "U"]

MAX_GRADE_POINT = 5.0

# Projection ladder: the lowest letter whose threshold is met by the
# required average. Checked top to bottom; anything below 0.75 is an F.
GRADE_THRESHOLDS = [
    (5.0, "A+"),
    (4.75, "A"),
    (4.25, "A-"),
    (3.75, "B+"),
    (3.25, "B"),
    (2.75, "B-"),
    (2.25, "C+"),
    (1.75, "C"),
    (1.25, "D+"),
    (0.75, "D"),
]
FLOOR_GRADE = "F"


# =============================================================================
# TERM DEFINITIONS
# =============================================================================

# Term parts in chronological order within a year. The weight is used for
# the ordering key: year * 10 + weight.
TERM_PARTS = ["Semester 1", "Semester 2", "Special Term 1", "Special Term 2"]
TERM_PART_WEIGHTS = {part: i for i, part in enumerate(TERM_PARTS, 1)}

MIN_YEAR = 1
MAX_YEAR = 6

# Ordering value for labels that don't parse (sorts after every valid key)
UNPARSEABLE_TERM_ORDER = 999


# =============================================================================
# RECORD DEFAULTS
# =============================================================================

DEFAULT_CREDITS = 4

# Credit values suggested by the add/edit prompt
CREDIT_CHOICES = [1, 2, 3, 4, 5, 6, 8, 10, 12]

UNCATEGORIZED = "Uncategorized"

# Separator for multiple category labels inside a single CSV field
CATEGORY_SEPARATOR = ";"

CSV_HEADERS = [
    "Semester",
    "Module Code",
    "Module Name",
    "MC",
    "Focus Area(s)",
    "Specialization",
    "Workload (hrs/week)",
    "Grade",
]

CHART_COLORS = [
    "#6366f1", "#8b5cf6", "#ec4899", "#f59e0b", "#10b981",
    "#06b6d4", "#f97316", "#ef4444", "#14b8a6", "#a855f7",
]

# Seeded on the very first run, when nothing has been saved yet
SAMPLE_RECORDS = [
    {"id": 1, "term": "Year 2 Semester 2", "code": "CS3230",
     "title": "Design & Analysis of Algorithms", "credits": 4,
     "categories": ["Algorithms & Theory"], "workload": 10, "grade": ""},
    {"id": 2, "term": "Year 2 Semester 2", "code": "CS2102",
     "title": "Database Systems", "credits": 4,
     "categories": ["Database Systems"], "workload": 8, "grade": ""},
    {"id": 3, "term": "Year 3 Semester 1", "code": "CS3244",
     "title": "Machine Learning", "credits": 4,
     "categories": ["Artificial Intelligence"], "workload": 10, "grade": ""},
]


# =============================================================================
# LOGGING
# =============================================================================

LOG_LEVEL = os.environ.get("GRADETRACKER_LOG_LEVEL", "WARNING").upper()
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(level: str = LOG_LEVEL) -> None:
    """Configure the root logger once for command-line use."""
    logging.basicConfig(level=getattr(logging, level, logging.WARNING), format=LOG_FORMAT)
