"""
Course record model.

Contains the CourseRecord dataclass, the core data unit that flows through
the tracker.
"""

from dataclasses import dataclass, field
from typing import Optional

from .grade import GradeScale, GradeStatus
from .term import Term


@dataclass(frozen=True)
class CourseRecord:
    """
    A single module on the user's record.

    Records are immutable; an edit produces a new record with the same
    record_id (see dataclasses.replace).

    Attributes:
        record_id: Opaque id, assigned monotonically, stable across edits
        term: Term label text (e.g., "Year 2 Semester 1")
        code: Module code (e.g., "CS2040S"), required
        title: Module title, required
        credits: Credit weight (MCs), positive integer
        categories: Category labels used for requirement bucketing
        specialization: Free-form label, display only
        workload: Estimated weekly hours, advisory only
        grade: Letter grade, or "" when ungraded
    """
    record_id: int
    term: str
    code: str
    title: str
    credits: int
    categories: tuple = field(default_factory=tuple)
    specialization: str = ""
    workload: Optional[float] = None
    grade: str = ""

    @property
    def parsed_term(self) -> Optional[Term]:
        return Term.parse(self.term)

    @property
    def grade_status(self) -> GradeStatus:
        return GradeScale.status(self.grade)

    @property
    def grade_points(self) -> Optional[float]:
        """weight x credits for a scored grade, otherwise None."""
        weight = GradeScale.weight(self.grade)
        if weight is None:
            return None
        return weight * self.credits

    def is_valid(self) -> bool:
        """Usable by the aggregates: code and title present, credits a positive int."""
        if not isinstance(self.code, str) or not self.code.strip():
            return False
        if not isinstance(self.title, str) or not self.title.strip():
            return False
        if isinstance(self.credits, bool) or not isinstance(self.credits, int):
            return False
        return self.credits > 0

    def has_category(self, name: str) -> bool:
        """Exact, case-sensitive label match. Never a substring match."""
        if not isinstance(self.categories, (tuple, list)):
            return False
        return name in self.categories

    def to_dict(self) -> dict:
        """Flat persisted form."""
        return {
            "id": self.record_id,
            "term": self.term,
            "code": self.code,
            "title": self.title,
            "credits": self.credits,
            "categories": list(self.categories),
            "specialization": self.specialization,
            "workload": self.workload,
            "grade": self.grade,
        }
