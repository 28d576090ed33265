"""
Aggregate and projection result models.

These dataclasses are the "contracts" between the engines and whatever
renders them. They hold plain numbers and labels only.
"""

from dataclasses import dataclass, field
from typing import Optional


@dataclass(frozen=True)
class TermGrouping:
    """
    Records grouped by term label.

    groups keeps each term's records in input order; order lists the
    term labels chronologically, unparseable labels last.
    """
    groups: dict
    order: list


@dataclass(frozen=True)
class TermSummary:
    """Per-term row of the grouped view."""
    term: str
    records: tuple
    credits: int
    gpa: Optional[float]        # None means "N/A" (no scored records)
    workload: float = 0.0


@dataclass(frozen=True)
class GradedCounts:
    scored: int = 0
    unscored: int = 0           # S/U only; ungraded records count in neither


@dataclass(frozen=True)
class CategoryProgress:
    """
    Progress of one configured category.

    Example:
        name: "Core"
        required: 40
        earned: 28
        remaining: 12
        percentage: 70.0
    """
    name: str
    required: int
    earned: int
    remaining: int
    percentage: float
    color: str = ""


@dataclass(frozen=True)
class CategoryStat:
    """Count and credit sum of one category label (pie chart data)."""
    label: str
    count: int
    credits: int


@dataclass(frozen=True)
class AggregateSnapshot:
    """
    Every derived number for one (records, requirements) pair.

    Produced fresh by AggregationEngine.aggregate() after each mutation;
    never updated in place.
    """
    gpa: Optional[float]
    total_credits: int
    graded_counts: GradedCounts
    terms: tuple                      # TermSummary, chronological
    category_totals: dict             # configured name -> credits
    category_progress: tuple          # CategoryProgress, schema order
    graduation_progress: CategoryProgress
    category_stats: tuple = field(default_factory=tuple)   # CategoryStat
    record_count: int = 0


@dataclass(frozen=True)
class ProjectionResult:
    """
    Outcome of a target-GPA projection.

    When there are no open credits, required_average and recommended_grade
    are None and final_gpa holds the GPA that can no longer change.
    required_average is never clamped, so an unachievable target shows the
    real shortfall (e.g., 7.0 on a 5-point scale).
    """
    target_gpa: float
    locked_credits: int
    open_credits: int
    locked_points: float
    achievable: bool
    message: str
    required_open_points: Optional[float] = None
    required_average: Optional[float] = None
    recommended_grade: Optional[str] = None
    final_gpa: Optional[float] = None


@dataclass(frozen=True)
class ImportResult:
    """Outcome of a bulk import. Dropped rows are counted, not reported."""
    records: tuple
    skipped: int = 0

    @property
    def imported(self) -> int:
        return len(self.records)

    @property
    def labels(self) -> list:
        """Every category label in the batch, first-seen order."""
        seen = []
        for record in self.records:
            for label in record.categories:
                if label not in seen:
                    seen.append(label)
        return seen
