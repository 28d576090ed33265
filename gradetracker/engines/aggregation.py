"""
Aggregation Engine.

This module derives every statistic shown for a record set: overall and
per-term GPA, credit totals, per-category progress and chart data.
"""

import logging
from typing import Optional

from ..config import UNCATEGORIZED
from ..models import (
    GradeStatus,
    RequirementsSchema,
    TermGrouping,
    TermSummary,
    GradedCounts,
    CategoryProgress,
    CategoryStat,
    AggregateSnapshot,
    term_order,
)

logger = logging.getLogger(__name__)

ALL = "All"


def usable(records) -> list:
    """Drop records the aggregates can't use (missing code/title, bad credits)."""
    valid = []
    for record in records:
        if record.is_valid():
            valid.append(record)
        else:
            logger.debug("Excluding malformed record from aggregates: %r", record)
    return valid


def _hours(workload) -> float:
    if isinstance(workload, bool) or not isinstance(workload, (int, float)):
        return 0.0
    return float(workload)


def _percentage(earned: int, required: int) -> float:
    if required <= 0:
        return 0.0
    return min(100.0, earned / required * 100)


class AggregationEngine:
    """
    Pure computation over (records, requirements).

    ═══════════════════════════════════════════════════════════════════════════
    GPA RULES
    ═══════════════════════════════════════════════════════════════════════════

    Scored grade (A+ .. F):  numerator += weight x credits
                             denominator += credits
    S / U or no grade:       credits totals only, GPA untouched

    A record set with no scored credits has no GPA: compute_gpa() returns
    None ("N/A") rather than dividing by zero.

    ═══════════════════════════════════════════════════════════════════════════
    MALFORMED INPUT
    ═══════════════════════════════════════════════════════════════════════════

    Every method silently skips records that fail CourseRecord.is_valid().
    Nothing here raises on bad data and nothing here mutates its inputs;
    the whole snapshot is recomputed from scratch on every call.

    Usage:
        engine = AggregationEngine()
        snapshot = engine.aggregate(store, requirements)
        print(snapshot.gpa, snapshot.total_credits)
    """

    def compute_gpa(self, records) -> Optional[float]:
        points = 0.0
        credits = 0
        for record in usable(records):
            record_points = record.grade_points
            if record_points is None:
                continue
            points += record_points
            credits += record.credits
        if credits == 0:
            return None
        return round(points / credits, 2)

    def compute_total_credits(self, records) -> int:
        return sum(r.credits for r in usable(records))

    def group_by_term(self, records) -> TermGrouping:
        """
        Group records by their literal term label.

        Labels are ordered by term_order(); labels that don't parse keep
        their first-seen order after all valid terms.
        """
        groups = {}
        for record in usable(records):
            groups.setdefault(record.term, []).append(record)
        order = sorted(groups, key=term_order)
        return TermGrouping(groups=groups, order=order)

    def compute_category_totals(self, records, requirements: RequirementsSchema) -> dict:
        """
        Credits per configured category.

        EXACT MATCH ONLY: a record counts toward a category when one of its
        labels is identical to the category name. "core" does not count
        toward "Core", and "Core Modules" does not count toward "Core".
        """
        valid = usable(records)
        totals = {}
        for category in requirements.categories:
            totals[category.name] = sum(r.credits for r in valid if r.has_category(category.name))
        return totals

    def compute_graded_counts(self, records) -> GradedCounts:
        scored = 0
        unscored = 0
        for record in usable(records):
            status = record.grade_status
            if status is GradeStatus.SCORED:
                scored += 1
            elif status is GradeStatus.UNSCORED:
                unscored += 1
        return GradedCounts(scored=scored, unscored=unscored)

    def compute_term_summaries(self, records) -> tuple:
        """Per-term credits, GPA and workload, chronological."""
        grouping = self.group_by_term(records)
        summaries = []
        for term in grouping.order:
            term_records = grouping.groups[term]
            summaries.append(TermSummary(
                term=term,
                records=tuple(term_records),
                credits=sum(r.credits for r in term_records),
                gpa=self.compute_gpa(term_records),
                workload=sum(_hours(r.workload) for r in term_records),
            ))
        return tuple(summaries)

    def compute_term_gpas(self, records) -> dict:
        """term label -> GPA (None for N/A), in term order."""
        return {s.term: s.gpa for s in self.compute_term_summaries(records)}

    def compute_workload_by_term(self, records) -> dict:
        """term label -> total weekly hours, in term order (bar chart data)."""
        return {s.term: s.workload for s in self.compute_term_summaries(records)}

    def compute_category_progress(self, records, requirements: RequirementsSchema) -> tuple:
        totals = self.compute_category_totals(records, requirements)
        progress = []
        for category in requirements.categories:
            earned = totals[category.name]
            required = category.required_credits
            progress.append(CategoryProgress(
                name=category.name,
                required=required,
                earned=earned,
                remaining=max(0, required - earned),
                percentage=_percentage(earned, required),
                color=category.color,
            ))
        return tuple(progress)

    def compute_graduation_progress(self, records, requirements: RequirementsSchema) -> CategoryProgress:
        earned = self.compute_total_credits(records)
        required = requirements.total_credits
        return CategoryProgress(
            name="Graduation",
            required=required,
            earned=earned,
            remaining=max(0, required - earned),
            percentage=_percentage(earned, required),
        )

    def compute_category_stats(self, records) -> tuple:
        """
        Count and credits per label across all records (pie chart data).

        Unlike compute_category_totals this isn't limited to configured
        categories. A record with several labels counts under each; a record
        with none counts under "Uncategorized".
        """
        stats = {}
        for record in usable(records):
            for label in record.categories or (UNCATEGORIZED,):
                count, credits = stats.get(label, (0, 0))
                stats[label] = (count + 1, credits + record.credits)
        return tuple(CategoryStat(label, count, credits) for label, (count, credits) in stats.items())

    # -------------------------------------------------------------------------
    # Filters and option lists
    # -------------------------------------------------------------------------

    def filter_records(self, records, term: Optional[str] = None, category: Optional[str] = None) -> list:
        """Term and category filters; None or "All" disables a filter."""
        filtered = []
        for record in usable(records):
            if term not in (None, ALL) and record.term != term:
                continue
            if category not in (None, ALL) and not record.has_category(category):
                continue
            filtered.append(record)
        return filtered

    def unique_terms(self, records) -> list:
        return self.group_by_term(records).order

    def all_categories(self, records) -> list:
        labels = set()
        for record in usable(records):
            labels.update(record.categories)
        return sorted(labels)

    def unconfigured_categories(self, records, requirements: RequirementsSchema) -> list:
        """Labels on records with no schema entry yet (quick-add suggestions)."""
        configured = set(requirements.names)
        return [label for label in self.all_categories(records) if label not in configured]

    # -------------------------------------------------------------------------
    # Full snapshot
    # -------------------------------------------------------------------------

    def aggregate(self, records, requirements: RequirementsSchema) -> AggregateSnapshot:
        records = usable(records)
        return AggregateSnapshot(
            gpa=self.compute_gpa(records),
            total_credits=self.compute_total_credits(records),
            graded_counts=self.compute_graded_counts(records),
            terms=self.compute_term_summaries(records),
            category_totals=self.compute_category_totals(records, requirements),
            category_progress=self.compute_category_progress(records, requirements),
            graduation_progress=self.compute_graduation_progress(records, requirements),
            category_stats=self.compute_category_stats(records),
            record_count=len(records),
        )
